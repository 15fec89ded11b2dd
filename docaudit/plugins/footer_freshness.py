# docaudit/plugins/footer_freshness.py
"""
Footer freshness: the compliance matrix carries a footer stamp
`YYYY-MM-DD HH:MM:SS UTC` written when it was last regenerated. The stamp
should be recent and no older than the newest evidence it summarizes.
"""
from __future__ import annotations
import os, re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from docaudit.evidence.scanner import newest_by_mtime
from docaudit.plugins.registry import plugin_registry

FOOTER_RE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) UTC")


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ") if dt else None


def check_footer(matrix_path: str, evidence_files: Iterable[str] = (), now: Optional[datetime] = None,
                 max_age_hours: float = 24.0) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    out: Dict[str, Any] = {
        "status": "MISSING", "document": matrix_path, "footer_timestamp": None,
        "age_hours": None, "max_age_hours": max_age_hours,
        "latest_evidence": None, "latest_evidence_utc": None, "valid": False, "detail": "",
    }
    if not os.path.isfile(matrix_path):
        out["detail"] = "compliance matrix not found"
        return out

    try:
        with open(matrix_path, "r", encoding="utf-8") as f:
            stamps = FOOTER_RE.findall(f.read())
        if not stamps:
            out["detail"] = "no footer timestamp found"
            return out
        stamp = datetime.strptime(stamps[-1], "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        out.update(status="ERROR", detail=str(e))
        return out

    age = round((now - stamp).total_seconds() / 3600.0, 2)
    out.update(footer_timestamp=_iso(stamp), age_hours=age)

    latest = None
    newest = newest_by_mtime(evidence_files)
    if newest:
        latest = datetime.fromtimestamp(os.path.getmtime(newest), tz=timezone.utc).replace(microsecond=0)
        out.update(latest_evidence=os.path.basename(newest), latest_evidence_utc=_iso(latest))

    fresh = age <= max_age_hours
    covers = latest is None or stamp >= latest
    out["valid"] = fresh and covers
    out["status"] = "PASS" if out["valid"] else "FAIL"
    if not fresh:
        out["detail"] = f"footer is {age}h old (limit {max_age_hours}h)"
    elif not covers:
        out["detail"] = f"footer predates newest evidence {out['latest_evidence']}"
    return out


@plugin_registry.check("footer_freshness")
def footer_freshness(context: Dict[str, Any]) -> Dict[str, Any]:
    settings = context["settings"]
    return check_footer(
        settings.matrix_path,
        context.get("evidence_files", ()),
        now=context.get("now"),
        max_age_hours=settings.footer_max_age_hours,
    )
