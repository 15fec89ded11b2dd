# docaudit/report/history.py
import glob, json, logging, os
import pandas as pd

from docaudit.registry.store import REPORT_PREFIX

logger = logging.getLogger(__name__)

COLUMNS = [
    "report", "timestamp_utc", "status", "total_validated", "valid_count",
    "invalid_count", "missing_count", "completeness_percent", "enforcement", "review_reasons",
]


def load_history(evidence_dir: str) -> pd.DataFrame:
    """One row per SchemaValidation_*.json report, oldest first."""
    rows = []
    for p in sorted(glob.glob(os.path.join(evidence_dir, REPORT_PREFIX + "*.json"))):
        try:
            with open(p, "r", encoding="utf-8") as f:
                rep = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("skipping unreadable report %s: %s", p, e)
            continue
        if not isinstance(rep, dict):
            logger.warning("skipping %s: not a report object", p)
            continue
        rows.append({
            "report": os.path.basename(p),
            "timestamp_utc": rep.get("timestamp_utc"),
            "status": rep.get("status"),
            "total_validated": rep.get("total_validated", 0),
            "valid_count": rep.get("valid_count", 0),
            "invalid_count": rep.get("invalid_count", 0),
            "missing_count": rep.get("missing_count", 0),
            "completeness_percent": rep.get("completeness_percent", 0.0),
            "enforcement": (rep.get("draft_enforcement") or {}).get("status"),
            "review_reasons": ";".join(rep.get("review_reasons") or []),
        })

    df = pd.DataFrame(rows, columns=COLUMNS)
    if df.empty:
        return df
    df["timestamp_utc"] = pd.to_datetime(df["timestamp_utc"], utc=True, errors="coerce")
    df["completeness_percent"] = pd.to_numeric(df["completeness_percent"], errors="coerce").fillna(0.0)
    return df.sort_values(["timestamp_utc", "report"]).reset_index(drop=True)


def latest_report(evidence_dir: str):
    """Full JSON of the newest report, or None."""
    df = load_history(evidence_dir)
    if df.empty:
        return None
    with open(os.path.join(evidence_dir, df.iloc[-1]["report"]), "r", encoding="utf-8") as f:
        return json.load(f)
