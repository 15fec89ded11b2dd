# docaudit/registry/store.py
from __future__ import annotations
import logging, os
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from docaudit.collectors.common import compact, iso, unique_path, utc_now, write_json
from docaudit.evidence.schema import AggregateReport, ValidationResult
from docaudit.report.summary import render_markdown

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"
EVIDENCE_TYPE = "SchemaValidationResult"
REPORT_PREFIX = "SchemaValidation_"
SUMMARY_PREFIX = "SchemaValidationSummary_"


def footer_outcome(report: AggregateReport) -> Optional[Dict[str, Any]]:
    for c in report.checks:
        if c.get("name") == "footer_freshness":
            return c
    return None


def build_record(report: AggregateReport, results: List[ValidationResult],
                 environment: Dict[str, Any], timestamp_utc: str) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "evidence_type": EVIDENCE_TYPE,
        "timestamp_utc": timestamp_utc,
        "total_validated": report.total_validated,
        "valid_count": report.valid_count,
        "invalid_count": report.invalid_count,
        "missing_count": report.missing_count,
        "completeness_percent": report.completeness_percent,
        "draft_enforcement": report.draft_enforcement.model_dump(mode="json"),
        "review_reasons": list(report.review_reasons),
        "results": [r.model_dump(mode="json") for r in results],
        "environment": dict(environment),
        "status": report.final_status,
        "footer_check": footer_outcome(report),
        "checks": list(report.checks),
    }


def emit(report: AggregateReport, results: List[ValidationResult], environment: Dict[str, Any],
         output_dir: str, now: Optional[datetime] = None) -> Tuple[str, str]:
    now = utc_now(now)
    os.makedirs(output_dir, exist_ok=True)
    stamp = compact(now)
    json_path = unique_path(output_dir, REPORT_PREFIX + stamp, ".json")
    # keep the pair on the same counter suffix
    suffix = os.path.basename(json_path)[len(REPORT_PREFIX):-len(".json")]
    md_path = unique_path(output_dir, SUMMARY_PREFIX + suffix, ".md")

    ts = iso(now)
    write_json(json_path, build_record(report, results, environment, ts))
    with open(md_path, "w", encoding="utf-8") as f:
        f.write(render_markdown(report, results, ts, footer_outcome(report)))

    logger.info("wrote %s and %s", json_path, md_path)
    return json_path, md_path
