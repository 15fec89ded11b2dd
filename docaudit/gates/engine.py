# docaudit/gates/engine.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from docaudit.evidence.schema import (
    REVIEW_REQUIRED, SUCCESS, AggregateReport, AuditResult, DraftEnforcement,
)
from docaudit.plugins.registry import plugin_registry

logger = logging.getLogger(__name__)

# order is part of the report contract
REASON_INVALID = "invalid_files"
REASON_MISSING = "missing_schemas"
REASON_NON_DRAFT7 = "non_draft7"


def run_checks(context: Dict[str, Any], registry=plugin_registry) -> List[Dict[str, Any]]:
    """Run auxiliary checks. Outcomes are informational and never gate the verdict."""
    results = []
    for name, fn in registry.checks.items():
        try:
            out = fn(context)
            out = out if isinstance(out, dict) else {"status": "PASS" if out else "FAIL"}
        except Exception as e:
            logger.warning("check %s crashed: %s", name, e)
            out = {"status": "ERROR", "detail": f"check crashed: {e}"}
        out.setdefault("name", name)
        out["blocking"] = False
        results.append(out)
    return results


def review_reasons(audit_result: AuditResult, draft_enforcement: DraftEnforcement) -> List[str]:
    reasons = []
    if audit_result.invalid_count > 0:
        reasons.append(REASON_INVALID)
    if audit_result.missing_count > 0:
        reasons.append(REASON_MISSING)
    if draft_enforcement.status != "PASS":
        reasons.append(REASON_NON_DRAFT7)
    return reasons


def aggregate(audit_result: AuditResult, draft_enforcement: DraftEnforcement,
              checks: Optional[List[Dict[str, Any]]] = None) -> AggregateReport:
    reasons = review_reasons(audit_result, draft_enforcement)
    return AggregateReport(
        total_validated=audit_result.total,
        valid_count=audit_result.valid_count,
        invalid_count=audit_result.invalid_count,
        missing_count=audit_result.missing_count,
        completeness_percent=audit_result.completeness_percent,
        draft_enforcement=draft_enforcement,
        review_reasons=reasons,
        final_status=REVIEW_REQUIRED if reasons else SUCCESS,
        checks=list(checks or []),
    )
