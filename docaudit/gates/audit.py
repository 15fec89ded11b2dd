# docaudit/gates/audit.py
from typing import Iterable
from docaudit.evidence.schema import AuditResult, ValidationResult


def completeness(valid_count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(valid_count / total * 100, 2)


def audit(results: Iterable[ValidationResult]) -> AuditResult:
    rows = list(results)
    total = len(rows)
    missing = sum(1 for r in rows if r.evidence_file is None)
    invalid = sum(1 for r in rows if not r.valid and r.evidence_file is not None)
    valid = total - invalid - missing
    return AuditResult(
        total=total,
        valid_count=valid,
        invalid_count=invalid,
        missing_count=missing,
        completeness_percent=completeness(valid, total),
    )
