# docaudit/report/summary.py
from typing import Any, Dict, List, Optional
from docaudit.evidence.schema import AggregateReport, ValidationResult


def _cell(value) -> str:
    if value is None:
        return "—"
    return str(value).replace("|", "\\|").replace("\n", " ")


def summary_line(report: AggregateReport) -> str:
    reasons = ",".join(report.review_reasons) or "none"
    return (
        f"SUMMARY: VALID={report.valid_count} INVALID={report.invalid_count} "
        f"MISSING={report.missing_count} COMPLETENESS={report.completeness_percent}% "
        f"ENFORCEMENT={report.draft_enforcement.status} STATUS={report.final_status} "
        f"REASONS={reasons}"
    )


def render_markdown(report: AggregateReport, results: List[ValidationResult], timestamp_utc: str,
                    footer: Optional[Dict[str, Any]] = None) -> str:
    de = report.draft_enforcement
    lines = [
        "# Schema Validation Summary",
        "",
        f"Generated: {timestamp_utc}",
        "",
        f"**Status:** {report.final_status}",
        "",
        "## Metrics",
        "",
        "| Metric | Value |",
        "|---|---|",
        f"| Total validated | {report.total_validated} |",
        f"| Valid | {report.valid_count} |",
        f"| Invalid | {report.invalid_count} |",
        f"| Missing | {report.missing_count} |",
        f"| Completeness | {report.completeness_percent}% |",
        f"| Review reasons | {', '.join(report.review_reasons) or 'none'} |",
        "",
        "## Draft Enforcement",
        "",
        f"- Standard: {de.standard}",
        f"- Status: {de.status}",
        f"- Schemas checked: {de.checked_count}",
        f"- Non-compliant: {', '.join(de.non_compliant) or 'none'}",
        "",
        "## Footer Check",
        "",
    ]
    if footer:
        lines += [
            f"- Status: {footer.get('status')}",
            f"- Footer timestamp: {footer.get('footer_timestamp') or 'n/a'}",
            f"- Age (hours): {footer.get('age_hours') if footer.get('age_hours') is not None else 'n/a'}",
        ]
        if footer.get("detail"):
            lines.append(f"- Detail: {footer['detail']}")
        lines.append("- Informational only; does not affect the status above.")
    else:
        lines.append("- Not run")

    lines += [
        "",
        "## Results",
        "",
        "| Schema | Evidence | Valid | Error | Note |",
        "|---|---|---|---|---|",
    ]
    for r in results:
        lines.append(
            f"| {_cell(r.schema_kind)} | {_cell(r.evidence_file)} | {'yes' if r.valid else 'no'} "
            f"| {_cell(r.error_message)} | {_cell(r.note)} |"
        )
    return "\n".join(lines) + "\n"
