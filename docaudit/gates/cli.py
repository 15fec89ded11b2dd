# docaudit/gates/cli.py
from __future__ import annotations
import argparse, logging, sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

# Ensure check plugins register themselves
import docaudit.plugins.footer_freshness  # noqa: F401

from docaudit.collectors.common import utc_now
from docaudit.config import Settings, load_settings
from docaudit.evidence.scanner import scan_evidence
from docaudit.evidence.schema import AggregateReport, AuditResult, DraftEnforcement, ValidationResult
from docaudit.evidence.validate import validate_all
from docaudit.exceptions import ConfigError, DirectoryNotFound
from docaudit.gates.audit import audit
from docaudit.gates.engine import aggregate, run_checks
from docaudit.lineage.emit import snapshot
from docaudit.registry.store import emit
from docaudit.report.summary import summary_line
from docaudit.schemas.registry import load_schemas

logger = logging.getLogger("docaudit")


@dataclass
class PipelineRun:
    """State handed from stage to stage for one invocation."""
    settings: Settings
    now: datetime
    evidence: Dict[str, List[str]] = field(default_factory=dict)
    draft_enforcement: Optional[DraftEnforcement] = None
    results: List[ValidationResult] = field(default_factory=list)
    audit_result: Optional[AuditResult] = None
    checks: List[Dict[str, Any]] = field(default_factory=list)
    report: Optional[AggregateReport] = None
    json_path: Optional[str] = None
    md_path: Optional[str] = None

    @property
    def evidence_files(self) -> List[str]:
        return sorted({p for paths in self.evidence.values() for p in paths})


def run_pipeline(settings: Settings, now: Optional[datetime] = None, write: bool = True) -> PipelineRun:
    """Scanner -> Validator -> Auditor -> Aggregator -> Emitter, once.

    DirectoryNotFound propagates before anything is written.
    """
    run = PipelineRun(settings=settings, now=utc_now(now))

    registry = load_schemas(settings.schema_dir, settings.draft_probe_lines)
    run.draft_enforcement = registry.draft_enforcement()
    run.evidence = scan_evidence(settings.evidence_dir, registry.kinds)

    run.results = validate_all(registry, run.evidence)
    run.audit_result = audit(run.results)
    run.checks = run_checks({"settings": settings, "now": run.now, "evidence_files": run.evidence_files})
    run.report = aggregate(run.audit_result, run.draft_enforcement, run.checks)

    if write:
        run.json_path, run.md_path = emit(run.report, run.results, snapshot(), settings.evidence_dir, run.now)
    return run


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Validate compliance evidence JSON against Draft-07 schemas")
    ap.add_argument("--config", help="YAML settings file (default: $DOCAUDIT_CONFIG or ./docaudit.yaml)")
    ap.add_argument("--schemas", dest="schema_dir", help="Schema directory (*.schema.json)")
    ap.add_argument("--evidence", dest="evidence_dir", help="Evidence directory (*.json); reports are written here")
    ap.add_argument("--matrix", dest="matrix_path", help="Compliance matrix document for the footer check")
    ap.add_argument("--no-write", action="store_true", help="Evaluate only; do not write report files")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    g.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def configure_logging(quiet: bool = False, verbose: bool = False):
    level = logging.ERROR if quiet else logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.quiet, args.verbose)

    try:
        settings = load_settings(args.config, overrides={
            "schema_dir": args.schema_dir,
            "evidence_dir": args.evidence_dir,
            "matrix_path": args.matrix_path,
        })
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    try:
        run = run_pipeline(settings, write=not args.no_write)
    except DirectoryNotFound as e:
        logger.error("%s", e)
        return 1

    print(summary_line(run.report))
    if run.json_path:
        print(f"REPORT: {run.json_path}")
    return run.report.exit_code()


if __name__ == "__main__":
    sys.exit(main())
