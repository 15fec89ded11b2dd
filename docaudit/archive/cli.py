# docaudit/archive/cli.py
import argparse, logging, sys
from typing import List, Optional

from docaudit.archive.retention import archive_evidence, purge_archives
from docaudit.config import load_settings
from docaudit.exceptions import ConfigError, DirectoryNotFound
from docaudit.gates.cli import configure_logging

logger = logging.getLogger("docaudit")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Archive old evidence and purge expired archive bundles")
    ap.add_argument("--config", help="YAML settings file")
    ap.add_argument("--evidence", dest="evidence_dir")
    ap.add_argument("--archive", dest="archive_dir")
    ap.add_argument("--older-than", dest="archive_after_days", type=int, help="Archive evidence older than N days")
    ap.add_argument("--retention", dest="retention_days", type=int, help="Delete bundles older than N days")
    ap.add_argument("-q", "--quiet", action="store_true")
    args = ap.parse_args(argv)
    configure_logging(args.quiet)

    try:
        settings = load_settings(args.config, overrides={
            "evidence_dir": args.evidence_dir, "archive_dir": args.archive_dir,
            "archive_after_days": args.archive_after_days, "retention_days": args.retention_days,
        })
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    try:
        bundle = archive_evidence(settings.evidence_dir, settings.archive_dir, settings.archive_after_days)
    except DirectoryNotFound as e:
        logger.error("%s", e)
        return 1
    removed = purge_archives(settings.archive_dir, settings.retention_days)

    print(f"ARCHIVE: {bundle or 'none'} PURGED={len(removed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
