# docaudit/collectors/cli.py
import argparse, logging, sys
from typing import List, Optional

from docaudit.collectors.stages import build_stage, lint_stage, sign_stage, verify_stage
from docaudit.config import load_settings
from docaudit.exceptions import ConfigError
from docaudit.gates.cli import configure_logging

logger = logging.getLogger("docaudit")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run a document stage and record its evidence")
    ap.add_argument("--config", help="YAML settings file")
    ap.add_argument("--evidence", dest="evidence_dir", help="Evidence output directory")
    ap.add_argument("-q", "--quiet", action="store_true")
    sub = ap.add_subparsers(dest="stage", required=True)

    b = sub.add_parser("build", help="Convert Markdown to PDF")
    b.add_argument("source")
    b.add_argument("-o", "--output")

    s = sub.add_parser("sign", help="Write a sha256 sidecar and a detached signature")
    s.add_argument("file")
    s.add_argument("--key", help="GPG key id (default from config)")

    v = sub.add_parser("verify", help="Check the sha256 sidecar and the detached signature")
    v.add_argument("file")
    v.add_argument("--signature")

    l = sub.add_parser("lint", help="Lint Markdown files")
    l.add_argument("patterns", nargs="+")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.quiet)
    try:
        settings = load_settings(args.config, overrides={"evidence_dir": args.evidence_dir})
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    out = settings.evidence_dir
    if args.stage == "build":
        record, path = build_stage(args.source, args.output, out, pandoc=settings.pandoc)
    elif args.stage == "sign":
        record, path = sign_stage(args.file, out, key_id=args.key or settings.gpg_key_id, gpg=settings.gpg)
    elif args.stage == "verify":
        record, path = verify_stage(args.file, out, signature=args.signature, gpg=settings.gpg)
    else:
        record, path = lint_stage(args.patterns, out, linter=settings.markdownlint)

    print(f"{record.kind}: {record.status} -> {path}")
    return 0 if record.status == "SUCCESS" else 1


if __name__ == "__main__":
    sys.exit(main())
