# docaudit/collectors/stages.py
"""
Producing stages. Each one calls its external tool once (no retries) and
records the outcome as an evidence JSON in the evidence directory, bound to
its schema through the `schema` field:

  build   Markdown -> PDF          BuildResult_<ts>.json
  sign    sha256 sidecar + .asc     SignResult_<ts>.json
  verify  sidecar + signature       VerifyResult_<ts>.json
  lint    markdown linter           LintResult_<ts>.json
"""
from __future__ import annotations
import logging, os
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from docaudit.collectors.common import compact, iso, unique_path, write_json
from docaudit.collectors.tools import convert_markdown, lint_markdown
from docaudit.evidence.attest import sign_file, verify_signature
from docaudit.evidence.hashing import sha256_file, verify_sidecar, write_sidecar
from docaudit.evidence.schema import EvidenceRecord
from docaudit.exceptions import CollaboratorError

logger = logging.getLogger(__name__)


def write_record(kind: str, status: str, evidence_dir: str, now: Optional[datetime] = None,
                 **payload: Any) -> Tuple[EvidenceRecord, str]:
    record = EvidenceRecord(kind=kind, timestamp=iso(now), status=status, schema=kind, **payload)
    os.makedirs(evidence_dir, exist_ok=True)
    path = unique_path(evidence_dir, f"{kind}_{compact(now)}", ".json")
    write_json(path, record.model_dump(mode="json", by_alias=True))
    logger.info("%s %s -> %s", kind, status, path)
    return record, path


def build_stage(src: str, out: Optional[str], evidence_dir: str, pandoc: str = "pandoc",
                now: Optional[datetime] = None) -> Tuple[EvidenceRecord, str]:
    out = out or os.path.splitext(src)[0] + ".pdf"
    try:
        convert_markdown(src, out, pandoc=pandoc)
    except CollaboratorError as e:
        logger.error("build failed: %s", e)
        return write_record("BuildResult", "FAILURE", evidence_dir, now,
                            source=src, output=out, sha256=None, error=str(e))
    return write_record("BuildResult", "SUCCESS", evidence_dir, now,
                        source=src, output=out, sha256=sha256_file(out), error=None)


def sign_stage(path: str, evidence_dir: str, key_id: Optional[str] = None, gpg: str = "gpg",
               now: Optional[datetime] = None) -> Tuple[EvidenceRecord, str]:
    if not os.path.isfile(path):
        return write_record("SignResult", "FAILURE", evidence_dir, now, file=path, sha256=None,
                            sidecar=None, signature=None, key_id=key_id, error=f"file not found: {path}")
    sidecar = write_sidecar(path)
    digest = sha256_file(path)
    try:
        sig = sign_file(path, key_id=key_id, gpg=gpg)
    except CollaboratorError as e:
        logger.error("signing failed: %s", e)
        return write_record("SignResult", "FAILURE", evidence_dir, now, file=path, sha256=digest,
                            sidecar=sidecar, signature=None, key_id=key_id, error=str(e))
    return write_record("SignResult", "SUCCESS", evidence_dir, now, file=path, sha256=digest,
                        sidecar=sidecar, signature=sig, key_id=key_id, error=None)


def verify_stage(path: str, evidence_dir: str, signature: Optional[str] = None, gpg: str = "gpg",
                 now: Optional[datetime] = None) -> Tuple[EvidenceRecord, str]:
    errors = []
    try:
        hash_ok = verify_sidecar(path)
        if not hash_ok:
            errors.append("sha256 mismatch")
    except (OSError, ValueError) as e:
        hash_ok = False
        errors.append(f"hash check failed: {e}")

    signature = signature or path + ".asc"
    try:
        verify_signature(path, signature, gpg=gpg)
        signature_ok = True
    except CollaboratorError as e:
        signature_ok = False
        errors.append(f"signature check failed: {e}")

    status = "SUCCESS" if hash_ok and signature_ok else "FAILURE"
    return write_record("VerifyResult", status, evidence_dir, now, file=path, signature=signature,
                        hash_ok=hash_ok, signature_ok=signature_ok,
                        error="; ".join(errors) or None)


def lint_stage(patterns: Iterable[str], evidence_dir: str, linter: str = "markdownlint",
               now: Optional[datetime] = None) -> Tuple[EvidenceRecord, str]:
    patterns = list(patterns)
    try:
        files = lint_markdown(patterns, linter=linter)
    except CollaboratorError as e:
        logger.error("lint failed: %s", e)
        return write_record("LintResult", "FAILURE", evidence_dir, now,
                            patterns=patterns, files=[], error=str(e))
    return write_record("LintResult", "SUCCESS", evidence_dir, now,
                        patterns=patterns, files=files, error=None)
