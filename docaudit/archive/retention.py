# docaudit/archive/retention.py
"""
Audit retention. Evidence older than `older_than_days` is moved into a
deflated zip bundle (with a MANIFEST.json of sizes and sha256 digests) under
the archive directory; bundles older than `retention_days` are purged.
"""
from __future__ import annotations
import glob, json, logging, os, zipfile
from datetime import datetime, timedelta
from typing import List, Optional

from docaudit.collectors.common import compact, iso, unique_path, utc_now
from docaudit.evidence.hashing import sha256_file
from docaudit.exceptions import DirectoryNotFound

logger = logging.getLogger(__name__)

ARCHIVE_PREFIX = "EvidenceArchive_"
ARCHIVABLE = ("*.json", "*.md")


def _older_than(path: str, cutoff: datetime) -> bool:
    return os.path.getmtime(path) < cutoff.timestamp()


def archive_candidates(evidence_dir: str, older_than_days: int, now: Optional[datetime] = None) -> List[str]:
    cutoff = utc_now(now) - timedelta(days=older_than_days)
    paths = set()
    for pat in ARCHIVABLE:
        paths.update(p for p in glob.glob(os.path.join(evidence_dir, pat)) if os.path.isfile(p))
    return sorted(p for p in paths if _older_than(p, cutoff))


def archive_evidence(evidence_dir: str, archive_dir: str, older_than_days: int,
                     now: Optional[datetime] = None) -> Optional[str]:
    """Bundle and remove old evidence. Returns the bundle path, or None if nothing qualified."""
    if not os.path.isdir(evidence_dir):
        raise DirectoryNotFound(evidence_dir, "evidence directory")

    files = archive_candidates(evidence_dir, older_than_days, now)
    if not files:
        logger.info("nothing older than %d day(s) in %s", older_than_days, evidence_dir)
        return None

    os.makedirs(archive_dir, exist_ok=True)
    bundle = unique_path(archive_dir, ARCHIVE_PREFIX + compact(now), ".zip")
    manifest = {
        "created_utc": iso(now),
        "source": evidence_dir,
        "older_than_days": older_than_days,
        "files": [{"name": os.path.basename(p), "size": os.path.getsize(p), "sha256": sha256_file(p)}
                  for p in files],
    }
    with zipfile.ZipFile(bundle, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for p in files:
            zf.write(p, arcname=os.path.basename(p))
        zf.writestr("MANIFEST.json", json.dumps(manifest, indent=2))

    # only remove originals once the bundle is closed
    for p in files:
        os.remove(p)
    logger.info("archived %d file(s) into %s", len(files), bundle)
    return bundle


def purge_archives(archive_dir: str, retention_days: int, now: Optional[datetime] = None) -> List[str]:
    if not os.path.isdir(archive_dir):
        return []
    cutoff = utc_now(now) - timedelta(days=retention_days)
    removed = []
    for p in sorted(glob.glob(os.path.join(archive_dir, ARCHIVE_PREFIX + "*.zip"))):
        if _older_than(p, cutoff):
            os.remove(p)
            removed.append(p)
    if removed:
        logger.info("purged %d expired archive(s) from %s", len(removed), archive_dir)
    return removed
