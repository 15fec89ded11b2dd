# docaudit/evidence/scanner.py
from __future__ import annotations
import glob, json, logging, os
from typing import Dict, Iterable, List, Optional

from docaudit.exceptions import DirectoryNotFound
from docaudit.schemas.registry import kind_from_filename

logger = logging.getLogger(__name__)

BINDING_FIELD = "schema"


def declared_kind(path: str, kinds: Iterable[str]) -> Optional[str]:
    """Kind named by the record's top-level `schema` field, if it is a known one."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    ref = data.get(BINDING_FIELD)
    if not isinstance(ref, str) or not ref.strip():
        return None
    kind = kind_from_filename(ref.strip().replace("\\", "/"))
    if kind in kinds:
        return kind
    logger.warning("%s declares unknown schema %r; falling back to filename matching",
                   os.path.basename(path), ref)
    return None


def scan_evidence(directory: str, kinds: List[str]) -> Dict[str, List[str]]:
    if not os.path.isdir(directory):
        raise DirectoryNotFound(directory, "evidence directory")

    found: Dict[str, List[str]] = {k: [] for k in kinds}
    for path in sorted(glob.glob(os.path.join(directory, "*.json"))):
        if not os.path.isfile(path):
            continue
        name = os.path.basename(path)
        bound = declared_kind(path, found)
        if bound is not None:
            found[bound].append(path)
            continue
        for kind in kinds:
            if name.startswith(kind):
                found[kind].append(path)

    for kind, paths in found.items():
        if not paths:
            logger.info("no evidence found for %s", kind)
    return found


def newest_by_mtime(paths: Iterable[str]) -> Optional[str]:
    """Most recently modified existing file among paths, or None."""
    files = [p for p in paths if os.path.isfile(p)]
    if not files:
        return None
    return max(files, key=lambda p: (os.path.getmtime(p), p))
