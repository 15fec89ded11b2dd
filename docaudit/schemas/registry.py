# docaudit/schemas/registry.py
from __future__ import annotations
import glob, json, logging, os
from itertools import islice
from typing import Dict, List, Optional

from docaudit.evidence.schema import DRAFT_07, DraftEnforcement, SchemaDefinition
from docaudit.exceptions import DirectoryNotFound

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".schema.json"


def kind_from_filename(name: str) -> str:
    base = os.path.basename(name)
    if base.endswith(SCHEMA_SUFFIX):
        return base[: -len(SCHEMA_SUFFIX)]
    return os.path.splitext(base)[0]


def declares_draft07(path: str, probe_lines: int = 5) -> bool:
    """Substring probe of the first lines; the $schema URI is not parsed."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        head = "".join(islice(f, probe_lines))
    return DRAFT_07 in head


def _load_body(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            body = json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        return None, f"{type(e).__name__}: {e}"
    if not isinstance(body, dict):
        return None, f"schema root must be an object, got {type(body).__name__}"
    return body, None


class SchemaRegistry:
    def __init__(self, directory: str, schemas: List[SchemaDefinition]):
        self.directory = directory
        self.schemas = list(schemas)
        self._by_kind: Dict[str, SchemaDefinition] = {s.kind: s for s in self.schemas}

    def __len__(self):
        return len(self.schemas)

    def __iter__(self):
        return iter(self.schemas)

    @property
    def kinds(self) -> List[str]:
        return [s.kind for s in self.schemas]

    def get(self, kind: str) -> Optional[SchemaDefinition]:
        return self._by_kind.get(kind)

    @property
    def compliant(self) -> bool:
        return all(s.compliant for s in self.schemas)

    def draft_enforcement(self) -> DraftEnforcement:
        return DraftEnforcement(
            non_compliant=[s.kind for s in self.schemas if not s.compliant],
            status="PASS" if self.compliant else "FAIL",
            checked_count=len(self.schemas),
        )


def load_schemas(directory: str, probe_lines: int = 5) -> SchemaRegistry:
    if not os.path.isdir(directory):
        raise DirectoryNotFound(directory, "schema directory")

    schemas: List[SchemaDefinition] = []
    for path in sorted(glob.glob(os.path.join(directory, "*" + SCHEMA_SUFFIX))):
        kind = kind_from_filename(path)
        try:
            draft = DRAFT_07 if declares_draft07(path, probe_lines) else None
        except OSError as e:
            logger.warning("cannot read schema %s: %s", path, e)
            draft = None
        body, err = _load_body(path)
        if err:
            logger.warning("schema %s could not be parsed: %s", path, err)
        if draft is None:
            logger.warning("schema %s does not declare %s in its first %d lines", kind, DRAFT_07, probe_lines)
        schemas.append(SchemaDefinition(kind=kind, path=path, draft_version=draft, body=body, load_error=err))

    logger.info("loaded %d schema(s) from %s", len(schemas), directory)
    return SchemaRegistry(directory, schemas)
