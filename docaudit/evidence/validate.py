# docaudit/evidence/validate.py
from __future__ import annotations
import json, logging, os
from typing import Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from docaudit.evidence.schema import (
    GENERIC_FAILURE_NOTE, PLACEHOLDER_NOTE, SchemaDefinition, ValidationResult,
)
from docaudit.schemas.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def _format_errors(errors) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(p) for p in err.absolute_path) or "<root>"
        parts.append(f"{location}: {err.message}")
    return "; ".join(parts)


def validate(path: str, schema: SchemaDefinition) -> ValidationResult:
    name = os.path.basename(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        payload = json.loads(text)
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("%s: unreadable JSON (%s)", name, e)
        return ValidationResult(schema_kind=schema.kind, evidence_file=name, valid=False,
                                error_kind="parse_error", error_message=str(e))

    try:
        if schema.body is None:
            raise SchemaError(f"schema {schema.kind} is not loadable: {schema.load_error}")
        Draft7Validator.check_schema(schema.body)
        validator = Draft7Validator(schema.body)
        errors = sorted(validator.iter_errors(payload), key=lambda err: [str(p) for p in err.absolute_path])
    except Exception as e:
        # any validator failure still yields a classified row
        logger.warning("%s: validator error against %s (%s)", name, schema.kind, e)
        return ValidationResult(schema_kind=schema.kind, evidence_file=name, valid=False,
                                error_kind="validator_error", error_message=f"{type(e).__name__}: {e}")

    if errors:
        msg = _format_errors(errors)
        logger.warning("%s does not match %s: %s", name, schema.kind, msg)
        return ValidationResult(schema_kind=schema.kind, evidence_file=name, valid=False,
                                error_kind="schema_mismatch", error_message=msg)

    logger.debug("%s valid against %s", name, schema.kind)
    return ValidationResult(schema_kind=schema.kind, evidence_file=name, valid=True)


def placeholder(kind: str) -> ValidationResult:
    return ValidationResult(schema_kind=kind, evidence_file=None, valid=False,
                            error_kind="missing_evidence", note=PLACEHOLDER_NOTE)


def validate_all(registry: SchemaRegistry, evidence: Dict[str, List[str]]) -> List[ValidationResult]:
    results: List[ValidationResult] = []
    for schema in registry:
        paths = evidence.get(schema.kind) or []
        if not paths:
            results.append(placeholder(schema.kind))
            continue
        for path in paths:
            results.append(validate(path, schema))

    for r in results:
        if not r.valid and not r.note:
            r.note = GENERIC_FAILURE_NOTE
    return results
