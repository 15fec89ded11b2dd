# docaudit/evidence/schema.py
from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

SUCCESS = "SUCCESS"
REVIEW_REQUIRED = "REVIEW_REQUIRED"
DRAFT_07 = "draft-07"

PLACEHOLDER_NOTE = "Placeholder entry — schema validated but no corresponding evidence JSON found."
GENERIC_FAILURE_NOTE = "Schema validation failed — review required."

ErrorKind = Literal["parse_error", "schema_mismatch", "validator_error", "missing_evidence"]


class EvidenceRecord(BaseModel):
    """Proof that a producing stage ran. Written once, read by the validation pipeline."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    kind: str  # SignResult, VerifyResult, BuildResult, LintResult, ...
    timestamp: str
    status: str  # SUCCESS / FAILURE as reported by the producing stage
    schema_ref: Optional[str] = Field(default=None, alias="schema")


class SchemaDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    path: str
    draft_version: Optional[str] = None
    body: Optional[Dict[str, Any]] = None
    load_error: Optional[str] = None

    @property
    def compliant(self) -> bool:
        return self.draft_version == DRAFT_07


class DraftEnforcement(BaseModel):
    model_config = ConfigDict(frozen=True)

    enforced: bool = True
    standard: str = DRAFT_07
    non_compliant: List[str] = Field(default_factory=list)
    status: Literal["PASS", "FAIL"] = "PASS"
    checked_count: int = 0


class ValidationResult(BaseModel):
    schema_kind: str
    evidence_file: Optional[str] = None  # None marks a placeholder row
    valid: bool = False
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    note: Optional[str] = None

    @model_validator(mode="after")
    def _placeholder_is_never_valid(self):
        if self.evidence_file is None and self.valid:
            raise ValueError("a placeholder result cannot be valid")
        return self

    @property
    def is_placeholder(self) -> bool:
        return self.evidence_file is None


class AuditResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    valid_count: int
    invalid_count: int
    missing_count: int
    completeness_percent: float


class AggregateReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_validated: int
    valid_count: int
    invalid_count: int
    missing_count: int
    completeness_percent: float
    draft_enforcement: DraftEnforcement
    review_reasons: List[str] = Field(default_factory=list)
    final_status: Literal["SUCCESS", "REVIEW_REQUIRED"] = SUCCESS
    checks: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _status_matches_reasons(self):
        expected = REVIEW_REQUIRED if self.review_reasons else SUCCESS
        if self.final_status != expected:
            raise ValueError(f"final_status must be {expected} for reasons {self.review_reasons}")
        return self

    def exit_code(self) -> int:
        return 1 if self.final_status == REVIEW_REQUIRED else 0
