from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from docaudit.config import Settings


NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

FOO_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Foo",
    "type": "object",
    "required": ["kind", "status"],
    "properties": {
        "kind": {"type": "string"},
        "status": {"enum": ["SUCCESS", "FAILURE"]},
        "count": {"type": "integer"},
    },
}


def write_schema(directory: Path, kind: str, body: dict | None = None, text: str | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{kind}.schema.json"
    path.write_text(text if text is not None else json.dumps(body or FOO_SCHEMA, indent=2), encoding="utf-8")
    return path


def write_evidence(directory: Path, name: str, payload=None, text: str | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(text if text is not None else json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    d = tmp_path / "schemas"
    d.mkdir()
    return d


@pytest.fixture
def evidence_dir(tmp_path: Path) -> Path:
    d = tmp_path / "docs" / "_evidence"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def settings(tmp_path: Path, schema_dir: Path, evidence_dir: Path) -> Settings:
    return Settings(
        schema_dir=str(schema_dir),
        evidence_dir=str(evidence_dir),
        matrix_path=str(tmp_path / "docs" / "compliance-matrix.md"),
        archive_dir=str(tmp_path / "archive"),
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in ("DOCAUDIT_CONFIG", "DOCAUDIT_SCHEMA_DIR", "DOCAUDIT_EVIDENCE_DIR",
                "DOCAUDIT_MATRIX_PATH", "DOCAUDIT_ARCHIVE_DIR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
