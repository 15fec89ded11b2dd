# docaudit/config.py
"""
Settings for the compliance pipeline.

Resolution order (later wins):
  1. defaults below
  2. YAML file: --config, else $DOCAUDIT_CONFIG, else ./docaudit.yaml if present
  3. environment: DOCAUDIT_SCHEMA_DIR, DOCAUDIT_EVIDENCE_DIR, DOCAUDIT_MATRIX_PATH, DOCAUDIT_ARCHIVE_DIR
  4. explicit overrides (CLI flags)
"""
from __future__ import annotations
import os
from typing import Any, Dict, Optional
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docaudit.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "docaudit.yaml"

ENV_KEYS = {
    "DOCAUDIT_SCHEMA_DIR": "schema_dir",
    "DOCAUDIT_EVIDENCE_DIR": "evidence_dir",
    "DOCAUDIT_MATRIX_PATH": "matrix_path",
    "DOCAUDIT_ARCHIVE_DIR": "archive_dir",
}


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_dir: str = "schemas"
    evidence_dir: str = os.path.join("docs", "_evidence")
    matrix_path: str = os.path.join("docs", "compliance-matrix.md")
    archive_dir: str = os.path.join("docs", "_evidence", "archive")
    draft_probe_lines: int = Field(default=5, ge=1)
    footer_max_age_hours: float = Field(default=24.0, gt=0)
    archive_after_days: int = Field(default=30, ge=0)
    retention_days: int = Field(default=365, ge=1)
    pandoc: str = "pandoc"
    gpg: str = "gpg"
    markdownlint: str = "markdownlint"
    gpg_key_id: Optional[str] = None


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"config YAML error in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(data).__name__}")
    return data


def load_settings(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None,
                  environ: Optional[Dict[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    cfg_path = path or env.get("DOCAUDIT_CONFIG")
    if cfg_path:
        values.update(_read_yaml(cfg_path))
    elif os.path.isfile(DEFAULT_CONFIG_FILE):
        values.update(_read_yaml(DEFAULT_CONFIG_FILE))

    for key, field in ENV_KEYS.items():
        if env.get(key):
            values[field] = env[key]

    values.update({k: v for k, v in (overrides or {}).items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}") from e
