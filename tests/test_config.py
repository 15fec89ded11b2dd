from __future__ import annotations

import os

import pytest

from docaudit.config import Settings, load_settings
from docaudit.exceptions import ConfigError


def test_defaults_without_config(tmp_path) -> None:
    s = load_settings(environ={})
    assert s.schema_dir == "schemas"
    assert s.evidence_dir == os.path.join("docs", "_evidence")
    assert s.draft_probe_lines == 5
    assert s.footer_max_age_hours == 24.0


def test_local_yaml_is_picked_up(tmp_path) -> None:
    (tmp_path / "docaudit.yaml").write_text("schema_dir: my_schemas\nretention_days: 90\n", encoding="utf-8")

    s = load_settings(environ={})

    assert s.schema_dir == "my_schemas"
    assert s.retention_days == 90


def test_env_beats_yaml_and_overrides_beat_env(tmp_path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("evidence_dir: from_yaml\nschema_dir: from_yaml\n", encoding="utf-8")
    env = {"DOCAUDIT_CONFIG": str(cfg), "DOCAUDIT_EVIDENCE_DIR": "from_env", "DOCAUDIT_SCHEMA_DIR": "from_env"}

    s = load_settings(overrides={"schema_dir": "from_cli", "evidence_dir": None}, environ=env)

    assert s.evidence_dir == "from_env"
    assert s.schema_dir == "from_cli"


def test_empty_yaml_is_defaults(tmp_path) -> None:
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_settings(str(cfg), environ={}) == Settings()


@pytest.mark.parametrize("text", ["- a\n- b\n", "unknown_key: 1\n", "footer_max_age_hours: -1\n", "a: [\n"])
def test_invalid_config_raises(tmp_path, text) -> None:
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(cfg), environ={})


def test_unreadable_config_raises(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "missing.yaml"), environ={})
