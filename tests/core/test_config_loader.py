"""Tests for loading application settings from YAML."""

# ruff: noqa: PLR2004

from __future__ import annotations

from pathlib import Path

import pytest

from src.core.config import EngineSettings, load_settings


def test_load_settings_parses_sections(tmp_path: Path) -> None:
    config_path = tmp_path / "dev.yaml"
    config_path.write_text(
        f"""
engine:
  min_latency_ms: 10
  max_latency_ms: 20
  min_affected_rows: 2
  max_affected_rows: 3
  seed: 42
console:
  dialect: MySQL
  format_output: true
paths:
  query_logs_dir: {tmp_path / 'logs'}
        """,
        encoding="utf-8",
    )

    settings = load_settings(config_path)

    assert settings.engine.min_latency_ms == 10
    assert settings.engine.max_affected_rows == 3
    assert settings.engine.seed == 42
    assert settings.console.dialect == "mysql"
    assert settings.console.format_output is True
    assert settings.paths is not None
    assert settings.paths.query_logs_dir == str(tmp_path / "logs")


def test_load_settings_defaults_for_empty_file(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    settings = load_settings(config_path)

    assert settings.engine.min_latency_ms == 200
    assert settings.engine.max_latency_ms == 500
    assert settings.engine.min_affected_rows == 1
    assert settings.engine.max_affected_rows == 10
    assert settings.engine.seed is None
    assert settings.console.dialect == "oracle"
    assert settings.paths is None


def test_load_settings_rejects_inverted_latency(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("engine:\n  min_latency_ms: 600\n  max_latency_ms: 100\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(config_path)


def test_engine_settings_rejects_inverted_row_range() -> None:
    with pytest.raises(ValueError):
        EngineSettings(min_affected_rows=5, max_affected_rows=1)
