"""Tests for dependency construction from settings."""

from __future__ import annotations

from pathlib import Path

from src.core.config import EngineSettings, PathsSettings, Settings
from src.core.dependencies import build_dependencies
from src.core.observability import InMemoryQueryLogger, JSONLQueryLogger


def test_build_dependencies_without_log_dir_uses_memory_logger() -> None:
    dependencies = build_dependencies(Settings(engine=EngineSettings(seed=3)))

    assert isinstance(dependencies.query_logger, InMemoryQueryLogger)
    assert dependencies.engine.min_latency_s == 0.2
    assert dependencies.engine.max_latency_s == 0.5
    assert "emp" in dependencies.engine.catalog


def test_build_dependencies_creates_log_dir(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs" / "query"
    settings = Settings(paths=PathsSettings(query_logs_dir=str(logs_dir)))

    dependencies = build_dependencies(settings)

    assert isinstance(dependencies.query_logger, JSONLQueryLogger)
    assert logs_dir.is_dir()
