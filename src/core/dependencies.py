"""Factory helpers for constructing console dependencies from settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.core.config import Settings
from src.core.observability import InMemoryQueryLogger, JSONLQueryLogger, QueryObservationSink
from src.integrations.fixture_tables import build_scott_catalog
from src.integrations.mock_sql_executor import MockQueryEngine


@dataclass(slots=True)
class ConsoleDependencies:
    """Collection of collaborators used by the SQL console."""

    engine: MockQueryEngine
    query_logger: QueryObservationSink | None = None


def build_dependencies(settings: Settings) -> ConsoleDependencies:
    """Create dependency instances based on *settings*."""

    engine = MockQueryEngine.from_settings(settings.engine, catalog=build_scott_catalog())

    query_logs_dir = _resolve_query_logs_dir(settings)
    query_logger: QueryObservationSink
    if query_logs_dir is not None:
        query_logger = JSONLQueryLogger(base_dir=query_logs_dir)
    else:
        query_logger = InMemoryQueryLogger()

    return ConsoleDependencies(engine=engine, query_logger=query_logger)


def _resolve_query_logs_dir(settings: Settings) -> Path | None:
    if not settings.paths or not settings.paths.query_logs_dir:
        return None
    path = Path(settings.paths.query_logs_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
