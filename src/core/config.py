"""Utilities for loading console and engine settings from YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_DIALECT = "oracle"


@dataclass(slots=True)
class EngineSettings:
    min_latency_ms: float = 200.0
    max_latency_ms: float = 500.0
    min_affected_rows: int = 1
    max_affected_rows: int = 10
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.min_latency_ms < 0 or self.max_latency_ms < self.min_latency_ms:
            raise ValueError(
                f"Invalid latency range [{self.min_latency_ms}, {self.max_latency_ms}) ms"
            )
        if self.min_affected_rows < 0 or self.max_affected_rows < self.min_affected_rows:
            raise ValueError(
                f"Invalid affected rows range [{self.min_affected_rows}, {self.max_affected_rows}]"
            )


@dataclass(slots=True)
class ConsoleSettings:
    dialect: str = DEFAULT_DIALECT
    format_output: bool = False


@dataclass(slots=True)
class PathsSettings:
    query_logs_dir: str | None = None


@dataclass(slots=True)
class Settings:
    engine: EngineSettings = field(default_factory=EngineSettings)
    console: ConsoleSettings = field(default_factory=ConsoleSettings)
    paths: PathsSettings | None = None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    raw = _load_yaml(config_path)

    engine_raw = raw.get("engine") or {}
    seed = engine_raw.get("seed")
    engine = EngineSettings(
        min_latency_ms=float(engine_raw.get("min_latency_ms", 200)),
        max_latency_ms=float(engine_raw.get("max_latency_ms", 500)),
        min_affected_rows=int(engine_raw.get("min_affected_rows", 1)),
        max_affected_rows=int(engine_raw.get("max_affected_rows", 10)),
        seed=int(seed) if seed is not None else None,
    )

    console_raw = raw.get("console") or {}
    console = ConsoleSettings(
        dialect=str(console_raw.get("dialect", DEFAULT_DIALECT)).lower(),
        format_output=bool(console_raw.get("format_output", False)),
    )

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        query_logs_dir = paths_raw.get("query_logs_dir")
        paths = PathsSettings(
            query_logs_dir=str(query_logs_dir) if query_logs_dir else None,
        )

    return Settings(engine=engine, console=console, paths=paths)
