"""Session event sinks for the SQL console."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class QueryObservationSink(Protocol):
    """Records lifecycle events emitted while statements are executed."""

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _build_event(event: str, payload: dict[str, Any], now: datetime) -> dict[str, Any]:
    enriched = {key: value for key, value in payload.items() if value is not None}
    enriched.setdefault("event", event)
    enriched.setdefault("timestamp", now.isoformat(timespec="milliseconds").replace("+00:00", "Z"))
    return enriched


@dataclass(slots=True)
class JSONLQueryLogger(QueryObservationSink):
    """Appends each session's events to its own `<started>-<session>.jsonl` file.

    The file name is fixed by the session's first event, so one console
    session always lands in a single file under *base_dir*.
    """

    base_dir: Path
    _session_files: dict[str, Path] = field(init=False, default_factory=dict, repr=False)

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        now = datetime.now(UTC)
        target = self.path_for(session_id, now)
        with target.open("a", encoding="utf-8") as handle:
            json.dump(_build_event(event, payload, now), handle, ensure_ascii=False)
            handle.write("\n")

    def path_for(self, session_id: str, started: datetime | None = None) -> Path:
        """Return the log file for *session_id*, creating the directory on first use."""

        target = self._session_files.get(session_id)
        if target is None:
            started = started or datetime.now(UTC)
            safe_session = _UNSAFE_FILENAME_CHARS.sub("-", session_id.strip()) or "session"
            slug = started.strftime("%Y%m%dT%H%M%S%f")[:-3]
            self.base_dir.mkdir(parents=True, exist_ok=True)
            target = self.base_dir / f"{slug}-{safe_session}.jsonl"
            self._session_files[session_id] = target
        return target


@dataclass(slots=True)
class InMemoryQueryLogger(QueryObservationSink):
    """Keeps events in a list; used when no logs directory is configured."""

    events: list[dict[str, Any]] = field(default_factory=list)

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        enriched = _build_event(event, payload, datetime.now(UTC))
        enriched.setdefault("session_id", session_id)
        self.events.append(enriched)
