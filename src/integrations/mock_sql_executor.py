"""Mock SQL executor evaluating statements against in-memory fixture tables.

This engine stands in for a live database when no proxy server is reachable.
It understands a narrow SQL subset (see `src.core.sql_parser`), simulates
network latency, and answers with the same envelope the real drivers produce:

- SELECT statements are filtered, sorted and projected over the fixtures.
- INSERT, UPDATE and DELETE report a random affected-row count; nothing is
  mutated.
- DDL and any other statement succeed with zero affected rows.

Errors are reported the way Oracle would (`ORA-00942`, `ORA-00923`), and no
exception ever escapes `execute`.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Sequence

from src.core.config import EngineSettings
from src.core.results import (
    INTERNAL_ERROR,
    MISSING_FROM,
    TABLE_NOT_FOUND,
    UNKNOWN_TABLE,
    CellValue,
    QueryError,
    QueryResult,
)
from src.core.sql_parser import (
    ALL_COLUMNS,
    LiteralValue,
    OrderBy,
    StatementKind,
    detect_statement_kind,
    find_from_table,
    locate_token,
    parse_select,
)
from src.integrations.fixture_tables import FixtureCatalog, FieldValue, build_scott_catalog

LOGGER = logging.getLogger(__name__)

UNKNOWN_TABLE_MESSAGE = "table or view does not exist (Mock Mode)"
MISSING_FROM_MESSAGE = "FROM keyword not found where expected"
TABLE_NOT_FOUND_MESSAGE = "Could not determine the table for this statement"
INTERNAL_ERROR_MESSAGE = "An unknown error occurred (Mock Mode)"

Record = Mapping[str, FieldValue]


@dataclass(slots=True)
class MockQueryEngine:
    """Evaluates SQL text against a fixture catalog with simulated latency."""

    catalog: FixtureCatalog = field(default_factory=build_scott_catalog)
    min_latency_s: float = 0.2
    max_latency_s: float = 0.5
    min_affected_rows: int = 1
    max_affected_rows: int = 10
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.perf_counter
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep

    @classmethod
    def from_settings(cls, settings: EngineSettings, catalog: FixtureCatalog | None = None) -> MockQueryEngine:
        return cls(
            catalog=catalog or build_scott_catalog(),
            min_latency_s=settings.min_latency_ms / 1000,
            max_latency_s=settings.max_latency_ms / 1000,
            min_affected_rows=settings.min_affected_rows,
            max_affected_rows=settings.max_affected_rows,
            rng=random.Random(settings.seed),
        )

    async def execute(self, sql: str) -> QueryResult:
        """Run *sql* and return a success or failure envelope."""

        started = self.clock()
        kind = detect_statement_kind(sql)
        LOGGER.debug("Executing %s statement: %s", kind.value, _truncate_for_log(sql))

        trimmed = sql.strip()
        try:
            await self.sleep(self._draw_latency())

            error = self._validate(trimmed)
            if error is not None:
                LOGGER.warning("Mock statement rejected with %s: %s", error.code, error.message)
                return QueryResult(success=False, error=error, execution_time=self._elapsed(started))

            if kind is StatementKind.SELECT:
                return self._run_select(trimmed, started)
            if kind.is_dml:
                affected = self.rng.randint(self.min_affected_rows, self.max_affected_rows)
                LOGGER.debug("Simulated %s affecting %s row(s)", kind.value, affected)
                return QueryResult.affected(affected, self._elapsed(started))
            return QueryResult.affected(0, self._elapsed(started))
        except Exception as exc:
            LOGGER.exception("Mock execution failed for %s statement", kind.value)
            return QueryResult.failed(
                INTERNAL_ERROR,
                str(exc) or INTERNAL_ERROR_MESSAGE,
                execution_time=self._elapsed(started),
            )

    def _draw_latency(self) -> float:
        span = self.max_latency_s - self.min_latency_s
        return self.min_latency_s + self.rng.random() * span

    def _elapsed(self, started: float) -> float:
        return self.clock() - started

    def _validate(self, sql: str) -> QueryError | None:
        table = find_from_table(sql)
        if table is not None and table not in self.catalog:
            line, position = locate_token(sql, table)
            return QueryError(code=UNKNOWN_TABLE, message=UNKNOWN_TABLE_MESSAGE, line=line, position=position)

        upper = sql.upper()
        if upper.startswith("SELECT") and "FROM" not in upper:
            return QueryError(code=MISSING_FROM, message=MISSING_FROM_MESSAGE, line=1, position=len(sql))
        return None

    def _run_select(self, sql: str, started: float) -> QueryResult:
        parsed = parse_select(sql)
        if parsed.table is None:
            return QueryResult.failed(TABLE_NOT_FOUND, TABLE_NOT_FOUND_MESSAGE, execution_time=self._elapsed(started))

        relation = self.catalog.resolve(parsed.table)
        if relation is None:
            line, position = locate_token(sql, parsed.table)
            return QueryResult.failed(
                UNKNOWN_TABLE,
                UNKNOWN_TABLE_MESSAGE,
                line=line,
                position=position,
                execution_time=self._elapsed(started),
            )

        records = _filter_records(relation.records, parsed.predicates)
        if parsed.order_by is not None:
            records = _sort_records(records, parsed.order_by)

        columns = _resolve_columns(parsed.columns, relation.fields)
        rows: list[list[CellValue]] = [[record.get(column) for column in columns] for record in records]
        LOGGER.debug("SELECT on %s returned %s row(s)", relation.name, len(rows))
        return QueryResult.selected(
            [column.upper() for column in columns],
            rows,
            self._elapsed(started),
        )


def _filter_records(records: Sequence[Record], predicates: Mapping[str, LiteralValue]) -> list[Record]:
    if not predicates:
        return list(records)
    return [
        record
        for record in records
        if all(record.get(column) == value for column, value in predicates.items())
    ]


def _sort_records(records: list[Record], order_by: OrderBy) -> list[Record]:
    column = order_by.column
    present = [record for record in records if record.get(column) is not None]
    missing = [record for record in records if record.get(column) is None]
    present.sort(key=lambda record: record[column], reverse=order_by.descending)
    return present + missing


def _resolve_columns(requested: list[str] | str, fields: Sequence[str]) -> list[str]:
    if requested == ALL_COLUMNS:
        return list(fields)
    selected = [column for column in requested if column in fields]
    return selected or list(fields)


def _truncate_for_log(value: str, limit: int = 200) -> str:
    collapsed = " ".join(value.split())
    if len(collapsed) <= limit:
        return collapsed
    return collapsed[: limit - 3] + "..."
