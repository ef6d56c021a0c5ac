"""Tests for the interactive SQL console."""

from __future__ import annotations

import random
from typing import Callable, Iterator

import pytest

from src.core.console import SqlConsole, render_result
from src.core.dependencies import ConsoleDependencies
from src.core.observability import InMemoryQueryLogger
from src.core.results import QueryResult
from src.integrations.mock_sql_executor import MockQueryEngine


async def _no_sleep(seconds: float) -> None:
    return None


def _input_from(lines: list[str]) -> Callable[[str], str]:
    iterator: Iterator[str] = iter(lines)

    def _read(prompt: str) -> str:
        try:
            return next(iterator)
        except StopIteration as exc:
            raise EOFError from exc

    return _read


def _console(lines: list[str]) -> tuple[SqlConsole, list[str], InMemoryQueryLogger]:
    outputs: list[str] = []
    logger = InMemoryQueryLogger()
    engine = MockQueryEngine(rng=random.Random(1), sleep=_no_sleep)
    console = SqlConsole(
        dependencies=ConsoleDependencies(engine=engine, query_logger=logger),
        input_func=_input_from(lines),
        output_func=outputs.append,
        session_id_factory=lambda: "session-test",
    )
    return console, outputs, logger


def test_console_runs_select_and_renders_table() -> None:
    console, outputs, logger = _console(
        ["SELECT ename, comm FROM emp WHERE deptno = 10 ORDER BY ename", "/exit"]
    )

    console.start()

    assert any(line.startswith("ENAME") and "COMM" in line for line in outputs)
    assert any(line.startswith("CLARK") and "NULL" in line for line in outputs)
    assert any(line.startswith("KING") for line in outputs)
    assert any(line.startswith("2 row(s) selected.") for line in outputs)
    assert outputs[-1] == "Session ended."
    events = [event["event"] for event in logger.events]
    assert events == ["statement_received", "statement_executed"]
    assert logger.events[1]["row_count"] == 2
    assert logger.events[0]["session_id"] == "session-test"


def test_console_reports_errors_with_location() -> None:
    console, outputs, logger = _console(["SELECT * FROM nope"])

    console.start()

    assert "Error ORA-00942: table or view does not exist (Mock Mode) (line 1, position 15)" in outputs
    assert logger.events[-1]["event"] == "statement_failed"
    assert logger.events[-1]["code"] == "ORA-00942"
    assert outputs[-1] == "\nSession ended."


def test_console_switches_dialect_and_checks_connection() -> None:
    console, outputs, logger = _console(["/dialect MySQL", "/connect", "/dialect db2", "quit"])

    console.start()

    assert console.dialect == "mysql"
    assert "Dialect set to MySQL 8.0." in outputs
    assert any(line.endswith("MySQL 8.0 (Mock Mode)") for line in outputs)
    assert any("Unknown dialect 'db2'" in line for line in outputs)
    assert [event["event"] for event in logger.events] == ["dialect_changed", "connection_checked"]


def test_console_lists_tables_and_formats_sql() -> None:
    console, outputs, _ = _console(["/tables", "/format select * from dept", "/bogus", ":q"])

    console.start()

    assert any(line.startswith("  - emp: 13 rows") and "employees" in line for line in outputs)
    assert any(line.startswith("  - salgrade: 5 rows") for line in outputs)
    assert any(line.startswith("SELECT") and "FROM dept" in line.replace("\n", " ") for line in outputs)
    assert any(line.startswith("Unknown command '/bogus'") for line in outputs)


def test_run_statement_returns_result_for_dml() -> None:
    console, outputs, _ = _console([])

    result = console.run_statement("UPDATE emp SET sal = sal * 2")

    assert result.success is True
    assert result.affected_rows is not None and 1 <= result.affected_rows <= 10
    assert outputs[-1].startswith(f"{result.affected_rows} row(s) affected.")


@pytest.mark.parametrize(
    ("result", "expected"),
    [
        (QueryResult.affected(0, 0.5), "0 row(s) affected. (0.500s)"),
        (QueryResult.failed("ERR-001", "boom"), "Error ERR-001: boom"),
    ],
)
def test_render_result_non_tabular(result: QueryResult, expected: str) -> None:
    assert render_result(result) == [expected]


def test_unformattable_statement_does_not_end_session() -> None:
    nested = "SELECT " + "(" * 3000 + "1" + ")" * 3000 + " FROM dual"
    console, outputs, _ = _console([nested, "SELECT * FROM dept", "/exit"])
    console.format_output = True

    console.start()

    assert nested in outputs
    assert any(line.startswith("4 row(s) selected.") for line in outputs)
    assert outputs[-1] == "Session ended."
