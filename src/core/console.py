"""Interactive console for running SQL against the mock query engine."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable
from uuid import uuid4

from src.core.config import Settings, load_settings
from src.core.dependencies import ConsoleDependencies, build_dependencies
from src.core.dialects import check_connection_mock, resolve_dialect
from src.core.results import CellValue, QueryResult
from src.core.sql_format import format_sql

LOGGER = logging.getLogger(__name__)

_exit_commands = {"/exit", "exit", "quit", ":q"}
_NULL_TEXT = "NULL"
_HELP_TEXT = (
    "Commands: /tables, /connect, /dialect <name>, /format <sql>, /help, /exit. "
    "Anything else is executed as SQL."
)


@dataclass
class SqlConsole:
    """Terminal SQL editor built on top of the mock query engine."""

    dependencies: ConsoleDependencies
    dialect: str = "oracle"
    format_output: bool = False
    input_func: Callable[[str], str] = field(default=input)
    output_func: Callable[[str], None] = field(default=print)
    session_id_factory: Callable[[], str] = field(default=lambda: f"session-{uuid4().hex[:8]}")
    session_id: str = field(default="", init=False)

    def start(self) -> None:
        """Launch an interactive session."""

        self.session_id = self.session_id_factory()
        LOGGER.info("Console session %s started (dialect=%s)", self.session_id, self.dialect)
        self.output_func(f"Connected to {resolve_dialect(self.dialect).display_name} in mock mode. {_HELP_TEXT}")

        while True:
            try:
                raw = self.input_func(f"{self.dialect}> ")
            except EOFError:
                self.output_func("\nSession ended.")
                break

            line = raw.strip()
            if not line:
                continue
            if line.lower() in _exit_commands:
                self.output_func("Session ended.")
                break
            if line.startswith("/"):
                self._handle_command(line)
                continue

            self.run_statement(line)

    def run_statement(self, sql: str) -> QueryResult:
        """Execute *sql*, render the outcome and record observability events."""

        self._log_event("statement_received", {"sql": sql, "dialect": self.dialect})
        if self.format_output:
            self.output_func(format_sql(sql, self.dialect))

        result = asyncio.run(self.dependencies.engine.execute(sql))

        if result.success:
            self._log_event(
                "statement_executed",
                {
                    "row_count": result.data.row_count if result.data else None,
                    "affected_rows": result.affected_rows,
                    "execution_time": _execution_time(result),
                },
            )
        else:
            error = result.error
            self._log_event(
                "statement_failed",
                {
                    "code": error.code if error else None,
                    "message": error.message if error else None,
                    "line": error.line if error else None,
                    "position": error.position if error else None,
                },
            )

        for line in render_result(result):
            self.output_func(line)
        return result

    def _handle_command(self, command: str) -> None:
        parts = command.split(maxsplit=1)
        name = parts[0].lower()
        argument = parts[1].strip() if len(parts) == 2 else ""

        if name == "/help":
            self.output_func(_HELP_TEXT)
        elif name == "/tables":
            for relation in self.dependencies.engine.catalog.describe():
                aliases = ", ".join(alias for alias in relation["aliases"] if alias != relation["name"])
                suffix = f" (aliases: {aliases})" if aliases else ""
                self.output_func(
                    f"  - {relation['name']}: {relation['row_count']} rows, "
                    f"columns {', '.join(relation['columns'])}{suffix}"
                )
        elif name == "/connect":
            check = check_connection_mock(self.dialect)
            self._log_event("connection_checked", {"dialect": self.dialect, "version": check.version})
            self.output_func(f"{check.message}: {check.version}")
        elif name == "/dialect":
            self._switch_dialect(argument)
        elif name == "/format":
            if not argument:
                self.output_func("Usage: /format <sql>")
                return
            self.output_func(format_sql(argument, self.dialect))
        else:
            self.output_func(f"Unknown command '{name}'. {_HELP_TEXT}")

    def _switch_dialect(self, argument: str) -> None:
        if not argument:
            self.output_func("Usage: /dialect <name>")
            return
        try:
            profile = resolve_dialect(argument)
        except ValueError as exc:
            self.output_func(str(exc))
            return
        previous = self.dialect
        self.dialect = profile.name
        self._log_event("dialect_changed", {"previous": previous, "dialect": profile.name})
        self.output_func(f"Dialect set to {profile.display_name}.")

    def _log_event(self, event: str, payload: dict[str, Any]) -> None:
        sink = self.dependencies.query_logger
        if sink is None:
            return
        sink.log_event(self.session_id or "console", event, payload)


def render_result(result: QueryResult) -> list[str]:
    """Return printable lines describing *result*."""

    if not result.success:
        error = result.error
        if error is None:
            return ["Error: statement failed."]
        location = ""
        if error.line is not None:
            location = f" (line {error.line}, position {error.position})"
        return [f"Error {error.code}: {error.message}{location}"]

    elapsed = _execution_time(result) or 0.0
    if result.data is None:
        return [f"{result.affected_rows or 0} row(s) affected. ({elapsed:.3f}s)"]

    lines = _format_table(result.data.columns, result.data.rows)
    lines.append(f"{result.data.row_count} row(s) selected. ({elapsed:.3f}s)")
    return lines


def _format_table(columns: list[str], rows: list[list[CellValue]]) -> list[str]:
    cells = [[_NULL_TEXT if value is None else str(value) for value in row] for row in rows]
    widths = [len(column) for column in columns]
    for row in cells:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(value))

    header = " | ".join(column.ljust(widths[index]) for index, column in enumerate(columns))
    divider = "-+-".join("-" * width for width in widths)
    body = [" | ".join(value.ljust(widths[index]) for index, value in enumerate(row)) for row in cells]
    return [header, divider, *body]


def _execution_time(result: QueryResult) -> float | None:
    if result.data is not None:
        return result.data.execution_time
    return result.execution_time


def _configure_logging(debug: bool) -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        if debug:
            root_logger.setLevel(logging.DEBUG)
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="SQL console backed by the mock query engine")
    parser.add_argument("--config", help="Path to the YAML config file")
    parser.add_argument("--dialect", help="Database flavor to emulate (oracle, mysql, postgresql, mariadb, sqlserver)")
    parser.add_argument("--debug", action="store_true", help="Log engine activity at DEBUG level")
    args = parser.parse_args()

    _configure_logging(debug=args.debug)
    settings = load_settings(args.config) if args.config else Settings()
    dependencies = build_dependencies(settings)

    dialect = resolve_dialect(args.dialect or settings.console.dialect).name
    console = SqlConsole(
        dependencies=dependencies,
        dialect=dialect,
        format_output=settings.console.format_output,
    )
    console.start()


if __name__ == "__main__":
    main()
