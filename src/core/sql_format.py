"""Dialect-aware SQL pretty printing."""

from __future__ import annotations

import logging

import sqlglot
from sqlglot.errors import SqlglotError

from src.core.config import DEFAULT_DIALECT
from src.core.dialects import resolve_dialect

LOGGER = logging.getLogger(__name__)


def format_sql(sql: str, dialect: str = DEFAULT_DIALECT) -> str:
    """Return *sql* pretty printed with upper-case keywords.

    Statements sqlglot cannot tokenize, parse or generate are returned
    unchanged, including ones nested too deeply for its recursive parser.
    """

    if not sql.strip():
        return sql

    target = resolve_dialect(dialect).sqlglot_dialect
    try:
        statements = sqlglot.transpile(sql, read=target, write=target, pretty=True)
    except (SqlglotError, RecursionError) as exc:
        LOGGER.debug("Formatting skipped for %s statement: %s", dialect, exc)
        return sql
    return ";\n\n".join(statements)
