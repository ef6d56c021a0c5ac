"""Tests for dialect-aware SQL formatting."""

from __future__ import annotations

import pytest
import sqlglot
from sqlglot.errors import ParseError

from src.core.sql_format import format_sql


def test_format_uppercases_keywords() -> None:
    formatted = format_sql("select ename, sal from emp where deptno = 10", dialect="oracle")

    assert formatted.startswith("SELECT")
    assert "FROM emp" in formatted
    assert "WHERE" in formatted
    assert "\n" in formatted


@pytest.mark.parametrize("dialect", ["mysql", "postgresql", "mariadb", "sqlserver"])
def test_format_supports_every_dialect(dialect: str) -> None:
    formatted = format_sql("select * from dept", dialect=dialect)

    assert formatted.startswith("SELECT")


def test_format_returns_input_on_parse_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode(*args: object, **kwargs: object) -> list[str]:
        raise ParseError("unexpected token")

    monkeypatch.setattr(sqlglot, "transpile", _explode)

    assert format_sql("select from where", dialect="oracle") == "select from where"


def test_format_leaves_blank_input_alone() -> None:
    assert format_sql("   ") == "   "


def test_format_rejects_unknown_dialect() -> None:
    with pytest.raises(ValueError):
        format_sql("select 1", dialect="db2")


def test_format_returns_deeply_nested_input_unchanged() -> None:
    nested = "SELECT " + "(" * 3000 + "1" + ")" * 3000

    assert format_sql(nested, dialect="oracle") == nested
