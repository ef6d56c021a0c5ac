"""Regex-based parsing for the narrow SQL subset understood by the mock engine.

Only the shapes needed to drive the fixture relations are recognised:

    SELECT <columns> FROM <table> [WHERE <col> = <literal> [AND ...]]
        [ORDER BY <col> [ASC|DESC]];

- `<columns>` is `*` or a comma-separated list of column names.
- `<literal>` is an unquoted integer or a single-quoted string.
- Conjuncts that do not match `<col> = <literal>` are ignored rather than
  rejected, so partially supported filters still return rows.

Statement classification looks only at the leading keyword.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Literal

# Identifiers and integer literals are ASCII-only; whitespace stays Unicode.
# Case folding is off inside the class so that e.g. the Kelvin sign is not a letter.
_WORD = r"(?-i:[A-Za-z0-9_]+)"

_FROM_TABLE_RE = re.compile(rf"FROM\s+({_WORD})", flags=re.IGNORECASE)
_SELECT_COLUMNS_RE = re.compile(r"SELECT\s+(.+?)\s+FROM", flags=re.IGNORECASE | re.DOTALL)
_WHERE_RE = re.compile(
    r"WHERE\s+(?P<clause>.+?)(?:\s+ORDER|\s+GROUP|\s+LIMIT|;|$)",
    flags=re.IGNORECASE | re.DOTALL,
)
_AND_SPLIT_RE = re.compile(r"\s+AND\s+", flags=re.IGNORECASE)
_EQUALITY_RE = re.compile(rf"({_WORD})\s*=\s*([0-9]+|'[^']*')")
_ORDER_BY_RE = re.compile(rf"ORDER\s+BY\s+({_WORD})(?:\s+(ASC|DESC))?", flags=re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_DDL_KEYWORDS = ("CREATE", "ALTER", "DROP")

# Stands in for integer literals too long to convert; equal to no fixture value.
UNMATCHABLE_INTEGER = float("inf")

LiteralValue = int | float | str


class StatementKind(str, enum.Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    DDL = "DDL"
    OTHER = "OTHER"

    @property
    def is_dml(self) -> bool:
        return self in (StatementKind.INSERT, StatementKind.UPDATE, StatementKind.DELETE)


ALL_COLUMNS: Literal["*"] = "*"


@dataclass(frozen=True, slots=True)
class OrderBy:
    column: str
    descending: bool = False

    @property
    def direction(self) -> str:
        return "DESC" if self.descending else "ASC"


@dataclass(slots=True)
class ParsedQuery:
    """Per-call breakdown of a SELECT statement."""

    table: str | None
    columns: list[str] | Literal["*"] = ALL_COLUMNS
    predicates: dict[str, LiteralValue] = field(default_factory=dict)
    order_by: OrderBy | None = None


def detect_statement_kind(sql: str) -> StatementKind:
    """Classify *sql* by its leading keyword."""

    trimmed = sql.strip().upper()
    for kind in (StatementKind.SELECT, StatementKind.INSERT, StatementKind.UPDATE, StatementKind.DELETE):
        if trimmed.startswith(kind.value):
            return kind
    if trimmed.startswith(_DDL_KEYWORDS):
        return StatementKind.DDL
    return StatementKind.OTHER


def find_from_table(sql: str) -> str | None:
    """Return the lowercased word following the first `FROM`, if any."""

    match = _FROM_TABLE_RE.search(sql)
    return match.group(1).lower() if match else None


def locate_token(sql: str, token: str) -> tuple[int, int]:
    """Return the 1-based (line, column) of the first occurrence of *token*.

    The search is case-insensitive and matches substrings, mirroring how a
    database reports the offset of an offending identifier. An absent token
    is reported at line 1, column 1.
    """

    offset = sql.lower().find(token.lower())
    if offset < 0:
        return 1, 1
    line = sql.count("\n", 0, offset) + 1
    line_start = sql.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def parse_select(sql: str) -> ParsedQuery:
    """Break a SELECT statement into table, columns, predicates and ordering."""

    normalized = _WHITESPACE_RE.sub(" ", sql).strip()
    return ParsedQuery(
        table=find_from_table(normalized),
        columns=_parse_columns(sql),
        predicates=_parse_predicates(sql),
        order_by=_parse_order_by(sql),
    )


def _parse_columns(sql: str) -> list[str] | Literal["*"]:
    match = _SELECT_COLUMNS_RE.search(sql)
    column_spec = match.group(1).strip() if match else ALL_COLUMNS
    if column_spec == ALL_COLUMNS:
        return ALL_COLUMNS
    return [part.strip().lower() for part in column_spec.split(",")]


def _parse_predicates(sql: str) -> dict[str, LiteralValue]:
    match = _WHERE_RE.search(sql)
    if not match:
        return {}

    predicates: dict[str, LiteralValue] = {}
    for conjunct in _AND_SPLIT_RE.split(match.group("clause")):
        equality = _EQUALITY_RE.search(conjunct)
        if not equality:
            continue
        column, raw_value = equality.groups()
        if raw_value.startswith("'"):
            predicates[column.lower()] = raw_value[1:-1]
        else:
            predicates[column.lower()] = _parse_integer(raw_value)
    return predicates


def _parse_integer(raw_value: str) -> int | float:
    try:
        return int(raw_value)
    except ValueError:
        # digits beyond the interpreter's int conversion limit
        return UNMATCHABLE_INTEGER


def _parse_order_by(sql: str) -> OrderBy | None:
    match = _ORDER_BY_RE.search(sql)
    if not match:
        return None
    direction = (match.group(2) or "ASC").upper()
    return OrderBy(column=match.group(1).lower(), descending=direction == "DESC")
