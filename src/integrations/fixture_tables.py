"""Read-only fixture relations backing the mock query engine.

The classic SCOTT demo schema (`emp`, `dept`, `salgrade`) is modelled as a set
of immutable relations. Records are exposed as read-only mappings so that no
statement evaluated by the engine can mutate them, and a catalog instance is
built explicitly and handed to each engine rather than living in module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

FieldValue = int | str | None

_EMP_FIELDS = ("empno", "ename", "job", "mgr", "hiredate", "sal", "comm", "deptno")
_EMP_ROWS: tuple[tuple[FieldValue, ...], ...] = (
    (7369, "SMITH", "CLERK", 7902, "1980-12-17", 800, None, 20),
    (7499, "ALLEN", "SALESMAN", 7698, "1981-02-20", 1600, 300, 30),
    (7521, "WARD", "SALESMAN", 7698, "1981-02-22", 1250, 500, 30),
    (7566, "JONES", "MANAGER", 7839, "1981-04-02", 2975, None, 20),
    (7654, "MARTIN", "SALESMAN", 7698, "1981-09-28", 1250, 1400, 30),
    (7698, "BLAKE", "MANAGER", 7839, "1981-05-01", 2850, None, 30),
    (7782, "CLARK", "MANAGER", 7839, "1981-06-09", 2450, None, 10),
    (7788, "SCOTT", "ANALYST", 7566, "1982-12-09", 3000, None, 20),
    (7839, "KING", "PRESIDENT", None, "1981-11-17", 5000, None, 10),
    (7844, "TURNER", "SALESMAN", 7698, "1981-09-08", 1500, 0, 30),
    (7876, "ADAMS", "CLERK", 7788, "1983-01-12", 1100, None, 20),
    (7900, "JAMES", "CLERK", 7698, "1981-12-03", 950, None, 30),
    (7902, "FORD", "ANALYST", 7566, "1981-12-03", 3000, None, 20),
)

_DEPT_FIELDS = ("deptno", "dname", "loc")
_DEPT_ROWS: tuple[tuple[FieldValue, ...], ...] = (
    (10, "ACCOUNTING", "NEW YORK"),
    (20, "RESEARCH", "DALLAS"),
    (30, "SALES", "CHICAGO"),
    (40, "OPERATIONS", "BOSTON"),
)

_SALGRADE_FIELDS = ("grade", "losal", "hisal")
_SALGRADE_ROWS: tuple[tuple[FieldValue, ...], ...] = (
    (1, 700, 1200),
    (2, 1201, 1400),
    (3, 1401, 2000),
    (4, 2001, 3000),
    (5, 3001, 9999),
)


@dataclass(frozen=True, slots=True)
class Relation:
    """Named, immutable table with a fixed record shape."""

    name: str
    fields: tuple[str, ...]
    records: tuple[Mapping[str, FieldValue], ...]
    aliases: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_rows(
        cls,
        name: str,
        fields: Iterable[str],
        rows: Iterable[Iterable[FieldValue]],
        aliases: Iterable[str] = (),
    ) -> Relation:
        """Build a relation from positional rows ordered like *fields*."""

        field_names = tuple(fields)
        records = []
        for row in rows:
            values = tuple(row)
            if len(values) != len(field_names):
                raise ValueError(
                    f"Row for relation '{name}' has {len(values)} values, expected {len(field_names)}"
                )
            records.append(MappingProxyType(dict(zip(field_names, values))))
        names = {name.lower(), *(alias.lower() for alias in aliases)}
        return cls(name=name.lower(), fields=field_names, records=tuple(records), aliases=frozenset(names))

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class FixtureCatalog:
    """Resolves table names (and their aliases) to fixture relations."""

    relations: tuple[Relation, ...]
    _by_alias: Mapping[str, Relation] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Relation] = {}
        for relation in self.relations:
            for alias in relation.aliases:
                if alias in index:
                    raise ValueError(f"Alias '{alias}' is registered by more than one relation")
                index[alias] = relation
        object.__setattr__(self, "_by_alias", MappingProxyType(index))

    def resolve(self, name: str) -> Relation | None:
        """Return the relation registered under *name* (case-insensitive)."""

        return self._by_alias.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_alias

    @property
    def known_names(self) -> frozenset[str]:
        return frozenset(self._by_alias)

    def describe(self) -> list[dict[str, Any]]:
        """Return a structured summary of every relation."""

        return [
            {
                "name": relation.name,
                "aliases": sorted(relation.aliases),
                "columns": list(relation.fields),
                "row_count": len(relation),
            }
            for relation in self.relations
        ]


def build_scott_catalog() -> FixtureCatalog:
    """Return a fresh catalog holding the `emp`, `dept` and `salgrade` fixtures."""

    return FixtureCatalog(
        relations=(
            Relation.from_rows("emp", _EMP_FIELDS, _EMP_ROWS, aliases=("employee", "employees")),
            Relation.from_rows("dept", _DEPT_FIELDS, _DEPT_ROWS, aliases=("department", "departments")),
            Relation.from_rows("salgrade", _SALGRADE_FIELDS, _SALGRADE_ROWS),
        )
    )
