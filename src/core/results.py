"""Result envelope shared by every database flavor the editor talks to."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

CellValue = int | float | str | None

UNKNOWN_TABLE = "ORA-00942"
MISSING_FROM = "ORA-00923"
INTERNAL_ERROR = "ERR-001"
TABLE_NOT_FOUND = "ERR-002"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class QueryError(_WireModel):
    code: str
    message: str
    line: int | None = None
    position: int | None = None


class ResultSet(_WireModel):
    columns: list[str]
    rows: list[list[CellValue]] = Field(default_factory=list)
    row_count: int = 0
    execution_time: float = 0.0

    @model_validator(mode="after")
    def _check_row_width(self) -> ResultSet:
        width = len(self.columns)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"Row {index} has {len(row)} values, expected {width}")
        return self


class QueryResult(_WireModel):
    """Tagged success/failure outcome of a single statement."""

    success: bool
    data: ResultSet | None = None
    affected_rows: int | None = None
    execution_time: float | None = None
    error: QueryError | None = None

    @classmethod
    def selected(cls, columns: list[str], rows: list[list[CellValue]], execution_time: float) -> QueryResult:
        return cls(
            success=True,
            data=ResultSet(
                columns=columns,
                rows=rows,
                row_count=len(rows),
                execution_time=execution_time,
            ),
        )

    @classmethod
    def affected(cls, affected_rows: int, execution_time: float) -> QueryResult:
        return cls(success=True, affected_rows=affected_rows, execution_time=execution_time)

    @classmethod
    def failed(
        cls,
        code: str,
        message: str,
        *,
        line: int | None = None,
        position: int | None = None,
        execution_time: float | None = None,
    ) -> QueryResult:
        return cls(
            success=False,
            error=QueryError(code=code, message=message, line=line, position=position),
            execution_time=execution_time,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase wire payload, omitting absent fields."""

        payload = self.model_dump(by_alias=True, exclude_none=True)
        if self.data is not None:
            # exclude_none must not drop NULL cells
            payload["data"]["rows"] = [list(row) for row in self.data.rows]
        return payload
