"""Database flavors supported by the editor and their mock-mode behaviour."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

MOCK_CONNECTION_MESSAGE = "Connected in mock mode (a proxy server is required for live databases)"
UNKNOWN_MOCK_VERSION = "Unknown (Mock Mode)"


@dataclass(frozen=True, slots=True)
class DialectProfile:
    name: str
    display_name: str
    host: str
    port: int
    database: str
    mock_version: str
    sqlglot_dialect: str


DIALECTS: dict[str, DialectProfile] = {
    profile.name: profile
    for profile in (
        DialectProfile(
            name="oracle",
            display_name="Oracle 11g XE",
            host="localhost",
            port=1521,
            database="XE",
            mock_version="Oracle Database 11g XE (Mock Mode)",
            sqlglot_dialect="oracle",
        ),
        DialectProfile(
            name="mysql",
            display_name="MySQL 8.0",
            host="localhost",
            port=3306,
            database="testdb",
            mock_version="MySQL 8.0 (Mock Mode)",
            sqlglot_dialect="mysql",
        ),
        DialectProfile(
            name="postgresql",
            display_name="PostgreSQL 15",
            host="localhost",
            port=5432,
            database="testdb",
            mock_version="PostgreSQL 15.4 (Mock Mode)",
            sqlglot_dialect="postgres",
        ),
        DialectProfile(
            name="mariadb",
            display_name="MariaDB 10.11",
            host="localhost",
            port=3307,
            database="testdb",
            mock_version="MariaDB 10.11 (Mock Mode)",
            sqlglot_dialect="mysql",
        ),
        DialectProfile(
            name="sqlserver",
            display_name="SQL Server 2022",
            host="localhost",
            port=1433,
            database="testdb",
            mock_version="SQL Server 2022 (Mock Mode)",
            sqlglot_dialect="tsql",
        ),
    )
}


class ConnectionCheck(BaseModel):
    success: bool
    message: str
    version: str | None = None


def resolve_dialect(name: str) -> DialectProfile:
    """Return the profile registered for *name* (case-insensitive)."""

    profile = DIALECTS.get(name.strip().lower())
    if profile is None:
        supported = ", ".join(DIALECTS)
        raise ValueError(f"Unknown dialect '{name}'. Expected one of: {supported}")
    return profile


def check_connection_mock(name: str) -> ConnectionCheck:
    """Simulate a successful connection test without contacting a server."""

    profile = DIALECTS.get(name.strip().lower())
    return ConnectionCheck(
        success=True,
        message=MOCK_CONNECTION_MESSAGE,
        version=profile.mock_version if profile else UNKNOWN_MOCK_VERSION,
    )
