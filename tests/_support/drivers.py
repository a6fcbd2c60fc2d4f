"""Stand-in drivers used in place of pyodbc, oracledb and adodbapi."""

from __future__ import annotations

from typing import Any

from dal.drivers.base import Driver
from dal.enums import Provider
from dal.protocols import DBAPIConnection, DBAPIModule


class SqliteDriver(Driver):
    """
    Registers as SQL Server but runs on sqlite3.

    The connection string is a database file path. sqlite accepts ``@name``
    placeholders, so parameters are bound by name.
    """

    provider = Provider.SQL_SERVER
    family = "sqlite"
    module_name = "sqlite3"
    paramstyle = "named"

    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        return module.connect(connection_string)


class FakeDriver(Driver):
    """Driver backed by a :class:`~tests._support.fake_dbapi.FakeModule` instance."""

    provider = Provider.SQL_SERVER
    family = "fake"
    module_name = "fake_dbapi"

    def __init__(self, module: Any, provider: Provider = Provider.SQL_SERVER):
        self.module = module
        self.provider = provider  # type: ignore[misc]

    def load_module(self) -> DBAPIModule:
        return self.module

    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        return module.connect(connection_string)

    def apply_timeout(self, raw_connection: DBAPIConnection, seconds: int) -> None:
        raw_connection.timeout = seconds  # type: ignore[attr-defined]
