"""SQL Server driver.

Talks to SQL Server through ``pyodbc`` and Microsoft's ODBC driver. When the
connection string names no ``Driver``, :attr:`SqlServerDriver.odbc_driver` is
added in front of it.
"""

from __future__ import annotations

from dal.connection_strings import format_odbc_pair, has_key, prepend_pair
from dal.enums import Provider

from .odbc import OdbcDriver

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"


class SqlServerDriver(OdbcDriver):
    """Microsoft SQL Server through pyodbc."""

    provider = Provider.SQL_SERVER
    family = "sqlserver"

    def __init__(self, odbc_driver: str = DEFAULT_ODBC_DRIVER):
        self.odbc_driver = odbc_driver

    def prepare_connection_string(self, connection_string: str) -> str:
        if has_key(connection_string, "Driver"):
            return connection_string
        return prepend_pair(connection_string, format_odbc_pair("Driver", self.odbc_driver, braced=True))


__all__ = [
    "SqlServerDriver",
    "DEFAULT_ODBC_DRIVER",
]
