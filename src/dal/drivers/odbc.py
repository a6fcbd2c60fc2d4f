"""ODBC driver.

Uses ``pyodbc``, which takes the full ODBC connection string verbatim and
binds parameters positionally (``?``).

Install the driver::

    pip install pyodbc
    # or:  pip install dal-core[odbc]

The import is deferred to the first ``open()``; a missing package raises
:class:`~dal.errors.DriverNotInstalledError`.
"""

from __future__ import annotations

from typing import Any

from dal.enums import Provider
from dal.protocols import DBAPIConnection, DBAPICursor, DBAPIModule

from .base import Driver


class OdbcDriver(Driver):
    """Generic ODBC data sources through pyodbc."""

    provider = Provider.ODBC
    family = "odbc"
    module_name = "pyodbc"

    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        return module.connect(connection_string)

    def apply_timeout(self, raw_connection: DBAPIConnection, seconds: int) -> None:
        # pyodbc: query timeout in seconds, 0 disables it
        raw_connection.timeout = seconds  # type: ignore[attr-defined]

    def call_procedure(self, cursor: DBAPICursor, name: str, args: list[Any] | dict[str, Any]) -> None:
        """pyodbc has no ``callproc``; use the ODBC call escape instead."""
        values = list(args.values()) if isinstance(args, dict) else list(args)
        if values:
            placeholders = ", ".join("?" for _ in values)
            cursor.execute(f"{{CALL {name} ({placeholders})}}", values)
        else:
            cursor.execute(f"{{CALL {name}}}")


__all__ = [
    "OdbcDriver",
]
