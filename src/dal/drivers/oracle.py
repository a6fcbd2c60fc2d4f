"""Oracle driver.

Uses ``oracledb`` (python-oracledb), the successor of ``cx_Oracle``. The
connection string is handed over as the DSN, so it may carry credentials
(``user/password@host:1521/service``). Oracle binds **named** parameters
(``:name``).

Install the driver::

    pip install oracledb
    # or:  pip install dal-core[oracle]
"""

from __future__ import annotations

from typing import Any

from dal.enums import Provider
from dal.protocols import DBAPIConnection, DBAPICursor, DBAPIModule

from .base import Driver


class OracleDriver(Driver):
    """Oracle Database through oracledb."""

    provider = Provider.ORACLE
    family = "oracle"
    module_name = "oracledb"

    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        return module.connect(dsn=connection_string)

    def apply_timeout(self, raw_connection: DBAPIConnection, seconds: int) -> None:
        # milliseconds per round trip
        raw_connection.call_timeout = seconds * 1000  # type: ignore[attr-defined]

    def call_procedure(self, cursor: DBAPICursor, name: str, args: list[Any] | dict[str, Any]) -> None:
        if isinstance(args, dict):
            cursor.callproc(name, keyword_parameters=args)  # type: ignore[attr-defined]
        else:
            cursor.callproc(name, args)  # type: ignore[attr-defined]


__all__ = [
    "OracleDriver",
]
