"""
Structural protocols for the PEP 249 (DB-API 2.0) objects the drivers wrap.

Manifesto:
    pyodbc, oracledb and adodbapi share no base classes, but all of them
    follow DB-API 2.0. The wrappers in :mod:`dal.drivers` depend on that
    shape only, which also lets tests stand ``sqlite3`` or a recording fake
    in for a real driver.

Architecture:
    ::

        DBAPIModule       connect(), paramstyle, NotSupportedError
        DBAPIConnection   cursor(), commit(), rollback(), close()
        DBAPICursor       execute(), callproc(), fetch*(), description, rowcount

Tags:
    protocol, dbapi, pep-249, dal

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DBAPICursor(Protocol):
    """Cursor subset used by commands and data adapters."""

    description: Sequence[Sequence[Any]] | None
    rowcount: int

    def execute(self, operation: str, parameters: Any = ...) -> Any:
        ...

    def fetchone(self) -> Any:
        ...

    def fetchmany(self, size: int = ...) -> list[Any]:
        ...

    def fetchall(self) -> list[Any]:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class DBAPIConnection(Protocol):
    """Connection subset used by :class:`dal.drivers.objects.Connection`."""

    def cursor(self) -> DBAPICursor:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...

    def close(self) -> None:
        ...


class DBAPIModule(Protocol):
    """A driver module such as ``pyodbc`` or ``oracledb``."""

    paramstyle: str

    def connect(self, *args: Any, **kwargs: Any) -> DBAPIConnection:
        ...


__all__ = [
    "DBAPICursor",
    "DBAPIConnection",
    "DBAPIModule",
]
