"""Enumerations shared by the driver layer and the session.

Tags:
    dal, enums, provider, command-type

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum


class Provider(str, Enum):
    """
    Database provider a session targets.

    ``ACCESS`` is not a driver of its own: it resolves to the OLE DB family
    with the Jet provider fixed.
    """

    NONE = "none"
    ORACLE = "oracle"
    SQL_SERVER = "sqlserver"
    OLE_DB = "oledb"
    ODBC = "odbc"
    ACCESS = "access"


class CommandType(str, Enum):
    """How the driver interprets a command's text."""

    TEXT = "text"
    STORED_PROCEDURE = "stored_procedure"


class ConnectionState(str, Enum):
    """Open/closed state reported by a connection wrapper."""

    CLOSED = "closed"
    OPEN = "open"


__all__ = [
    "Provider",
    "CommandType",
    "ConnectionState",
]
