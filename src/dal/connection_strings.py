"""Helpers for ``key=value;`` connection strings (ODBC and OLE DB syntax)."""

from __future__ import annotations

from collections.abc import Iterable

_SPECIAL = (";", "=", "{", "}", '"', "'")


def _needs_quoting(value: str) -> bool:
    return value != value.strip() or any(ch in value for ch in _SPECIAL)


def format_odbc_pair(key: str, value: str, *, braced: bool = False) -> str:
    """``key=value`` with ODBC brace quoting where the value needs it."""
    if braced or _needs_quoting(value):
        value = "{" + value.replace("}", "}}") + "}"
    return f"{key}={value}"


def format_oledb_pair(key: str, value: str) -> str:
    """``key=value`` with OLE DB double-quote quoting where the value needs it."""
    if _needs_quoting(value):
        value = '"' + value.replace('"', '""') + '"'
    return f"{key}={value}"


def join_pairs(pairs: Iterable[str]) -> str:
    return ";".join(pairs)


def has_key(connection_string: str, key: str) -> bool:
    """Whether ``connection_string`` already sets ``key`` (case-insensitive)."""
    wanted = key.strip().lower()
    for part in connection_string.split(";"):
        name, sep, _ = part.partition("=")
        if sep and name.strip().lower() == wanted:
            return True
    return False


def prepend_pair(connection_string: str, pair: str) -> str:
    if not connection_string:
        return pair
    return f"{pair};{connection_string}"


__all__ = [
    "format_odbc_pair",
    "format_oledb_pair",
    "join_pairs",
    "has_key",
    "prepend_pair",
]
