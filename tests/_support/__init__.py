"""
Test support for dal tests.

Stand-in drivers and a recording DB-API module live here so tests can run
the full session lifecycle without pyodbc, oracledb or adodbapi installed.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from tests._support.drivers import FakeDriver, SqliteDriver
from tests._support.fake_dbapi import FakeConnection, FakeCursor, FakeModule, ResultSet


def count_rows(path: Path, where: str = "1=1") -> int:
    """Count rows of table ``t`` through a separate sqlite connection."""
    conn = sqlite3.connect(path)
    try:
        return conn.execute(f"SELECT COUNT(*) FROM t WHERE {where}").fetchone()[0]
    finally:
        conn.close()


__all__ = [
    "FakeConnection",
    "FakeCursor",
    "FakeModule",
    "ResultSet",
    "FakeDriver",
    "SqliteDriver",
    "count_rows",
]
