"""
Shared pytest fixtures for dal tests.

This module provides:
- An isolated ProviderRegistry per test, with SQL Server served by a stand-in
- A seeded sqlite database file for end-to-end session tests
- A recording fake DB-API module for binding, timeout and procedure checks

Usage:
    def test_something(sqlite_session):
        sqlite_session.execute_non_query(CommandType.TEXT, "DELETE FROM t")
"""

import sqlite3
import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure dal package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dal.drivers.registry import ProviderRegistry
from dal.enums import Provider
from dal.session import DataAccessSession
from tests._support import FakeDriver, FakeModule, SqliteDriver


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """sqlite file with table ``t(id, x, name)`` holding three rows."""
    path = tmp_path / "dal.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, x INTEGER, name TEXT)")
    conn.executemany(
        "INSERT INTO t (id, x, name) VALUES (?, ?, ?)",
        [(5, 0, "alpha"), (6, 0, "beta"), (7, 2, None)],
    )
    conn.commit()
    conn.close()
    return path


# =============================================================================
# Registry / Session Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ProviderRegistry:
    """Fresh registry; SQL Server runs on sqlite3."""
    reg = ProviderRegistry()
    reg.register(Provider.SQL_SERVER, SqliteDriver())
    return reg


@pytest.fixture
def sqlite_session(registry: ProviderRegistry, db_path: Path) -> Generator[DataAccessSession, None, None]:
    session = DataAccessSession(Provider.SQL_SERVER, str(db_path), registry=registry)
    yield session
    session.dispose()


@pytest.fixture
def fake_module() -> FakeModule:
    return FakeModule()


@pytest.fixture
def fake_registry(fake_module: FakeModule) -> ProviderRegistry:
    reg = ProviderRegistry()
    reg.register(Provider.SQL_SERVER, FakeDriver(fake_module))
    return reg


@pytest.fixture
def fake_session(fake_registry: ProviderRegistry) -> Generator[DataAccessSession, None, None]:
    session = DataAccessSession(Provider.SQL_SERVER, "Server=fake;Database=test", registry=fake_registry)
    yield session
    session.dispose()
