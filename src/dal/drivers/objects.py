"""Driver-neutral connection, command, parameter, adapter and transaction objects.

Each object wraps the DB-API 2.0 counterpart of the :class:`~dal.drivers.base.Driver`
that created it. Provider differences (how to connect, bind, time out or call
a procedure) are delegated back to that driver.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dal.enums import CommandType, ConnectionState
from dal.errors import ConnectionStateError, InvalidArgumentError
from dal.logging import get_logger
from dal.protocols import DBAPIConnection, DBAPICursor, DBAPIModule
from dal.tables import DataSet, DataTable

if TYPE_CHECKING:
    from .base import Driver

logger = get_logger(__name__)


class _Unset:
    """Marker for a parameter whose value was never assigned."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class Parameter:
    """A named value bound to a command."""

    name: str = ""
    value: Any = UNSET


class Connection:
    """
    Unopened-until-asked connection for one driver.

    ``connection_string`` may be reassigned at any time; it is read on the
    next :meth:`open`.
    """

    def __init__(self, driver: Driver):
        self.driver = driver
        self.connection_string = ""
        self.paramstyle: str | None = None
        self._raw: DBAPIConnection | None = None
        self._module: DBAPIModule | None = None

    @property
    def state(self) -> ConnectionState:
        return ConnectionState.OPEN if self._raw is not None else ConnectionState.CLOSED

    @property
    def raw(self) -> DBAPIConnection:
        """The underlying DB-API connection."""
        if self._raw is None:
            raise ConnectionStateError("Connection is not open").with_context(provider=self.driver.provider.value)
        return self._raw

    @property
    def module(self) -> DBAPIModule:
        if self._module is None:
            raise ConnectionStateError("Connection has never been opened")
        return self._module

    def open(self) -> None:
        if self._raw is not None:
            raise ConnectionStateError("Connection is already open")
        if not self.connection_string:
            raise InvalidArgumentError("connection_string")

        module = self.driver.load_module()
        self._raw = self.driver.open_raw(module, self.driver.prepare_connection_string(self.connection_string))
        self._module = module
        self.paramstyle = self.driver.resolve_paramstyle(module)
        logger.debug("connection_opened", provider=self.driver.provider.value, paramstyle=self.paramstyle)

    def close(self) -> None:
        """Close the connection. Safe to call when already closed."""
        if self._raw is None:
            return
        raw, self._raw = self._raw, None
        raw.close()
        logger.debug("connection_closed", provider=self.driver.provider.value)

    def cursor(self) -> DBAPICursor:
        return self.raw.cursor()

    def commit(self) -> None:
        self.raw.commit()

    def rollback(self) -> None:
        self.raw.rollback()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Connection(provider={self.driver.provider.value}, state={self.state.value})"


class Transaction:
    """A transaction running on one open connection."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def _ensure_active(self) -> None:
        if not self._active:
            raise ConnectionStateError("Transaction has already completed")

    def commit(self) -> None:
        self._ensure_active()
        try:
            self.connection.commit()
        finally:
            self._active = False
        logger.debug("transaction_committed", provider=self.connection.driver.provider.value)

    def rollback(self) -> None:
        self._ensure_active()
        try:
            self.connection.rollback()
        finally:
            self._active = False
        logger.debug("transaction_rolled_back", provider=self.connection.driver.provider.value)


class RowCursor:
    """
    Forward-only, single-pass view over a query's rows.

    When created with an ``owner`` command, the cursor owns that command's
    connection from the moment it is returned: closing the cursor completes
    the command (committing it outside a transaction) and then closes the
    connection.
    """

    def __init__(self, cursor: DBAPICursor, owner: Command | None = None):
        self._cursor = cursor
        self._owner = owner
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def columns(self) -> list[str]:
        return [desc[0] for desc in self._cursor.description or ()]

    def _ensure_open(self) -> DBAPICursor:
        if self._closed:
            raise ConnectionStateError("Cursor is closed")
        return self._cursor

    def fetchone(self) -> Any:
        return self._ensure_open().fetchone()

    def fetchmany(self, size: int = 1) -> list[Any]:
        return self._ensure_open().fetchmany(size)

    def fetchall(self) -> list[Any]:
        return self._ensure_open().fetchall()

    def __iter__(self) -> Iterator[Any]:
        cursor = self._ensure_open()
        while True:
            row = cursor.fetchone()
            if row is None:
                return
            yield row

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        connection = self._owner.connection if self._owner is not None else None
        try:
            self._cursor.close()
            if connection is not None and connection.state is ConnectionState.OPEN:
                self._owner.complete()
        finally:
            if connection is not None:
                connection.close()

    def __enter__(self) -> RowCursor:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class Command:
    """
    A statement or stored procedure call bound to a connection.

    ``timeout`` starts at the driver's default and is applied to the raw
    connection right before execution.
    """

    def __init__(self, driver: Driver):
        self.driver = driver
        self.connection: Connection | None = None
        self.command_text = ""
        self.command_type = CommandType.TEXT
        self.timeout: int = driver.command_timeout
        self.transaction: Transaction | None = None
        self.parameters: list[Parameter] = []

    def _open_connection(self) -> Connection:
        if self.connection is None or self.connection.state is not ConnectionState.OPEN:
            raise ConnectionStateError("Command requires an open connection").with_context(
                provider=self.driver.provider.value
            )
        return self.connection

    def open_cursor(self) -> DBAPICursor:
        """Execute and return the raw cursor positioned on the first result set."""
        connection = self._open_connection()
        if not self.command_text:
            raise InvalidArgumentError("command_text")
        if self.transaction is not None and self.transaction.connection is not connection:
            raise ConnectionStateError("Transaction belongs to a different connection")

        self.driver.apply_timeout(connection.raw, self.timeout)
        args = self.driver.bind(self.parameters, connection.paramstyle or "qmark")

        cursor = connection.cursor()
        try:
            if self.command_type is CommandType.STORED_PROCEDURE:
                self.driver.call_procedure(cursor, self.command_text, args)
            elif args:
                cursor.execute(self.command_text, args)
            else:
                cursor.execute(self.command_text)
        except Exception:
            cursor.close()
            raise
        return cursor

    def complete(self) -> None:
        """Commit the work of a command that runs outside a transaction."""
        if self.transaction is None:
            self._open_connection().commit()

    def execute_reader(self, close_connection: bool = False) -> RowCursor:
        cursor = self.open_cursor()
        logger.debug("command_executed", mode="reader", command_type=self.command_type.value)
        return RowCursor(cursor, self if close_connection else None)

    def execute_non_query(self) -> int:
        cursor = self.open_cursor()
        try:
            count = cursor.rowcount
            self.complete()
        finally:
            cursor.close()
        count = -1 if count is None else count
        logger.debug("command_executed", mode="non_query", command_type=self.command_type.value, rowcount=count)
        return count

    def execute_scalar(self) -> Any:
        """First column of the first row, or ``None`` when there is none."""
        cursor = self.open_cursor()
        try:
            row = cursor.fetchone() if cursor.description else None
            self.complete()
        finally:
            cursor.close()
        logger.debug("command_executed", mode="scalar", command_type=self.command_type.value)
        return row[0] if row else None


class DataAdapter:
    """Fills a :class:`DataSet` with every result set ``select_command`` returns."""

    def __init__(self, driver: Driver):
        self.driver = driver
        self.select_command: Command | None = None

    def fill(self, data_set: DataSet) -> int:
        """Add one table per result set; return the number of rows added."""
        command = self.select_command
        if command is None:
            raise InvalidArgumentError("select_command")

        cursor = command.open_cursor()
        added = 0
        try:
            while True:
                if cursor.description:
                    columns = [desc[0] for desc in cursor.description]
                    rows = [tuple(row) for row in cursor.fetchall()]
                    data_set.add_table(DataTable(name=data_set.next_table_name(), columns=columns, rows=rows))
                    added += len(rows)
                if not self._next_result_set(cursor, command):
                    break
            command.complete()
        finally:
            cursor.close()

        logger.debug("command_executed", mode="data_set", tables=len(data_set), rowcount=added)
        return added

    @staticmethod
    def _next_result_set(cursor: DBAPICursor, command: Command) -> bool:
        nextset = getattr(cursor, "nextset", None)
        if nextset is None:
            return False
        module = command.connection.module if command.connection is not None else None
        not_supported = getattr(module, "NotSupportedError", ())
        try:
            return bool(nextset())
        except not_supported:
            return False


__all__ = [
    "UNSET",
    "Parameter",
    "Connection",
    "Transaction",
    "RowCursor",
    "Command",
    "DataAdapter",
]
