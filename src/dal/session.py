"""
Data access session -- one unit of database work against one provider.

Manifesto:
    Calling code should not care whether it talks to SQL Server or Oracle,
    nor remember to close connections after every query. A session runs the
    same open → prepare → execute → close protocol for every provider and
    every query shape, and keeps at most one connection, one command and
    one transaction alive at a time.

Architecture:
    ::

        DataAccessSession
        ├── add_parameter()          accumulate parameters for the next call
        ├── execute_reader()         connection stays open, owned by the RowCursor
        ├── execute_non_query()      rows affected; connection closed
        ├── execute_scalar()         first value converted; connection closed
        ├── execute_data_set()       every result set; connection closed
        ├── execute_data_table()     first result set or None
        ├── begin_transaction()      transaction on the session's own connection
        ├── commit_transaction()
        └── dispose()                idempotent teardown

        ProviderRegistry (dal.drivers) materializes every driver object.

Features:
    - 900 second command timeout for application queries
    - Absent parameter values become the provider NULL marker
    - Parameters never leak from one execution into the next
    - Scalar conversion failures return the type's zero value and log a warning
    - While a transaction is active, every execution shares its connection

Guardrails:
    ❌ Sharing one session between threads
    ✅ One session per thread or unit of work
    ❌ Forgetting to close the cursor returned by ``execute_reader()``
    ✅ ``with session.execute_reader(CommandType.TEXT, sql) as rows: ...``

Examples:
    >>> with DataAccessSession(Provider.SQL_SERVER, connection_string) as session:
    ...     session.add_parameter("id", 5)
    ...     session.execute_non_query(CommandType.TEXT, "UPDATE t SET x = 1 WHERE id = ?")
    1

Tags:
    dal, session, connection-lifecycle, transaction, execution-modes

Doc-Types:
    - API Reference
    - Architecture Decision Record
"""

from __future__ import annotations

import decimal
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from dal.drivers.objects import Command, Connection, Parameter, RowCursor, Transaction
from dal.drivers.registry import ProviderRegistry, provider_registry, resolve_provider
from dal.enums import CommandType, ConnectionState, Provider
from dal.errors import ConnectionStateError, ConversionError, InvalidArgumentError
from dal.logging import get_logger
from dal.result import Err, Ok, Result
from dal.tables import DataSet, DataTable

if TYPE_CHECKING:
    from dal.settings import ConnectionSettings

logger = get_logger(__name__)

T = TypeVar("T")

# Application queries may run long; distinct from the driver's 600s default.
SESSION_COMMAND_TIMEOUT = 900

_CONVERSION_ERRORS: tuple[type[Exception], ...] = (
    TypeError,
    ValueError,
    OverflowError,
    decimal.InvalidOperation,
)


def _zero_value(result_type: type[T]) -> T | None:
    """``result_type()`` when the type has a no-argument form, else ``None``."""
    try:
        return result_type()
    except TypeError:
        return None


def _coerce(value: Any, result_type: type[T]) -> T:
    if value is None:
        raise TypeError("NULL cannot be converted")
    if isinstance(value, result_type) and not (result_type is int and isinstance(value, bool)):
        return value
    if result_type is bool:
        if isinstance(value, (int, float, decimal.Decimal)):
            return bool(value)  # type: ignore[return-value]
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"  # type: ignore[return-value]
        raise ValueError(f"{value!r} is not a boolean")
    if result_type is int and isinstance(value, (float, decimal.Decimal)):
        return int(round(value))  # type: ignore[return-value]
    return result_type(value)  # type: ignore[call-arg]


def convert_scalar(value: Any, result_type: type[T]) -> Result[T]:
    """Convert a scalar result, wrapping failures in :class:`ConversionError`."""
    try:
        return Ok(_coerce(value, result_type))
    except _CONVERSION_ERRORS as e:
        return Err(ConversionError(value, result_type, cause=e))


class DataAccessSession:
    """
    Connection/command lifecycle manager for one provider.

    Not thread-safe: a session holds one live connection/command pair and
    mutates its parameter list without locking.
    """

    def __init__(
        self,
        provider: Provider | str = Provider.NONE,
        connection_string: str | None = None,
        *,
        registry: ProviderRegistry | None = None,
    ):
        self._provider = resolve_provider(provider)
        self.connection_string = connection_string
        self._registry = registry or provider_registry

        self._connection: Connection | None = None
        self._command: Command | None = None
        self._transaction: Transaction | None = None
        self._parameters: list[Parameter] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ConnectionSettings,
        *,
        registry: ProviderRegistry | None = None,
    ) -> DataAccessSession:
        """Session for the provider and connection string described by ``settings``."""
        return cls(settings.provider, settings.construct_connection_string(), registry=registry)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def connection(self) -> Connection | None:
        return self._connection

    @property
    def command(self) -> Command | None:
        return self._command

    @property
    def transaction(self) -> Transaction | None:
        """The active transaction; callers may ``rollback()`` it directly."""
        return self._transaction

    @property
    def parameters(self) -> list[Parameter] | None:
        return self._parameters

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def add_parameter(self, name: str, value: Any = None) -> None:
        """Append a parameter for the next execution."""
        if name is None:
            raise InvalidArgumentError("name")
        if self._parameters is None:
            self._parameters = []

        driver = self._registry.driver_for(self._provider)
        parameter = driver.new_parameter()
        parameter.name = name
        parameter.value = driver.to_driver_value(value)
        self._parameters.append(parameter)

    # ------------------------------------------------------------------
    # Preparation
    # ------------------------------------------------------------------

    @staticmethod
    def _attach_parameters(command: Command | None, parameters: Sequence[Parameter] | None) -> None:
        if command is None:
            raise InvalidArgumentError("command")
        if parameters is None:
            raise InvalidArgumentError("parameters")

        for parameter in parameters:
            parameter.value = command.driver.to_driver_value(parameter.value)
            command.parameters.append(parameter)

    def _prepare_command(
        self,
        command: Command | None,
        connection: Connection | None,
        transaction: Transaction | None,
        command_type: CommandType,
        command_text: str,
        parameters: Sequence[Parameter] | None,
    ) -> None:
        if command is None:
            raise InvalidArgumentError("command")
        if connection is None:
            raise InvalidArgumentError("connection")
        if not command_text:
            raise InvalidArgumentError("command_text")

        command.connection = connection
        command.command_text = command_text
        command.command_type = CommandType(command_type)
        command.timeout = SESSION_COMMAND_TIMEOUT

        if transaction is not None:
            command.transaction = transaction

        if parameters:
            self._attach_parameters(command, parameters)
        self._parameters = None

    def _open(self) -> None:
        if self._connection is None:
            raise ConnectionStateError("Connection has not been set up yet")
        if not self.connection_string:
            raise InvalidArgumentError("connection_string")

        self._connection.connection_string = self.connection_string
        if self._connection.state is not ConnectionState.OPEN:
            self._connection.open()

    def _close(self) -> None:
        if self._connection is not None and self._connection.state is not ConnectionState.CLOSED:
            self._connection.close()

    def _live_transaction(self) -> Transaction | None:
        """The active transaction.

        A transaction the caller already rolled back is dropped here and its
        connection closed, so later executions auto-commit again.
        """
        finished = self._transaction
        if finished is not None and not finished.is_active:
            self._transaction = None
            finished.connection.close()
            logger.debug("transaction_released", provider=self._provider.value)
        return self._transaction

    def _acquire_connection(self) -> Connection:
        """The transaction's connection, or a freshly opened one."""
        transaction = self._live_transaction()
        if transaction is not None:
            return transaction.connection
        self._connection = self._registry.new_connection(self._provider)
        self._open()
        return self._connection

    def _new_prepared_command(self, connection: Connection, command_type: CommandType, command_text: str) -> Command:
        self._command = self._registry.new_command(self._provider)
        self._prepare_command(
            self._command,
            connection,
            self._transaction,
            command_type,
            command_text,
            self._parameters,
        )
        return self._command

    @contextmanager
    def _scoped_command(self, command_type: CommandType, command_text: str) -> Iterator[Command]:
        """Prepared command whose connection is released on every exit path.

        Inside a transaction the connection stays open until commit.
        """
        command: Command | None = None
        try:
            connection = self._acquire_connection()
            command = self._new_prepared_command(connection, command_type, command_text)
            yield command
        finally:
            if command is not None:
                command.parameters.clear()
            self._parameters = None
            if self._transaction is None:
                self._close()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute_reader(self, command_type: CommandType, command_text: str) -> RowCursor:
        """
        Run a query and stream its rows.

        The connection stays open; closing the returned cursor closes it
        (outside a transaction). The caller owns the cursor.
        """
        command: Command | None = None
        try:
            connection = self._acquire_connection()
            command = self._new_prepared_command(connection, command_type, command_text)
            return command.execute_reader(close_connection=self._transaction is None)
        except Exception:
            if self._transaction is None:
                self._close()
            raise
        finally:
            if command is not None:
                command.parameters.clear()
            self._parameters = None

    def execute_non_query(self, command_type: CommandType, command_text: str) -> int:
        """Run a statement; return the affected row count (-1 when unknown)."""
        with self._scoped_command(command_type, command_text) as command:
            return command.execute_non_query()

    def execute_scalar(self, command_type: CommandType, command_text: str, result_type: type[T]) -> T:
        """
        Run a query and return its first value as ``result_type``.

        A value that cannot be converted (including NULL or no rows) yields
        the type's zero value, e.g. ``0`` for ``int``, instead of an error.
        """
        with self._scoped_command(command_type, command_text) as command:
            value = command.execute_scalar()

        result = convert_scalar(value, result_type)
        if result.is_err():
            logger.warning(
                "scalar_conversion_failed",
                provider=self._provider.value,
                **result.error.context,
            )
        return result.unwrap_or(_zero_value(result_type))  # type: ignore[arg-type]

    def execute_data_set(self, command_type: CommandType, command_text: str) -> DataSet:
        """Run a command and load every result set into memory."""
        data_set = DataSet()
        with self._scoped_command(command_type, command_text) as command:
            adapter = self._registry.new_data_adapter(self._provider)
            adapter.select_command = command
            adapter.fill(data_set)
        return data_set

    def execute_data_table(self, command_type: CommandType, command_text: str) -> DataTable | None:
        """Like :meth:`execute_data_set` but return a copy of the first table only."""
        data_set = self.execute_data_set(command_type, command_text)
        if len(data_set) > 0:
            return data_set[0].copy()
        return None

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin_transaction(self) -> None:
        """Start a transaction on the session's connection; reuse an active one."""
        if self._live_transaction() is None:
            # a still-open reader connection belongs to its cursor, never reuse it
            self._connection = self._registry.new_connection(self._provider)
            self._open()
            self._transaction = self._registry.new_transaction(self._provider, self._connection)
            logger.debug("transaction_begun", provider=self._provider.value)

        if self._command is not None:
            self._command.transaction = self._transaction

    def commit_transaction(self) -> None:
        """Commit the active transaction, if any, and release its connection."""
        transaction = self._live_transaction()
        if transaction is None:
            return
        try:
            transaction.commit()
        finally:
            self._transaction = None
            self._close()

    # ------------------------------------------------------------------
    # Disposal
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Roll back any uncommitted transaction and close the connection."""
        try:
            if self._transaction is not None and self._transaction.is_active:
                self._transaction.rollback()
        finally:
            self._close()
            self._command = None
            self._transaction = None
            self._connection = None
            self._parameters = None

    def __enter__(self) -> DataAccessSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = self._connection.state.value if self._connection is not None else "idle"
        return f"DataAccessSession(provider={self._provider.value}, connection={state})"


__all__ = [
    "DataAccessSession",
    "SESSION_COMMAND_TIMEOUT",
    "convert_scalar",
]
