"""Driver base class.

Manifesto:
    Every provider needs the same five objects (connection, command,
    parameter, data adapter, transaction). What differs is a handful of
    decisions: which DB-API module to import, how to hand it the connection
    string, how parameters are bound, how a command timeout is set and how a
    stored procedure is called. ``Driver`` owns the shared construction and
    leaves those decisions to one subclass per provider.

Features:
    - Import-guarded ``load_module()``: the driver package is only needed
      when a connection opens
    - Positional or named binding chosen from the module's ``paramstyle``
    - Per-provider NULL marker for absent parameter values
    - Factory methods for the five driver objects

Tags:
    dal, driver, adapter-pattern, abstract-base, dbapi

Doc-Types:
    api-reference
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

from dal.enums import ConnectionState, Provider
from dal.errors import ConnectionStateError, DriverNotInstalledError
from dal.protocols import DBAPIConnection, DBAPICursor, DBAPIModule

from .objects import UNSET, Command, Connection, DataAdapter, Parameter, Transaction

NAMED_PARAMSTYLES = frozenset({"named", "pyformat"})
DEFAULT_COMMAND_TIMEOUT = 600


class Driver(ABC):
    """
    Abstract base class for provider drivers.

    Subclasses set ``provider``, ``family`` and ``module_name`` and implement
    :meth:`open_raw`.
    """

    provider: ClassVar[Provider]
    family: ClassVar[str]
    module_name: ClassVar[str]

    # None: use the module's own ``paramstyle``
    paramstyle: ClassVar[str | None] = None
    null_marker: ClassVar[Any] = None
    command_timeout: ClassVar[int] = DEFAULT_COMMAND_TIMEOUT

    def load_module(self) -> DBAPIModule:
        """Import the DB-API module, raising a clear error when it is missing."""
        try:
            return importlib.import_module(self.module_name)
        except ImportError as e:
            raise DriverNotInstalledError(self.module_name, self.provider, cause=e) from e

    def resolve_paramstyle(self, module: DBAPIModule) -> str:
        return self.paramstyle or getattr(module, "paramstyle", "qmark")

    def prepare_connection_string(self, connection_string: str) -> str:
        """Hook for provider defaults; the string is otherwise opaque."""
        return connection_string

    @abstractmethod
    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        """Open a DB-API connection."""
        ...

    def apply_timeout(self, raw_connection: DBAPIConnection, seconds: int) -> None:
        """Set a command timeout on the raw connection, if the driver has one."""

    def to_driver_value(self, value: Any) -> Any:
        if value is None or value is UNSET:
            return self.null_marker
        return value

    def bind(self, parameters: Sequence[Parameter], paramstyle: str) -> list[Any] | dict[str, Any]:
        """
        Convert parameters to DB-API arguments.

        Named styles get a dict keyed by the name without its ``@`` or ``:``
        prefix; positional styles get the values in insertion order.
        """
        if paramstyle in NAMED_PARAMSTYLES:
            return {p.name.lstrip("@:"): self.to_driver_value(p.value) for p in parameters}
        return [self.to_driver_value(p.value) for p in parameters]

    def call_procedure(self, cursor: DBAPICursor, name: str, args: list[Any] | dict[str, Any]) -> None:
        """Invoke a stored procedure through DB-API ``callproc``."""
        values = list(args.values()) if isinstance(args, dict) else args
        cursor.callproc(name, values)  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    def new_connection(self) -> Connection:
        return Connection(self)

    def new_command(self) -> Command:
        command = Command(self)
        command.timeout = self.command_timeout
        return command

    def new_parameter(self) -> Parameter:
        return Parameter()

    def new_data_adapter(self) -> DataAdapter:
        return DataAdapter(self)

    def new_transaction(self, connection: Connection | None) -> Transaction:
        """Begin a transaction on ``connection``, which must already be open."""
        if connection is None or connection.state is not ConnectionState.OPEN:
            raise ConnectionStateError("A transaction requires an open connection").with_context(
                provider=self.provider.value
            )
        return Transaction(connection)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider.value}, module={self.module_name})"


__all__ = [
    "Driver",
    "DEFAULT_COMMAND_TIMEOUT",
    "NAMED_PARAMSTYLES",
]
