"""Provider registry and factory.

Manifesto:
    Calling code should never pick driver classes itself. The registry maps
    each :class:`~dal.enums.Provider` to one :class:`Driver` instance and
    hands out the five driver objects for it. An unknown provider is a
    programming error: it raises immediately and never falls back to a
    default.

Features:
    - ``ProviderRegistry`` with every provider except ``NONE`` pre-registered
    - ``register()`` to swap in a custom driver (or a test stand-in)
    - ``reset()`` to restore the defaults
    - Accepts enum members, enum values (``"oracle"``) and names
      (``"SQL_SERVER"``)

Tags:
    dal, registry, factory, provider

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from dal.enums import Provider
from dal.errors import UnsupportedProviderError

from .base import Driver
from .objects import Command, Connection, DataAdapter, Parameter, Transaction
from .odbc import OdbcDriver
from .oledb import AccessDriver, OleDbDriver
from .oracle import OracleDriver
from .sqlserver import SqlServerDriver


def resolve_provider(provider: Provider | str | Any) -> Provider:
    """Coerce ``provider`` to a :class:`Provider`, or raise ``UnsupportedProviderError``."""
    if isinstance(provider, Provider):
        return provider
    if isinstance(provider, str):
        try:
            return Provider(provider.lower())
        except ValueError:
            pass
        member = Provider.__members__.get(provider.upper())
        if member is not None:
            return member
    raise UnsupportedProviderError(provider)


class ProviderRegistry:
    """
    Lookup from provider to driver.

    Pre-registered drivers:
    - ``oracle``: :class:`OracleDriver`
    - ``sqlserver``: :class:`SqlServerDriver`
    - ``oledb``: :class:`OleDbDriver`
    - ``odbc``: :class:`OdbcDriver`
    - ``access``: :class:`AccessDriver` (OLE DB family)
    """

    def __init__(self):
        self._drivers: dict[Provider, Driver] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default drivers."""
        self._drivers[Provider.ORACLE] = OracleDriver()
        self._drivers[Provider.SQL_SERVER] = SqlServerDriver()
        self._drivers[Provider.OLE_DB] = OleDbDriver()
        self._drivers[Provider.ODBC] = OdbcDriver()
        self._drivers[Provider.ACCESS] = AccessDriver()

    def register(self, provider: Provider | str, driver: Driver) -> None:
        """Register (or replace) the driver for ``provider``."""
        provider = resolve_provider(provider)
        if provider is Provider.NONE:
            raise UnsupportedProviderError(provider, "Provider NONE cannot have a driver")
        self._drivers[provider] = driver

    def reset(self) -> None:
        """Drop custom registrations and restore the defaults."""
        self._drivers.clear()
        self._register_defaults()

    def driver_for(self, provider: Provider | str) -> Driver:
        provider = resolve_provider(provider)
        driver = self._drivers.get(provider)
        if driver is None:
            raise UnsupportedProviderError(provider)
        return driver

    def list_providers(self) -> list[Provider]:
        """List providers that have a driver."""
        return sorted(self._drivers, key=lambda p: p.value)

    def new_connection(self, provider: Provider | str) -> Connection:
        return self.driver_for(provider).new_connection()

    def new_command(self, provider: Provider | str) -> Command:
        return self.driver_for(provider).new_command()

    def new_data_adapter(self, provider: Provider | str) -> DataAdapter:
        return self.driver_for(provider).new_data_adapter()

    def new_transaction(self, provider: Provider | str, connection: Connection | None) -> Transaction:
        return self.driver_for(provider).new_transaction(connection)

    def new_parameter(self, provider: Provider | str) -> Parameter:
        return self.driver_for(provider).new_parameter()


# Global registry
provider_registry = ProviderRegistry()


__all__ = [
    "ProviderRegistry",
    "provider_registry",
    "resolve_provider",
]
