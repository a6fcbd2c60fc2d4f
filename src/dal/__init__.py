"""dal-core -- provider-agnostic database access layer.

Manifesto:
    Application code should issue the same calls against SQL Server, Oracle,
    ODBC, OLE DB and Access. ``DataAccessSession`` runs the connection and
    command lifecycle; the provider registry isolates every driver-specific
    construction detail.

Quick start::

    from dal import CommandType, DataAccessSession, Provider

    with DataAccessSession(Provider.SQL_SERVER, connection_string) as session:
        session.add_parameter("region", "EMEA")
        total = session.execute_scalar(
            CommandType.TEXT, "SELECT COUNT(*) FROM orders WHERE region = ?", int
        )

Modules
-------
session             DataAccessSession (four execution modes, transactions)
drivers             Driver base class, per-provider drivers, ProviderRegistry
enums               Provider, CommandType, ConnectionState
errors              DalError hierarchy
settings            ConnectionSettings (pydantic-settings) + connection strings
tables              DataSet / DataTable
result              Ok / Err result envelope
logging             structlog configuration

Tags:
    dal, database, data-access, sqlserver, oracle, odbc, oledb, access

Doc-Types:
    package-overview, module-index
"""

from dal.drivers import (
    UNSET,
    Command,
    Connection,
    DataAdapter,
    Driver,
    Parameter,
    ProviderRegistry,
    RowCursor,
    Transaction,
    provider_registry,
)
from dal.enums import CommandType, ConnectionState, Provider
from dal.errors import (
    ConfigError,
    ConnectionStateError,
    ConversionError,
    DalError,
    DriverNotInstalledError,
    InvalidArgumentError,
    UnsupportedProviderError,
)
from dal.session import DataAccessSession
from dal.settings import ConnectionSettings, get_settings
from dal.tables import DataSet, DataTable

__version__ = "1.0.0"

__all__ = [
    # Session
    "DataAccessSession",
    # Enums
    "Provider",
    "CommandType",
    "ConnectionState",
    # Drivers
    "Driver",
    "ProviderRegistry",
    "provider_registry",
    "Connection",
    "Command",
    "Parameter",
    "DataAdapter",
    "Transaction",
    "RowCursor",
    "UNSET",
    # Results
    "DataSet",
    "DataTable",
    # Settings
    "ConnectionSettings",
    "get_settings",
    # Errors
    "DalError",
    "ConfigError",
    "UnsupportedProviderError",
    "DriverNotInstalledError",
    "InvalidArgumentError",
    "ConnectionStateError",
    "ConversionError",
]
