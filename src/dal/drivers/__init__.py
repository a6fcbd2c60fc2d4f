"""Provider drivers -- one DB-API backed implementation per database family.

Manifesto:
    Application code issues connections, commands, parameters and
    transactions the same way whether the database is SQL Server, Oracle,
    an ODBC source, an OLE DB source or an Access file. Everything that
    differs between those back-ends is isolated in a driver class, and the
    registry is the only place that knows which class serves which
    provider.

    Each driver is **import-guarded**: its DB-API package is only needed when
    a connection opens. Install the corresponding extra::

        pip install dal-core[sqlserver]   # pyodbc
        pip install dal-core[odbc]        # pyodbc
        pip install dal-core[oracle]      # oracledb
        pip install dal-core[oledb]       # adodbapi (Windows)

Architecture::

    Driver (base.py)                 Abstract base: module import, binding, factories
        |-- OdbcDriver               pyodbc
        |   |-- SqlServerDriver      pyodbc + Microsoft ODBC driver
        |-- OleDbDriver              adodbapi
        |   |-- AccessDriver         adodbapi + Jet provider
        |-- OracleDriver             oracledb

    ProviderRegistry (registry.py)   Provider -> Driver instance
    objects.py                       Connection, Command, Parameter,
                                     DataAdapter, Transaction, RowCursor

Guardrails:
    ❌ ``OracleDriver().new_connection()`` in application code
    ✅ ``provider_registry.new_connection(Provider.ORACLE)``
    ❌ Importing pyodbc/oracledb/adodbapi at module scope
    ✅ Import-guarded in ``Driver.load_module()``

Tags:
    dal, drivers, registry-pattern, sqlserver, oracle, odbc, oledb, access

Doc-Types:
    package-overview, architecture-map, module-index
"""

from .base import DEFAULT_COMMAND_TIMEOUT, Driver
from .objects import UNSET, Command, Connection, DataAdapter, Parameter, RowCursor, Transaction
from .odbc import OdbcDriver
from .oledb import JET_PROVIDER, AccessDriver, OleDbDriver
from .oracle import OracleDriver
from .registry import ProviderRegistry, provider_registry, resolve_provider
from .sqlserver import DEFAULT_ODBC_DRIVER, SqlServerDriver

__all__ = [
    # Base class
    "Driver",
    "DEFAULT_COMMAND_TIMEOUT",
    # Driver objects
    "UNSET",
    "Connection",
    "Command",
    "Parameter",
    "DataAdapter",
    "Transaction",
    "RowCursor",
    # Implementations
    "OdbcDriver",
    "SqlServerDriver",
    "DEFAULT_ODBC_DRIVER",
    "OleDbDriver",
    "AccessDriver",
    "JET_PROVIDER",
    "OracleDriver",
    # Registry
    "ProviderRegistry",
    "provider_registry",
    "resolve_provider",
]
