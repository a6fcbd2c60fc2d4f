"""OLE DB and Access drivers.

Both go through ``adodbapi`` (ADO over COM, Windows only). Access is the OLE
DB family with the Jet provider fixed: :class:`AccessDriver` adds
``Provider=Microsoft.Jet.OLEDB.4.0`` when the connection string names none.

Install the driver::

    pip install adodbapi
    # or:  pip install dal-core[oledb]
"""

from __future__ import annotations

from dal.connection_strings import format_oledb_pair, has_key, prepend_pair
from dal.enums import Provider
from dal.protocols import DBAPIConnection, DBAPIModule

from .base import Driver

JET_PROVIDER = "Microsoft.Jet.OLEDB.4.0"


class OleDbDriver(Driver):
    """OLE DB data sources through adodbapi."""

    provider = Provider.OLE_DB
    family = "oledb"
    module_name = "adodbapi"

    def open_raw(self, module: DBAPIModule, connection_string: str) -> DBAPIConnection:
        return module.connect(connection_string)

    def apply_timeout(self, raw_connection: DBAPIConnection, seconds: int) -> None:
        # adodbapi copies this into ADO's CommandTimeout
        raw_connection.timeout = seconds  # type: ignore[attr-defined]


class AccessDriver(OleDbDriver):
    """Microsoft Access databases through the Jet OLE DB provider."""

    provider = Provider.ACCESS

    def prepare_connection_string(self, connection_string: str) -> str:
        if has_key(connection_string, "Provider"):
            return connection_string
        return prepend_pair(connection_string, format_oledb_pair("Provider", JET_PROVIDER))


__all__ = [
    "OleDbDriver",
    "AccessDriver",
    "JET_PROVIDER",
]
