"""Connection settings and connection-string construction.

Manifesto:
    Sessions take an opaque connection string and a provider. Where those
    come from is configuration: environment variables or a ``.env`` file,
    optionally grouped per database (``DAL_REPORTING_DATA_SOURCE``), turned
    into the provider's own connection-string syntax in one place.

Features:
    - **ConnectionSettings:** pydantic-settings model with ``DAL_`` prefix
    - **Groups:** ``ConnectionSettings.for_group("reporting")`` reads
      ``DAL_REPORTING_*``
    - **construct_connection_string():** ODBC, OLE DB, Access (Jet), SQL
      Server and Oracle syntax, or the explicit ``connection_string`` when set
    - **get_settings():** cached default instance

Examples:
    >>> settings = ConnectionSettings(provider="sqlserver", data_source="db01",
    ...                               initial_catalog="sales", integrated_security=True)
    >>> settings.construct_connection_string()
    'Driver={ODBC Driver 18 for SQL Server};Server=db01;Database=sales;Trusted_Connection=yes'

Tags:
    settings, configuration, pydantic, environment, connection-string, dal

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from dal.connection_strings import format_odbc_pair, format_oledb_pair, join_pairs
from dal.drivers.oledb import JET_PROVIDER
from dal.drivers.sqlserver import DEFAULT_ODBC_DRIVER
from dal.enums import Provider
from dal.errors import UnsupportedProviderError

ENV_PREFIX = "DAL_"


class ConnectionSettings(BaseSettings):
    """Provider selection and connection properties.

    All fields can be set through ``DAL_*`` environment variables (e.g.
    ``DAL_PROVIDER=oracle``) or a ``.env`` file.

    ``service`` is the ODBC ``Driver`` for ODBC sources and the OLE DB
    ``Provider`` for OLE DB sources.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Provider ─────────────────────────────────────────────────
    provider: Provider = Field(default=Provider.NONE)
    connection_string: SecretStr | None = Field(
        default=None,
        description="Complete connection string; overrides the properties below",
    )

    # ── Connection properties ────────────────────────────────────
    data_source: str = ""
    user_id: str = ""
    password: SecretStr = SecretStr("")
    integrated_security: bool = False
    initial_catalog: str = ""
    service: str = ""
    sqlserver_odbc_driver: str = DEFAULT_ODBC_DRIVER

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def for_group(cls, group: str, **overrides) -> ConnectionSettings:
        """Settings read from ``DAL_<GROUP>_*`` variables."""
        prefix = f"{ENV_PREFIX}{group.strip().upper()}_"
        return cls(_env_prefix=prefix, **overrides)  # type: ignore[call-arg]

    # ── Connection strings ───────────────────────────────────────

    def _secret(self) -> str:
        return self.password.get_secret_value()

    def _oledb_string(self, provider_name: str) -> str:
        pairs = [
            format_oledb_pair("Provider", provider_name),
            format_oledb_pair("Data Source", self.data_source),
        ]
        if self.user_id:
            pairs.append(format_oledb_pair("User ID", self.user_id))
            if self._secret():
                pairs.append(format_oledb_pair("Password", self._secret()))
        return join_pairs(pairs)

    def _odbc_string(self) -> str:
        pairs = [
            format_odbc_pair("Driver", self.service, braced=True),
            format_odbc_pair("Dbq", self.data_source),
        ]
        if self.user_id:
            pairs.append(format_odbc_pair("uid", self.user_id))
            if self._secret():
                pairs.append(format_odbc_pair("pwd", self._secret()))
        return join_pairs(pairs)

    def _sqlserver_string(self) -> str:
        pairs = [
            format_odbc_pair("Driver", self.sqlserver_odbc_driver, braced=True),
            format_odbc_pair("Server", self.data_source),
        ]
        if self.initial_catalog:
            pairs.append(format_odbc_pair("Database", self.initial_catalog))
        if self.integrated_security:
            pairs.append("Trusted_Connection=yes")
        else:
            pairs.append(format_odbc_pair("UID", self.user_id))
            pairs.append(format_odbc_pair("PWD", self._secret()))
        return join_pairs(pairs)

    def _oracle_string(self) -> str:
        # external authentication: empty user and password
        if self.integrated_security:
            return f"/@{self.data_source}"
        return f"{self.user_id}/{self._secret()}@{self.data_source}"

    def construct_connection_string(self) -> str:
        """Build the connection string for ``provider``.

        Returns ``connection_string`` unchanged when it is set.
        """
        if self.connection_string is not None and self.connection_string.get_secret_value():
            return self.connection_string.get_secret_value()

        match self.provider:
            case Provider.ACCESS:
                return self._oledb_string(JET_PROVIDER)
            case Provider.OLE_DB:
                return self._oledb_string(self.service)
            case Provider.ODBC:
                return self._odbc_string()
            case Provider.ORACLE:
                return self._oracle_string()
            case Provider.SQL_SERVER:
                return self._sqlserver_string()
            case _:
                raise UnsupportedProviderError(self.provider)


_settings_cache: dict[str, ConnectionSettings] = {}


def get_settings(group: str | None = None, *, _force_reload: bool = False) -> ConnectionSettings:
    """Load and cache settings for the default configuration or a group."""
    cache_key = (group or "").upper()
    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    settings = ConnectionSettings.for_group(group) if group else ConnectionSettings()
    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    _settings_cache.clear()


__all__ = [
    "ConnectionSettings",
    "get_settings",
    "clear_settings_cache",
    "ENV_PREFIX",
]
