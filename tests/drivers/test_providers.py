"""Tests for the provider-specific driver hooks (connect, timeout, binding, procedures)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dal.drivers import (
    JET_PROVIDER,
    UNSET,
    AccessDriver,
    OdbcDriver,
    OleDbDriver,
    OracleDriver,
    Parameter,
    SqlServerDriver,
)
from dal.errors import ConfigError, DriverNotInstalledError


class MissingOdbcDriver(OdbcDriver):
    module_name = "dal_test_missing_driver_module"


class TestLoadModule:
    def test_missing_module_raises_config_error(self) -> None:
        with pytest.raises(DriverNotInstalledError) as exc_info:
            MissingOdbcDriver().load_module()
        assert isinstance(exc_info.value, ConfigError)
        assert exc_info.value.module_name == "dal_test_missing_driver_module"
        assert "pip install" in str(exc_info.value)

    def test_opening_a_connection_surfaces_missing_module(self) -> None:
        conn = MissingOdbcDriver().new_connection()
        conn.connection_string = "DSN=x"
        with pytest.raises(DriverNotInstalledError):
            conn.open()


class TestConnectionStrings:
    def test_sqlserver_adds_odbc_driver(self) -> None:
        result = SqlServerDriver().prepare_connection_string("Server=db01;Database=sales")
        assert result == "Driver={ODBC Driver 18 for SQL Server};Server=db01;Database=sales"

    def test_sqlserver_custom_odbc_driver(self) -> None:
        result = SqlServerDriver(odbc_driver="ODBC Driver 17 for SQL Server").prepare_connection_string("Server=x")
        assert result.startswith("Driver={ODBC Driver 17 for SQL Server};")

    def test_sqlserver_keeps_explicit_driver(self) -> None:
        cs = "DRIVER={FreeTDS};Server=db01"
        assert SqlServerDriver().prepare_connection_string(cs) == cs

    def test_odbc_is_verbatim(self) -> None:
        cs = "Driver={Microsoft Access Driver (*.mdb)};Dbq=C:\\data\\app.mdb"
        assert OdbcDriver().prepare_connection_string(cs) == cs

    def test_access_adds_jet_provider(self) -> None:
        result = AccessDriver().prepare_connection_string("Data Source=C:\\data\\app.mdb")
        assert result == f"Provider={JET_PROVIDER};Data Source=C:\\data\\app.mdb"

    def test_access_keeps_explicit_provider(self) -> None:
        cs = "Provider=Microsoft.ACE.OLEDB.12.0;Data Source=app.accdb"
        assert AccessDriver().prepare_connection_string(cs) == cs

    def test_oledb_is_verbatim(self) -> None:
        cs = "Data Source=app.mdb"
        assert OleDbDriver().prepare_connection_string(cs) == cs


class TestOpenRaw:
    def test_pyodbc_gets_connection_string(self) -> None:
        module = MagicMock()
        OdbcDriver().open_raw(module, "DSN=x")
        module.connect.assert_called_once_with("DSN=x")

    def test_adodbapi_gets_connection_string(self) -> None:
        module = MagicMock()
        OleDbDriver().open_raw(module, "Provider=p;Data Source=d")
        module.connect.assert_called_once_with("Provider=p;Data Source=d")

    def test_oracle_gets_dsn(self) -> None:
        module = MagicMock()
        OracleDriver().open_raw(module, "scott/tiger@db:1521/orcl")
        module.connect.assert_called_once_with(dsn="scott/tiger@db:1521/orcl")


class TestTimeouts:
    def test_pyodbc_seconds(self) -> None:
        raw = MagicMock()
        SqlServerDriver().apply_timeout(raw, 900)
        assert raw.timeout == 900

    def test_adodbapi_seconds(self) -> None:
        raw = MagicMock()
        AccessDriver().apply_timeout(raw, 600)
        assert raw.timeout == 600

    def test_oracle_milliseconds(self) -> None:
        raw = MagicMock()
        OracleDriver().apply_timeout(raw, 900)
        assert raw.call_timeout == 900_000


class TestBinding:
    def _params(self) -> list[Parameter]:
        return [Parameter("@id", 5), Parameter(":name", None), Parameter("flag", UNSET)]

    def test_positional_keeps_insertion_order(self) -> None:
        assert OdbcDriver().bind(self._params(), "qmark") == [5, None, None]

    def test_named_strips_prefixes(self) -> None:
        assert OracleDriver().bind(self._params(), "named") == {"id": 5, "name": None, "flag": None}

    def test_pyformat_is_named(self) -> None:
        assert isinstance(OdbcDriver().bind(self._params(), "pyformat"), dict)

    def test_null_marker_replaces_absent_values(self) -> None:
        driver = OdbcDriver()
        assert driver.to_driver_value(None) is driver.null_marker
        assert driver.to_driver_value(UNSET) is driver.null_marker
        assert driver.to_driver_value(0) == 0

    def test_paramstyle_from_module(self) -> None:
        module = MagicMock(paramstyle="named")
        assert OdbcDriver().resolve_paramstyle(module) == "named"


class TestProcedureCalls:
    def test_odbc_call_escape(self) -> None:
        cursor = MagicMock()
        OdbcDriver().call_procedure(cursor, "usp_archive", [1, "x"])
        cursor.execute.assert_called_once_with("{CALL usp_archive (?, ?)}", [1, "x"])

    def test_odbc_call_escape_without_arguments(self) -> None:
        cursor = MagicMock()
        SqlServerDriver().call_procedure(cursor, "usp_refresh", [])
        cursor.execute.assert_called_once_with("{CALL usp_refresh}")

    def test_oracle_keyword_parameters(self) -> None:
        cursor = MagicMock()
        OracleDriver().call_procedure(cursor, "pkg.close_day", {"day": 3})
        cursor.callproc.assert_called_once_with("pkg.close_day", keyword_parameters={"day": 3})

    def test_oledb_callproc(self) -> None:
        cursor = MagicMock()
        OleDbDriver().call_procedure(cursor, "qryTotals", [2024])
        cursor.callproc.assert_called_once_with("qryTotals", [2024])
