"""Tests for dal.errors."""

import pytest

from dal.enums import Provider
from dal.errors import (
    ConfigError,
    ConnectionStateError,
    ConversionError,
    DalError,
    DriverNotInstalledError,
    ErrorCategory,
    InvalidArgumentError,
    UnsupportedProviderError,
)


class TestDalError:
    def test_defaults(self):
        err = DalError("something broke")
        assert err.message == "something broke"
        assert err.category is ErrorCategory.INTERNAL
        assert err.context == {}
        assert err.cause is None

    def test_cause_is_chained(self):
        cause = OSError("socket closed")
        err = DalError("lost connection", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "socket closed"

    def test_with_context_chains(self):
        err = DalError("x").with_context(provider="oracle", attempt=2)
        assert err.context == {"provider": "oracle", "attempt": 2}

    def test_to_dict(self):
        err = ConnectionStateError("Connection is not open", context={"provider": "odbc"})
        assert err.to_dict() == {
            "error_type": "ConnectionStateError",
            "message": "Connection is not open",
            "category": "DATABASE",
            "provider": "odbc",
        }

    def test_repr(self):
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"


class TestSubclasses:
    @pytest.mark.parametrize(
        "err,category",
        [
            (UnsupportedProviderError("mysql"), ErrorCategory.CONFIG),
            (DriverNotInstalledError("pyodbc", Provider.ODBC), ErrorCategory.CONFIG),
            (InvalidArgumentError("name"), ErrorCategory.VALIDATION),
            (ConnectionStateError("closed"), ErrorCategory.DATABASE),
            (ConversionError("abc", int), ErrorCategory.VALIDATION),
        ],
    )
    def test_category(self, err, category):
        assert isinstance(err, DalError)
        assert err.category is category

    def test_unsupported_provider_uses_enum_value(self):
        err = UnsupportedProviderError(Provider.NONE)
        assert err.provider is Provider.NONE
        assert err.context["provider"] == "none"
        assert "'none'" in str(err)

    def test_driver_not_installed_is_config_error(self):
        err = DriverNotInstalledError("oracledb", Provider.ORACLE)
        assert isinstance(err, ConfigError)
        assert str(err) == "oracledb is required for the oracle provider. Install with: pip install oracledb"

    def test_invalid_argument_message(self):
        err = InvalidArgumentError("command_text")
        assert err.argument == "command_text"
        assert str(err) == "Argument 'command_text' is required"

    def test_conversion_error_context(self):
        err = ConversionError("abc", int, cause=ValueError("invalid literal"))
        assert err.value == "abc"
        assert err.target_type is int
        assert err.context == {"source_type": "str", "target_type": "int"}
