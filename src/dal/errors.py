"""
Structured error types for the data access layer.

Every error raised by this package derives from :class:`DalError` and carries
a category, a context dictionary and an optional chained cause, so callers can
log or route failures without parsing messages.

Manifesto:
    - **Typed hierarchy:** configuration, argument and state errors are
      distinct classes
    - **Caller errors surface immediately:** nothing here is retryable
    - **Driver errors stay verbatim:** exceptions from pyodbc, oracledb or
      adodbapi are never wrapped or translated

Architecture:
    ::

        DalError (category, context, cause)
        ├── ConfigError                  CONFIG
        │   ├── UnsupportedProviderError
        │   └── DriverNotInstalledError
        ├── InvalidArgumentError         VALIDATION
        ├── ConnectionStateError         DATABASE
        └── ConversionError              VALIDATION (scalar path only)

Examples:
    >>> from dal.errors import UnsupportedProviderError
    >>> err = UnsupportedProviderError("mysql")
    >>> err.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> err.to_dict()["provider"]
    'mysql'

Tags:
    exception, error-hierarchy, dal, validation, configuration

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Broad classification used for logging and routing."""

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    DATABASE = "DATABASE"
    INTERNAL = "INTERNAL"


class DalError(Exception):
    """
    Base exception for the data access layer.

    Subclasses set ``default_category``; instances may override it and attach
    arbitrary context through :meth:`with_context`.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DalError:
        """Add context fields and return self for chaining."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result.update(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(DalError):
    """Configuration error. Fix the configuration, do not retry."""

    default_category = ErrorCategory.CONFIG


class UnsupportedProviderError(ConfigError):
    """The registry has no driver for the requested provider."""

    def __init__(self, provider: Any, message: str | None = None):
        name = getattr(provider, "value", provider)
        super().__init__(
            message or f"Unsupported database provider: {name!r}",
            context={"provider": name},
        )
        self.provider = provider


class DriverNotInstalledError(ConfigError):
    """The DB-API module backing a provider cannot be imported."""

    def __init__(self, module_name: str, provider: Any, cause: BaseException | None = None):
        name = getattr(provider, "value", provider)
        super().__init__(
            f"{module_name} is required for the {name} provider. Install with: pip install {module_name}",
            context={"module": module_name, "provider": name},
            cause=cause,
        )
        self.module_name = module_name


# =============================================================================
# CALLER ERRORS
# =============================================================================


class InvalidArgumentError(DalError):
    """A required argument was missing or empty."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, argument: str, message: str | None = None):
        super().__init__(
            message or f"Argument {argument!r} is required",
            context={"argument": argument},
        )
        self.argument = argument


class ConnectionStateError(DalError):
    """An operation needs a connection (or transaction) in a state it is not in."""

    default_category = ErrorCategory.DATABASE


class ConversionError(DalError):
    """A scalar result could not be converted to the requested type."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, value: Any, target_type: type, cause: BaseException | None = None):
        super().__init__(
            f"Cannot convert {type(value).__name__} value to {target_type.__name__}",
            context={"source_type": type(value).__name__, "target_type": target_type.__name__},
            cause=cause,
        )
        self.value = value
        self.target_type = target_type


__all__ = [
    "ErrorCategory",
    "DalError",
    "ConfigError",
    "UnsupportedProviderError",
    "DriverNotInstalledError",
    "InvalidArgumentError",
    "ConnectionStateError",
    "ConversionError",
]
