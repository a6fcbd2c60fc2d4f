"""
Structured logging for the data access layer.

Manifesto:
    Database failures are diagnosed from logs long after the fact. Every
    module logs key/value events through structlog so provider, command type
    and row counts can be filtered without parsing free text.

    - **Structured:** JSON output for log aggregation
    - **Correlated:** bind a request or job id once with ``LogContext``
    - **Quiet by default:** the session logs at DEBUG; only lossy scalar
      conversions log at WARNING

Examples:
    >>> from dal.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="reporting")
    >>> logger = get_logger(__name__)
    >>> logger.info("report_started", report="monthly")

Guardrails:
    ❌ ``logger.info("opened", connection_string=cs)``
    ✅ ``logger.debug("connection_opened", provider=provider.value)``

Tags:
    logging, structlog, observability, json-logging, dal

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from dal.errors import ConfigError

if TYPE_CHECKING:
    from dal.settings import ConnectionSettings

_SERVICE_NAME = "dal"

_REDACTED = "***REDACTED***"

# Keys whose values may carry credentials
_SENSITIVE_KEY_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"connection_?string", re.IGNORECASE),
    re.compile(r"password|passwd|secret", re.IGNORECASE),
    re.compile(r"^(pwd|dsn)$", re.IGNORECASE),
]

# log_format setting -> json_format argument (None = decide by tty)
_LOG_FORMATS: dict[str, bool | None] = {"json": True, "console": False, "auto": None}


def _add_service_metadata(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask values of credential-bearing keys such as ``connection_string``."""
    for key in event_dict:
        if any(pattern.search(key) for pattern in _SENSITIVE_KEY_PATTERNS):
            event_dict[key] = _REDACTED
    return event_dict


def _elasticsearch_compatible(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename fields to ECS names."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "dal",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
        _redact_secrets,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def configure_logging_from_settings(settings: ConnectionSettings, service: str = "dal") -> None:
    """Configure logging from ``DAL_LOG_LEVEL`` / ``DAL_LOG_FORMAT``.

    ``log_format`` is ``json``, ``console`` or ``auto`` (JSON unless stdout is
    a terminal).
    """
    log_format = settings.log_format.strip().lower()
    if log_format not in _LOG_FORMATS:
        raise ConfigError(
            f"Unknown log format {settings.log_format!r}",
            context={"allowed": sorted(_LOG_FORMATS)},
        )
    configure_logging(level=settings.log_level, json_format=_LOG_FORMATS[log_format], service=service)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(job="nightly_export"):
            session.execute_non_query(CommandType.STORED_PROCEDURE, "export_day")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
