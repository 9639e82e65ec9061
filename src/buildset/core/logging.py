"""
buildset logging - structured logging for the resolution pipeline.

Manifesto:
    Conflict reconciliation never stops resolution: an option that is both
    enabled and disabled gets a deterministic winner and resolution carries
    on. The only trace an author gets is the log, so every conflict, stage
    and loaded document is emitted as a structured event:

    - **Structures:** ``logger.warning("option_conflict", option=..., document=...)``
    - **Correlates:** the document being resolved is bound as context
    - **Flexes:** colored console output for humans, JSON for CI logs

Architecture:
    ::

        configure_logging(level="INFO", json_format=False)
            ↓
        structlog processor chain:
          1. TimeStamper(fmt="iso")
          2. add_log_level / add_logger_name
          3. add_service_metadata
          4. JSONRenderer (or ConsoleRenderer)

Examples:
    >>> from buildset.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.info("builds_resolved", count=12)

Tags:
    logging, structlog, observability, buildset

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "buildset"


class _NamedPrintLogger(structlog.PrintLogger):
    """``PrintLogger`` carrying the name ``add_logger_name`` reads."""

    def __init__(self, file: Any = None, name: str | None = None):
        super().__init__(file)
        self.name = name


def _stderr_logger_factory(*args: Any) -> _NamedPrintLogger:
    # sys.stderr is looked up per logger so redirected streams are honoured
    return _NamedPrintLogger(sys.stderr, name=args[0] if args else None)


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "buildset",
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
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        # stdout is reserved for command output (tables, JSON)
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
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

    Nested scopes restore the outer values on exit, so recursive resolution
    can rebind ``document`` safely.

    Example:
        with LogContext(document="creality/ender3.yaml"):
            logger.debug("extension_merged")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: Any = None

    def __enter__(self) -> LogContext:
        self._tokens = structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)

    async def __aenter__(self) -> LogContext:
        return self.__enter__()

    async def __aexit__(self, *args) -> None:
        self.__exit__(*args)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
