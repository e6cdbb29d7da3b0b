"""structlog-backed logger for the policy audit pipeline.

Writes one event per line to stdout. Development gets the colored console
renderer; every other environment gets JSON so audit failures can be shipped
and queried. Satisfies LoggerProtocol structurally.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(level: str) -> int:
    """Map a level name to its numeric value; unknown names mean INFO."""
    return LEVELS.get(str(level).strip().upper(), logging.INFO)


def build_processors(*, use_json: bool) -> list[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        renderer,
    ]


def _error_fields(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is None:
        return context
    return {
        **context,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }


class ConsoleAdapter:
    """Structured stdout logger used by the recorder and query service.

    Args:
        use_json: Render JSON lines instead of the colored console format.
        level: Minimum level name; events below it are dropped.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        structlog.configure(
            processors=build_processors(use_json=use_json),
            wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    @classmethod
    def _wrapping(cls, bound_logger: Any) -> ConsoleAdapter:
        # Reuses the process-wide structlog configuration
        adapter = cls.__new__(cls)
        adapter._logger = bound_logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at ERROR, flattening ``error`` into error_type/error_message."""
        self._logger.error(message, **_error_fields(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_error_fields(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter that adds ``context`` to every event."""
        return self._wrapping(self._logger.bind(**context))

    def with_context(self, **context: Any) -> ConsoleAdapter:
        return self.bind(**context)
