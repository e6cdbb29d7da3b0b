"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Implementations MUST emit
structured (key-value) records and MUST NOT be handed secrets: audit
metadata is sanitized before it is ever logged.

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events (audit event recorded)
    - WARNING: Rejected input (audit event missing required fields)
    - ERROR: Operation failed, system continues (audit store write failed)
    - CRITICAL: System-wide failure

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.warning("policy_audit_event_rejected", missing_fields=["persona"])

    scoped = logger.bind(policy_key="governance.rbac.matrix")
    scoped.info("policy_audit_event_recorded", event_id=str(event_id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name or short message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Event name or short message.
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Event name or short message.
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message.

        Args:
            message: Event name or short message.
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Args:
            **context: Context to include in every subsequent log call.

        Returns:
            New logger instance; the original is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind().

        Args:
            **context: Context to bind.

        Returns:
            New logger instance with bound context.
        """
        ...
