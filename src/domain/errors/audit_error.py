"""Audit trail error types.

Used when recording or querying policy audit events fails.

Usage:
    from src.domain.errors import AuditError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(AuditError(
        code=ErrorCode.AUDIT_RECORD_FAILED,
        message="Failed to record policy audit event: connection lost",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit store failure.

    Used when the audit store cannot persist or read events (database
    error, connection loss, constraint violation).

    Attributes:
        code: ErrorCode enum (AUDIT_RECORD_FAILED, AUDIT_QUERY_FAILED).
        message: Human-readable message.
        details: Additional context (policy key, persona, error type).
    """

    pass  # Inherits all fields from DomainError
