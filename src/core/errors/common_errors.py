"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (missing or malformed fields)

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(ValidationError(
        code=ErrorCode.AUDIT_EVENT_INVALID,
        message="Policy audit event is missing required fields",
        field="policy_key",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation (first offending field).
        details: Additional context.
    """

    field: str | None = None
