"""Result types for railway-oriented programming.

Store adapters and handlers return a Result instead of raising, so a failed
audit write is a value the caller can inspect, log, and discard without
touching the access decision that preceded it.

Usage:
    async def persist(event: PolicyAuditEvent) -> Result[PolicyAuditEvent, AuditError]:
        ...

    match await persist(event):
        case Success(value=stored):
            logger.info("policy_audit_event_recorded", event_id=str(stored.id))
        case Failure(error=error):
            logger.error("policy_audit_event_persist_failed", error_code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
Result: TypeAlias = Union[Success[T], Failure[E]]
