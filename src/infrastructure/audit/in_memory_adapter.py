"""In-memory implementation of PolicyAuditStoreProtocol.

Process-local store for tests and local tooling. Matches the SQL adapter's
filter, ordering and pagination semantics; nothing survives a restart.
"""

from dataclasses import replace
from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.core.result import Result, Success
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.errors import AuditError
from src.domain.value_objects.policy_audit_filters import PolicyAuditFilters


class InMemoryPolicyAuditStore:
    """List-backed audit store.

    Appends never block each other (single event loop, no awaits while
    mutating).
    """

    def __init__(self) -> None:
        self._events: list[PolicyAuditEvent] = []

    @property
    def events(self) -> list[PolicyAuditEvent]:
        """Copy of stored events in insertion order."""
        return list(self._events)

    async def create(
        self, event: PolicyAuditEvent
    ) -> Result[PolicyAuditEvent, AuditError]:
        now = datetime.now(UTC)
        occurred_at = event.occurred_at
        if occurred_at.tzinfo is None:
            occurred_at = occurred_at.replace(tzinfo=UTC)
        stored = replace(
            event,
            id=uuid7(),
            occurred_at=occurred_at.astimezone(UTC),
            created_at=now,
            updated_at=now,
        )
        self._events.append(stored)
        return Success(value=stored)

    async def find(
        self,
        filters: PolicyAuditFilters,
        *,
        limit: int,
        offset: int,
    ) -> Result[list[PolicyAuditEvent], AuditError]:
        matching = sorted(
            (event for event in self._events if filters.matches(event)),
            key=lambda event: (event.occurred_at, event.id),
            reverse=True,
        )
        return Success(value=matching[offset : offset + limit])

    async def count(self, filters: PolicyAuditFilters) -> Result[int, AuditError]:
        return Success(value=sum(1 for event in self._events if filters.matches(event)))
