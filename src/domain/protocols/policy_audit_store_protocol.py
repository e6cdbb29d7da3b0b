"""Policy audit store protocol (port).

Durable, append-only storage for policy audit events. Infrastructure
adapters implement this protocol (PostgreSQL via SQLAlchemy, in-memory for
tests); the recorder and the query service depend only on the protocol.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (PostgresPolicyAuditStore, InMemoryPolicyAuditStore)
- Application handlers use the protocol

Usage:
    store: PolicyAuditStoreProtocol = PostgresPolicyAuditStore(session=session)

    result = await store.create(event)
    match result:
        case Success(value=stored):
            ...
        case Failure(error=error):
            ...

    total = await store.count(filters)
    page = await store.find(filters, limit=25, offset=0)
"""

from typing import Protocol

from src.core.result import Result
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.errors import AuditError
from src.domain.value_objects.policy_audit_filters import PolicyAuditFilters


class PolicyAuditStoreProtocol(Protocol):
    """Protocol for policy audit event storage.

    Immutability:
        Implementations expose no update or delete operation. Retention and
        purging are handled outside this codebase.

    Error Handling:
        All methods return Result types. NEVER raise; wrap failures in
        Failure(AuditError(...)).

    Concurrency:
        Independent writes must not block each other. Reads may or may not
        observe writes still in flight.
    """

    async def create(
        self, event: PolicyAuditEvent
    ) -> Result[PolicyAuditEvent, AuditError]:
        """Persist a new audit event.

        Args:
            event: Normalized, sanitized event (id is ignored).

        Returns:
            Result[PolicyAuditEvent, AuditError]:
                - Success(stored) with id, created_at, updated_at assigned
                - Failure(AuditError) with code AUDIT_RECORD_FAILED
        """
        ...

    async def find(
        self,
        filters: PolicyAuditFilters,
        *,
        limit: int,
        offset: int,
    ) -> Result[list[PolicyAuditEvent], AuditError]:
        """Return one page of matching events.

        Ordering is occurred_at DESC, then id DESC.

        Args:
            filters: Normalized filters.
            limit: Page size (already clamped by the caller).
            offset: Rows to skip (already clamped by the caller).

        Returns:
            Result[list[PolicyAuditEvent], AuditError]:
                - Success(events), possibly empty
                - Failure(AuditError) with code AUDIT_QUERY_FAILED
        """
        ...

    async def count(self, filters: PolicyAuditFilters) -> Result[int, AuditError]:
        """Count all events matching the filters, ignoring pagination.

        Args:
            filters: Normalized filters.

        Returns:
            Result[int, AuditError]:
                - Success(total)
                - Failure(AuditError) with code AUDIT_QUERY_FAILED
        """
        ...
