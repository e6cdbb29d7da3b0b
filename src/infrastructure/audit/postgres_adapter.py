"""SQLAlchemy implementation of PolicyAuditStoreProtocol.

Append-only storage for policy audit events:
- Async SQLAlchemy for database operations
- Result types for error handling (no exceptions)
- JSON storage for sanitized event metadata

Runs against PostgreSQL (asyncpg) in deployed environments and SQLite
(aiosqlite) locally; nothing here is dialect specific.

Following hexagonal architecture:
- Infrastructure implements domain protocol (PolicyAuditStoreProtocol)
- Domain doesn't know about PostgreSQL or SQLAlchemy
- Easy to swap implementations (in-memory for testing)

Timestamps:
    SQLite drops tzinfo on the way in. Every datetime written here is UTC,
    and naive values read back are re-labeled as UTC.

Usage:
    from src.infrastructure.audit.postgres_adapter import PostgresPolicyAuditStore

    store = PostgresPolicyAuditStore(session=session)
    result = await store.create(event)
"""

from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.enums import PolicyDecision
from src.domain.errors import AuditError
from src.domain.value_objects.policy_audit_filters import PolicyAuditFilters
from src.infrastructure.persistence.models.policy_audit_event import (
    PolicyAuditEventModel,
)


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class PostgresPolicyAuditStore:
    """SQLAlchemy implementation of PolicyAuditStoreProtocol.

    This adapter is stateless - all state lives in the database.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Thread Safety:
        NOT safe to share across concurrent tasks (uses the provided
        session). The container hands out one session per unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize adapter with database session.

        Args:
            session: SQLAlchemy async session (injected by container).
        """
        self.session = session

    async def create(
        self, event: PolicyAuditEvent
    ) -> Result[PolicyAuditEvent, AuditError]:
        """Insert a new audit event and commit immediately.

        Args:
            event: Normalized, sanitized event. Any id on it is ignored.

        Returns:
            Result[PolicyAuditEvent, AuditError]:
                - Success(stored) with id, created_at, updated_at assigned
                - Failure(AuditError) if database operation failed
        """
        now = datetime.now(UTC)
        stored = replace(
            event,
            id=uuid7(),
            occurred_at=_utc(event.occurred_at),
            created_at=now,
            updated_at=now,
        )

        try:
            self.session.add(self._to_model(stored))
            await self.session.commit()  # Commit immediately for durability
            return Success(value=stored)

        except SQLAlchemyError as e:
            await self.session.rollback()
            return Failure(
                error=AuditError(
                    message=f"Failed to record policy audit event: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details=self._error_details(e, event),
                )
            )
        except Exception as e:
            return Failure(
                error=AuditError(
                    message=f"Unexpected error recording policy audit event: {str(e)}",
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    details=self._error_details(e, event),
                )
            )

    async def find(
        self,
        filters: PolicyAuditFilters,
        *,
        limit: int,
        offset: int,
    ) -> Result[list[PolicyAuditEvent], AuditError]:
        """Query one page of events (read-only).

        Args:
            filters: Normalized filters.
            limit: Page size.
            offset: Rows to skip.

        Returns:
            Result[list[PolicyAuditEvent], AuditError]:
                - Success(events) ordered occurred_at DESC, id DESC
                - Failure(AuditError) if database operation failed
        """
        try:
            query = (
                select(PolicyAuditEventModel)
                .where(*self._conditions(filters))
                .order_by(
                    PolicyAuditEventModel.occurred_at.desc(),
                    PolicyAuditEventModel.id.desc(),
                )
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(query)
            return Success(value=[self._to_domain(row) for row in result.scalars().all()])

        except Exception as e:
            return self._query_failure(e, filters)

    async def count(self, filters: PolicyAuditFilters) -> Result[int, AuditError]:
        """Count events matching the filters (pagination ignored).

        Args:
            filters: Normalized filters.

        Returns:
            Result[int, AuditError]:
                - Success(total)
                - Failure(AuditError) if database operation failed
        """
        try:
            query = (
                select(func.count())
                .select_from(PolicyAuditEventModel)
                .where(*self._conditions(filters))
            )
            result = await self.session.execute(query)
            return Success(value=int(result.scalar_one()))

        except Exception as e:
            return self._query_failure(e, filters)

    @staticmethod
    def _conditions(filters: PolicyAuditFilters) -> list[ColumnElement[bool]]:
        """Build WHERE clauses for the set filters."""
        model = PolicyAuditEventModel
        conditions: list[ColumnElement[bool]] = []

        if filters.policy_key is not None:
            conditions.append(model.policy_key == filters.policy_key)
        if filters.persona is not None:
            conditions.append(model.persona == filters.persona)
        if filters.resource is not None:
            conditions.append(model.resource == filters.resource)
        if filters.action is not None:
            conditions.append(model.action == filters.action)
        if filters.decision is not None:
            conditions.append(model.decision == filters.decision.value)
        if filters.search is not None:
            conditions.append(
                or_(
                    func.lower(model.reason).contains(filters.search, autoescape=True),
                    func.lower(model.actor_email).contains(
                        filters.search, autoescape=True
                    ),
                )
            )
        if filters.occurred_from is not None:
            conditions.append(model.occurred_at >= filters.occurred_from)
        if filters.occurred_to is not None:
            conditions.append(model.occurred_at <= filters.occurred_to)

        return conditions

    def _query_failure(
        self, e: Exception, filters: PolicyAuditFilters
    ) -> Failure[AuditError]:
        error_details: dict[str, Any] = {"error_type": type(e).__name__}
        if filters.policy_key is not None:
            error_details["policy_key"] = filters.policy_key
        if filters.persona is not None:
            error_details["persona"] = filters.persona

        if isinstance(e, SQLAlchemyError):
            message = f"Failed to query policy audit events: {str(e)}"
        else:
            message = f"Unexpected error querying policy audit events: {str(e)}"

        return Failure(
            error=AuditError(
                message=message,
                code=ErrorCode.AUDIT_QUERY_FAILED,
                details=error_details,
            )
        )

    @staticmethod
    def _error_details(e: Exception, event: PolicyAuditEvent) -> dict[str, Any]:
        return {
            "policy_key": event.policy_key,
            "persona": event.persona,
            "error_type": type(e).__name__,
        }

    def _to_domain(self, model: PolicyAuditEventModel) -> PolicyAuditEvent:
        """Convert database model to domain entity.

        Args:
            model: SQLAlchemy PolicyAuditEventModel instance.

        Returns:
            Domain PolicyAuditEvent entity.
        """
        return PolicyAuditEvent(
            id=model.id,
            policy_key=model.policy_key,
            persona=model.persona,
            resource=model.resource,
            action=model.action,
            decision=PolicyDecision.normalize(model.decision),
            reason=model.reason,
            actor_id=model.actor_id,
            actor_type=model.actor_type,
            actor_email=model.actor_email,
            request_id=model.request_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            response_status=model.response_status,
            metadata=dict(model.event_metadata or {}),
            occurred_at=_utc(model.occurred_at),
            created_at=_utc(model.created_at) if model.created_at else None,
            updated_at=_utc(model.updated_at) if model.updated_at else None,
        )

    def _to_model(self, event: PolicyAuditEvent) -> PolicyAuditEventModel:
        """Convert domain entity to database model.

        Args:
            event: Domain PolicyAuditEvent entity.

        Returns:
            SQLAlchemy PolicyAuditEventModel instance.
        """
        return PolicyAuditEventModel(
            id=event.id,
            policy_key=event.policy_key,
            persona=event.persona,
            resource=event.resource,
            action=event.action,
            decision=event.decision.value,
            reason=event.reason,
            actor_id=event.actor_id,
            actor_type=event.actor_type,
            actor_email=event.actor_email,
            request_id=event.request_id,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            response_status=event.response_status,
            event_metadata=dict(event.metadata),
            occurred_at=event.occurred_at,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )
