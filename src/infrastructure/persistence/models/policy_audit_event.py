"""Policy audit event database model.

Append-only store of evaluated policy decisions. The codebase only inserts
and reads rows; there is no update or delete path.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class PolicyAuditEventModel(BaseMutableModel):
    """Policy audit event model.

    Fields:
        id: UUIDv7 primary key (from BaseModel)
        created_at / updated_at: Store timestamps (from BaseMutableModel)
        policy_key, persona, resource, action, decision: Decision identity
        reason: Reason code or free text
        actor_*: Who triggered the decision
        request_id, ip_address, user_agent, response_status: Request context
        event_metadata: Sanitized context (column "metadata")
        occurred_at: When the decision happened

    Indexes:
        policy_key, persona, decision, occurred_at individually, plus
        (persona, occurred_at) for per-persona timelines.
    """

    __tablename__ = "rbac_policy_audit_events"

    policy_key: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    persona: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    resource: Mapped[str] = mapped_column(String(150), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    decision: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        index=True,
        comment="allow or deny",
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    actor_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    actor_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    actor_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    request_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(
        String(45),  # IPv6 max length
        nullable=True,
    )
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    response_status: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # "metadata" is reserved on declarative classes
    event_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
        default=None,
    )

    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index("idx_policy_audit_persona_occurred", "persona", "occurred_at"),
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of the event.
        """
        return (
            f"<PolicyAuditEventModel(id={self.id}, policy_key={self.policy_key}, "
            f"persona={self.persona}, decision={self.decision})>"
        )
