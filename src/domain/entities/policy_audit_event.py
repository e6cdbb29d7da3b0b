"""Policy audit event domain entity.

One immutable record of an evaluated (or externally reported) policy
decision. Created exactly once by the recorder, never updated or deleted by
this codebase, and read many times by the audit query service.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.domain.enums.policy_decision import PolicyDecision


@dataclass(frozen=True, kw_only=True)
class PolicyAuditEvent:
    """Audited policy decision.

    Attributes:
        policy_key: Policy the decision was made under.
        persona: Normalized persona key.
        resource: Normalized resource key.
        action: Normalized action.
        decision: allow or deny.
        id: Store-assigned identifier (None until persisted).
        reason: Reason code or free-text reason.
        actor_id: Identifier of the acting principal.
        actor_type: Kind of actor (user, admin, service).
        actor_email: Lower-cased actor email.
        request_id: Correlation identifier of the originating request.
        ip_address: Client IP address.
        user_agent: Client user agent.
        response_status: HTTP status returned to the caller.
        metadata: Sanitized context (request details, constraints, caller data).
        occurred_at: When the decision happened.
        created_at: When the store persisted the record.
        updated_at: Store bookkeeping timestamp (equal to created_at).
    """

    policy_key: str
    persona: str
    resource: str
    action: str
    decision: PolicyDecision
    id: UUID | None = None
    reason: str | None = None
    actor_id: str | None = None
    actor_type: str | None = None
    actor_email: str | None = None
    request_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    response_status: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Public, JSON-friendly view of the event.

        Returns:
            dict: Event fields with string id and ISO 8601 timestamps.
        """
        return {
            "id": str(self.id) if self.id is not None else None,
            "policy_key": self.policy_key,
            "persona": self.persona,
            "resource": self.resource,
            "action": self.action,
            "decision": self.decision.value,
            "reason": self.reason,
            "actor_id": self.actor_id,
            "actor_type": self.actor_type,
            "actor_email": self.actor_email,
            "request_id": self.request_id,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "response_status": self.response_status,
            "metadata": dict(self.metadata or {}),
            "occurred_at": self.occurred_at.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
