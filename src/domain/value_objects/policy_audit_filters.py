"""Normalized filters for policy audit event queries.

Built by the query handler from raw caller input; store adapters receive
only this already-normalized form.
"""

from dataclasses import dataclass
from datetime import datetime

from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.enums.policy_decision import PolicyDecision


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyAuditFilters:
    """Store-level audit query filters. None means "no constraint".

    Attributes:
        policy_key: Exact policy key.
        persona: Exact normalized persona.
        resource: Exact normalized resource.
        action: Exact normalized action.
        decision: allow or deny.
        search: Lower-cased substring matched against reason and actor_email.
        occurred_from: Inclusive lower bound on occurred_at (UTC).
        occurred_to: Inclusive upper bound on occurred_at (UTC).
    """

    policy_key: str | None = None
    persona: str | None = None
    resource: str | None = None
    action: str | None = None
    decision: PolicyDecision | None = None
    search: str | None = None
    occurred_from: datetime | None = None
    occurred_to: datetime | None = None

    @property
    def is_empty_range(self) -> bool:
        """True when the time window cannot contain any instant."""
        return (
            self.occurred_from is not None
            and self.occurred_to is not None
            and self.occurred_from > self.occurred_to
        )

    def matches(self, event: PolicyAuditEvent) -> bool:
        """Whether an event satisfies every set filter.

        Args:
            event: Stored event (timestamps in UTC).

        Returns:
            bool: True if the event matches.
        """
        if self.policy_key is not None and event.policy_key != self.policy_key:
            return False
        if self.persona is not None and event.persona != self.persona:
            return False
        if self.resource is not None and event.resource != self.resource:
            return False
        if self.action is not None and event.action != self.action:
            return False
        if self.decision is not None and event.decision is not self.decision:
            return False
        if self.search is not None:
            haystacks = (event.reason or "", event.actor_email or "")
            if not any(self.search in text.lower() for text in haystacks):
                return False
        if self.occurred_from is not None and event.occurred_at < self.occurred_from:
            return False
        if self.occurred_to is not None and event.occurred_at > self.occurred_to:
            return False
        return True
