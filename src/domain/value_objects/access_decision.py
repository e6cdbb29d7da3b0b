"""Access decision value object.

Output of the access evaluator. Not persisted on its own; callers copy the
relevant fields into a policy audit event.

Usage:
    decision = evaluator.evaluate("platform_admin", "runtime.telemetry", "view")
    if not decision.allowed:
        return deny(decision.reason)
"""

from dataclasses import dataclass
from typing import Any

from src.domain.enums.decision_reason import DecisionReason
from src.domain.enums.policy_decision import PolicyDecision


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessDecision:
    """Allow/deny outcome of one access evaluation.

    Attributes:
        allowed: True only for an allow decision.
        decision: allow or deny.
        reason: Why access was denied (None when allowed).
        policy_key: Policy of the matching grant (None if nothing matched).
        constraints: Conditions attached to the matching grant.
        audit_retention_days: Retention of the matching grant (allow only).
    """

    allowed: bool
    decision: PolicyDecision
    reason: DecisionReason | None = None
    policy_key: str | None = None
    constraints: tuple[str, ...] = ()
    audit_retention_days: int | None = None

    @classmethod
    def deny(
        cls,
        reason: DecisionReason,
        *,
        policy_key: str | None = None,
        constraints: tuple[str, ...] = (),
    ) -> "AccessDecision":
        """Build a deny decision.

        Args:
            reason: Reason code.
            policy_key: Policy of the matching grant, if any.
            constraints: Constraints of the matching grant, if any.

        Returns:
            AccessDecision: allowed=False.
        """
        return cls(
            allowed=False,
            decision=PolicyDecision.DENY,
            reason=reason,
            policy_key=policy_key,
            constraints=tuple(constraints),
        )

    @classmethod
    def allow(
        cls,
        *,
        policy_key: str,
        constraints: tuple[str, ...],
        audit_retention_days: int,
    ) -> "AccessDecision":
        """Build an allow decision.

        Args:
            policy_key: Policy of the matching grant.
            constraints: Constraints of the matching grant.
            audit_retention_days: Retention of the matching grant.

        Returns:
            AccessDecision: allowed=True.
        """
        return cls(
            allowed=True,
            decision=PolicyDecision.ALLOW,
            policy_key=policy_key,
            constraints=tuple(constraints),
            audit_retention_days=audit_retention_days,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view; absent optional fields are omitted.

        Returns:
            dict: allowed, decision, constraints, plus reason/policy_key/
                audit_retention_days when set.
        """
        data: dict[str, Any] = {
            "allowed": self.allowed,
            "decision": self.decision.value,
            "constraints": list(self.constraints),
        }
        if self.reason is not None:
            data["reason"] = self.reason.value
        if self.policy_key is not None:
            data["policy_key"] = self.policy_key
        if self.audit_retention_days is not None:
            data["audit_retention_days"] = self.audit_retention_days
        return data
