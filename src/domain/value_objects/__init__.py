"""Domain value objects.

Immutable values produced and consumed by the policy engine.
"""

from src.domain.value_objects.access_decision import AccessDecision
from src.domain.value_objects.action_rule import (
    ACTION_RULES,
    ActionRule,
    action_matches,
    rule_for,
)
from src.domain.value_objects.policy_audit_filters import PolicyAuditFilters

__all__ = [
    "ACTION_RULES",
    "AccessDecision",
    "ActionRule",
    "PolicyAuditFilters",
    "action_matches",
    "rule_for",
]
