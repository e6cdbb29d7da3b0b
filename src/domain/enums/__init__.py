"""Domain enums for policy evaluation and auditing.

Available Enums:
    - PolicyDecision: allow/deny vocabulary for grants and audit events
    - DecisionReason: reason codes for denied evaluations
    - ActionMatchKind: action matching rule kinds (exact, wildcard, synonym)
"""

from src.domain.enums.action_match_kind import ActionMatchKind
from src.domain.enums.decision_reason import DecisionReason
from src.domain.enums.policy_decision import PolicyDecision

__all__ = [
    "ActionMatchKind",
    "DecisionReason",
    "PolicyDecision",
]
