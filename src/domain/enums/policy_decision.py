"""Policy decision vocabulary.

A grant either allows or denies the actions it lists, and every audit event
carries one of the same two labels.

Usage:
    from src.domain.enums import PolicyDecision

    PolicyDecision.normalize("Allow")    # PolicyDecision.ALLOW
    PolicyDecision.normalize("maybe")    # PolicyDecision.DENY (fail-closed)
"""

from enum import Enum


class PolicyDecision(str, Enum):
    """Allow/deny outcome of a grant or an audited decision.

    String Enum:
        Inherits from str so values serialize and persist as plain strings.
    """

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def values(cls) -> list[str]:
        """Get all decision values as strings.

        Returns:
            list[str]: ['allow', 'deny'].
        """
        return [decision.value for decision in cls]

    @classmethod
    def normalize(cls, value: object) -> "PolicyDecision":
        """Collapse an arbitrary value onto the decision vocabulary.

        Anything other than a case-insensitive "allow" becomes DENY. This is a
        labeling rule for audit records; it must never drive access control.

        Args:
            value: Raw decision value (usually a string).

        Returns:
            PolicyDecision: ALLOW for "allow" (any case, trimmed), else DENY.
        """
        if isinstance(value, str) and value.strip().lower() == cls.ALLOW.value:
            return cls.ALLOW
        return cls.DENY
