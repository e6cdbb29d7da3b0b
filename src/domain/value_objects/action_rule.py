"""Action matching rules.

A grant lists action entries. Each entry either matches the requested action
exactly, matches every action (wildcard), or matches a fixed set of synonyms.
The table below is the complete matching vocabulary: no fuzzy or partial
string matching exists anywhere else.

Usage:
    from src.domain.value_objects.action_rule import action_matches

    action_matches("view", "fetch")      # True (synonym)
    action_matches("manage", "delete")   # True (wildcard)
    action_matches("view", "delete")     # False
"""

from dataclasses import dataclass

from src.domain.enums.action_match_kind import ActionMatchKind


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionRule:
    """How one grant action entry matches requested actions.

    Attributes:
        kind: Match kind.
        synonyms: Extra actions matched by a SYNONYM_OF entry.
    """

    kind: ActionMatchKind
    synonyms: frozenset[str] = frozenset()

    def matches(self, entry: str, action: str) -> bool:
        """Check whether a normalized entry matches a normalized action.

        Args:
            entry: Grant action entry (normalized).
            action: Requested action (normalized).

        Returns:
            bool: True on match.
        """
        if self.kind is ActionMatchKind.WILDCARD_ANY:
            return True
        if entry == action:
            return True
        return self.kind is ActionMatchKind.SYNONYM_OF and action in self.synonyms


EXACT_RULE = ActionRule(kind=ActionMatchKind.EXACT)
WILDCARD_RULE = ActionRule(kind=ActionMatchKind.WILDCARD_ANY)

# Entries not listed here match exactly.
ACTION_RULES: dict[str, ActionRule] = {
    "*": WILDCARD_RULE,
    "all": WILDCARD_RULE,
    "any": WILDCARD_RULE,
    "manage": WILDCARD_RULE,
    "view": ActionRule(
        kind=ActionMatchKind.SYNONYM_OF,
        synonyms=frozenset({"read", "fetch"}),
    ),
    "update": ActionRule(
        kind=ActionMatchKind.SYNONYM_OF,
        synonyms=frozenset({"edit", "patch"}),
    ),
}


def rule_for(entry: str) -> ActionRule:
    """Matching rule for a normalized grant action entry.

    Args:
        entry: Normalized entry.

    Returns:
        ActionRule: Table rule, or the exact-match rule.
    """
    return ACTION_RULES.get(entry, EXACT_RULE)


def action_matches(entry: str, action: str) -> bool:
    """Check a normalized grant entry against a normalized requested action.

    An empty requested action never matches, not even a wildcard.

    Args:
        entry: Normalized grant action entry.
        action: Normalized requested action.

    Returns:
        bool: True on match.
    """
    if not action:
        return False
    return rule_for(entry).matches(entry, action)
