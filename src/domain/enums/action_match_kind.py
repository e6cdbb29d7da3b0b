"""How a grant's action entry matches a requested action."""

from enum import Enum


class ActionMatchKind(str, Enum):
    """Closed set of action matching rules.

    EXACT: entry equals the requested action.
    WILDCARD_ANY: entry matches every action (e.g. "*", "manage").
    SYNONYM_OF: entry matches a fixed list of synonymous actions
        (e.g. "view" matches "read" and "fetch").
    """

    EXACT = "exact"
    WILDCARD_ANY = "wildcard_any"
    SYNONYM_OF = "synonym_of"
