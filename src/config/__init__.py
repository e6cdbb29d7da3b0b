"""Application configuration package.

Static, code-defined configuration that is not environment dependent.

Modules:
    rbac_policy: Versioned persona/grant policy matrix
"""

from src.config.rbac_policy import RBAC_POLICY_MATRIX, get_policy_matrix

__all__ = [
    "RBAC_POLICY_MATRIX",
    "get_policy_matrix",
]
