"""Domain entities for policy evaluation and auditing.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.entities.policy_matrix import (
    Grant,
    Guardrail,
    Persona,
    PersonaSummary,
    PolicyMatrix,
    ResourceDescriptor,
    normalize_key,
)

__all__ = [
    "Grant",
    "Guardrail",
    "Persona",
    "PersonaSummary",
    "PolicyAuditEvent",
    "PolicyMatrix",
    "ResourceDescriptor",
    "normalize_key",
]
