"""Audit infrastructure implementations.

Concrete policy audit stores implementing PolicyAuditStoreProtocol.
"""

from src.infrastructure.audit.in_memory_adapter import InMemoryPolicyAuditStore
from src.infrastructure.audit.postgres_adapter import PostgresPolicyAuditStore

__all__ = ["InMemoryPolicyAuditStore", "PostgresPolicyAuditStore"]
