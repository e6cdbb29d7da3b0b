"""Database models for persistence layer.

SQLAlchemy models that map to database tables. These are infrastructure
concerns and should not be imported by the domain layer.

Models Organization:
    - policy_audit_event.py: RBAC policy decision audit trail (append-only)

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here and are mapped by the audit store adapters.
"""

from src.infrastructure.persistence.models.policy_audit_event import (
    PolicyAuditEventModel,
)

__all__ = [
    "PolicyAuditEventModel",
]
