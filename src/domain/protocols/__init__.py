"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import LoggerProtocol, PolicyAuditStoreProtocol
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_audit_store_protocol import PolicyAuditStoreProtocol

__all__ = [
    "LoggerProtocol",
    "PolicyAuditStoreProtocol",
]
