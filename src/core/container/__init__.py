"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_access_evaluator, get_audit_session, ...

The container is organized into modules by concern:
- infrastructure: Database, audit session, logging
- policy: Policy matrix, evaluator, audit handlers
"""

from src.core.container.infrastructure import (
    get_audit_session,
    get_database,
    get_logger,
)
from src.core.container.policy import (
    get_access_evaluator,
    get_evaluate_access_handler,
    get_get_policy_matrix_handler,
    get_list_personas_handler,
    get_list_policy_audit_events_handler,
    get_policy_audit_store,
    get_policy_matrix,
    get_record_policy_event_handler,
)

__all__ = [
    # Infrastructure
    "get_audit_session",
    "get_database",
    "get_logger",
    # Policy
    "get_access_evaluator",
    "get_evaluate_access_handler",
    "get_get_policy_matrix_handler",
    "get_list_personas_handler",
    "get_list_policy_audit_events_handler",
    "get_policy_audit_store",
    "get_policy_matrix",
    "get_record_policy_event_handler",
]
