"""RBAC policy dependency factories.

- Policy matrix and access evaluator (application-scoped)
- Matrix query handlers (application-scoped, stateless)
- Audit recorder and audit query handlers (per audit session)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.record_policy_event_handler import (
        RecordPolicyEventHandler,
    )
    from src.application.queries.handlers.list_policy_audit_events_handler import (
        ListPolicyAuditEventsHandler,
    )
    from src.application.queries.handlers.policy_matrix_handlers import (
        EvaluateAccessHandler,
        GetPolicyMatrixHandler,
        ListPersonasHandler,
    )
    from src.application.services.access_evaluator import AccessEvaluator
    from src.domain.entities.policy_matrix import PolicyMatrix
    from src.domain.protocols.policy_audit_store_protocol import (
        PolicyAuditStoreProtocol,
    )


# ============================================================================
# Policy Matrix (Application-Scoped)
# ============================================================================


@lru_cache()
def get_policy_matrix() -> "PolicyMatrix":
    """Get the policy matrix loaded at process start.

    Returns:
        Immutable PolicyMatrix shared by every evaluator.
    """
    from src.config.rbac_policy import RBAC_POLICY_MATRIX

    return RBAC_POLICY_MATRIX


@lru_cache()
def get_access_evaluator() -> "AccessEvaluator":
    """Get access evaluator singleton (app-scoped, pure).

    Returns:
        AccessEvaluator bound to the process matrix.
    """
    from src.application.services.access_evaluator import AccessEvaluator

    return AccessEvaluator(matrix=get_policy_matrix())


@lru_cache()
def get_get_policy_matrix_handler() -> "GetPolicyMatrixHandler":
    """Get GetPolicyMatrix query handler."""
    from src.application.queries.handlers.policy_matrix_handlers import (
        GetPolicyMatrixHandler,
    )

    return GetPolicyMatrixHandler(matrix=get_policy_matrix())


@lru_cache()
def get_list_personas_handler() -> "ListPersonasHandler":
    """Get ListPersonas query handler."""
    from src.application.queries.handlers.policy_matrix_handlers import (
        ListPersonasHandler,
    )

    return ListPersonasHandler(matrix=get_policy_matrix())


@lru_cache()
def get_evaluate_access_handler() -> "EvaluateAccessHandler":
    """Get EvaluateAccess query handler."""
    from src.application.queries.handlers.policy_matrix_handlers import (
        EvaluateAccessHandler,
    )

    return EvaluateAccessHandler(evaluator=get_access_evaluator())


# ============================================================================
# Audit Handlers (Per Audit Session)
# ============================================================================


def get_policy_audit_store(session: AsyncSession) -> "PolicyAuditStoreProtocol":
    """Get audit store bound to an audit session.

    Args:
        session: Session from get_audit_session().

    Returns:
        Store implementing PolicyAuditStoreProtocol.
    """
    from src.infrastructure.audit.postgres_adapter import PostgresPolicyAuditStore

    return PostgresPolicyAuditStore(session=session)


def get_record_policy_event_handler(
    session: AsyncSession,
) -> "RecordPolicyEventHandler":
    """Get RecordPolicyEvent command handler.

    Args:
        session: Session from get_audit_session().

    Returns:
        RecordPolicyEventHandler instance.
    """
    from src.application.commands.handlers.record_policy_event_handler import (
        RecordPolicyEventHandler,
    )

    return RecordPolicyEventHandler(
        store=get_policy_audit_store(session),
        logger=get_logger(),
    )


def get_list_policy_audit_events_handler(
    session: AsyncSession,
) -> "ListPolicyAuditEventsHandler":
    """Get ListPolicyAuditEvents query handler.

    Args:
        session: Session from get_audit_session().

    Returns:
        ListPolicyAuditEventsHandler with limits from settings.
    """
    from src.application.queries.handlers.list_policy_audit_events_handler import (
        ListPolicyAuditEventsHandler,
    )

    return ListPolicyAuditEventsHandler(
        store=get_policy_audit_store(session),
        logger=get_logger(),
        default_limit=settings.audit_query_default_limit,
        max_limit=settings.audit_query_max_limit,
    )
