"""Unit tests for container policy factories.

Tests cover:
- Application-scoped singletons (matrix, evaluator, matrix handlers)
- Per-session audit handler wiring
- Logger construction from settings
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.application.commands.handlers.record_policy_event_handler import (
    RecordPolicyEventHandler,
)
from src.application.queries.handlers.list_policy_audit_events_handler import (
    ListPolicyAuditEventsHandler,
)
from src.application.services.access_evaluator import AccessEvaluator
from src.config.rbac_policy import RBAC_POLICY_MATRIX
from src.core.config import settings
from src.core.container import (
    get_access_evaluator,
    get_evaluate_access_handler,
    get_get_policy_matrix_handler,
    get_list_personas_handler,
    get_list_policy_audit_events_handler,
    get_logger,
    get_policy_audit_store,
    get_policy_matrix,
    get_record_policy_event_handler,
)
from src.infrastructure.audit.postgres_adapter import PostgresPolicyAuditStore


@pytest.mark.unit
class TestPolicySingletons:
    """Test application-scoped factories."""

    def test_policy_matrix_is_process_matrix(self):
        assert get_policy_matrix() is RBAC_POLICY_MATRIX

    def test_evaluator_is_singleton(self):
        evaluator = get_access_evaluator()

        assert isinstance(evaluator, AccessEvaluator)
        assert get_access_evaluator() is evaluator
        assert evaluator.matrix_version == RBAC_POLICY_MATRIX.version

    def test_matrix_handlers_are_singletons(self):
        assert get_get_policy_matrix_handler() is get_get_policy_matrix_handler()
        assert get_list_personas_handler() is get_list_personas_handler()
        assert get_evaluate_access_handler() is get_evaluate_access_handler()


@pytest.mark.unit
class TestAuditHandlerFactories:
    """Test per-session factories."""

    def test_store_bound_to_session(self):
        session = AsyncMock()

        store = get_policy_audit_store(session)

        assert isinstance(store, PostgresPolicyAuditStore)
        assert store.session is session

    def test_record_handler(self):
        handler = get_record_policy_event_handler(AsyncMock())

        assert isinstance(handler, RecordPolicyEventHandler)
        assert handler._logger is get_logger()

    def test_list_handler_uses_configured_limits(self):
        session = AsyncMock()
        handler = get_list_policy_audit_events_handler(session)

        assert isinstance(handler, ListPolicyAuditEventsHandler)
        assert handler._default_limit == settings.audit_query_default_limit
        assert handler._max_limit == settings.audit_query_max_limit


@pytest.mark.unit
class TestLoggerFactory:
    """Test logger wiring from settings."""

    def test_logger_built_from_settings(self):
        get_logger.cache_clear()
        try:
            with patch(
                "src.infrastructure.logging.console_adapter.ConsoleAdapter"
            ) as adapter_cls:
                logger = get_logger()

            adapter_cls.assert_called_once_with(
                use_json=settings.json_logs, level=settings.log_level
            )
            adapter_cls.return_value.bind.assert_called_once_with(
                service=settings.app_name
            )
            assert logger is adapter_cls.return_value.bind.return_value
        finally:
            get_logger.cache_clear()
