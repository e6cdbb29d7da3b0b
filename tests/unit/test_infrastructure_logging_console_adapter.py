"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods used by the audit handlers
- Exception details on error/critical
- Context binding
- Renderer and level selection

Architecture:
- Unit tests with mocked structlog
- NO real logging output
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from src.infrastructure.logging.console_adapter import ConsoleAdapter, resolve_level

STRUCTLOG = "src.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_logs_message_with_context(self):
        """Test info() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("policy_audit_event_recorded", policy_key="governance.rbac.matrix")

            mock_logger.info.assert_called_once_with(
                "policy_audit_event_recorded",
                policy_key="governance.rbac.matrix",
            )

    def test_warning_logs_message_with_context(self):
        """Test warning() logs message with structured context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.warning("policy_audit_event_rejected", missing_fields=["persona"])

            mock_logger.warning.assert_called_once_with(
                "policy_audit_event_rejected",
                missing_fields=["persona"],
            )

    def test_error_adds_exception_details(self):
        """Test error() flattens the exception into context."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error(
                "policy_audit_event_persist_failed",
                error=ConnectionError("database unreachable"),
                persona="platform_admin",
            )

            mock_logger.error.assert_called_once_with(
                "policy_audit_event_persist_failed",
                persona="platform_admin",
                error_type="ConnectionError",
                error_message="database unreachable",
            )

    def test_critical_without_exception(self):
        """Test critical() passes context through unchanged."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.critical("audit_store_unavailable", attempts=3)

            mock_logger.critical.assert_called_once_with(
                "audit_store_unavailable", attempts=3
            )


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test structlog configuration."""

    def test_json_renderer_selected(self):
        """Test use_json=True configures the JSON renderer."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            mock_structlog.processors.JSONRenderer.assert_called_once()
            mock_structlog.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_selected(self):
        """Test default configures the console renderer."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            mock_structlog.dev.ConsoleRenderer.assert_called_once_with(colors=True)

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("nonsense", logging.INFO),
        ],
    )
    def test_level_filtering(self, level, expected):
        """Test minimum level passed to the filtering logger."""
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(level=level)

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(expected)


@pytest.mark.unit
class TestConsoleAdapterBinding:
    """Test context binding."""

    def test_bind_returns_new_adapter(self):
        """Test bind() wraps the bound structlog logger."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(policy_key="governance.rbac.matrix")
            bound.info("policy_audit_event_recorded")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(policy_key="governance.rbac.matrix")
            bound_logger.info.assert_called_once_with("policy_audit_event_recorded")

    def test_with_context_is_alias(self):
        """Test with_context() delegates to bind()."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().with_context(request_id="req-1")

            mock_logger.bind.assert_called_once_with(request_id="req-1")

    def test_bound_adapter_flattens_errors(self):
        """Test error() on a bound adapter still adds exception details."""
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            bound = ConsoleAdapter().bind(service="Persona RBAC")
            bound.error("policy_audit_query_failed", error=TimeoutError("slow"))

            bound_logger.error.assert_called_once_with(
                "policy_audit_query_failed",
                error_type="TimeoutError",
                error_message="slow",
            )


@pytest.mark.unit
class TestResolveLevel:
    """Test level name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            (" error ", logging.ERROR),
            ("Critical", logging.CRITICAL),
            ("NOTSET", logging.INFO),
            ("", logging.INFO),
        ],
    )
    def test_resolve_level(self, name, expected):
        assert resolve_level(name) == expected
