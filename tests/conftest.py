"""Pytest configuration and shared fixtures.

Provides:
1. Policy matrix and evaluator fixtures (real, immutable matrix)
2. Logger and audit store doubles for handler tests
3. A throwaway SQLite database for integration tests
4. Helpers for building audit events
"""

import inspect
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from src.application.services.access_evaluator import AccessEvaluator
from src.config.rbac_policy import RBAC_POLICY_MATRIX
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.entities.policy_matrix import PolicyMatrix
from src.domain.enums import PolicyDecision
from src.infrastructure.audit.in_memory_adapter import InMemoryPolicyAuditStore


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def policy_matrix() -> PolicyMatrix:
    """The platform policy matrix."""
    return RBAC_POLICY_MATRIX


@pytest.fixture
def evaluator(policy_matrix: PolicyMatrix) -> AccessEvaluator:
    """Evaluator bound to the platform matrix."""
    return AccessEvaluator(matrix=policy_matrix)


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double implementing LoggerProtocol call signatures."""
    return MagicMock()


@pytest.fixture
def in_memory_store() -> InMemoryPolicyAuditStore:
    """Fresh in-memory audit store per test."""
    return InMemoryPolicyAuditStore()


def make_event(**overrides) -> PolicyAuditEvent:
    """Build a normalized, unsaved PolicyAuditEvent for tests.

    Args:
        **overrides: Field values replacing the defaults.

    Returns:
        PolicyAuditEvent with sensible defaults.
    """
    values = {
        "policy_key": "platform.runtime.control",
        "persona": "platform_admin",
        "resource": "runtime.telemetry",
        "action": "view",
        "decision": PolicyDecision.ALLOW,
        "occurred_at": datetime(2024, 6, 10, 12, 0, tzinfo=UTC),
    }
    values.update(overrides)
    return PolicyAuditEvent(**values)


@pytest_asyncio.fixture
async def sqlite_database(tmp_path):
    """Provide an isolated SQLite database with the schema created.

    Each test gets its own database file that is discarded afterwards.
    """
    from src.infrastructure.persistence.database import Database

    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'audit.db'}")
    await db.create_all()

    yield db

    await db.drop_all()
    await db.close()
