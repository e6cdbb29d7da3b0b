"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL / SQLite)
- Logging (console)

Plus the unit-of-work scoped audit session.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_audit_session() for sessions.

    Returns:
        Database manager instance.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Every event carries the configured app name as ``service``.

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    adapter = ConsoleAdapter(use_json=settings.json_logs, level=settings.log_level)
    return adapter.bind(service=settings.app_name)


# ============================================================================
# Unit-of-Work Scoped Dependencies
# ============================================================================


@asynccontextmanager
async def get_audit_session() -> AsyncGenerator[AsyncSession, None]:
    """Get audit session (independent lifecycle).

    Separate session ONLY for policy audit events. The store commits each
    write immediately, so audit rows persist regardless of what the caller's
    own transaction does afterwards.

    Yields:
        Database session for audit operations only.

    Usage:
        async with get_audit_session() as session:
            handler = get_record_policy_event_handler(session)
            await handler.handle(cmd)
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
