"""List policy audit events query handler (audit query service).

Normalizes raw filters, then reads one page plus the total match count from
the audit store.

Normalization:
- persona/resource/action: trimmed, lower-cased; blank means no constraint
- policy_key: trimmed; blank means no constraint
- decision: "allow"/"deny" (any case); anything else means no constraint
- search: trimmed, lower-cased substring of reason or actor email
- start_date/end_date: datetime or ISO 8601 string, naive treated as UTC;
  unparseable values are ignored; start after end yields zero results
- limit: clamped to [1, max_limit]; missing or non-numeric uses default
- offset: clamped to >= 0; missing or non-numeric uses 0

No filter combination raises. Store failures are logged and reported as an
empty page by handle(); execute() exposes them as a Result.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.application.queries.policy_queries import ListPolicyAuditEvents
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.entities.policy_matrix import normalize_key
from src.domain.enums import PolicyDecision
from src.domain.errors import AuditError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_audit_store_protocol import PolicyAuditStoreProtocol
from src.domain.value_objects.policy_audit_filters import PolicyAuditFilters

DEFAULT_LIMIT = 25
MAX_LIMIT = 200


@dataclass
class PolicyAuditEventPage:
    """One page of audit events.

    Attributes:
        total: Number of events matching the filters (ignores pagination).
        limit: Effective page size.
        offset: Effective offset.
        events: Events on this page, newest first.
    """

    total: int
    limit: int
    offset: int
    events: list[PolicyAuditEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view of the page."""
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "events": [event.to_dict() for event in self.events],
        }


def _coerce_int(value: object, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        return default


def parse_timestamp(value: object) -> datetime | None:
    """Parse a filter timestamp, returning None for anything invalid.

    Args:
        value: datetime, ISO 8601 string, or anything else.

    Returns:
        datetime | None: Timezone-aware UTC datetime, or None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        # Offset pushes the instant outside datetime's range
        return None


def _optional_key(value: object) -> str | None:
    return normalize_key(value) or None


class ListPolicyAuditEventsHandler:
    """Handler for ListPolicyAuditEvents queries.

    Fetches from the audit store (no cache for audit reads).
    """

    def __init__(
        self,
        store: PolicyAuditStoreProtocol,
        logger: LoggerProtocol,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            store: Audit store.
            logger: Structured logger.
            default_limit: Page size when the query gives none.
            max_limit: Upper bound for any page size.
        """
        self._store = store
        self._logger = logger
        self._max_limit = max(1, max_limit)
        self._default_limit = min(max(1, default_limit), self._max_limit)

    async def handle(self, query: ListPolicyAuditEvents) -> PolicyAuditEventPage:
        """Handle list query; never raises.

        Args:
            query: ListPolicyAuditEvents query.

        Returns:
            PolicyAuditEventPage: Matching page (empty if the store failed).
        """
        result = await self.execute(query)
        match result:
            case Success(value=page):
                return page
            case _:
                limit, offset = self.normalize_pagination(query)
                return PolicyAuditEventPage(total=0, limit=limit, offset=offset)

    async def execute(
        self, query: ListPolicyAuditEvents
    ) -> Result[PolicyAuditEventPage, AuditError]:
        """Handle list query, reporting store failures as a Result.

        Args:
            query: ListPolicyAuditEvents query.

        Returns:
            Result[PolicyAuditEventPage, AuditError]:
                - Success(page)
                - Failure(AuditError) if the store failed
        """
        filters = self.normalize_filters(query)
        limit, offset = self.normalize_pagination(query)

        if filters.is_empty_range:
            return Success(value=PolicyAuditEventPage(total=0, limit=limit, offset=offset))

        try:
            count_result = await self._store.count(filters)
            match count_result:
                case Failure(error=error):
                    return self._failed(error, filters)
                case Success(value=total):
                    pass

            find_result = await self._store.find(filters, limit=limit, offset=offset)
            match find_result:
                case Failure(error=error):
                    return self._failed(error, filters)
                case Success(value=events):
                    pass
        except Exception as e:
            # Stores are expected to return Failure; guard against ones that raise
            return self._failed(
                AuditError(
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    message=f"Unexpected error querying policy audit events: {e}",
                    details={"error_type": type(e).__name__},
                ),
                filters,
            )

        return Success(
            value=PolicyAuditEventPage(
                total=total,
                limit=limit,
                offset=offset,
                events=list(events),
            )
        )

    def normalize_pagination(self, query: ListPolicyAuditEvents) -> tuple[int, int]:
        """Effective (limit, offset) for a query.

        Args:
            query: Raw query.

        Returns:
            tuple[int, int]: Clamped limit and offset.
        """
        limit = _coerce_int(query.limit, self._default_limit)
        limit = min(max(limit, 1), self._max_limit)
        offset = max(_coerce_int(query.offset, 0), 0)
        return limit, offset

    @staticmethod
    def normalize_filters(query: ListPolicyAuditEvents) -> PolicyAuditFilters:
        """Store-level filters for a query.

        Args:
            query: Raw query.

        Returns:
            PolicyAuditFilters: Normalized filters.
        """
        policy_key = query.policy_key.strip() if isinstance(query.policy_key, str) else None

        decision: PolicyDecision | None = None
        if normalize_key(query.decision) in PolicyDecision.values():
            decision = PolicyDecision(normalize_key(query.decision))

        return PolicyAuditFilters(
            policy_key=policy_key or None,
            persona=_optional_key(query.persona),
            resource=_optional_key(query.resource),
            action=_optional_key(query.action),
            decision=decision,
            search=_optional_key(query.search),
            occurred_from=parse_timestamp(query.start_date),
            occurred_to=parse_timestamp(query.end_date),
        )

    def _failed(
        self, error: AuditError, filters: PolicyAuditFilters
    ) -> Failure[AuditError]:
        self._logger.error(
            "policy_audit_query_failed",
            error_code=error.code.value,
            error_message=error.message,
            policy_key=filters.policy_key,
            persona=filters.persona,
            decision=filters.decision.value if filters.decision else None,
        )
        return Failure(error=error)
