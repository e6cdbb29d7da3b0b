"""Record policy event handler (audit recorder).

Flow:
1. Validate required fields (policy_key, persona, resource, action, decision)
2. Normalize persona/resource/action/actor email to lower case and the
   decision to allow/deny (anything else is labeled deny)
3. Merge request context into metadata (caller metadata wins on conflict)
4. Strip credential headers (authorization, cookie) from metadata and
   convert it to plain JSON values
5. Persist through the audit store
6. Return the stored event, or None on any failure

Failure semantics:
    Audit durability is best-effort. A rejected or failed write is logged and
    reported as None; it never raises into the code path that made the
    access decision. record() exposes the same flow as a Result so the
    failure branch stays inspectable.

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- Store and logger are injected via protocols
"""

from datetime import UTC, datetime
from typing import Any

from pydantic_core import to_jsonable_python

from src.application.commands.policy_audit_commands import RecordPolicyEvent
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.policy_audit_event import PolicyAuditEvent
from src.domain.entities.policy_matrix import normalize_key
from src.domain.enums import PolicyDecision
from src.domain.errors import AuditError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_audit_store_protocol import PolicyAuditStoreProtocol

REQUIRED_FIELDS = ("policy_key", "persona", "resource", "action", "decision")

# Compared case-insensitively against header names.
SENSITIVE_HEADERS = frozenset({"authorization", "cookie"})


def sanitize_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Copy metadata, dropping credential headers.

    The input is never mutated.

    Args:
        metadata: Caller-supplied metadata (may be None).

    Returns:
        dict: Shallow copy with a filtered copy of the "headers" map.
    """
    if not isinstance(metadata, dict):
        return {}
    sanitized = dict(metadata)
    headers = sanitized.get("headers")
    if isinstance(headers, dict):
        sanitized["headers"] = {
            name: value
            for name, value in headers.items()
            if str(name).strip().lower() not in SENSITIVE_HEADERS
        }
    return sanitized


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_utc(value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class RecordPolicyEventHandler:
    """Handler for RecordPolicyEvent commands.

    Never raises past its boundary.
    """

    def __init__(
        self,
        store: PolicyAuditStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            store: Audit store.
            logger: Structured logger.
        """
        self._store = store
        self._logger = logger

    async def handle(self, cmd: RecordPolicyEvent) -> PolicyAuditEvent | None:
        """Record a policy decision.

        Args:
            cmd: RecordPolicyEvent command.

        Returns:
            PolicyAuditEvent | None: Stored event, or None if the command was
                rejected or the store failed.
        """
        result = await self.record(cmd)
        match result:
            case Success(value=event):
                return event
            case _:
                return None

    async def record(
        self, cmd: RecordPolicyEvent
    ) -> Result[PolicyAuditEvent, DomainError]:
        """Record a policy decision, reporting failure as a Result.

        Args:
            cmd: RecordPolicyEvent command.

        Returns:
            Result[PolicyAuditEvent, DomainError]:
                - Success(stored event)
                - Failure(ValidationError) when required fields are missing
                  or the command cannot be normalized
                - Failure(AuditError) when the store write failed
        """
        missing = [name for name in REQUIRED_FIELDS if not _optional_str(getattr(cmd, name))]
        if missing:
            self._logger.warning(
                "policy_audit_event_rejected",
                missing_fields=missing,
                policy_key=cmd.policy_key,
            )
            return Failure(
                error=ValidationError(
                    code=ErrorCode.AUDIT_EVENT_INVALID,
                    message="Policy audit event is missing required fields",
                    field=missing[0],
                    details={"missing_fields": ",".join(missing)},
                )
            )

        try:
            event = self.build_event(cmd)
        except Exception as e:
            self._logger.warning(
                "policy_audit_event_rejected",
                error_type=type(e).__name__,
                error_message=str(e),
                policy_key=str(cmd.policy_key),
            )
            return Failure(
                error=ValidationError(
                    code=ErrorCode.AUDIT_EVENT_INVALID,
                    message=f"Policy audit event could not be normalized: {e}",
                    details={"error_type": type(e).__name__},
                )
            )

        context = {
            "policy_key": event.policy_key,
            "persona": event.persona,
            "resource": event.resource,
            "action": event.action,
        }

        try:
            result = await self._store.create(event)
        except Exception as e:
            # Stores are expected to return Failure; guard against ones that raise
            self._logger.error(
                "policy_audit_event_persist_failed", error=e, **context
            )
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message=f"Unexpected error recording policy audit event: {e}",
                    details={"error_type": type(e).__name__, **context},
                )
            )

        match result:
            case Success(value=stored):
                self._logger.info(
                    "policy_audit_event_recorded",
                    event_id=str(stored.id),
                    decision=stored.decision.value,
                    **context,
                )
            case Failure(error=error):
                self._logger.error(
                    "policy_audit_event_persist_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                    **context,
                )
        return result

    @staticmethod
    def build_event(cmd: RecordPolicyEvent) -> PolicyAuditEvent:
        """Normalize and sanitize a command into an unsaved event.

        Args:
            cmd: Command whose required fields are present.

        Returns:
            PolicyAuditEvent: Event without id or store timestamps.
        """
        actor = cmd.actor
        request = cmd.request

        metadata: dict[str, Any] = {}
        if request is not None:
            if request.path is not None:
                metadata["path"] = request.path
            if request.method is not None:
                metadata["method"] = str(request.method).strip().upper()
            if request.duration_ms is not None:
                metadata["duration_ms"] = request.duration_ms
        if cmd.constraints is not None:
            metadata["constraints"] = list(cmd.constraints)
        metadata.update(sanitize_metadata(cmd.metadata))
        # Stored as a JSON document; datetimes, UUIDs, sets etc. become JSON values
        metadata = to_jsonable_python(metadata, fallback=str)

        response_status = cmd.response_status
        if response_status is None and request is not None:
            response_status = request.status_code

        actor_email = _optional_str(actor.email) if actor else None

        return PolicyAuditEvent(
            policy_key=str(cmd.policy_key).strip(),
            persona=normalize_key(str(cmd.persona)),
            resource=normalize_key(str(cmd.resource)),
            action=normalize_key(str(cmd.action)),
            decision=PolicyDecision.normalize(cmd.decision),
            reason=_optional_str(cmd.reason),
            actor_id=_optional_str(actor.id) if actor else None,
            actor_type=_optional_str(actor.type) if actor else None,
            actor_email=actor_email.lower() if actor_email else None,
            request_id=_optional_str(request.id) if request else None,
            ip_address=_optional_str(request.ip) if request else None,
            user_agent=_optional_str(request.user_agent) if request else None,
            response_status=response_status,
            metadata=metadata,
            occurred_at=_as_utc(cmd.occurred_at),
        )
