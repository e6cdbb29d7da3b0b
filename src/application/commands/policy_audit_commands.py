"""Policy audit commands (CQRS write operations).

Commands represent intent to append a policy decision to the audit trail.
All commands are immutable (frozen=True) and use keyword-only arguments.

Pattern:
- Commands are data containers (no logic)
- Handlers normalize, sanitize, and persist
- Required fields are typed optional so that a missing value reaches the
  handler and is rejected there (logged, no write) instead of failing at
  construction time
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, kw_only=True)
class ActorContext:
    """Who made the request.

    Attributes:
        id: Actor identifier (any scalar; stored as a string).
        type: Actor kind (user, admin, service).
        email: Actor email (stored lower-cased).
    """

    id: str | int | None = None
    type: str | None = None
    email: str | None = None


@dataclass(frozen=True, kw_only=True)
class RequestContext:
    """Transport details of the request that triggered the decision.

    Attributes:
        id: Request/correlation identifier.
        path: Request path (merged into metadata).
        method: HTTP method (merged into metadata).
        ip: Client IP address.
        user_agent: Client user agent.
        duration_ms: Handling time in milliseconds (merged into metadata).
        status_code: Response status (used when response_status is absent).
    """

    id: str | None = None
    path: str | None = None
    method: str | None = None
    ip: str | None = None
    user_agent: str | None = None
    duration_ms: float | int | None = None
    status_code: int | None = None


@dataclass(frozen=True, kw_only=True)
class RecordPolicyEvent:
    """Append one policy decision to the audit trail.

    Attributes:
        policy_key: Policy the decision was made under (required).
        persona: Persona key (required; stored lower-cased).
        resource: Resource key (required; stored lower-cased).
        action: Action (required; stored lower-cased).
        decision: "allow" or "deny" (required; anything else is stored as deny).
        reason: Reason code or free text.
        actor: Actor details.
        request: Request details.
        response_status: Status returned to the caller.
        metadata: Caller context; headers are stripped of credentials.
        constraints: Constraints attached to the decision.
        occurred_at: When the decision happened (defaults to now).

    Example:
        >>> command = RecordPolicyEvent(
        ...     policy_key="governance.rbac.matrix",
        ...     persona="Platform_Admin",
        ...     resource="Governance.RBAC",
        ...     action="View",
        ...     decision="Allow",
        ...     actor=ActorContext(id=99, type="admin", email="OPS@X.COM"),
        ...     metadata={"headers": {"authorization": "Bearer x", "x-trace": "abc"}},
        ... )
        >>> event = await handler.handle(command)
    """

    policy_key: str | None = None
    persona: str | None = None
    resource: str | None = None
    action: str | None = None
    decision: str | None = None
    reason: str | None = None
    actor: ActorContext | None = None
    request: RequestContext | None = None
    response_status: int | None = None
    metadata: dict[str, Any] | None = None
    constraints: list[str] | tuple[str, ...] | None = None
    occurred_at: datetime | None = None
