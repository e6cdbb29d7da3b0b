"""Policy queries (CQRS read operations).

Queries represent requests for policy or audit information. They are
immutable dataclasses with question-like names. Queries NEVER change state.

Pattern:
- Queries are data containers (no logic)
- Handlers normalize input and fetch data
- Audit filters are accepted raw; malformed values degrade to "no
  constraint" inside the handler instead of failing here
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class GetPolicyMatrix:
    """Get a deep copy of the active policy matrix.

    Example:
        >>> matrix = handler.handle(GetPolicyMatrix())
    """


@dataclass(frozen=True, kw_only=True)
class ListPersonas:
    """List persona summaries (key, label, grant count, routing).

    Example:
        >>> summaries = handler.handle(ListPersonas())
    """


@dataclass(frozen=True, kw_only=True)
class EvaluateAccess:
    """Ask whether a persona may perform an action on a resource.

    Attributes:
        persona_key: Persona identifier (case-insensitive).
        resource_key: Resource identifier (case-insensitive).
        action: Requested action (case-insensitive).

    Example:
        >>> decision = handler.handle(EvaluateAccess(
        ...     persona_key="security_officer",
        ...     resource_key="security.waf",
        ...     action="export",
        ... ))
        >>> decision.reason
        <DecisionReason.NO_MATCHING_GRANT: 'no-matching-grant'>
    """

    persona_key: str | None = None
    resource_key: str | None = None
    action: str | None = None


@dataclass(frozen=True, kw_only=True)
class ListPolicyAuditEvents:
    """List recorded policy audit events, newest first.

    Attributes:
        policy_key: Exact policy key.
        persona: Persona key (case-insensitive).
        resource: Resource key (case-insensitive).
        action: Action (case-insensitive).
        decision: "allow" or "deny" (case-insensitive; other values ignored).
        search: Case-insensitive substring of reason or actor email.
        start_date: Inclusive lower bound on occurred_at (datetime or ISO string).
        end_date: Inclusive upper bound on occurred_at (datetime or ISO string).
        limit: Page size; clamped to [1, max], default from settings.
        offset: Rows to skip; clamped to >= 0.

    Example:
        >>> page = await handler.handle(ListPolicyAuditEvents(
        ...     persona="security_officer",
        ...     decision="deny",
        ...     start_date="2024-06-01T00:00:00Z",
        ...     limit=50,
        ... ))
        >>> page.total
        1
    """

    policy_key: str | None = None
    persona: str | None = None
    resource: str | None = None
    action: str | None = None
    decision: str | None = None
    search: str | None = None
    start_date: datetime | str | None = None
    end_date: datetime | str | None = None
    limit: int | str | None = None
    offset: int | str | None = None
