"""Policy matrix domain entities.

The policy matrix is the versioned registry of personas, their grants,
platform-wide guardrails, and resource metadata. It is built once at process
start (see src/config/rbac_policy.py) and never mutated afterwards; a new
matrix means a new deployment.

Only personas and grants are consulted by the access evaluator. Guardrails
and resource descriptors are descriptive metadata exposed for introspection
and external compliance tooling.

Reference:
    - src/application/services/access_evaluator.py (matching algorithm)
"""

import copy
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from src.domain.enums.policy_decision import PolicyDecision


def normalize_key(value: object) -> str:
    """Canonicalize a persona, resource, or action key.

    Args:
        value: Raw key. Non-strings (including None) normalize to "".

    Returns:
        str: Trimmed, lower-cased key.
    """
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def _freeze(instance: object, name: str) -> None:
    value = getattr(instance, name)
    if not isinstance(value, tuple):
        object.__setattr__(instance, name, tuple(value))


@dataclass(frozen=True, kw_only=True)
class Grant:
    """One persona's permission rule for a resource.

    Attributes:
        policy_key: Named policy this grant implements (e.g. "platform.runtime.control").
        resource: Resource key the grant covers (matched case-insensitively).
        actions: Action entries; may contain wildcard or synonym tokens.
        decision: Whether matching requests are allowed or denied.
        constraints: Operational conditions the caller must additionally satisfy.
        audit_retention_days: How long decisions under this grant are retained.
    """

    policy_key: str
    resource: str
    actions: tuple[str, ...]
    decision: PolicyDecision = PolicyDecision.ALLOW
    constraints: tuple[str, ...] = ()
    audit_retention_days: int = 365

    def __post_init__(self) -> None:
        """Coerce list inputs to tuples and validate.

        Raises:
            ValueError: If policy_key or resource is empty, or no actions given.
        """
        _freeze(self, "actions")
        _freeze(self, "constraints")
        if not self.policy_key:
            raise ValueError("Grant policy_key cannot be empty")
        if not self.resource:
            raise ValueError("Grant resource cannot be empty")
        if not self.actions:
            raise ValueError(f"Grant {self.policy_key!r} must list at least one action")


@dataclass(frozen=True, kw_only=True)
class Persona:
    """A named role bundle carrying an ordered list of grants.

    Grant order matters: the evaluator uses the first grant that matches
    both resource and action.

    Attributes:
        key: Canonical identifier (unique, case-insensitive).
        label: Human-readable name.
        description: What this persona is for.
        default_channels: Notification channels (informational only).
        escalation_target: Escalation routing target (informational only).
        grants: Grants in declaration order.
    """

    key: str
    label: str
    description: str = ""
    default_channels: tuple[str, ...] = ()
    escalation_target: str = ""
    grants: tuple[Grant, ...] = ()

    def __post_init__(self) -> None:
        """Coerce list inputs to tuples and validate.

        Raises:
            ValueError: If key normalizes to an empty string.
        """
        _freeze(self, "default_channels")
        _freeze(self, "grants")
        if not normalize_key(self.key):
            raise ValueError("Persona key cannot be empty")


@dataclass(frozen=True, kw_only=True)
class Guardrail:
    """Cross-persona control, not enforced by the evaluator.

    Attributes:
        key: Guardrail identifier.
        label: Human-readable name.
        description: What the control requires.
        coverage: Persona keys the guardrail applies to.
        severity: Severity label (e.g. "critical", "high").
    """

    key: str
    label: str
    description: str = ""
    coverage: tuple[str, ...] = ()
    severity: str = "medium"

    def __post_init__(self) -> None:
        _freeze(self, "coverage")


@dataclass(frozen=True, kw_only=True)
class ResourceDescriptor:
    """Classification metadata for a protected resource.

    Attributes:
        key: Resource key (e.g. "runtime.telemetry").
        label: Human-readable name.
        owner: Owning team.
        data_classification: Data classification (e.g. "confidential").
        surfaces: Surfaces exposing the resource (e.g. "admin-console").
    """

    key: str
    label: str
    owner: str = ""
    data_classification: str = "internal"
    surfaces: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "surfaces")


@dataclass(kw_only=True)
class PersonaSummary:
    """Introspection view of a persona (no grants, just counts).

    Returned as a fresh, mutable object; changing it never affects the matrix.
    """

    key: str
    label: str
    description: str
    grant_count: int
    escalation_target: str
    default_channels: list[str]


@dataclass(frozen=True, kw_only=True)
class PolicyMatrix:
    """Immutable, versioned policy registry.

    Attributes:
        version: Matrix version label.
        published_at: When this version was published (UTC).
        review_cadence_days: Days between mandatory reviews.
        personas: Personas, unique by normalized key.
        guardrails: Platform-wide guardrails.
        resources: Resource classification metadata.

    Raises:
        ValueError: If two personas share a normalized key.

    Example:
        >>> matrix = PolicyMatrix(
        ...     version="2024.06",
        ...     published_at=datetime(2024, 6, 1, tzinfo=UTC),
        ...     review_cadence_days=90,
        ...     personas=(Persona(key="auditor", label="Auditor"),),
        ... )
        >>> matrix.get_persona("  AUDITOR ").label
        'Auditor'
    """

    version: str
    published_at: datetime
    review_cadence_days: int
    personas: tuple[Persona, ...] = ()
    guardrails: tuple[Guardrail, ...] = ()
    resources: tuple[ResourceDescriptor, ...] = ()
    _persona_index: dict[str, Persona] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        _freeze(self, "personas")
        _freeze(self, "guardrails")
        _freeze(self, "resources")

        index: dict[str, Persona] = {}
        for persona in self.personas:
            key = normalize_key(persona.key)
            if key in index:
                raise ValueError(f"Duplicate persona key in policy matrix: {key!r}")
            index[key] = persona
        object.__setattr__(self, "_persona_index", index)

    def get_persona(self, key: object) -> Persona | None:
        """Look up a persona by key (trimmed, case-insensitive).

        Args:
            key: Persona key.

        Returns:
            Persona | None: The persona, or None if unknown.
        """
        return self._persona_index.get(normalize_key(key))

    def get_resource(self, key: object) -> ResourceDescriptor | None:
        """Look up resource metadata by key (trimmed, case-insensitive).

        Args:
            key: Resource key.

        Returns:
            ResourceDescriptor | None: Descriptor, or None if undocumented.
        """
        wanted = normalize_key(key)
        for resource in self.resources:
            if normalize_key(resource.key) == wanted:
                return resource
        return None

    def guardrails_for(self, persona_key: object) -> list[Guardrail]:
        """Guardrails whose coverage includes the persona.

        Args:
            persona_key: Persona key.

        Returns:
            list[Guardrail]: Covering guardrails in declaration order.
        """
        wanted = normalize_key(persona_key)
        return [
            guardrail
            for guardrail in self.guardrails
            if wanted in {normalize_key(key) for key in guardrail.coverage}
        ]

    def list_personas(self) -> list[PersonaSummary]:
        """Summaries of all personas in declaration order.

        Returns:
            list[PersonaSummary]: Fresh summary objects.
        """
        return [
            PersonaSummary(
                key=persona.key,
                label=persona.label,
                description=persona.description,
                grant_count=len(persona.grants),
                escalation_target=persona.escalation_target,
                default_channels=list(persona.default_channels),
            )
            for persona in self.personas
        ]

    def snapshot(self) -> "PolicyMatrix":
        """Deep copy of the matrix.

        Returns:
            PolicyMatrix: Independent copy sharing no objects with self.
        """
        return copy.deepcopy(self)

    @property
    def next_review_due(self) -> datetime:
        """When the next scheduled review is due.

        Returns:
            datetime: published_at + review_cadence_days.
        """
        return self.published_at + timedelta(days=self.review_cadence_days)

    def is_review_overdue(self, now: datetime | None = None) -> bool:
        """Check whether the matrix has passed its review date.

        Args:
            now: Reference time (defaults to current UTC time). Naive
                datetimes are treated as UTC.

        Returns:
            bool: True if now is later than next_review_due.
        """
        reference = now or datetime.now(UTC)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=UTC)
        return reference > self.next_review_due

    def to_dict(self) -> dict[str, Any]:
        """Convert the matrix to plain, JSON-friendly data.

        Returns:
            dict: Nested dicts/lists; decisions as strings, dates as ISO 8601.
        """
        data = asdict(self)
        data.pop("_persona_index", None)
        data["published_at"] = self.published_at.isoformat()
        for persona in data["personas"]:
            for grant in persona["grants"]:
                grant["decision"] = PolicyDecision(grant["decision"]).value
        return _tuples_to_lists(data)


def _tuples_to_lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _tuples_to_lists(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_tuples_to_lists(item) for item in value]
    return value
