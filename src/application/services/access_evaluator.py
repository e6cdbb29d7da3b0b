"""Access evaluator service.

Turns (persona, resource, action) into an AccessDecision using the policy
matrix. Pure and stateless: the matrix is immutable, so any number of callers
may evaluate concurrently without locking, and evaluation never waits on
audit persistence.

Algorithm:
    1. Normalize the persona key (trim, lower-case) and look it up.
       Unknown persona -> deny, reason "unknown-persona".
    2. Normalize resource and action. Scan the persona's grants in
       declaration order; the FIRST grant whose resource equals the resource
       and whose action entries match the action wins. A later, narrower
       grant never overrides an earlier, broader one.
    3. No grant matched -> deny, reason "no-matching-grant".
    4. Matching grant denies -> deny, reason "explicit-deny" (with the
       grant's policy key and constraints).
    5. Otherwise -> allow with policy key, constraints, audit retention.

Action entries match through the table in
src/domain/value_objects/action_rule.py (exact, wildcard, synonym).

Usage:
    evaluator = AccessEvaluator(matrix=RBAC_POLICY_MATRIX)
    decision = evaluator.evaluate("platform_admin", "runtime.telemetry", "view")
"""

from src.domain.entities.policy_matrix import Grant, PolicyMatrix, normalize_key
from src.domain.enums import DecisionReason, PolicyDecision
from src.domain.value_objects.access_decision import AccessDecision
from src.domain.value_objects.action_rule import action_matches


class AccessEvaluator:
    """Evaluates access requests against an immutable policy matrix.

    Never raises: malformed input (None, non-strings, blanks) produces a
    deny decision with a reason code.
    """

    def __init__(self, matrix: PolicyMatrix) -> None:
        """Initialize evaluator with the matrix captured at process start.

        Args:
            matrix: Policy matrix (immutable).
        """
        self._matrix = matrix

    @property
    def matrix_version(self) -> str:
        """Version of the matrix this evaluator consults."""
        return self._matrix.version

    def evaluate(
        self,
        persona_key: object,
        resource_key: object,
        action: object,
    ) -> AccessDecision:
        """Evaluate one access request.

        Args:
            persona_key: Persona identifier (case-insensitive).
            resource_key: Resource identifier (case-insensitive).
            action: Requested action (case-insensitive).

        Returns:
            AccessDecision: Allow or deny with reason code.
        """
        persona = self._matrix.get_persona(persona_key)
        if persona is None:
            return AccessDecision.deny(DecisionReason.UNKNOWN_PERSONA)

        grant = self.find_matching_grant(
            persona.grants,
            normalize_key(resource_key),
            normalize_key(action),
        )
        if grant is None:
            return AccessDecision.deny(DecisionReason.NO_MATCHING_GRANT)

        if grant.decision is PolicyDecision.DENY:
            return AccessDecision.deny(
                DecisionReason.EXPLICIT_DENY,
                policy_key=grant.policy_key,
                constraints=grant.constraints,
            )

        return AccessDecision.allow(
            policy_key=grant.policy_key,
            constraints=grant.constraints,
            audit_retention_days=grant.audit_retention_days,
        )

    @staticmethod
    def find_matching_grant(
        grants: tuple[Grant, ...],
        resource: str,
        action: str,
    ) -> Grant | None:
        """First grant covering a normalized resource/action pair.

        Args:
            grants: Grants in declaration order.
            resource: Normalized resource key.
            action: Normalized action.

        Returns:
            Grant | None: First match, or None.
        """
        if not resource:
            return None
        for grant in grants:
            if normalize_key(grant.resource) != resource:
                continue
            if any(action_matches(normalize_key(entry), action) for entry in grant.actions):
                return grant
        return None
