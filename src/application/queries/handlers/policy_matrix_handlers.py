"""Policy matrix query handlers.

Read-only views over the immutable policy matrix and the access evaluator.
All handlers are synchronous: the matrix lives in memory, so nothing here
performs I/O or waits on the audit store.

Architecture:
- Application layer handlers (no side effects)
- Return defensive copies; callers cannot mutate shared state
"""

from src.application.queries.policy_queries import (
    EvaluateAccess,
    GetPolicyMatrix,
    ListPersonas,
)
from src.application.services.access_evaluator import AccessEvaluator
from src.domain.entities.policy_matrix import PersonaSummary, PolicyMatrix
from src.domain.value_objects.access_decision import AccessDecision


class GetPolicyMatrixHandler:
    """Handler for GetPolicyMatrix queries."""

    def __init__(self, matrix: PolicyMatrix) -> None:
        """Initialize handler with the active matrix.

        Args:
            matrix: Policy matrix.
        """
        self._matrix = matrix

    def handle(self, query: GetPolicyMatrix) -> PolicyMatrix:
        """Return a deep copy of the matrix.

        Args:
            query: GetPolicyMatrix query.

        Returns:
            PolicyMatrix: Independent snapshot.
        """
        return self._matrix.snapshot()


class ListPersonasHandler:
    """Handler for ListPersonas queries."""

    def __init__(self, matrix: PolicyMatrix) -> None:
        """Initialize handler with the active matrix.

        Args:
            matrix: Policy matrix.
        """
        self._matrix = matrix

    def handle(self, query: ListPersonas) -> list[PersonaSummary]:
        """Return persona summaries in declaration order.

        Args:
            query: ListPersonas query.

        Returns:
            list[PersonaSummary]: Fresh summary objects.
        """
        return self._matrix.list_personas()


class EvaluateAccessHandler:
    """Handler for EvaluateAccess queries."""

    def __init__(self, evaluator: AccessEvaluator) -> None:
        self._evaluator = evaluator

    def handle(self, query: EvaluateAccess) -> AccessDecision:
        """Evaluate the request. Never raises.

        Args:
            query: EvaluateAccess query.

        Returns:
            AccessDecision: Allow or deny with reason code.
        """
        return self._evaluator.evaluate(
            query.persona_key,
            query.resource_key,
            query.action,
        )
