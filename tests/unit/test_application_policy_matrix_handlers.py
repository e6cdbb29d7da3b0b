"""Unit tests for policy matrix query handlers."""

import pytest

from src.application.queries.handlers.policy_matrix_handlers import (
    EvaluateAccessHandler,
    GetPolicyMatrixHandler,
    ListPersonasHandler,
)
from src.application.queries.policy_queries import (
    EvaluateAccess,
    GetPolicyMatrix,
    ListPersonas,
)
from src.domain.enums import DecisionReason


@pytest.mark.unit
class TestGetPolicyMatrixHandler:
    def test_returns_deep_copy(self, policy_matrix):
        handler = GetPolicyMatrixHandler(matrix=policy_matrix)

        first = handler.handle(GetPolicyMatrix())
        second = handler.handle(GetPolicyMatrix())

        assert first == policy_matrix
        assert first is not second
        assert first.personas[0].grants[0] is not policy_matrix.personas[0].grants[0]


@pytest.mark.unit
class TestListPersonasHandler:
    def test_lists_every_persona(self, policy_matrix):
        handler = ListPersonasHandler(matrix=policy_matrix)

        summaries = handler.handle(ListPersonas())

        assert {s.key for s in summaries} == {
            "platform_admin",
            "security_officer",
            "compliance_manager",
            "support_lead",
            "finance_controller",
        }

    def test_each_call_returns_fresh_objects(self, policy_matrix):
        handler = ListPersonasHandler(matrix=policy_matrix)

        first = handler.handle(ListPersonas())
        first.clear()

        assert len(handler.handle(ListPersonas())) == len(policy_matrix.personas)


@pytest.mark.unit
class TestEvaluateAccessHandler:
    def test_delegates_to_evaluator(self, evaluator):
        handler = EvaluateAccessHandler(evaluator=evaluator)

        decision = handler.handle(
            EvaluateAccess(
                persona_key="security_officer",
                resource_key="security.waf",
                action="export",
            )
        )

        assert decision.allowed is False
        assert decision.reason is DecisionReason.NO_MATCHING_GRANT
