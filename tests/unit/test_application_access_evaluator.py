"""Unit tests for AccessEvaluator.

Tests cover:
- Allow decisions with policy key, constraints, retention
- Reason codes (unknown-persona, no-matching-grant, explicit-deny)
- Case-insensitivity and whitespace handling
- Wildcard and synonym action matching through grants
- First-match-wins grant ordering
- Malformed input never raises
"""

from datetime import UTC, datetime

import pytest

from src.application.services.access_evaluator import AccessEvaluator
from src.config.rbac_policy import DUAL_CONTROL, SESSION_PROTECTION
from src.domain.entities.policy_matrix import Grant, Persona, PolicyMatrix
from src.domain.enums import DecisionReason, PolicyDecision


def _single_persona_evaluator(*grants: Grant) -> AccessEvaluator:
    matrix = PolicyMatrix(
        version="test",
        published_at=datetime(2024, 1, 1, tzinfo=UTC),
        review_cadence_days=90,
        personas=(Persona(key="operator", label="Operator", grants=grants),),
    )
    return AccessEvaluator(matrix=matrix)


@pytest.mark.unit
class TestAllowDecisions:
    """Test successful evaluations."""

    def test_platform_admin_can_view_runtime_telemetry(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "runtime.telemetry", "view")

        assert decision.allowed is True
        assert decision.decision is PolicyDecision.ALLOW
        assert decision.reason is None
        assert decision.policy_key == "platform.runtime.control"
        assert SESSION_PROTECTION in decision.constraints
        assert decision.audit_retention_days == 365

    def test_evaluation_is_case_insensitive(self, evaluator):
        mixed = evaluator.evaluate("Platform_Admin", "Governance.RBAC", "View")
        canonical = evaluator.evaluate("platform_admin", "governance.rbac", "view")

        assert mixed == canonical
        assert mixed.allowed is True

    def test_whitespace_is_trimmed(self, evaluator):
        decision = evaluator.evaluate("  platform_admin ", " runtime.telemetry ", " view ")

        assert decision.allowed is True

    def test_evaluation_is_deterministic(self, evaluator):
        first = evaluator.evaluate("support_lead", "support.tickets", "assign")

        for _ in range(5):
            assert evaluator.evaluate("support_lead", "support.tickets", "assign") == first

    def test_matrix_version_exposed(self, evaluator, policy_matrix):
        assert evaluator.matrix_version == policy_matrix.version


@pytest.mark.unit
class TestActionMatching:
    """Test wildcard and synonym rules applied through grants."""

    @pytest.mark.parametrize("action", ["view", "delete", "anything"])
    def test_manage_grant_matches_any_action(self, evaluator, action):
        decision = evaluator.evaluate("platform_admin", "runtime.maintenance", action)

        assert decision.allowed is True
        assert decision.policy_key == "platform.runtime.control"

    @pytest.mark.parametrize("action", ["read", "fetch"])
    def test_view_grant_matches_read_synonyms(self, evaluator, action):
        decision = evaluator.evaluate("platform_admin", "runtime.telemetry", action)

        assert decision.allowed is True

    def test_view_grant_does_not_match_delete(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "runtime.telemetry", "delete")

        assert decision.allowed is False
        assert decision.reason is DecisionReason.NO_MATCHING_GRANT

    @pytest.mark.parametrize("action", ["edit", "patch"])
    def test_update_grant_matches_edit_synonyms(self, evaluator, action):
        decision = evaluator.evaluate("platform_admin", "security.waf", action)

        assert decision.allowed is True
        assert decision.policy_key == "platform.security.perimeter"


@pytest.mark.unit
class TestDenyDecisions:
    """Test reason codes."""

    def test_unknown_persona(self, evaluator):
        decision = evaluator.evaluate("not-a-real-role", "runtime.telemetry", "view")

        assert decision.allowed is False
        assert decision.decision is PolicyDecision.DENY
        assert decision.reason is DecisionReason.UNKNOWN_PERSONA
        assert decision.constraints == ()
        assert decision.policy_key is None

    def test_security_officer_cannot_export_waf(self, evaluator):
        decision = evaluator.evaluate("security_officer", "security.waf", "export")

        assert decision.allowed is False
        assert decision.reason is DecisionReason.NO_MATCHING_GRANT
        assert decision.constraints == ()
        assert decision.policy_key is None

    def test_unknown_resource_has_no_matching_grant(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "billing.invoices", "view")

        assert decision.reason is DecisionReason.NO_MATCHING_GRANT

    def test_explicit_deny_carries_policy_and_constraints(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "finance.escrow", "release")

        assert decision.allowed is False
        assert decision.reason is DecisionReason.EXPLICIT_DENY
        assert decision.policy_key == "finance.escrow.oversight"
        assert decision.constraints == (DUAL_CONTROL,)
        assert decision.audit_retention_days is None

    def test_deny_grant_for_other_actions_is_invisible(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "finance.escrow", "view")

        assert decision.allowed is True
        assert decision.policy_key == "finance.escrow.oversight"

    def test_wildcard_deny_grant(self, evaluator):
        decision = evaluator.evaluate("security_officer", "runtime.maintenance", "schedule")

        assert decision.reason is DecisionReason.EXPLICIT_DENY


@pytest.mark.unit
class TestGrantOrdering:
    """Test first-match-wins semantics."""

    def test_earlier_broad_deny_shadows_later_allow(self):
        evaluator = _single_persona_evaluator(
            Grant(
                policy_key="ops.freeze",
                resource="deployments",
                actions=("*",),
                decision=PolicyDecision.DENY,
            ),
            Grant(policy_key="ops.read", resource="deployments", actions=("view",)),
        )

        decision = evaluator.evaluate("operator", "deployments", "view")

        assert decision.reason is DecisionReason.EXPLICIT_DENY
        assert decision.policy_key == "ops.freeze"

    def test_earlier_broad_allow_shadows_later_deny(self):
        evaluator = _single_persona_evaluator(
            Grant(policy_key="ops.manage", resource="deployments", actions=("manage",)),
            Grant(
                policy_key="ops.no-delete",
                resource="deployments",
                actions=("delete",),
                decision=PolicyDecision.DENY,
            ),
        )

        decision = evaluator.evaluate("operator", "deployments", "delete")

        assert decision.allowed is True
        assert decision.policy_key == "ops.manage"

    def test_grant_resource_compared_case_insensitively(self):
        evaluator = _single_persona_evaluator(
            Grant(policy_key="ops.read", resource="Deployments", actions=("VIEW",)),
        )

        assert evaluator.evaluate("operator", "deployments", "read").allowed is True


@pytest.mark.unit
class TestMalformedInput:
    """Test that evaluation never raises."""

    @pytest.mark.parametrize(
        ("persona", "resource", "action"),
        [
            (None, None, None),
            (123, "runtime.telemetry", "view"),
            ("", "runtime.telemetry", "view"),
            ("platform_admin", None, "view"),
            ("platform_admin", "runtime.telemetry", None),
            ("platform_admin", ["runtime.telemetry"], {"view": True}),
        ],
    )
    def test_malformed_input_denies(self, evaluator, persona, resource, action):
        decision = evaluator.evaluate(persona, resource, action)

        assert decision.allowed is False
        assert decision.reason in {
            DecisionReason.UNKNOWN_PERSONA,
            DecisionReason.NO_MATCHING_GRANT,
        }

    def test_empty_action_does_not_match_wildcard(self, evaluator):
        decision = evaluator.evaluate("platform_admin", "runtime.maintenance", "  ")

        assert decision.reason is DecisionReason.NO_MATCHING_GRANT
