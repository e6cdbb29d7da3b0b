"""Platform RBAC policy matrix.

This module defines the versioned persona/grant matrix consulted by the
access evaluator, plus the guardrails and resource classifications published
alongside it for compliance tooling.

The matrix is constructed once at import time and is immutable. Changing it
means shipping a new version and restarting the process; there is no runtime
edit or reload path.

Grant order within a persona matters: the evaluator applies the FIRST grant
whose resource and action both match, so a broader grant listed earlier
shadows a narrower one listed later.

Usage:
    ```python
    from src.config.rbac_policy import RBAC_POLICY_MATRIX

    persona = RBAC_POLICY_MATRIX.get_persona("platform_admin")
    summaries = RBAC_POLICY_MATRIX.list_personas()
    ```
"""

from datetime import UTC, datetime

from src.domain.entities.policy_matrix import (
    Grant,
    Guardrail,
    Persona,
    PolicyMatrix,
    ResourceDescriptor,
)
from src.domain.enums import PolicyDecision

# =============================================================================
# Shared constraint strings
# =============================================================================

SESSION_PROTECTION = "Requires an MFA-verified session no older than 12 hours"
CHANGE_TICKET = "Changes must reference an approved change ticket"
DUAL_CONTROL = "Requires dual-control approval from a second authorized persona"
EXPORT_WATERMARK = "Exports are watermarked and logged with the requesting actor"
TEMPORARY_RULE_TTL = "Temporary rules expire automatically after 24 hours"
PII_MASKING = "Personal data is masked unless an escalation case is linked"

# =============================================================================
# Personas
# =============================================================================

PLATFORM_ADMIN = Persona(
    key="platform_admin",
    label="Platform administrator",
    description="Operates runtime infrastructure and owns the RBAC matrix.",
    default_channels=("pagerduty", "slack:#platform-ops"),
    escalation_target="cto-office",
    grants=(
        Grant(
            policy_key="governance.rbac.matrix",
            resource="governance.rbac",
            actions=("view", "export"),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=730,
        ),
        Grant(
            policy_key="platform.runtime.control",
            resource="runtime.telemetry",
            actions=("view", "export"),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="platform.runtime.control",
            resource="runtime.maintenance",
            actions=("manage",),
            constraints=(SESSION_PROTECTION, CHANGE_TICKET),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="platform.security.perimeter",
            resource="security.waf",
            actions=("view", "update"),
            constraints=(SESSION_PROTECTION, CHANGE_TICKET),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="finance.escrow.oversight",
            resource="finance.escrow",
            actions=("release", "refund"),
            decision=PolicyDecision.DENY,
            constraints=(DUAL_CONTROL,),
            audit_retention_days=2555,
        ),
        Grant(
            policy_key="finance.escrow.oversight",
            resource="finance.escrow",
            actions=("view",),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=2555,
        ),
    ),
)

SECURITY_OFFICER = Persona(
    key="security_officer",
    label="Security officer",
    description="Investigates incidents and manages perimeter controls.",
    default_channels=("pagerduty", "slack:#security-incidents"),
    escalation_target="ciso",
    grants=(
        Grant(
            policy_key="platform.security.perimeter",
            resource="security.waf",
            actions=("view", "create-temporary-rule", "expire-temporary-rule"),
            constraints=(SESSION_PROTECTION, TEMPORARY_RULE_TTL),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="security.audit.review",
            resource="security.audit-log",
            actions=("view", "export"),
            constraints=(SESSION_PROTECTION, EXPORT_WATERMARK),
            audit_retention_days=730,
        ),
        Grant(
            policy_key="governance.rbac.matrix",
            resource="governance.rbac",
            actions=("view",),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=730,
        ),
        Grant(
            policy_key="platform.runtime.control",
            resource="runtime.telemetry",
            actions=("view",),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="platform.runtime.control",
            resource="runtime.maintenance",
            actions=("*",),
            decision=PolicyDecision.DENY,
            constraints=(CHANGE_TICKET,),
            audit_retention_days=365,
        ),
    ),
)

COMPLIANCE_MANAGER = Persona(
    key="compliance_manager",
    label="Compliance manager",
    description="Runs periodic access reviews and regulator reporting.",
    default_channels=("email:compliance@platform.example", "slack:#compliance"),
    escalation_target="general-counsel",
    grants=(
        Grant(
            policy_key="security.audit.review",
            resource="security.audit-log",
            actions=("view", "export"),
            constraints=(EXPORT_WATERMARK,),
            audit_retention_days=2555,
        ),
        Grant(
            policy_key="governance.rbac.matrix",
            resource="governance.rbac",
            actions=("view", "export", "attest"),
            constraints=(SESSION_PROTECTION,),
            audit_retention_days=2555,
        ),
        Grant(
            policy_key="finance.escrow.oversight",
            resource="finance.escrow",
            actions=("view",),
            constraints=(PII_MASKING,),
            audit_retention_days=2555,
        ),
    ),
)

SUPPORT_LEAD = Persona(
    key="support_lead",
    label="Support lead",
    description="Handles escalated member cases and identity verification.",
    default_channels=("slack:#support-escalations",),
    escalation_target="head-of-support",
    grants=(
        Grant(
            policy_key="support.case.handling",
            resource="support.tickets",
            actions=("view", "update", "assign", "close"),
            audit_retention_days=365,
        ),
        Grant(
            policy_key="support.identity.review",
            resource="users.identity",
            actions=("view",),
            constraints=(PII_MASKING,),
            audit_retention_days=730,
        ),
        Grant(
            policy_key="support.identity.review",
            resource="users.identity",
            actions=("approve", "reject"),
            constraints=(DUAL_CONTROL, PII_MASKING),
            audit_retention_days=730,
        ),
    ),
)

FINANCE_CONTROLLER = Persona(
    key="finance_controller",
    label="Finance controller",
    description="Approves escrow releases, refunds, and payout adjustments.",
    default_channels=("email:finance-ops@platform.example",),
    escalation_target="cfo",
    grants=(
        Grant(
            policy_key="finance.escrow.oversight",
            resource="finance.escrow",
            actions=("view", "release", "refund"),
            constraints=(SESSION_PROTECTION, DUAL_CONTROL),
            audit_retention_days=2555,
        ),
        Grant(
            policy_key="security.audit.review",
            resource="security.audit-log",
            actions=("view",),
            audit_retention_days=2555,
        ),
    ),
)

# =============================================================================
# Guardrails (descriptive, not enforced by the evaluator)
# =============================================================================

GUARDRAILS = (
    Guardrail(
        key="mfa-enforcement",
        label="MFA enforcement",
        description="Privileged personas must authenticate with a second factor.",
        coverage=(
            "platform_admin",
            "security_officer",
            "compliance_manager",
            "finance_controller",
        ),
        severity="critical",
    ),
    Guardrail(
        key="dual-control-finance",
        label="Dual control for money movement",
        description="Escrow releases and refunds need two distinct approvers.",
        coverage=("finance_controller", "platform_admin"),
        severity="critical",
    ),
    Guardrail(
        key="pii-minimisation",
        label="PII minimisation",
        description="Support and compliance views mask personal data by default.",
        coverage=("support_lead", "compliance_manager"),
        severity="high",
    ),
    Guardrail(
        key="quarterly-access-review",
        label="Quarterly access review",
        description="Grants are re-certified at every review cadence.",
        coverage=(
            "platform_admin",
            "security_officer",
            "compliance_manager",
            "support_lead",
            "finance_controller",
        ),
        severity="medium",
    ),
)

# =============================================================================
# Resource classification
# =============================================================================

RESOURCES = (
    ResourceDescriptor(
        key="governance.rbac",
        label="RBAC policy matrix",
        owner="platform-governance",
        data_classification="confidential",
        surfaces=("admin-console", "compliance-reports"),
    ),
    ResourceDescriptor(
        key="runtime.telemetry",
        label="Runtime telemetry",
        owner="platform-ops",
        data_classification="internal",
        surfaces=("admin-console", "ops-dashboard"),
    ),
    ResourceDescriptor(
        key="runtime.maintenance",
        label="Maintenance windows",
        owner="platform-ops",
        data_classification="internal",
        surfaces=("admin-console",),
    ),
    ResourceDescriptor(
        key="security.waf",
        label="Web application firewall",
        owner="security-engineering",
        data_classification="restricted",
        surfaces=("security-console",),
    ),
    ResourceDescriptor(
        key="security.audit-log",
        label="Security audit log",
        owner="security-engineering",
        data_classification="restricted",
        surfaces=("security-console", "compliance-reports"),
    ),
    ResourceDescriptor(
        key="finance.escrow",
        label="Escrow accounts",
        owner="finance-operations",
        data_classification="restricted",
        surfaces=("finance-console",),
    ),
    ResourceDescriptor(
        key="support.tickets",
        label="Support cases",
        owner="member-support",
        data_classification="internal",
        surfaces=("support-desk",),
    ),
    ResourceDescriptor(
        key="users.identity",
        label="Identity verification records",
        owner="trust-and-safety",
        data_classification="restricted",
        surfaces=("support-desk", "admin-console"),
    ),
)

# =============================================================================
# Matrix
# =============================================================================

RBAC_POLICY_MATRIX = PolicyMatrix(
    version="2024.06.0",
    published_at=datetime(2024, 6, 1, tzinfo=UTC),
    review_cadence_days=90,
    personas=(
        PLATFORM_ADMIN,
        SECURITY_OFFICER,
        COMPLIANCE_MANAGER,
        SUPPORT_LEAD,
        FINANCE_CONTROLLER,
    ),
    guardrails=GUARDRAILS,
    resources=RESOURCES,
)


def get_policy_matrix() -> PolicyMatrix:
    """Get a deep copy of the platform policy matrix.

    Returns:
        PolicyMatrix: Independent snapshot; mutating it cannot affect evaluation.
    """
    return RBAC_POLICY_MATRIX.snapshot()
