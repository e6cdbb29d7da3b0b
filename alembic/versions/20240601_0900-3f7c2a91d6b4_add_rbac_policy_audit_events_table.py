"""add_rbac_policy_audit_events_table

Revision ID: 3f7c2a91d6b4
Revises:
Create Date: 2024-06-01 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f7c2a91d6b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create rbac_policy_audit_events table."""
    op.create_table(
        "rbac_policy_audit_events",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # Decision identity
        sa.Column("policy_key", sa.String(length=150), nullable=False),
        sa.Column("persona", sa.String(length=100), nullable=False),
        sa.Column("resource", sa.String(length=150), nullable=False),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column(
            "decision",
            sa.String(length=10),
            nullable=False,
            comment="allow or deny",
        ),
        sa.Column("reason", sa.Text(), nullable=True),
        # Actor
        sa.Column("actor_id", sa.String(length=100), nullable=True),
        sa.Column("actor_type", sa.String(length=50), nullable=True),
        sa.Column("actor_email", sa.String(length=255), nullable=True),
        # Request context
        sa.Column("request_id", sa.String(length=100), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.Column("response_status", sa.Integer(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_rbac_policy_audit_events_policy_key"),
        "rbac_policy_audit_events",
        ["policy_key"],
    )
    op.create_index(
        op.f("ix_rbac_policy_audit_events_persona"),
        "rbac_policy_audit_events",
        ["persona"],
    )
    op.create_index(
        op.f("ix_rbac_policy_audit_events_decision"),
        "rbac_policy_audit_events",
        ["decision"],
    )
    op.create_index(
        op.f("ix_rbac_policy_audit_events_occurred_at"),
        "rbac_policy_audit_events",
        ["occurred_at"],
    )
    op.create_index(
        "idx_policy_audit_persona_occurred",
        "rbac_policy_audit_events",
        ["persona", "occurred_at"],
    )


def downgrade() -> None:
    """Drop rbac_policy_audit_events table."""
    op.drop_index("idx_policy_audit_persona_occurred", table_name="rbac_policy_audit_events")
    op.drop_index(
        op.f("ix_rbac_policy_audit_events_occurred_at"),
        table_name="rbac_policy_audit_events",
    )
    op.drop_index(
        op.f("ix_rbac_policy_audit_events_decision"),
        table_name="rbac_policy_audit_events",
    )
    op.drop_index(
        op.f("ix_rbac_policy_audit_events_persona"),
        table_name="rbac_policy_audit_events",
    )
    op.drop_index(
        op.f("ix_rbac_policy_audit_events_policy_key"),
        table_name="rbac_policy_audit_events",
    )
    op.drop_table("rbac_policy_audit_events")
