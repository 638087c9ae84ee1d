"""staff partitions, action weights, api tokens and score events

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None

_MODERATOR_METRICS = (
    "responsiveness",
    "fairness",
    "communication",
    "conflict_resolution",
    "rule_enforcement",
    "engagement",
    "supportiveness",
    "adaptability",
    "objectivity",
    "initiative",
)
_BUILDER_ONLY_METRICS = (
    "exterior",
    "interior",
    "decoration",
    "effort",
    "contribution",
    "cooperativeness",
    "creativity",
    "consistency",
)


def _staff_columns():
    return [
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("staff_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("rank", sa.String(), nullable=False),
        sa.Column("profile_image_url", sa.String(), nullable=True),
        sa.Column("overall_grade", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def _metric_columns(names):
    return [sa.Column(name, sa.Float(), nullable=True) for name in names]


def upgrade() -> None:
    op.create_table(
        "moderators",
        *_staff_columns(),
        *_metric_columns(_MODERATOR_METRICS),
    )
    op.create_table(
        "builders",
        *_staff_columns(),
        *_metric_columns(_BUILDER_ONLY_METRICS + ("communication", "adaptability")),
    )
    op.create_table(
        "managers",
        *_staff_columns(),
        *_metric_columns(_MODERATOR_METRICS + _BUILDER_ONLY_METRICS),
        sa.Column("role", sa.String(), nullable=True),
    )

    op.create_table(
        "action_weights",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index(op.f("ix_action_weights_action"), "action_weights", ["action"], unique=True)

    op.create_table(
        "api_tokens",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("token_prefix", sa.String(length=8), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f("ix_api_tokens_token_hash"), "api_tokens", ["token_hash"], unique=True)

    op.create_table(
        "score_events",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("staff_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("points", sa.Float(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f("ix_score_events_staff_id"), "score_events", ["staff_id"], unique=False)
    op.create_index(
        "ix_score_events_staff_id_created_at",
        "score_events",
        ["staff_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_score_events_staff_id_created_at", table_name="score_events")
    op.drop_index(op.f("ix_score_events_staff_id"), table_name="score_events")
    op.drop_table("score_events")
    op.drop_index(op.f("ix_api_tokens_token_hash"), table_name="api_tokens")
    op.drop_table("api_tokens")
    op.drop_index(op.f("ix_action_weights_action"), table_name="action_weights")
    op.drop_table("action_weights")
    op.drop_table("managers")
    op.drop_table("builders")
    op.drop_table("moderators")
