"""Initial tables: users, sessions, settings, lesson_plans, community_plans.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("google_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_google_id"), "users", ["google_id"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sessions_user_id"), "sessions", ["user_id"], unique=False)

    op.create_table(
        "settings",
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("api_key", sa.Text(), nullable=True),
        sa.Column("gpt_link", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("user_id"),
    )

    for table, stamp in (("lesson_plans", "created_at"), ("community_plans", "shared_at")):
        columns = [
            sa.Column("id", sa.String(36), nullable=False),
            sa.Column("user_id", sa.String(36), nullable=False),
        ]
        if table == "community_plans":
            columns.append(sa.Column("shared_by", sa.String(255), nullable=False))
        columns += [
            sa.Column("title", sa.String(255), nullable=True),
            sa.Column("subject", sa.String(255), nullable=True),
            sa.Column("grade_level", sa.String(64), nullable=True),
            sa.Column("learning_objective", sa.Text(), nullable=True),
            sa.Column("plan_data", sa.Text(), nullable=False),
            sa.Column(stamp, sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        ]
        op.create_table(table, *columns)
        op.create_index(op.f(f"ix_{table}_user_id"), table, ["user_id"], unique=False)
        op.create_index(op.f(f"ix_{table}_{stamp}"), table, [stamp], unique=False)


def downgrade() -> None:
    for table, stamp in (("community_plans", "shared_at"), ("lesson_plans", "created_at")):
        op.drop_index(op.f(f"ix_{table}_{stamp}"), table_name=table)
        op.drop_index(op.f(f"ix_{table}_user_id"), table_name=table)
        op.drop_table(table)
    op.drop_table("settings")
    op.drop_index(op.f("ix_sessions_user_id"), table_name="sessions")
    op.drop_table("sessions")
    op.drop_index(op.f("ix_users_google_id"), table_name="users")
    op.drop_table("users")
