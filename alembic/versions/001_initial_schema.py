"""Initial schema — users, teams, tasks, assignments, notifications.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = "'admin', 'manager', 'senior', 'employee', 'data_collector'"
STATUSES = (
    "'not_started', 'assigned', 'in_progress', 'pending', "
    "'review', 'completed', 'delivered', 'rejected'"
)


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id", UUID(as_uuid=False), primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("role", sa.String(30), nullable=False, server_default="employee"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint(f"role IN ({ROLES})", name="ck_users_role"),
    )

    # Teams
    op.create_table(
        "teams",
        _uuid_pk(),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
    )

    # Team members
    op.create_table(
        "team_members",
        _uuid_pk(),
        sa.Column(
            "team_id", UUID(as_uuid=False),
            sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "user_id", UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "joined_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_team_members_team", "team_members", ["team_id"])
    op.create_index(
        "uq_team_members_team_user", "team_members", ["team_id", "user_id"], unique=True
    )

    # Tasks
    op.create_table(
        "tasks",
        _uuid_pk(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "created_by", UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=True
        ),
        sa.Column(
            "team_id", UUID(as_uuid=False), sa.ForeignKey("teams.id"), nullable=True
        ),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("difficulty", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("estimated_hours", sa.Float, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="not_started"),
        sa.Column("pending_reason", sa.String(30), nullable=True),
        sa.Column("pending_notes", sa.Text, nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint(f"status IN ({STATUSES})", name="ck_tasks_status"),
        sa.CheckConstraint("estimated_hours >= 0", name="ck_tasks_estimated_hours"),
    )
    op.create_index("idx_tasks_status", "tasks", ["status"])
    op.create_index("idx_tasks_team", "tasks", ["team_id"])

    # Task assignments
    op.create_table(
        "task_assignments",
        _uuid_pk(),
        sa.Column(
            "task_id", UUID(as_uuid=False),
            sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "user_id", UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column(
            "assigned_by", UUID(as_uuid=False), sa.ForeignKey("users.id"), nullable=True
        ),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("is_primary", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "assigned_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_task_assignments_task", "task_assignments", ["task_id"])
    op.create_index(
        "idx_task_assignments_active_user",
        "task_assignments",
        ["user_id"],
        postgresql_where=sa.text("is_active"),
    )

    # Notifications
    op.create_table(
        "notifications",
        _uuid_pk(),
        sa.Column(
            "user_id", UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "task_id", UUID(as_uuid=False),
            sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        sa.Column(
            "created_at", sa.DateTime, nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("idx_notifications_user", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("task_assignments")
    op.drop_table("tasks")
    op.drop_table("team_members")
    op.drop_table("teams")
    op.drop_table("users")
