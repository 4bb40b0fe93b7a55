"""initial schema

Revision ID: 0001
Revises:
Create Date: 2025-08-18 00:00:00.000000

Creates task_definitions + user_tasks and seeds the default weekly catalogue.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TRACKS = ("linkedin", "github", "career")
_STATUSES = ("NOT_STARTED", "STARTED", "SUBMITTED", "PARTIALLY_VERIFIED", "VERIFIED")

# (track, title, points_base, display_order)
_DEFAULT_TASKS = [
    ("linkedin", "Update your headline",                      10, 1),
    ("linkedin", "Comment on 3 posts in your field",          10, 2),
    ("linkedin", "Send 5 connection requests",                10, 3),
    ("linkedin", "Publish a post about something you learned", 20, 4),
    ("linkedin", "Follow 3 target companies",                  5, 5),
    ("linkedin", "Ask a peer for a recommendation",           15, 6),
    ("linkedin", "Review your weekly profile analytics",       5, 7),
    ("github",   "Push commits on 3 different days",          20, 1),
    ("github",   "Open a pull request",                       15, 3),
    ("github",   "Close or triage an issue",                  10, 5),
    ("github",   "Update a repository README",                10, 7),
    ("career",   "Complete this week's assignment",           30, 2),
    ("career",   "Apply to 5 jobs",                           20, 4),
    ("career",   "Refresh your resume summary",               10, 6),
]


def upgrade() -> None:
    # --- ENUM types ---
    track_enum = sa.Enum(*_TRACKS, name="track_enum")
    track_enum.create(op.get_bind(), checkfirst=True)

    task_status_enum = sa.Enum(*_STATUSES, name="task_status_enum")
    task_status_enum.create(op.get_bind(), checkfirst=True)

    # --- task_definitions ---
    task_definitions = op.create_table(
        "task_definitions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("track", sa.Enum(*_TRACKS, name="track_enum", create_type=False), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("points_base", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_definitions_id", "task_definitions", ["id"])
    op.create_index("ix_task_definitions_track", "task_definitions", ["track"])

    # --- user_tasks ---
    op.create_table(
        "user_tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("task_id", sa.Integer(), sa.ForeignKey("task_definitions.id"), nullable=False),
        sa.Column("period", sa.String(16), nullable=True),
        sa.Column("status", sa.Enum(*_STATUSES, name="task_status_enum", create_type=False), nullable=False),
        sa.Column("score_awarded", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "task_id", "period", name="uq_user_task_period"),
    )
    op.create_index("ix_user_tasks_id", "user_tasks", ["id"])
    op.create_index("ix_user_tasks_user_id", "user_tasks", ["user_id"])
    op.create_index("ix_user_tasks_task_id", "user_tasks", ["task_id"])
    op.create_index("ix_user_tasks_period", "user_tasks", ["period"])

    # --- seed default catalogue ---
    op.bulk_insert(
        task_definitions,
        [
            {
                "track": track,
                "title": title,
                "points_base": points,
                "display_order": order,
                "active": True,
            }
            for track, title, points, order in _DEFAULT_TASKS
        ],
    )


def downgrade() -> None:
    op.drop_table("user_tasks")
    op.drop_table("task_definitions")
    sa.Enum(name="task_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="track_enum").drop(op.get_bind(), checkfirst=True)
