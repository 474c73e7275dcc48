"""training tables

Revision ID: 5b1e0c7d2a41
Revises:
Create Date: 2026-10-17 10:12:03.518204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b1e0c7d2a41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "volunteer",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("user.id"), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("join_date", sa.DateTime(), nullable=False),
        sa.Column("total_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_lessons", sa.JSON(), nullable=False),
        sa.Column("badges", sa.JSON(), nullable=False),
    )
    op.create_table(
        "lesson",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("difficulty", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "progress_entry",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("volunteer_id", sa.String(), sa.ForeignKey("volunteer.id"), nullable=False),
        sa.Column("lesson_id", sa.String(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Integer(), nullable=False),
        sa.Column("replay", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_progress_entry_volunteer_id", "progress_entry", ["volunteer_id"])
    op.create_index("ix_progress_entry_lesson_id", "progress_entry", ["lesson_id"])
    op.create_table(
        "quiz_result",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("volunteer_id", sa.String(), sa.ForeignKey("volunteer.id"), nullable=False),
        sa.Column("lesson_id", sa.String(), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_quiz_result_volunteer_id", "quiz_result", ["volunteer_id"])
    op.create_table(
        "catalog_seed",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("lesson_count", sa.Integer(), nullable=False),
        sa.Column("seeded_at", sa.DateTime(), nullable=False),
    )


def downgrade():
    op.drop_table("catalog_seed")
    op.drop_index("ix_quiz_result_volunteer_id", table_name="quiz_result")
    op.drop_table("quiz_result")
    op.drop_index("ix_progress_entry_lesson_id", table_name="progress_entry")
    op.drop_index("ix_progress_entry_volunteer_id", table_name="progress_entry")
    op.drop_table("progress_entry")
    op.drop_table("lesson")
    op.drop_table("volunteer")
    op.drop_table("user")
