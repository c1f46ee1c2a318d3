"""grade runs

Revision ID: 0001_grade_runs
Revises:
Create Date: 2026-10-19 09:12:44.318201

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_grade_runs"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "grade_runs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column("correct", sa.Integer(), nullable=False),
        sa.Column("wrong", sa.Integer(), nullable=False),
        sa.Column("correct_ids", sa.JSON(), nullable=False),
        sa.Column("wrong_ids", sa.JSON(), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_grade_runs"),
    )
    op.create_index("ix_grade_runs_created_at", "grade_runs", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_grade_runs_created_at", table_name="grade_runs")
    op.drop_table("grade_runs")
