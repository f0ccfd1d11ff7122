"""add game state and advance locks

Revision ID: 7c4e2d1a9b30
Revises: 3a1f0c9d2b7e
Create Date: 2026-10-06 09:41:12.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c4e2d1a9b30"
down_revision = "3a1f0c9d2b7e"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "game_state",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("current_game_hour", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "advance_locks",
        sa.Column("job", sa.String(length=50), nullable=False),
        sa.Column("last_advanced_at", sa.DateTime(), nullable=True),
        sa.Column("runs", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("job"),
    )
    op.execute(sa.text("INSERT INTO game_state (id, current_game_hour) VALUES (1, 0)"))


def downgrade():
    op.drop_table("advance_locks")
    op.drop_table("game_state")
