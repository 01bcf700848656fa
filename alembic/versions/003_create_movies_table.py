"""create movies table

Revision ID: 003
Revises: 002
Create Date: 2026-09-28 20:20:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "movies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("daily_rental_rate", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("number_in_stock", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        # Stock never goes negative, whatever path writes it
        sa.CheckConstraint(
            "number_in_stock >= 0", name="ck_movies_number_in_stock_non_negative"
        ),
    )


def downgrade() -> None:
    op.drop_table("movies")
