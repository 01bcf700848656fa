"""create rentals table

Revision ID: 004
Revises: 003
Create Date: 2026-09-28 20:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Customer and movie columns are snapshots, not foreign keys
    op.create_table(
        "rentals",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("customer_name", sa.String(50), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("movie_id", sa.Uuid(), nullable=False),
        sa.Column("movie_title", sa.String(255), nullable=False),
        sa.Column("movie_daily_rental_rate", sa.Integer(), nullable=False),
        sa.Column("date_out", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_returned", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rental_fee", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rentals_customer_id", "rentals", ["customer_id"], unique=False)
    op.create_index("ix_rentals_movie_id", "rentals", ["movie_id"], unique=False)
    op.create_index("ix_rentals_date_out", "rentals", ["date_out"], unique=False)

    # At most one open rental per (customer, movie)
    op.create_index(
        "ix_rentals_open_customer_movie",
        "rentals",
        ["customer_id", "movie_id"],
        unique=True,
        sqlite_where=sa.text("date_returned IS NULL"),
        postgresql_where=sa.text("date_returned IS NULL"),
    )


def downgrade() -> None:
    op.drop_index("ix_rentals_open_customer_movie", table_name="rentals")
    op.drop_index("ix_rentals_date_out", table_name="rentals")
    op.drop_index("ix_rentals_movie_id", table_name="rentals")
    op.drop_index("ix_rentals_customer_id", table_name="rentals")
    op.drop_table("rentals")
