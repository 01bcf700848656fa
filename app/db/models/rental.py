import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import composite

from app.db.base import Base
from app.domain.rental import CustomerSnapshot, MovieSnapshot


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Rental(Base):
    __tablename__ = "rentals"
    __table_args__ = (
        # At most one open rental per (customer, movie)
        Index(
            "ix_rentals_open_customer_movie",
            "customer_id",
            "movie_id",
            unique=True,
            sqlite_where=text("date_returned IS NULL"),
            postgresql_where=text("date_returned IS NULL"),
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Embedded customer snapshot
    customer_id = Column(Uuid, nullable=False, index=True)
    customer_name = Column(String(50), nullable=False)
    customer_phone = Column(String(50), nullable=False)

    # Embedded movie snapshot
    movie_id = Column(Uuid, nullable=False, index=True)
    movie_title = Column(String(255), nullable=False)
    movie_daily_rental_rate = Column(Integer, nullable=False)

    date_out = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    date_returned = Column(DateTime(timezone=True), nullable=True)
    rental_fee = Column(Integer, nullable=True)

    customer = composite(CustomerSnapshot, customer_id, customer_name, customer_phone)
    movie = composite(MovieSnapshot, movie_id, movie_title, movie_daily_rental_rate)
