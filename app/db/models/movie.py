import uuid

from sqlalchemy import CheckConstraint, Column, Integer, String, Uuid

from app.db.base import Base


class Movie(Base):
    __tablename__ = "movies"
    __table_args__ = (
        CheckConstraint("number_in_stock >= 0", name="ck_movies_number_in_stock_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    daily_rental_rate = Column(Integer, nullable=False, default=0)
    number_in_stock = Column(Integer, nullable=False, default=0)
