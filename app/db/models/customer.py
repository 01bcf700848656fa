import uuid

from sqlalchemy import Column, String, Uuid

from app.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
