import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.domain.rental import as_utc


class CustomerSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    name: str
    phone: str


class MovieSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    title: str
    daily_rental_rate: int


class Rental(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    customer: CustomerSnapshot
    movie: MovieSnapshot
    date_out: datetime
    date_returned: datetime | None = None
    rental_fee: int | None = None

    @field_validator("date_out", "date_returned")
    @classmethod
    def in_utc(cls, v: datetime | None) -> datetime | None:
        """Serialize timestamps with a UTC offset whatever the database returned."""
        if v is None:
            return None
        return as_utc(v)


class RentalCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: uuid.UUID
    movie_id: uuid.UUID


class ReturnCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: uuid.UUID
    movie_id: uuid.UUID
