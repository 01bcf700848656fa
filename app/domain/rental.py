from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class CustomerSnapshot:
    """Customer details as they were when the rental was opened.

    Rentals keep their own copy so that editing a customer later does not
    rewrite rental history.
    """

    id: uuid.UUID
    name: str
    phone: str


@dataclass(frozen=True)
class MovieSnapshot:
    """Movie details as they were when the rental was opened."""

    id: uuid.UUID
    title: str
    daily_rental_rate: int


def as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def rental_fee(*, date_out: datetime, returned_at: datetime, daily_rental_rate: int) -> int:
    """Fee owed on return: whole days the movie was out times the daily rate.

    A movie returned on the day it was rented costs nothing.
    """
    days_out = (as_utc(returned_at) - as_utc(date_out)).days
    return max(days_out, 0) * daily_rental_rate
