import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import app.repositories.customer as customer_repo
import app.repositories.movie as movie_repo
import app.repositories.rental as rental_repo
from app.db.models.rental import Rental as RentalModel
from app.domain.rental import CustomerSnapshot, MovieSnapshot
from app.errors import NotFoundError


# ============================================================================
# CUSTOMER TESTS
# ============================================================================


def test_create_and_get_customer(db: Session):
    customer = customer_repo.create_customer(db, name="Ada", phone="555-0001")
    assert isinstance(customer.id, uuid.UUID)

    found = customer_repo.get_customer_by_id(db, customer.id)
    assert found is not None
    assert found.name == "Ada"
    assert found.phone == "555-0001"


def test_get_customer_unknown_id(db: Session):
    assert customer_repo.get_customer_by_id(db, uuid.uuid4()) is None


def test_get_all_customers_sorted_by_name(db: Session):
    customer_repo.create_customer(db, name="Zed", phone="555-0002")
    customer_repo.create_customer(db, name="Amy", phone="555-0003")

    names = [customer.name for customer in customer_repo.get_all_customers(db)]
    assert names == ["Amy", "Zed"]


def test_update_customer_only_given_fields(db: Session):
    customer = customer_repo.create_customer(db, name="Ada", phone="555-0001")

    updated = customer_repo.update_customer(db, customer.id, phone="555-7777")
    assert updated.name == "Ada"
    assert updated.phone == "555-7777"


def test_update_customer_not_found(db: Session):
    with pytest.raises(NotFoundError):
        customer_repo.update_customer(db, uuid.uuid4(), name="Nobody")


# ============================================================================
# MOVIE TESTS
# ============================================================================


def test_create_and_get_movie(db: Session):
    movie = movie_repo.create_movie(db, title="Heat", daily_rental_rate=3, number_in_stock=5)

    found = movie_repo.get_movie_by_id(db, movie.id)
    assert found.title == "Heat"
    assert found.daily_rental_rate == 3
    assert found.number_in_stock == 5


def test_get_all_movies_sorted_by_title(db: Session):
    movie_repo.create_movie(db, title="Ran", daily_rental_rate=1, number_in_stock=1)
    movie_repo.create_movie(db, title="Brazil", daily_rental_rate=1, number_in_stock=1)

    titles = [movie.title for movie in movie_repo.get_all_movies(db)]
    assert titles == ["Brazil", "Ran"]


def test_update_movie_leaves_stock_alone(db: Session):
    movie = movie_repo.create_movie(db, title="Heat", daily_rental_rate=3, number_in_stock=5)

    updated = movie_repo.update_movie(db, movie.id, title="Heat (1995)", daily_rental_rate=4)
    assert updated.title == "Heat (1995)"
    assert updated.daily_rental_rate == 4
    assert updated.number_in_stock == 5


def test_update_movie_not_found(db: Session):
    with pytest.raises(NotFoundError):
        movie_repo.update_movie(db, uuid.uuid4(), title="Nothing")


def test_decrement_stock_stops_at_zero(db: Session):
    movie = movie_repo.create_movie(db, title="Heat", daily_rental_rate=3, number_in_stock=1)

    assert movie_repo.decrement_stock(db, movie.id) is True
    db.commit()
    assert movie_repo.decrement_stock(db, movie.id) is False
    db.commit()

    db.refresh(movie)
    assert movie.number_in_stock == 0


def test_decrement_stock_unknown_movie(db: Session):
    assert movie_repo.decrement_stock(db, uuid.uuid4()) is False
    db.rollback()


def test_negative_stock_rejected_by_database(db: Session):
    with pytest.raises(IntegrityError):
        movie_repo.create_movie(db, title="Broken", daily_rental_rate=1, number_in_stock=-1)
    db.rollback()


# ============================================================================
# RENTAL TESTS
# ============================================================================


def _new_rental(customer_id: uuid.UUID, movie_id: uuid.UUID, **kwargs) -> RentalModel:
    return RentalModel(
        customer=CustomerSnapshot(id=customer_id, name="Ada", phone="555-0001"),
        movie=MovieSnapshot(id=movie_id, title="Heat", daily_rental_rate=3),
        **kwargs,
    )


def test_add_rental_sets_date_out(db: Session):
    rental = rental_repo.add_rental(db, _new_rental(uuid.uuid4(), uuid.uuid4()))
    db.commit()

    found = rental_repo.get_rental_by_id(db, rental.id)
    assert found.date_out is not None
    assert found.date_returned is None
    assert found.rental_fee is None


def test_add_rental_is_not_committed(db: Session, session_factory):
    rental = rental_repo.add_rental(db, _new_rental(uuid.uuid4(), uuid.uuid4()))
    rental_id = rental.id
    db.rollback()

    other = session_factory()
    try:
        assert rental_repo.get_rental_by_id(other, rental_id) is None
    finally:
        other.close()


def test_only_one_open_rental_per_pair(db: Session):
    customer_id, movie_id = uuid.uuid4(), uuid.uuid4()
    rental_repo.add_rental(db, _new_rental(customer_id, movie_id))
    db.commit()

    with pytest.raises(IntegrityError):
        rental_repo.add_rental(db, _new_rental(customer_id, movie_id))
    db.rollback()


def test_closed_rentals_do_not_block_new_ones(db: Session):
    customer_id, movie_id = uuid.uuid4(), uuid.uuid4()
    returned_at = datetime.now(timezone.utc)
    rental_repo.add_rental(
        db,
        _new_rental(
            customer_id,
            movie_id,
            date_out=returned_at - timedelta(days=2),
            date_returned=returned_at,
            rental_fee=6,
        ),
    )
    rental_repo.add_rental(db, _new_rental(customer_id, movie_id))
    db.commit()

    assert len(rental_repo.get_all_rentals(db)) == 2


def test_find_rental_prefers_open_rental(db: Session):
    customer_id, movie_id = uuid.uuid4(), uuid.uuid4()
    now = datetime.now(timezone.utc)
    closed = rental_repo.add_rental(
        db,
        _new_rental(customer_id, movie_id, date_out=now - timedelta(days=3), date_returned=now),
    )
    opened = rental_repo.add_rental(
        db, _new_rental(customer_id, movie_id, date_out=now - timedelta(days=5))
    )
    db.commit()

    assert rental_repo.get_open_rental(db, customer_id, movie_id).id == opened.id
    assert rental_repo.find_rental_by_customer_and_movie(db, customer_id, movie_id).id == opened.id
    assert closed.id != opened.id


def test_find_rental_falls_back_to_latest_closed(db: Session):
    customer_id, movie_id = uuid.uuid4(), uuid.uuid4()
    now = datetime.now(timezone.utc)
    rental_repo.add_rental(
        db,
        _new_rental(customer_id, movie_id, date_out=now - timedelta(days=9), date_returned=now - timedelta(days=8)),
    )
    latest = rental_repo.add_rental(
        db,
        _new_rental(customer_id, movie_id, date_out=now - timedelta(days=2), date_returned=now),
    )
    db.commit()

    assert rental_repo.get_open_rental(db, customer_id, movie_id) is None
    assert rental_repo.find_rental_by_customer_and_movie(db, customer_id, movie_id).id == latest.id


def test_find_rental_no_match(db: Session):
    assert rental_repo.find_rental_by_customer_and_movie(db, uuid.uuid4(), uuid.uuid4()) is None
