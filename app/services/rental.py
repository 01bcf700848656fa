"""Rental lifecycle: opening a rental against stock and closing it on return."""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import app.repositories.customer as customer_repo
import app.repositories.movie as movie_repo
import app.repositories.rental as rental_repo
from app.db.models.rental import Rental as RentalModel
from app.domain.rental import CustomerSnapshot, MovieSnapshot, rental_fee
from app.errors import (
    AlreadyProcessedError,
    DomainError,
    DomainValidationError,
    NotFoundError,
    TransactionFailedError,
)

logger = logging.getLogger(__name__)

NOT_IN_STOCK = "Movie not in stock."
OPEN_RENTAL_EXISTS = "Customer already has an open rental for this movie."
RETURN_ALREADY_PROCESSED = "Return already processed."
TRANSACTION_FAILED = "Something failed."


def list_rentals(db: Session) -> list[RentalModel]:
    """List every rental, newest first."""
    try:
        return rental_repo.get_all_rentals(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to list rentals")
        raise TransactionFailedError(TRANSACTION_FAILED) from None


def open_rental(db: Session, customer_id: uuid.UUID, movie_id: uuid.UUID) -> RentalModel:
    """
    Rent a movie to a customer.

    - Validates customer and movie exist
    - Rejects the rental when the movie has no copies in stock
    - Rejects a second open rental of the same movie by the same customer
    - Inserts the rental and takes one copy out of stock in one transaction

    Raises:
        NotFoundError: If the customer or movie does not exist.
        DomainValidationError: If the movie is out of stock or already rented
            by this customer.
        TransactionFailedError: If the store could not be read or the write
            could not be committed. Neither the rental nor the stock change
            is applied.
    """
    try:
        customer = customer_repo.get_customer_by_id(db, customer_id)
        if not customer:
            raise NotFoundError("Invalid customer.")

        movie = movie_repo.get_movie_by_id(db, movie_id)
        if not movie:
            raise NotFoundError("Invalid movie.")

        if movie.number_in_stock <= 0:
            raise DomainValidationError(NOT_IN_STOCK)

        if rental_repo.get_open_rental(db, customer.id, movie.id):
            raise DomainValidationError(OPEN_RENTAL_EXISTS)

        rental = RentalModel(
            customer=CustomerSnapshot(id=customer.id, name=customer.name, phone=customer.phone),
            movie=MovieSnapshot(
                id=movie.id,
                title=movie.title,
                daily_rental_rate=movie.daily_rental_rate,
            ),
        )

        # Stock may have run out since the read above
        if not movie_repo.decrement_stock(db, movie.id):
            raise DomainValidationError(NOT_IN_STOCK)
        rental_repo.add_rental(db, rental)
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except IntegrityError:
        # Lost a race against another open of the same (customer, movie)
        db.rollback()
        raise DomainValidationError(OPEN_RENTAL_EXISTS) from None
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to open rental for customer %s and movie %s", customer_id, movie_id
        )
        raise TransactionFailedError(TRANSACTION_FAILED) from None

    db.refresh(rental)
    logger.info("Opened rental %s for customer %s and movie %s", rental.id, customer_id, movie_id)
    return rental


def close_rental(
    db: Session, customer_id: uuid.UUID | None, movie_id: uuid.UUID | None
) -> RentalModel:
    """
    Process the return of a rented movie.

    The caller is expected to be authenticated already.

    Raises:
        DomainValidationError: If customer_id or movie_id is missing.
        NotFoundError: If no rental exists for the pair.
        AlreadyProcessedError: If the rental has already been returned,
            including by a concurrent return that committed first.
        TransactionFailedError: If the store could not be read or the update
            could not be committed.
    """
    if not customer_id:
        raise DomainValidationError("customerId is required.")
    if not movie_id:
        raise DomainValidationError("movieId is required.")

    try:
        rental = rental_repo.find_rental_by_customer_and_movie(db, customer_id, movie_id)
        if not rental:
            raise NotFoundError("Rental not found.")

        if rental.date_returned is not None:
            raise AlreadyProcessedError(RETURN_ALREADY_PROCESSED)

        returned_at = datetime.now(timezone.utc)
        fee = rental_fee(
            date_out=rental.date_out,
            returned_at=returned_at,
            daily_rental_rate=rental.movie.daily_rental_rate,
        )

        if not rental_repo.mark_returned(db, rental.id, returned_at, fee):
            raise AlreadyProcessedError(RETURN_ALREADY_PROCESSED)
        db.commit()
    except DomainError:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to close rental for customer %s and movie %s", customer_id, movie_id
        )
        raise TransactionFailedError(TRANSACTION_FAILED) from None

    db.refresh(rental)
    logger.info("Closed rental %s with fee %s", rental.id, rental.rental_fee)
    return rental
