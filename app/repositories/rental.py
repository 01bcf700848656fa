import uuid
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db.models.rental import Rental as RentalModel


def get_rental_by_id(db: Session, rental_id: uuid.UUID) -> RentalModel | None:
    """Get a rental by ID."""
    return db.query(RentalModel).filter(RentalModel.id == rental_id).first()


def get_all_rentals(db: Session) -> list[RentalModel]:
    """Get all rentals, newest first."""
    return db.query(RentalModel).order_by(RentalModel.date_out.desc()).all()


def get_open_rental(
    db: Session, customer_id: uuid.UUID, movie_id: uuid.UUID
) -> RentalModel | None:
    """Get the rental of a movie by a customer that has not been returned yet."""
    return (
        db.query(RentalModel)
        .filter(
            RentalModel.customer_id == customer_id,
            RentalModel.movie_id == movie_id,
            RentalModel.date_returned.is_(None),
        )
        .first()
    )


def find_rental_by_customer_and_movie(
    db: Session, customer_id: uuid.UUID, movie_id: uuid.UUID
) -> RentalModel | None:
    """
    Find the rental a return for (customer, movie) refers to.

    The open rental wins if there is one; otherwise the most recently opened
    closed rental is returned so the caller can tell a repeated return apart
    from an unknown one.
    """
    open_rental = get_open_rental(db, customer_id, movie_id)
    if open_rental:
        return open_rental

    return (
        db.query(RentalModel)
        .filter(
            RentalModel.customer_id == customer_id,
            RentalModel.movie_id == movie_id,
        )
        .order_by(RentalModel.date_out.desc())
        .first()
    )


def add_rental(db: Session, rental: RentalModel) -> RentalModel:
    """Stage a new rental and flush it. Does not commit: the caller owns the transaction."""
    db.add(rental)
    db.flush()
    return rental


def mark_returned(
    db: Session,
    rental_id: uuid.UUID,
    returned_at: datetime,
    rental_fee: int,
) -> bool:
    """
    Close a rental, only if it is still open.

    The date_returned IS NULL condition is checked by the UPDATE itself, so
    of two concurrent returns at most one matches. Does not commit.

    Returns:
        True if this call closed the rental, False if it was already closed.
    """
    result = db.execute(
        update(RentalModel)
        .where(RentalModel.id == rental_id, RentalModel.date_returned.is_(None))
        .values(date_returned=returned_at, rental_fee=rental_fee)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
