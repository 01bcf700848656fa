import uuid

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.db.models.movie import Movie as MovieModel
from app.errors import NotFoundError


def get_movie_by_id(db: Session, movie_id: uuid.UUID) -> MovieModel | None:
    """Get a movie by ID."""
    return db.query(MovieModel).filter(MovieModel.id == movie_id).first()


def get_all_movies(db: Session) -> list[MovieModel]:
    """Get all movies, sorted by title."""
    return db.query(MovieModel).order_by(MovieModel.title).all()


def create_movie(
    db: Session,
    title: str,
    daily_rental_rate: int,
    number_in_stock: int,
) -> MovieModel:
    """Create a new movie in the database. Pure data access - no business logic."""
    db_movie = MovieModel(
        title=title,
        daily_rental_rate=daily_rental_rate,
        number_in_stock=number_in_stock,
    )
    db.add(db_movie)
    db.commit()
    db.refresh(db_movie)
    return db_movie


def update_movie(
    db: Session,
    movie_id: uuid.UUID,
    title: str | None = None,
    daily_rental_rate: int | None = None,
) -> MovieModel:
    """
    Update movie details. Only provided fields will be updated.

    Stock is not editable here: it only moves through decrement_stock.
    """
    movie = get_movie_by_id(db, movie_id)
    if not movie:
        raise NotFoundError("Movie not found")

    if title is not None:
        movie.title = title
    if daily_rental_rate is not None:
        movie.daily_rental_rate = daily_rental_rate

    db.commit()
    db.refresh(movie)
    return movie


def decrement_stock(db: Session, movie_id: uuid.UUID) -> bool:
    """
    Take one copy of a movie out of stock.

    Issued as a single conditional UPDATE so concurrent callers cannot lose
    decrements or push the count below zero. Does not commit: the caller owns
    the transaction.

    Returns:
        True if a copy was taken, False if the movie has none left.
    """
    result = db.execute(
        update(MovieModel)
        .where(MovieModel.id == movie_id, MovieModel.number_in_stock > 0)
        .values(number_in_stock=MovieModel.number_in_stock - 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
