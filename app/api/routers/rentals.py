from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.db.models.user import User
from app.schemas.rental import Rental, RentalCreate
from app.services.rental import list_rentals, open_rental

router = APIRouter(prefix="/rentals", tags=["rentals"])


@router.get("", response_model=list[Rental])
def get_all_rentals(db: Session = Depends(get_db)):
    """
    Get all rentals, newest first.

    Customer and movie details are the snapshots taken when each rental was opened.
    """
    rentals = list_rentals(db)
    return [Rental.model_validate(rental) for rental in rentals]


@router.post("", response_model=Rental)
def create_new_rental(
    rental_data: RentalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Rent a movie to a customer. Requires an authenticated user.

    Takes one copy of the movie out of stock.
    """
    rental = open_rental(
        db,
        customer_id=rental_data.customer_id,
        movie_id=rental_data.movie_id,
    )
    return Rental.model_validate(rental)
