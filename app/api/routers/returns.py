from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.db.models.user import User
from app.schemas.rental import ReturnCreate
from app.services.rental import close_rental

router = APIRouter(prefix="/returns", tags=["returns"])


@router.post("", status_code=status.HTTP_200_OK, response_class=Response)
def process_return(
    return_data: ReturnCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Return a rented movie. Requires an authenticated user.

    Responds with an empty body on success.
    """
    close_rental(
        db,
        customer_id=return_data.customer_id,
        movie_id=return_data.movie_id,
    )
    return Response(status_code=status.HTTP_200_OK)
