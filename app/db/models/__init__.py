from app.db.models.user import User
from app.db.models.customer import Customer
from app.db.models.movie import Movie
from app.db.models.rental import Rental

__all__ = ["User", "Customer", "Movie", "Rental"]
