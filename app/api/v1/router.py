from fastapi import APIRouter

from app.api.routers import auth, rentals, returns

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(rentals.router)
api_router.include_router(returns.router)
