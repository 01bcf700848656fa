from urllib.parse import urlparse

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.v1.router import api_router
from app.core.config import settings

tags_metadata = [
    {"name": "rentals", "description": "Rent movies out. Each rental takes one copy out of stock."},
    {"name": "returns", "description": "Close an open rental when the movie comes back."},
    {"name": "auth", "description": "Obtain a bearer token for the store's endpoints."},
]

app = FastAPI(title="Movie Rentals API", openapi_tags=tags_metadata)

if settings.frontend_url:
    parsed = urlparse(settings.frontend_url)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[f"{parsed.scheme}://{parsed.netloc}"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
