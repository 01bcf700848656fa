from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.db import SessionLocal
from app.db.models.user import User
from app.core.security import ACCESS_TOKEN_TYPE, decode_token
from app.errors import UnauthorizedError
from app.repositories.user import get_user_by_id

# Missing tokens are reported by get_current_user so that every 401 carries an error code
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

COULD_NOT_VALIDATE = "Could not validate credentials"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Get the current authenticated user from JWT token."""
    if not token:
        raise UnauthorizedError("Not authenticated")

    payload = decode_token(token)
    if payload is None:
        raise UnauthorizedError(COULD_NOT_VALIDATE)

    # Only access tokens authenticate requests
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise UnauthorizedError(COULD_NOT_VALIDATE)

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthorizedError(COULD_NOT_VALIDATE) from None

    user = get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")

    return user
