import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_rentals.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_USER_EMAIL"] = "clerk@test.example.com"
os.environ["FIRST_USER_PASSWORD"] = "ClerkTest123!"
os.environ["FIRST_USER_NAME"] = "Test Clerk"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from app.main import app
from app.db.base import connect_args_for
from app.core.security import create_access_token


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(test_db_url, connect_args=connect_args_for(test_db_url, 30))

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    try:
        yield test_engine
    finally:
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file, WAL files and directory
        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory bound to the test database, for tests that need several sessions."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def clerk_user(db: Session) -> dict:
    """The store user seeded by migration 001."""
    from app.repositories.user import get_user_by_email
    from app.core.config import settings

    user = get_user_by_email(db, settings.first_user_email)
    if not user:
        raise RuntimeError("Seeded user not found. Check migration 001.")

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "password": settings.first_user_password,  # Plaintext password from env
    }


@pytest.fixture(scope="function")
def clerk_token(clerk_user: dict) -> str:
    """Get JWT token for the seeded store user."""
    return create_access_token(clerk_user["id"])


@pytest.fixture(scope="function")
def auth_headers(clerk_token: str) -> dict:
    return {"Authorization": f"Bearer {clerk_token}"}


@pytest.fixture(scope="function")
def customer(db: Session):
    """Create a customer for testing."""
    from app.repositories.customer import create_customer

    return create_customer(db, name="Jane Doe", phone="555-0101")


@pytest.fixture(scope="function")
def movie(db: Session):
    """Create a movie with three copies in stock."""
    from app.repositories.movie import create_movie

    return create_movie(db, title="Terminator", daily_rental_rate=2, number_in_stock=3)
