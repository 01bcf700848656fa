from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings


def normalize_database_url(url: str) -> str:
    """Use the psycopg 3 driver for plain postgresql:// URLs. SQLite URLs pass through."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def connect_args_for(url: str, timeout_seconds: int) -> dict:
    """Driver arguments that bound how long a connection waits before failing.

    A statement that hits the limit raises, and the rental transaction it
    belongs to is rolled back.
    """
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout_seconds}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": timeout_seconds,
            "options": f"-c statement_timeout={timeout_seconds * 1000}",
        }
    return {}


database_url = normalize_database_url(settings.database_url)

engine = create_engine(
    database_url,
    connect_args=connect_args_for(database_url, settings.database_timeout_seconds),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
