"""Engine and session handling for the kitchen operations database."""
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from kitchen_ops.config import get_settings


def get_database_url() -> str:
    """Resolve the database URL.

    DATABASE_URL wins when set. Otherwise a Postgres URL is composed,
    over the Cloud SQL unix socket when INSTANCE_CONNECTION_NAME is set
    (Cloud Run) or over TCP to DB_HOST:DB_PORT (local proxy).
    """
    settings = get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    credentials = f"{settings.DB_USER}:{settings.DB_PASSWORD}"
    if settings.INSTANCE_CONNECTION_NAME:
        socket_dir = f"/cloudsql/{settings.INSTANCE_CONNECTION_NAME}"
        return f"postgresql://{credentials}@/{settings.DB_NAME}?host={socket_dir}"

    return f"postgresql://{credentials}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"


@lru_cache
def get_engine():
    """Shared engine for the process."""
    return create_engine(
        get_database_url(),
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine())


def get_session() -> Session:
    """Open a session for scripts and background jobs. Caller closes it."""
    return get_session_factory()()


def get_db():
    """FastAPI dependency yielding a request-scoped session."""
    db = get_session()
    try:
        yield db
    finally:
        db.close()
