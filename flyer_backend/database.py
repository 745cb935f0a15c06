# flyer_backend/database.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from flyer_backend.core.config import get_settings
from flyer_backend.core.errors import PersistenceFailure

settings = get_settings()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Database connection
#
# - SQLite (local default): check_same_thread=False so the
#   FastAPI threadpool can share the connection
# - Postgres: postgres:// is rewritten to postgresql:// and
#   sslmode=require is appended when DATABASE_SSL is set
# - pool_pre_ping=True: validate connections before using them
# ---------------------------------------------------------


def normalize_db_url(db_url: str, require_ssl: bool = False) -> str:
    """
    Rewrite legacy Postgres scheme and enforce SSL if requested.
    """
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)

    if require_ssl and db_url.startswith("postgresql") and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return db_url


db_url = normalize_db_url(settings.DATABASE_URL, settings.DATABASE_SSL)

if db_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
else:
    connect_args = {}

engine = create_engine(
    db_url,
    echo=settings.DB_ECHO,  # set to True if you want to debug SQL queries
    pool_pre_ping=True,
    connect_args=connect_args,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


@contextmanager
def unit_of_work(session: Session, action: str):
    """
    Commit everything written inside the block, or nothing.

    Any exception rolls the session back. Storage errors are logged and
    re-raised as PersistenceFailure; other errors propagate unchanged.

    Usage:

        with unit_of_work(session, "save project"):
            repo.add_project(session, project)
            ...
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to %s", action)
        raise PersistenceFailure(f"Could not {action}") from exc
    except Exception:
        session.rollback()
        raise
