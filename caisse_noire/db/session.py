from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from caisse_noire.core.errors import CaisseNoireError
from caisse_noire.core.settings import mask_database_url, settings
from caisse_noire.db.errors import translate_db_error

# Lazy initialization so importing the package never opens a connection
_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _is_sqlite(database_url: str) -> bool:
    return database_url.lower().startswith("sqlite")


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _get_engine() -> Engine:
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {mask_database_url(settings.database_url)}")

        if _is_sqlite(settings.database_url):
            logger.warning("Using SQLite database (local development only)")
            _engine = create_engine(
                settings.database_url,
                connect_args={"check_same_thread": False},
                echo=False,
            )
            enable_sqlite_foreign_keys(_engine)
        else:
            _engine = create_engine(
                settings.database_url,
                connect_args={"connect_timeout": 10, "application_name": "caisse-noire"},
                echo=False,
                pool_pre_ping=True,  # Verify connections before using
                pool_recycle=3600,
            )
        logger.info("Database engine initialized")
    return _engine


def get_engine() -> Engine:
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Get database session for FastAPI dependencies.

    Repositories commit their own writes; the session is closed once the
    response has been produced.

    Yields:
        Session: SQLAlchemy database session
    """
    logger.debug("Creating new database session (FastAPI dependency)")
    session = _get_session_local()()
    try:
        yield session
    finally:
        session.close()
        logger.debug("Database session closed")


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get database session context manager.

    Service errors (CaisseNoireError) are expected outcomes: they roll the
    session back without being logged as database failures.
    """
    logger.debug("Creating new database session")
    session = _get_session_local()()
    try:
        yield session
        session.commit()
    except CaisseNoireError:
        session.rollback()
        raise
    except Exception as e:
        logger.error(f"Database session error, rolling back: {e}")
        session.rollback()
        raise
    finally:
        session.close()
        logger.debug("Database session closed")


def commit_or_translate(session: Session) -> None:
    """Flush and commit pending changes as one transaction.

    On failure the whole transaction is rolled back, so nothing added since
    the last commit is persisted.

    Raises:
        DbError: Translated database failure (foreign key, unique, ...)
    """
    try:
        session.flush()
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise translate_db_error(e) from e
