"""Database error types and translation from SQLAlchemy exceptions.

Callers never see driver-specific error codes: every SQLAlchemy failure is
turned into one of the DbError subclasses below.
"""

import re

from loguru import logger
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError

from caisse_noire.core.errors import CaisseNoireError

# PostgreSQL SQLSTATE codes
_PG_FOREIGN_KEY_VIOLATION = "23503"
_PG_UNIQUE_VIOLATION = "23505"

_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w., ]+)")


class DbError(CaisseNoireError):
    """Base exception for persistence failures."""


class ForeignKeyViolationError(DbError):
    """Raised when an inserted row references a missing parent row."""


class UniqueViolationError(DbError):
    """Raised when an inserted row collides with a unique constraint."""


class ServiceUnavailableError(DbError):
    """Raised when the database cannot be reached."""

    def __init__(self, description: str = "The service is currently unavailable") -> None:
        super().__init__(description)


class UnknownDbError(DbError):
    """Raised for any other database failure."""

    def __init__(self, description: str = "An internal error occured") -> None:
        super().__init__(description)


def _constraint_name(error: IntegrityError) -> str | None:
    diag = getattr(error.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _translate_integrity_error(error: IntegrityError) -> DbError:
    pgcode = getattr(error.orig, "pgcode", None)
    message = str(error.orig)
    constraint = _constraint_name(error)

    if pgcode == _PG_FOREIGN_KEY_VIOLATION or "FOREIGN KEY" in message.upper():
        if constraint:
            return ForeignKeyViolationError(f"The key {constraint} doesn't refer to anything")
        return ForeignKeyViolationError("An error occured due to a foreign key violation")

    if pgcode == _PG_UNIQUE_VIOLATION or "UNIQUE" in message.upper():
        if constraint is None:
            match = _SQLITE_UNIQUE_PATTERN.search(message)
            if match:
                # "users.email" -> "email"
                constraint = match.group("columns").split(",")[0].strip().split(".")[-1]
        if constraint:
            return UniqueViolationError(f"The field {constraint} is already used")
        return UniqueViolationError("An error occured due to a unique violation")

    return UnknownDbError()


def translate_db_error(error: SQLAlchemyError) -> DbError:
    """Translate a SQLAlchemy exception into the service error taxonomy.

    Args:
        error: Exception raised by SQLAlchemy

    Returns:
        The matching DbError (never raises)
    """
    if isinstance(error, IntegrityError):
        translated = _translate_integrity_error(error)
    elif isinstance(error, OperationalError) or (isinstance(error, DBAPIError) and error.connection_invalidated):
        translated = ServiceUnavailableError()
    else:
        translated = UnknownDbError()

    logger.error(
        "Database error translated",
        error_type=type(error).__name__,
        translated=type(translated).__name__,
        detail=translated.description,
    )
    return translated
