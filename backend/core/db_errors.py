from __future__ import annotations

import logging
from typing import Optional

from django.db import DatabaseError, IntegrityError, OperationalError

from .errors import AppError, ConflictError, TransientStoreError, ValidationError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
TRANSIENT_SQLSTATES = {
    "40001",  # serialization_failure
    "40P01",  # deadlock_detected
    "55P03",  # lock_not_available
    "57014",  # query_canceled (statement_timeout)
}


def sqlstate_of(exc: BaseException) -> Optional[str]:
    """Return the SQLSTATE of a psycopg error wrapped by Django, if any."""
    cause = getattr(exc, "__cause__", None)
    for candidate in (exc, cause):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return code
    return None


def map_database_error(exc: DatabaseError) -> AppError:
    """
    Translate a Django database error into the application error taxonomy.

    PostgreSQL errors are mapped by SQLSTATE; SQLite errors carry no code, so
    their message text is inspected instead.
    """
    state = sqlstate_of(exc)
    message = str(exc)

    if state == UNIQUE_VIOLATION:
        return ConflictError("Resource already exists", code=state)
    if state in (FOREIGN_KEY_VIOLATION, NOT_NULL_VIOLATION, CHECK_VIOLATION):
        return ValidationError("Invalid reference or missing required value", code=state)
    if state in TRANSIENT_SQLSTATES:
        return TransientStoreError("Database is busy, try again", code=state)

    lowered = message.lower()
    if isinstance(exc, IntegrityError):
        if "unique constraint failed" in lowered:
            return ConflictError("Resource already exists", code=UNIQUE_VIOLATION)
        if "foreign key constraint failed" in lowered:
            return ValidationError("Invalid reference", code=FOREIGN_KEY_VIOLATION)
        if "not null constraint failed" in lowered:
            return ValidationError("Missing required value", code=NOT_NULL_VIOLATION)
        if "check constraint failed" in lowered:
            return ValidationError("Invalid value", code=CHECK_VIOLATION)
    if isinstance(exc, OperationalError) and ("database is locked" in lowered or "timeout" in lowered):
        return TransientStoreError("Database is busy, try again")

    logger.error("Unmapped database error: %s", message)
    return AppError("Database error")


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, TransientStoreError):
        return True
    if isinstance(exc, DatabaseError):
        return isinstance(map_database_error(exc), TransientStoreError)
    return False
