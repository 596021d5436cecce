"""Translation of sqlite3 failures into the storage error taxonomy."""

import sqlite3

from bitelog.domain.errors import (
    ConstraintViolationError,
    DataAccessError,
    DuplicateKeyError,
    ForeignKeyViolationError,
)

_FOREIGN_KEY_NAMES = {"SQLITE_CONSTRAINT_FOREIGNKEY"}
_UNIQUE_NAMES = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}
_FOREIGN_KEY_MESSAGE = "FOREIGN KEY constraint failed"
_UNIQUE_MESSAGE = "UNIQUE constraint failed"
_NOT_NULL_MESSAGE = "NOT NULL constraint failed"
_CHECK_MESSAGE = "CHECK constraint failed"


def translate_sqlite_error(exc: sqlite3.Error, operation: str) -> DataAccessError:
    """Return the most specific storage error for a sqlite3 failure.

    The engine message is only used for classification and never copied
    into the result; callers chain the original exception for debugging.
    """
    message = str(exc)
    error_name = getattr(exc, "sqlite_errorname", None) or ""
    if not (
        isinstance(exc, sqlite3.IntegrityError)
        or error_name.startswith("SQLITE_CONSTRAINT")
    ):
        return DataAccessError(f"Database error while {operation}")

    if error_name in _FOREIGN_KEY_NAMES or _FOREIGN_KEY_MESSAGE in message:
        return ForeignKeyViolationError(
            f"Foreign key violation while {operation}"
        )
    if error_name in _UNIQUE_NAMES or _UNIQUE_MESSAGE in message:
        return DuplicateKeyError(
            f"Unique constraint violation while {operation}"
        )
    if _NOT_NULL_MESSAGE in message:
        return ConstraintViolationError(
            f"NOT NULL constraint violation while {operation}"
        )
    if _CHECK_MESSAGE in message:
        return ConstraintViolationError(
            f"CHECK constraint violation while {operation}"
        )
    return ConstraintViolationError(
        f"Integrity constraint violation while {operation}"
    )
