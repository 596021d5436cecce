"""Tests for sqlite3 error translation."""

import sqlite3

import pytest

from bitelog.adapters.sqlite_errors import translate_sqlite_error
from bitelog.domain.errors import (
    ConstraintViolationError,
    DataAccessError,
    DuplicateKeyError,
    ForeignKeyViolationError,
)


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("UNIQUE constraint failed: food_items.name", DuplicateKeyError),
        ("FOREIGN KEY constraint failed", ForeignKeyViolationError),
        ("NOT NULL constraint failed: food_items.name", ConstraintViolationError),
        ("CHECK constraint failed: amount_in_grams >= 0", ConstraintViolationError),
        ("constraint failed", ConstraintViolationError),
    ],
)
def test_integrity_errors_map_to_constraint_kinds(message, expected) -> None:
    translated = translate_sqlite_error(sqlite3.IntegrityError(message), "saving")

    assert type(translated) is expected
    assert "saving" in str(translated)
    assert message not in str(translated)


def test_non_constraint_error_is_generic_data_access_error() -> None:
    translated = translate_sqlite_error(
        sqlite3.OperationalError("no such table: food_items"), "listing food items"
    )

    assert type(translated) is DataAccessError
    assert "listing food items" in str(translated)
    assert "no such table" not in str(translated)


def test_translates_errors_raised_by_the_engine() -> None:
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute("CREATE TABLE parent (id INTEGER PRIMARY KEY, name TEXT UNIQUE)")
    conn.execute(
        "CREATE TABLE child (id INTEGER PRIMARY KEY, "
        "parent_id INTEGER REFERENCES parent(id))"
    )
    conn.execute("INSERT INTO parent (id, name) VALUES (1, 'a')")
    try:
        with pytest.raises(sqlite3.IntegrityError) as unique_info:
            conn.execute("INSERT INTO parent (id, name) VALUES (2, 'a')")
        with pytest.raises(sqlite3.IntegrityError) as primary_info:
            conn.execute("INSERT INTO parent (id, name) VALUES (1, 'b')")
        with pytest.raises(sqlite3.IntegrityError) as foreign_info:
            conn.execute("INSERT INTO child (parent_id) VALUES (42)")
    finally:
        conn.close()

    assert isinstance(translate_sqlite_error(unique_info.value, "x"), DuplicateKeyError)
    assert isinstance(
        translate_sqlite_error(primary_info.value, "x"), DuplicateKeyError
    )
    assert isinstance(
        translate_sqlite_error(foreign_info.value, "x"), ForeignKeyViolationError
    )
