"""Tests for the SQLite connection and transaction provider."""

import threading

import pytest

from bitelog.adapters.sqlite_database import MEMORY_LOCATION, SqliteDatabase
from bitelog.adapters.sqlite_food_item_repository import SqliteFoodItemRepository
from bitelog.adapters.sqlite_schema import create_schema
from bitelog.domain.errors import DataAccessError
from tests.conftest import make_food


def test_connection_requires_open_database() -> None:
    database = SqliteDatabase(MEMORY_LOCATION)

    assert database.is_open is False
    with pytest.raises(DataAccessError):
        with database.connection():
            pass


def test_memory_database_is_shared_between_connections(database) -> None:
    with database.transaction() as conn:
        conn.execute("INSERT INTO food_categories (name) VALUES ('Крупы')")

    with database.connection() as conn:
        rows = conn.execute("SELECT name FROM food_categories").fetchall()

    assert [row["name"] for row in rows] == ["Крупы"]


def test_memory_databases_are_isolated() -> None:
    first = SqliteDatabase(MEMORY_LOCATION)
    second = SqliteDatabase(MEMORY_LOCATION)
    first.open()
    second.open()
    try:
        create_schema(first)
        with second.connection() as conn:
            tables = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
    finally:
        first.close()
        second.close()

    assert tables == []


def test_transaction_rolls_back_on_error(database) -> None:
    with pytest.raises(RuntimeError):
        with database.transaction() as conn:
            conn.execute("INSERT INTO food_categories (name) VALUES ('Крупы')")
            raise RuntimeError("boom")

    with database.connection() as conn:
        count = conn.execute("SELECT COUNT(*) FROM food_categories").fetchone()[0]

    assert count == 0


def test_foreign_keys_are_enforced(database) -> None:
    with database.connection() as conn:
        enabled = conn.execute("PRAGMA foreign_keys").fetchone()[0]

    assert enabled == 1


def test_close_discards_memory_contents() -> None:
    database = SqliteDatabase(MEMORY_LOCATION)
    database.open()
    create_schema(database)
    database.close()

    assert database.is_open is False
    database.open()
    try:
        with database.connection() as conn:
            tables = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
    finally:
        database.close()

    assert tables == []


def test_file_database_persists_across_reopen(tmp_path) -> None:
    location = tmp_path / "nested" / "bitelog.db"
    database = SqliteDatabase(str(location))
    database.open()
    create_schema(database)
    with database.transaction() as conn:
        conn.execute("INSERT INTO food_categories (name) VALUES ('Крупы')")
    database.close()

    assert location.exists()
    reopened = SqliteDatabase(str(location))
    reopened.open()
    try:
        with reopened.connection() as conn:
            names = [
                row["name"]
                for row in conn.execute("SELECT name FROM food_categories").fetchall()
            ]
    finally:
        reopened.close()

    assert names == ["Крупы"]


def test_create_schema_is_idempotent(database) -> None:
    create_schema(database)

    with database.connection() as conn:
        tables = {
            row["name"]
            for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        }

    assert {
        "food_categories",
        "food_items",
        "food_components",
        "meal_entries",
        "meal_components",
    } <= tables


def test_memory_reader_waits_for_concurrent_writer(database) -> None:
    repository = SqliteFoodItemRepository(database)
    saved = repository.save(make_food("Мука", 350, 10, 1, 70))
    updated = threading.Event()
    writer_errors: list[Exception] = []

    def rename_slowly() -> None:
        try:
            with database.transaction() as conn:
                conn.execute(
                    "UPDATE food_items SET name = ? WHERE id = ?",
                    ("Мука цельнозерновая", saved.id),
                )
                updated.set()
                threading.Event().wait(0.2)
        except Exception as exc:
            writer_errors.append(exc)
            updated.set()

    writer = threading.Thread(target=rename_slowly)
    writer.start()
    assert updated.wait(5)

    loaded = repository.find_by_id(saved.id)
    writer.join(5)

    assert writer_errors == []
    assert loaded.name == "Мука цельнозерновая"
