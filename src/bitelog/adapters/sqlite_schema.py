"""SQLite schema for the food catalogue and meal diary."""

import logging
import sqlite3

from bitelog.adapters.sqlite_database import SqliteDatabase
from bitelog.adapters.sqlite_errors import translate_sqlite_error

_logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS food_categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS food_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        calories_per_100g REAL NOT NULL,
        serving_size_in_grams REAL NOT NULL,
        unit TEXT NOT NULL,
        proteins_per_100g REAL NOT NULL,
        fats_per_100g REAL NOT NULL,
        carbs_per_100g REAL NOT NULL,
        is_composite INTEGER NOT NULL,
        food_category_id INTEGER,
        FOREIGN KEY (food_category_id) REFERENCES food_categories(id) ON DELETE SET NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS food_components (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        parent_food_item_id INTEGER NOT NULL,
        ingredient_food_item_id INTEGER NOT NULL,
        amount_in_grams REAL NOT NULL CHECK (amount_in_grams >= 0),
        FOREIGN KEY (parent_food_item_id) REFERENCES food_items(id) ON DELETE CASCADE,
        FOREIGN KEY (ingredient_food_item_id) REFERENCES food_items(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_food_components_parent "
    "ON food_components(parent_food_item_id);",
    """
    CREATE TABLE IF NOT EXISTS meal_entries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        date TEXT NOT NULL,
        time TEXT NOT NULL,
        meal_category TEXT NOT NULL,
        notes TEXT
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_meal_entries_date ON meal_entries(date);",
    """
    CREATE TABLE IF NOT EXISTS meal_components (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        meal_entry_id INTEGER NOT NULL,
        food_item_id INTEGER NOT NULL,
        amount_in_grams REAL NOT NULL CHECK (amount_in_grams >= 0),
        FOREIGN KEY (meal_entry_id) REFERENCES meal_entries(id) ON DELETE CASCADE,
        FOREIGN KEY (food_item_id) REFERENCES food_items(id)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_meal_components_entry "
    "ON meal_components(meal_entry_id);",
)


def create_schema(database: SqliteDatabase) -> None:
    """Create all tables and indexes if they do not exist yet."""
    try:
        with database.transaction() as conn:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
    except sqlite3.Error as exc:
        _logger.exception("Failed to create schema in %s", database.location)
        raise translate_sqlite_error(exc, "creating schema") from exc
    _logger.info("Schema ready in %s", database.location)
