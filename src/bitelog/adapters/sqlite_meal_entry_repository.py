"""SQLite implementation of the meal entry store."""

import logging
import sqlite3
from dataclasses import dataclass, replace
from datetime import date, time

from bitelog.adapters.sqlite_database import SqliteDatabase
from bitelog.adapters.sqlite_errors import translate_sqlite_error
from bitelog.domain.meals import (
    MealCategory,
    MealComponent,
    MealEntry,
    describe_meal_time,
)
from bitelog.services.meals import MealEntryRepository

_logger = logging.getLogger(__name__)

_SELECT_MEAL_ENTRIES = """
    SELECT id, date, time, meal_category, notes
    FROM meal_entries
"""

_SELECT_COMPONENTS = """
    SELECT id, meal_entry_id, food_item_id, amount_in_grams
    FROM meal_components
    WHERE meal_entry_id = ?
    ORDER BY id
"""

_INSERT_COMPONENT = """
    INSERT INTO meal_components (meal_entry_id, food_item_id, amount_in_grams)
    VALUES (?, ?, ?)
"""


@dataclass
class SqliteMealEntryRepository(MealEntryRepository):
    """SQLite-backed repository for meal entries and their components.

    Components are owned by their entry and replaced wholesale on update;
    ids of unchanged-looking components are not preserved.
    """

    database: SqliteDatabase

    def save(self, entry: MealEntry) -> MealEntry:
        """Insert an entry with its components and return it with ids."""
        label = describe_meal_time(entry)
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO meal_entries (date, time, meal_category, notes) "
                    "VALUES (?, ?, ?, ?)",
                    _entry_params(entry),
                )
                entry_id = cursor.lastrowid
                components = _insert_components(conn, entry_id, entry.components)
        except sqlite3.Error as exc:
            _logger.exception("Failed to save meal entry at %s", label)
            raise translate_sqlite_error(exc, f"saving meal entry at {label}") from exc
        _logger.info(
            "Meal entry at %s saved with id %s and %s components",
            label,
            entry_id,
            len(components),
        )
        return replace(entry, id=entry_id, components=components)

    def find_by_id(self, meal_entry_id: int) -> MealEntry | None:
        """Return an entry with components loaded, if present."""
        operation = f"finding meal entry {meal_entry_id}"
        try:
            with self.database.connection() as conn:
                row = conn.execute(
                    _SELECT_MEAL_ENTRIES + " WHERE id = ?", (meal_entry_id,)
                ).fetchone()
                if row is None:
                    return None
                entry = _row_to_entry(row, _load_components(conn, row["id"]))
        except sqlite3.Error as exc:
            _logger.exception("Failed while %s", operation)
            raise translate_sqlite_error(exc, operation) from exc
        return entry

    def update(self, entry: MealEntry) -> bool:
        """Replace the entry row and all of its components in one transaction."""
        label = describe_meal_time(entry)
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "UPDATE meal_entries SET date = ?, time = ?, meal_category = ?, "
                    "notes = ? WHERE id = ?",
                    (*_entry_params(entry), entry.id),
                )
                if cursor.rowcount == 0:
                    _logger.warning("Meal entry %s not found for update", entry.id)
                    return False
                removed = conn.execute(
                    "DELETE FROM meal_components WHERE meal_entry_id = ?", (entry.id,)
                ).rowcount
                inserted = _insert_components(conn, entry.id, entry.components)
        except sqlite3.Error as exc:
            _logger.exception("Failed to update meal entry %s", entry.id)
            raise translate_sqlite_error(
                exc, f"updating meal entry {entry.id} at {label}"
            ) from exc
        _logger.info(
            "Meal entry %s updated: %s components removed, %s inserted",
            entry.id,
            removed,
            len(inserted),
        )
        return True

    def delete(self, meal_entry_id: int) -> bool:
        """Delete an entry; its components cascade."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM meal_entries WHERE id = ?", (meal_entry_id,)
                )
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            _logger.exception("Failed to delete meal entry %s", meal_entry_id)
            raise translate_sqlite_error(
                exc, f"deleting meal entry {meal_entry_id}"
            ) from exc
        if deleted:
            _logger.info("Meal entry %s deleted", meal_entry_id)
        else:
            _logger.warning("Meal entry %s not found for deletion", meal_entry_id)
        return deleted

    def find_all_by_date(self, day: date) -> list[MealEntry]:
        """Return every entry of a date, ordered by time."""
        try:
            with self.database.connection() as conn:
                rows = conn.execute(
                    _SELECT_MEAL_ENTRIES + " WHERE date = ? ORDER BY time, id",
                    (day.isoformat(),),
                ).fetchall()
                entries = [
                    _row_to_entry(row, _load_components(conn, row["id"]))
                    for row in rows
                ]
        except sqlite3.Error as exc:
            _logger.exception("Failed to list meal entries for %s", day)
            raise translate_sqlite_error(
                exc, f"listing meal entries for {day:%d.%m.%Y}"
            ) from exc
        _logger.debug("Loaded %s meal entries for %s", len(entries), day)
        return entries


def _entry_params(entry: MealEntry) -> tuple[object, ...]:
    return (
        entry.date.isoformat(),
        entry.time.isoformat(),
        entry.category.name,
        entry.notes,
    )


def _insert_components(
    conn: sqlite3.Connection, entry_id: int, components: tuple[MealComponent, ...]
) -> tuple[MealComponent, ...]:
    conn.executemany(
        _INSERT_COMPONENT,
        [
            (entry_id, component.food_item_id, component.amount_in_grams)
            for component in components
        ],
    )
    return _load_components(conn, entry_id)


def _load_components(
    conn: sqlite3.Connection, entry_id: int
) -> tuple[MealComponent, ...]:
    rows = conn.execute(_SELECT_COMPONENTS, (entry_id,)).fetchall()
    return tuple(
        MealComponent(
            id=row["id"],
            meal_entry_id=row["meal_entry_id"],
            food_item_id=row["food_item_id"],
            amount_in_grams=float(row["amount_in_grams"]),
        )
        for row in rows
    )


def _row_to_entry(
    row: sqlite3.Row, components: tuple[MealComponent, ...]
) -> MealEntry:
    return MealEntry(
        id=row["id"],
        date=date.fromisoformat(row["date"]),
        time=time.fromisoformat(row["time"]),
        category=MealCategory[row["meal_category"]],
        notes=row["notes"],
        components=components,
    )
