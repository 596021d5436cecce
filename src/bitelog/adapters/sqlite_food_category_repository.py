"""SQLite implementation of the food category store."""

import logging
import sqlite3
from dataclasses import dataclass, replace

from bitelog.adapters.sqlite_database import SqliteDatabase
from bitelog.adapters.sqlite_errors import translate_sqlite_error
from bitelog.domain.models import FoodCategory
from bitelog.services.categories import FoodCategoryRepository

_logger = logging.getLogger(__name__)


@dataclass
class SqliteFoodCategoryRepository(FoodCategoryRepository):
    """SQLite-backed repository for food categories."""

    database: SqliteDatabase

    def save(self, category: FoodCategory) -> FoodCategory:
        """Insert a category and return it with its id."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO food_categories (name) VALUES (?)", (category.name,)
                )
                category_id = cursor.lastrowid
        except sqlite3.Error as exc:
            _logger.exception("Failed to save food category %s", category.name)
            raise translate_sqlite_error(
                exc, f"saving food category {category.name!r}"
            ) from exc
        _logger.info("Food category %s saved with id %s", category.name, category_id)
        return replace(category, id=category_id)

    def find_by_id(self, category_id: int) -> FoodCategory | None:
        """Return a category by id, if present."""
        return self._find_one(
            "SELECT id, name FROM food_categories WHERE id = ?",
            category_id,
            f"finding food category {category_id}",
        )

    def find_by_name(self, name: str) -> FoodCategory | None:
        """Return a category by exact name, if present."""
        return self._find_one(
            "SELECT id, name FROM food_categories WHERE name = ?",
            name,
            f"finding food category {name!r}",
        )

    def find_all(self) -> list[FoodCategory]:
        """Return every category ordered by name."""
        try:
            with self.database.connection() as conn:
                rows = conn.execute(
                    "SELECT id, name FROM food_categories ORDER BY name"
                ).fetchall()
        except sqlite3.Error as exc:
            _logger.exception("Failed to list food categories")
            raise translate_sqlite_error(exc, "listing food categories") from exc
        return [FoodCategory(id=row["id"], name=row["name"]) for row in rows]

    def update(self, category: FoodCategory) -> bool:
        """Rename a category; False when missing."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "UPDATE food_categories SET name = ? WHERE id = ?",
                    (category.name, category.id),
                )
                updated = cursor.rowcount > 0
        except sqlite3.Error as exc:
            _logger.exception("Failed to update food category %s", category.id)
            raise translate_sqlite_error(
                exc, f"updating food category {category.id}"
            ) from exc
        if updated:
            _logger.info("Food category %s renamed to %s", category.id, category.name)
        return updated

    def delete(self, category_id: int) -> bool:
        """Delete a category; False when missing."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM food_categories WHERE id = ?", (category_id,)
                )
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            _logger.exception("Failed to delete food category %s", category_id)
            raise translate_sqlite_error(
                exc, f"deleting food category {category_id}"
            ) from exc
        if deleted:
            _logger.info("Food category %s deleted", category_id)
        else:
            _logger.warning("Food category %s not found for deletion", category_id)
        return deleted

    def _find_one(
        self, query: str, value: object, operation: str
    ) -> FoodCategory | None:
        try:
            with self.database.connection() as conn:
                row = conn.execute(query, (value,)).fetchone()
        except sqlite3.Error as exc:
            _logger.exception("Failed while %s", operation)
            raise translate_sqlite_error(exc, operation) from exc
        if row is None:
            return None
        return FoodCategory(id=row["id"], name=row["name"])
