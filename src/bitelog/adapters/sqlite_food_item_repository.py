"""SQLite implementation of the food item store."""

import logging
import sqlite3
from dataclasses import dataclass, replace

from bitelog.adapters.sqlite_database import SqliteDatabase
from bitelog.adapters.sqlite_errors import translate_sqlite_error
from bitelog.domain.errors import DataAccessError
from bitelog.domain.models import FoodCategory, FoodComponent, FoodItem, Unit
from bitelog.services.food_items import FoodItemRepository

_logger = logging.getLogger(__name__)

_SELECT_FOOD_ITEMS = """
    SELECT fi.id, fi.name, fi.calories_per_100g, fi.serving_size_in_grams, fi.unit,
           fi.proteins_per_100g, fi.fats_per_100g, fi.carbs_per_100g, fi.is_composite,
           fc.id AS category_id, fc.name AS category_name
    FROM food_items fi
    LEFT JOIN food_categories fc ON fi.food_category_id = fc.id
"""

_INSERT_FOOD_ITEM = """
    INSERT INTO food_items (name, calories_per_100g, serving_size_in_grams, unit,
                            proteins_per_100g, fats_per_100g, carbs_per_100g,
                            is_composite, food_category_id)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

_UPDATE_FOOD_ITEM = """
    UPDATE food_items SET
        name = ?,
        calories_per_100g = ?,
        serving_size_in_grams = ?,
        unit = ?,
        proteins_per_100g = ?,
        fats_per_100g = ?,
        carbs_per_100g = ?,
        is_composite = ?,
        food_category_id = ?
    WHERE id = ?
"""

_INSERT_COMPONENT = """
    INSERT INTO food_components (parent_food_item_id, ingredient_food_item_id,
                                 amount_in_grams)
    VALUES (?, ?, ?)
"""

_SELECT_COMPONENTS = """
    SELECT id, parent_food_item_id, ingredient_food_item_id, amount_in_grams
    FROM food_components
    WHERE parent_food_item_id = ?
    ORDER BY id
"""


@dataclass
class SqliteFoodItemRepository(FoodItemRepository):
    """SQLite-backed repository for food items and their components.

    Parent rows and component rows are always written in one transaction.
    Business rules such as name uniqueness or ingredient existence are left
    to the calling service; this class only surfaces storage failures.
    """

    database: SqliteDatabase

    def save(self, item: FoodItem) -> FoodItem:
        """Insert an item with its components and return it with ids."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(_INSERT_FOOD_ITEM, _item_params(item))
                item_id = cursor.lastrowid
                components = _insert_components(conn, item_id, item)
        except sqlite3.Error as exc:
            _logger.exception("Failed to save food item %s", item.name)
            raise translate_sqlite_error(
                exc, f"saving food item {item.name!r}"
            ) from exc
        _logger.info("Food item %s saved with id %s", item.name, item_id)
        return replace(item, id=item_id, components=components)

    def find_by_id(self, food_item_id: int) -> FoodItem | None:
        """Return a food item with components loaded, if present."""
        return self._find_one(
            _SELECT_FOOD_ITEMS + " WHERE fi.id = ?",
            food_item_id,
            f"finding food item {food_item_id}",
        )

    def find_by_name(self, name: str) -> FoodItem | None:
        """Return a food item by exact name, if present."""
        return self._find_one(
            _SELECT_FOOD_ITEMS + " WHERE fi.name = ?",
            name,
            f"finding food item {name!r}",
        )

    def update(self, item: FoodItem) -> bool:
        """Replace the item row and its full component list.

        Existing component rows are deleted and the supplied ones inserted
        with fresh ids, all inside the transaction that updates the parent.
        """
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    _UPDATE_FOOD_ITEM, (*_item_params(item), item.id)
                )
                if cursor.rowcount == 0:
                    _logger.warning("Food item %s not found for update", item.id)
                    return False
                removed = conn.execute(
                    "DELETE FROM food_components WHERE parent_food_item_id = ?",
                    (item.id,),
                ).rowcount
                _insert_components(conn, item.id, item)
        except sqlite3.Error as exc:
            _logger.exception("Failed to update food item %s", item.id)
            raise translate_sqlite_error(
                exc, f"updating food item {item.name!r} (id {item.id})"
            ) from exc
        _logger.info(
            "Food item %s updated, %s old components replaced", item.id, removed
        )
        return True

    def delete(self, food_item_id: int) -> bool:
        """Delete an item; its own and dependent component rows cascade."""
        try:
            with self.database.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM food_items WHERE id = ?", (food_item_id,)
                )
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            _logger.exception("Failed to delete food item %s", food_item_id)
            raise translate_sqlite_error(
                exc, f"deleting food item {food_item_id}"
            ) from exc
        if deleted:
            _logger.info("Food item %s deleted", food_item_id)
        else:
            _logger.warning("Food item %s not found for deletion", food_item_id)
        return deleted

    def find_all(self, load_components: bool) -> list[FoodItem]:
        """Return every food item ordered by id."""
        try:
            with self.database.connection() as conn:
                rows = conn.execute(_SELECT_FOOD_ITEMS + " ORDER BY fi.id").fetchall()
                items = []
                for row in rows:
                    components = None
                    if load_components and row["is_composite"]:
                        components = _load_components(conn, row["id"])
                    items.append(_row_to_item(row, components))
        except sqlite3.Error as exc:
            _logger.exception("Failed to list food items")
            raise translate_sqlite_error(exc, "listing food items") from exc
        return items

    def _find_one(self, query: str, value: object, operation: str) -> FoodItem | None:
        try:
            with self.database.connection() as conn:
                row = conn.execute(query, (value,)).fetchone()
                if row is None:
                    return None
                components = None
                if row["is_composite"]:
                    components = _load_components(conn, row["id"])
        except sqlite3.Error as exc:
            _logger.exception("Failed while %s", operation)
            raise translate_sqlite_error(exc, operation) from exc
        return _row_to_item(row, components)


def _item_params(item: FoodItem) -> tuple[object, ...]:
    return (
        item.name,
        item.calories_per_100g,
        item.serving_size_in_grams,
        item.unit.name,
        item.proteins_per_100g,
        item.fats_per_100g,
        item.carbs_per_100g,
        1 if item.is_composite else 0,
        item.category.id if item.category is not None else None,
    )


def _insert_components(
    conn: sqlite3.Connection, parent_id: int, item: FoodItem
) -> tuple[FoodComponent, ...] | None:
    """Batch-insert the components of a composite item."""
    if not item.is_composite:
        return None
    components = item.components or ()
    for component in components:
        if not component.ingredient_food_item_id:
            raise DataAccessError(
                f"Component of food item {item.name!r} has no ingredient id"
            )
    conn.executemany(
        _INSERT_COMPONENT,
        [
            (parent_id, component.ingredient_food_item_id, component.amount_in_grams)
            for component in components
        ],
    )
    stored = _load_components(conn, parent_id)
    return tuple(
        replace(component, id=loaded.id, parent_food_item_id=parent_id)
        for component, loaded in zip(components, stored, strict=True)
    )


def _load_components(
    conn: sqlite3.Connection, parent_id: int
) -> tuple[FoodComponent, ...]:
    rows = conn.execute(_SELECT_COMPONENTS, (parent_id,)).fetchall()
    return tuple(
        FoodComponent(
            id=row["id"],
            parent_food_item_id=row["parent_food_item_id"],
            ingredient_food_item_id=row["ingredient_food_item_id"],
            amount_in_grams=float(row["amount_in_grams"]),
        )
        for row in rows
    )


def _row_to_item(
    row: sqlite3.Row, components: tuple[FoodComponent, ...] | None
) -> FoodItem:
    """Parse a joined food item row into a domain model."""
    category = None
    if row["category_id"] is not None:
        category = FoodCategory(id=row["category_id"], name=row["category_name"])
    return FoodItem(
        id=row["id"],
        name=row["name"],
        calories_per_100g=float(row["calories_per_100g"]),
        serving_size_in_grams=float(row["serving_size_in_grams"]),
        unit=Unit[row["unit"]],
        proteins_per_100g=float(row["proteins_per_100g"]),
        fats_per_100g=float(row["fats_per_100g"]),
        carbs_per_100g=float(row["carbs_per_100g"]),
        is_composite=bool(row["is_composite"]),
        category=category,
        components=components,
    )
