"""Services for managing food items and composite recipes."""

import logging
from dataclasses import dataclass
from typing import Protocol

from bitelog.domain.errors import DuplicateNameError, InvalidFoodItemError
from bitelog.domain.models import FoodItem
from bitelog.services.nutrients import NutrientResolver

_logger = logging.getLogger(__name__)


class FoodItemRepository(Protocol):
    """Persistence interface for food items and their components."""

    def save(self, item: FoodItem) -> FoodItem:
        """Insert an item with its components and return it with ids."""

    def find_by_id(self, food_item_id: int) -> FoodItem | None:
        """Return a food item with components loaded, if present."""

    def find_by_name(self, name: str) -> FoodItem | None:
        """Return a food item by exact name, if present."""

    def update(self, item: FoodItem) -> bool:
        """Replace an item row and its components; False when missing."""

    def delete(self, food_item_id: int) -> bool:
        """Delete an item; False when missing."""

    def find_all(self, load_components: bool) -> list[FoodItem]:
        """Return every food item."""


@dataclass
class FoodItemService:
    """Application service enforcing food item business rules.

    Name uniqueness, ingredient existence and acyclicity are checked before
    the repository is called, so a rejected write never opens a transaction.
    Items returned from here carry macros recomputed by the resolver.
    """

    repository: FoodItemRepository
    resolver: NutrientResolver

    def create_food_item(self, item: FoodItem) -> FoodItem:
        """Validate and persist a new food item."""
        operation = f"creating food item {item.name!r}"
        if self.repository.find_by_name(item.name) is not None:
            _logger.warning("Food item name already taken: %s", item.name)
            raise DuplicateNameError("Food item", item.name)
        _check_structure(item, operation)
        self.resolver.validate_components(item, operation)
        saved = self.repository.save(self.resolver.with_resolved_macros(item))
        _logger.info("Created food item %s with id %s", saved.name, saved.id)
        return saved

    def update_food_item(self, item: FoodItem) -> FoodItem | None:
        """Validate and replace a food item; None when it does not exist."""
        if item.id is None or item.id <= 0:
            _logger.warning("Food item %s update requested without id", item.name)
            raise InvalidFoodItemError(
                f"Food item {item.name!r} must have an id to be updated"
            )
        operation = f"updating food item {item.name!r} (id {item.id})"
        existing = self.repository.find_by_name(item.name)
        if existing is not None and existing.id != item.id:
            _logger.warning(
                "Food item name %s already used by id %s", item.name, existing.id
            )
            raise DuplicateNameError("Food item", item.name)
        _check_structure(item, operation)
        self.resolver.validate_components(item, operation)
        if not self.repository.update(self.resolver.with_resolved_macros(item)):
            _logger.warning("Food item %s not found for update", item.id)
            return None
        return self.get_food_item_by_id(item.id)

    def get_food_item_by_id(self, food_item_id: int) -> FoodItem | None:
        """Return a food item with resolved macros."""
        item = self.repository.find_by_id(food_item_id)
        if item is None:
            return None
        return self.resolver.with_resolved_macros(item)

    def get_food_item_by_name(self, name: str) -> FoodItem | None:
        """Return a food item by name with resolved macros."""
        item = self.repository.find_by_name(name)
        if item is None:
            return None
        return self.resolver.with_resolved_macros(item)

    def delete_food_item(self, food_item_id: int) -> bool:
        """Delete a food item; False when nothing matched."""
        deleted = self.repository.delete(food_item_id)
        if not deleted:
            _logger.warning("Food item %s not found for deletion", food_item_id)
        return deleted

    def list_food_items(self, load_components: bool = True) -> list[FoodItem]:
        """Return all food items.

        Composite macros are only recomputed when components are loaded;
        otherwise the stored, possibly stale, values are returned as is.
        """
        items = self.repository.find_all(load_components)
        if not load_components:
            return items
        return [self.resolver.with_resolved_macros(item) for item in items]


def _check_structure(item: FoodItem, operation: str) -> None:
    if not item.name or not item.name.strip():
        raise InvalidFoodItemError(f"Food item name must not be empty while {operation}")
    if not item.is_composite:
        return
    if not item.components:
        raise InvalidFoodItemError(
            f"Composite food item {item.name!r} needs at least one component "
            f"while {operation}"
        )
    for component in item.components:
        if component.amount_in_grams < 0:
            raise InvalidFoodItemError(
                f"Component {component.ingredient_food_item_id} of {item.name!r} "
                f"has a negative amount while {operation}"
            )
