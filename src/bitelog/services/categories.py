"""Food category service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from bitelog.domain.errors import DuplicateNameError
from bitelog.domain.models import FoodCategory

_logger = logging.getLogger(__name__)


class FoodCategoryRepository(Protocol):
    """Persistence interface for food categories."""

    def save(self, category: FoodCategory) -> FoodCategory:
        """Insert a category and return it with its id."""

    def find_by_id(self, category_id: int) -> FoodCategory | None:
        """Return a category by id, if present."""

    def find_by_name(self, name: str) -> FoodCategory | None:
        """Return a category by exact name, if present."""

    def find_all(self) -> list[FoodCategory]:
        """Return every category."""

    def update(self, category: FoodCategory) -> bool:
        """Rename a category; False when missing."""

    def delete(self, category_id: int) -> bool:
        """Delete a category; False when missing."""


@dataclass
class FoodCategoryService:
    """Service for the food category lookup table."""

    repository: FoodCategoryRepository

    def create_category(self, name: str) -> FoodCategory:
        """Create a category with a unique name."""
        if self.repository.find_by_name(name) is not None:
            _logger.warning("Food category name already taken: %s", name)
            raise DuplicateNameError("Food category", name)
        return self.repository.save(FoodCategory(id=None, name=name))

    def rename_category(self, category_id: int, name: str) -> FoodCategory | None:
        """Rename a category; None when it does not exist."""
        existing = self.repository.find_by_name(name)
        if existing is not None and existing.id != category_id:
            raise DuplicateNameError("Food category", name)
        category = FoodCategory(id=category_id, name=name)
        if not self.repository.update(category):
            _logger.warning("Food category %s not found for update", category_id)
            return None
        return category

    def get_category(self, category_id: int) -> FoodCategory | None:
        """Return a category by id."""
        return self.repository.find_by_id(category_id)

    def list_categories(self) -> list[FoodCategory]:
        """Return all categories."""
        return self.repository.find_all()

    def delete_category(self, category_id: int) -> bool:
        """Delete a category; referencing food items lose their category."""
        return self.repository.delete(category_id)
