"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from bitelog.domain.errors import InvalidMealEntryError
from bitelog.domain.meals import MealEntry, describe_meal_time
from bitelog.services.nutrients import NutrientResolver

_logger = logging.getLogger(__name__)


class MealEntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def save(self, entry: MealEntry) -> MealEntry:
        """Insert an entry with its components and return it with ids."""

    def find_by_id(self, meal_entry_id: int) -> MealEntry | None:
        """Return an entry with components loaded, if present."""

    def update(self, entry: MealEntry) -> bool:
        """Replace an entry row and all of its components; False when missing."""

    def delete(self, meal_entry_id: int) -> bool:
        """Delete an entry; False when missing."""

    def find_all_by_date(self, day: date) -> list[MealEntry]:
        """Return every entry stored for a date."""


@dataclass
class MealEntryService:
    """Service that persists meal entries and computes their totals."""

    repository: MealEntryRepository
    resolver: NutrientResolver

    def create_meal_entry(self, entry: MealEntry) -> MealEntry:
        """Persist a meal entry and return it with totals."""
        _check_amounts(entry)
        totals = self.resolver.resolve_meal(entry)
        saved = self.repository.save(entry)
        _logger.info(
            "Created meal entry %s at %s", saved.id, describe_meal_time(saved)
        )
        return replace(saved, totals=totals)

    def get_meal_entry(self, meal_entry_id: int) -> MealEntry | None:
        """Return a meal entry with totals."""
        entry = self.repository.find_by_id(meal_entry_id)
        if entry is None:
            return None
        return replace(entry, totals=self.resolver.resolve_meal(entry))

    def update_meal_entry(self, entry: MealEntry) -> MealEntry | None:
        """Replace a meal entry and its components; None when it is missing."""
        if entry.id is None or entry.id <= 0:
            _logger.warning(
                "Meal entry at %s update requested without id",
                describe_meal_time(entry),
            )
            raise InvalidMealEntryError(
                f"Meal entry at {describe_meal_time(entry)} must have an id "
                "to be updated"
            )
        _check_amounts(entry)
        totals = self.resolver.resolve_meal(entry)
        if not self.repository.update(entry):
            _logger.warning("Meal entry %s not found for update", entry.id)
            return None
        updated = self.repository.find_by_id(entry.id)
        if updated is None:
            return None
        return replace(updated, totals=totals)

    def delete_meal_entry(self, meal_entry_id: int) -> bool:
        """Delete a meal entry; False when nothing matched."""
        deleted = self.repository.delete(meal_entry_id)
        if not deleted:
            _logger.warning("Meal entry %s not found for deletion", meal_entry_id)
        return deleted

    def list_meal_entries(self, day: date) -> list[MealEntry]:
        """Return all meal entries of a date with totals."""
        return [
            replace(entry, totals=self.resolver.resolve_meal(entry))
            for entry in self.repository.find_all_by_date(day)
        ]


def _check_amounts(entry: MealEntry) -> None:
    for component in entry.components:
        if component.amount_in_grams < 0:
            raise InvalidMealEntryError(
                f"Meal entry at {describe_meal_time(entry)} has a negative amount "
                f"for food item {component.food_item_id}"
            )
