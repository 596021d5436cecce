"""Nutrient resolution over the ingredient graph."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Protocol

from bitelog.domain.errors import CyclicDependencyError, IngredientNotFoundError
from bitelog.domain.meals import MealEntry, describe_meal_time
from bitelog.domain.models import FoodComponent, FoodItem
from bitelog.domain.nutrition import MacroProfile

_logger = logging.getLogger(__name__)


class FoodItemReader(Protocol):
    """Read access to food items with their components loaded."""

    def find_by_id(self, food_item_id: int) -> FoodItem | None:
        """Return a food item by id, if present."""


@dataclass
class NutrientResolver:
    """Computes per-100g macros of composite items and totals of meals.

    Nothing is cached: every call re-reads the ingredient graph from the
    store. Cycle detection tracks the ids on the active traversal path only,
    so an ingredient shared by two branches (a diamond) is resolved once per
    branch and is not mistaken for a cycle.
    """

    food_items: FoodItemReader

    def resolve(self, food_item_id: int) -> MacroProfile:
        """Return per-100g macros for a stored food item."""
        item = self._load(food_item_id, f"resolving food item {food_item_id}")
        return self.resolve_item(item)

    def resolve_item(self, item: FoodItem) -> MacroProfile:
        """Return per-100g macros for a loaded, possibly unsaved, item."""
        path = frozenset() if item.id is None else frozenset({item.id})
        return self._resolve(item, path, _label(item))

    def with_resolved_macros(self, item: FoodItem) -> FoodItem:
        """Return a copy of a composite item carrying its derived macros."""
        if not item.is_composite:
            return item
        macros = self.resolve_item(item)
        return replace(
            item,
            calories_per_100g=macros.calories,
            proteins_per_100g=macros.proteins,
            fats_per_100g=macros.fats,
            carbs_per_100g=macros.carbs,
        )

    def validate_components(self, item: FoodItem, operation: str) -> None:
        """Walk the declared components eagerly before a write.

        Raises CyclicDependencyError when an ingredient leads back to an id
        already on its path (including the item itself on update) and
        IngredientNotFoundError when an ingredient does not exist.
        """
        if not item.is_composite:
            return
        origin = _label(item)
        root_path = frozenset() if item.id is None else frozenset({item.id})
        stack = [
            (component.ingredient_food_item_id, root_path)
            for component in reversed(item.components or ())
        ]
        while stack:
            ingredient_id, path = stack.pop()
            if ingredient_id in path:
                _logger.warning(
                    "Cyclic dependency in food item %s via ingredient %s",
                    origin,
                    ingredient_id,
                )
                raise CyclicDependencyError(origin, ingredient_id, operation)
            ingredient = self._load(ingredient_id, operation)
            if not ingredient.is_composite:
                continue
            nested = path | {ingredient_id}
            stack.extend(
                (component.ingredient_food_item_id, nested)
                for component in reversed(ingredient.components or ())
            )

    def resolve_meal(self, entry: MealEntry) -> MacroProfile:
        """Return absolute macro totals for the components of a meal."""
        operation = f"resolving meal entry {describe_meal_time(entry)}"
        total = MacroProfile.zero()
        for component in entry.components:
            food_item = self._load(component.food_item_id, operation)
            macros = self.resolve_item(food_item)
            total = total + macros.scaled(component.amount_in_grams / 100.0)
        return total

    def _resolve(
        self, item: FoodItem, path: frozenset[int], origin: str
    ) -> MacroProfile:
        if not item.is_composite:
            return _stored_macros(item)

        operation = f"resolving nutrients of {origin}"
        stack = [_Frame(item, path)]
        while True:
            frame = stack[-1]
            component = next(frame.pending, None)
            if component is None:
                stack.pop()
                macros = frame.per_100g()
                if not stack:
                    return macros
                stack[-1].add(macros, stack[-1].current_amount)
                continue

            ingredient_id = component.ingredient_food_item_id
            if ingredient_id in frame.path:
                _logger.error(
                    "Cycle found while resolving %s at ingredient %s",
                    origin,
                    ingredient_id,
                )
                raise CyclicDependencyError(origin, ingredient_id, operation)
            ingredient = self._load(ingredient_id, operation)
            if ingredient.is_composite:
                frame.current_amount = component.amount_in_grams
                stack.append(_Frame(ingredient, frame.path | {ingredient_id}))
            else:
                frame.add(_stored_macros(ingredient), component.amount_in_grams)

    def _load(self, food_item_id: int, operation: str) -> FoodItem:
        item = self.food_items.find_by_id(food_item_id)
        if item is None:
            _logger.warning("Ingredient %s not found while %s", food_item_id, operation)
            raise IngredientNotFoundError(food_item_id, operation)
        return item


def _label(item: FoodItem) -> str:
    if item.id is None:
        return repr(item.name)
    return f"{item.name!r} (id {item.id})"


@dataclass
class _Frame:
    """Composite item whose components are being summed on the resolve stack."""

    item: FoodItem
    path: frozenset[int]
    pending: Iterator[FoodComponent] = field(init=False)
    total: MacroProfile = field(default_factory=MacroProfile.zero)
    weight: float = 0.0
    current_amount: float = 0.0

    def __post_init__(self) -> None:
        self.pending = iter(self.item.components or ())

    def add(self, macros: MacroProfile, amount_in_grams: float) -> None:
        self.weight += amount_in_grams
        self.total = self.total + macros.scaled(amount_in_grams / 100.0)

    def per_100g(self) -> MacroProfile:
        if self.weight <= 0:
            _logger.warning(
                "Composite food item %s has zero component weight; macros set to 0",
                _label(self.item),
            )
            return MacroProfile.zero()
        return MacroProfile(
            calories=self.total.calories / self.weight * 100,
            proteins=self.total.proteins / self.weight * 100,
            fats=self.total.fats / self.weight * 100,
            carbs=self.total.carbs / self.weight * 100,
        )


def _stored_macros(item: FoodItem) -> MacroProfile:
    return MacroProfile(
        calories=item.calories_per_100g,
        proteins=item.proteins_per_100g,
        fats=item.fats_per_100g,
        carbs=item.carbs_per_100g,
    )
