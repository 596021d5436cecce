"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import date, time

import pytest

from bitelog.adapters.sqlite_database import MEMORY_LOCATION, SqliteDatabase
from bitelog.adapters.sqlite_food_category_repository import (
    SqliteFoodCategoryRepository,
)
from bitelog.adapters.sqlite_food_item_repository import SqliteFoodItemRepository
from bitelog.adapters.sqlite_meal_entry_repository import SqliteMealEntryRepository
from bitelog.adapters.sqlite_schema import create_schema
from bitelog.config import Settings
from bitelog.containers import AppContainer, build_container
from bitelog.domain.meals import MealCategory, MealComponent, MealEntry
from bitelog.domain.models import FoodComponent, FoodItem, Unit
from bitelog.services.categories import FoodCategoryService
from bitelog.services.diary import DiaryService
from bitelog.services.food_items import FoodItemService
from bitelog.services.meals import MealEntryService
from bitelog.services.nutrients import FoodItemReader, NutrientResolver


def make_food(  # noqa: PLR0913
    name: str,
    calories: float = 0.0,
    proteins: float = 0.0,
    fats: float = 0.0,
    carbs: float = 0.0,
    *,
    food_item_id: int | None = None,
    unit: Unit = Unit.GRAM,
    serving_size: float = 100.0,
) -> FoodItem:
    """Build a simple food item."""
    return FoodItem(
        id=food_item_id,
        name=name,
        calories_per_100g=calories,
        serving_size_in_grams=serving_size,
        unit=unit,
        proteins_per_100g=proteins,
        fats_per_100g=fats,
        carbs_per_100g=carbs,
    )


def make_composite(
    name: str,
    components: list[tuple[int, float]],
    *,
    food_item_id: int | None = None,
) -> FoodItem:
    """Build a composite food item from (ingredient id, grams) pairs."""
    return FoodItem(
        id=food_item_id,
        name=name,
        calories_per_100g=0.0,
        serving_size_in_grams=100.0,
        unit=Unit.GRAM,
        proteins_per_100g=0.0,
        fats_per_100g=0.0,
        carbs_per_100g=0.0,
        is_composite=True,
        components=tuple(
            FoodComponent(ingredient_food_item_id=ingredient_id, amount_in_grams=grams)
            for ingredient_id, grams in components
        ),
    )


def make_meal(
    components: list[tuple[int, float]],
    *,
    day: date = date(2025, 3, 14),
    at: time = time(8, 30),
    category: MealCategory = MealCategory.BREAKFAST,
    meal_entry_id: int | None = None,
    notes: str | None = None,
) -> MealEntry:
    """Build a meal entry from (food item id, grams) pairs."""
    return MealEntry(
        id=meal_entry_id,
        date=day,
        time=at,
        category=category,
        notes=notes,
        components=tuple(
            MealComponent(food_item_id=food_item_id, amount_in_grams=grams)
            for food_item_id, grams in components
        ),
    )


def component_pairs(item: FoodItem) -> list[tuple[int, float]]:
    """Return (ingredient id, grams) pairs of a composite item."""
    return [
        (component.ingredient_food_item_id, component.amount_in_grams)
        for component in item.components or ()
    ]


def meal_pairs(entry: MealEntry) -> list[tuple[int, float]]:
    """Return (food item id, grams) pairs of a meal entry."""
    return [
        (component.food_item_id, component.amount_in_grams)
        for component in entry.components
    ]


@dataclass
class InMemoryFoodItemReader(FoodItemReader):
    """In-memory food item store that counts lookups."""

    items: dict[int, FoodItem] = field(default_factory=dict)
    lookups: list[int] = field(default_factory=list)

    def add(self, item: FoodItem) -> FoodItem:
        if item.id is None:
            item = replace(item, id=len(self.items) + 1)
        self.items[item.id] = item
        return item

    def find_by_id(self, food_item_id: int) -> FoodItem | None:
        self.lookups.append(food_item_id)
        return self.items.get(food_item_id)


@pytest.fixture
def database() -> Iterator[SqliteDatabase]:
    db = SqliteDatabase(MEMORY_LOCATION)
    db.open()
    create_schema(db)
    yield db
    db.close()


@pytest.fixture
def category_repository(database: SqliteDatabase) -> SqliteFoodCategoryRepository:
    return SqliteFoodCategoryRepository(database)


@pytest.fixture
def food_item_repository(database: SqliteDatabase) -> SqliteFoodItemRepository:
    return SqliteFoodItemRepository(database)


@pytest.fixture
def meal_entry_repository(database: SqliteDatabase) -> SqliteMealEntryRepository:
    return SqliteMealEntryRepository(database)


@pytest.fixture
def resolver(food_item_repository: SqliteFoodItemRepository) -> NutrientResolver:
    return NutrientResolver(food_item_repository)


@pytest.fixture
def category_service(
    category_repository: SqliteFoodCategoryRepository,
) -> FoodCategoryService:
    return FoodCategoryService(category_repository)


@pytest.fixture
def food_item_service(
    food_item_repository: SqliteFoodItemRepository, resolver: NutrientResolver
) -> FoodItemService:
    return FoodItemService(repository=food_item_repository, resolver=resolver)


@pytest.fixture
def meal_entry_service(
    meal_entry_repository: SqliteMealEntryRepository, resolver: NutrientResolver
) -> MealEntryService:
    return MealEntryService(repository=meal_entry_repository, resolver=resolver)


@pytest.fixture
def diary_service(meal_entry_service: MealEntryService) -> DiaryService:
    return DiaryService(meal_entry_service)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_path=MEMORY_LOCATION, environment="test")


@pytest.fixture
def container(settings: Settings) -> Iterator[AppContainer]:
    app_container = build_container(settings)
    yield app_container
    app_container.close_resources()
