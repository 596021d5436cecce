"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from bitelog.adapters.sqlite_database import SqliteDatabase
from bitelog.adapters.sqlite_food_category_repository import (
    SqliteFoodCategoryRepository,
)
from bitelog.adapters.sqlite_food_item_repository import SqliteFoodItemRepository
from bitelog.adapters.sqlite_meal_entry_repository import SqliteMealEntryRepository
from bitelog.adapters.sqlite_schema import create_schema
from bitelog.config import Settings
from bitelog.services.categories import FoodCategoryService
from bitelog.services.diary import DiaryService
from bitelog.services.food_items import FoodItemService
from bitelog.services.meals import MealEntryService
from bitelog.services.nutrients import NutrientResolver


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    database: SqliteDatabase
    nutrient_resolver: NutrientResolver
    category_service: FoodCategoryService
    food_item_service: FoodItemService
    meal_entry_service: MealEntryService
    diary_service: DiaryService
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Open the database, create the schema and wire services."""
    resolved_settings = settings or Settings()
    database = SqliteDatabase(resolved_settings.database_path)
    database.open()
    try:
        create_schema(database)
    except Exception:
        database.close()
        raise

    food_item_repository = SqliteFoodItemRepository(database)
    resolver = NutrientResolver(food_item_repository)
    meal_entry_service = MealEntryService(
        repository=SqliteMealEntryRepository(database),
        resolver=resolver,
    )

    return AppContainer(
        settings=resolved_settings,
        database=database,
        nutrient_resolver=resolver,
        category_service=FoodCategoryService(SqliteFoodCategoryRepository(database)),
        food_item_service=FoodItemService(
            repository=food_item_repository,
            resolver=resolver,
        ),
        meal_entry_service=meal_entry_service,
        diary_service=DiaryService(meal_entry_service),
        close_resources=database.close,
    )
