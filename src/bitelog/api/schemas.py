"""Pydantic request and response models for the HTTP API."""

import datetime

from pydantic import BaseModel, Field, field_validator

from bitelog.domain.diary import DailyDiary
from bitelog.domain.meals import MealCategory, MealComponent, MealEntry
from bitelog.domain.models import FoodCategory, FoodComponent, FoodItem, Unit
from bitelog.domain.nutrition import MacroProfile


class CategoryPayload(BaseModel):
    """Category create or rename payload."""

    name: str = Field(min_length=1)


class CategoryResponse(BaseModel):
    """Stored food category."""

    id: int
    name: str

    @classmethod
    def from_domain(cls, category: FoodCategory) -> "CategoryResponse":
        return cls(id=category.id, name=category.name)


class MacrosResponse(BaseModel):
    """Macro values, per 100 g or absolute depending on context."""

    calories: float
    proteins: float
    fats: float
    carbs: float

    @classmethod
    def from_domain(cls, macros: MacroProfile) -> "MacrosResponse":
        return cls(
            calories=macros.calories,
            proteins=macros.proteins,
            fats=macros.fats,
            carbs=macros.carbs,
        )


class FoodComponentPayload(BaseModel):
    """Ingredient reference with amount."""

    ingredient_food_item_id: int = Field(gt=0)
    amount_in_grams: float = Field(ge=0)


class FoodComponentResponse(FoodComponentPayload):
    """Stored ingredient reference."""

    id: int | None = None


class FoodItemPayload(BaseModel):
    """Food item create or replace payload."""

    name: str = Field(min_length=1)
    calories_per_100g: float = 0.0
    serving_size_in_grams: float = 100.0
    unit: str = Unit.GRAM.name
    proteins_per_100g: float = 0.0
    fats_per_100g: float = 0.0
    carbs_per_100g: float = 0.0
    is_composite: bool = False
    category_id: int | None = None
    components: list[FoodComponentPayload] | None = None

    @field_validator("unit")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        if value not in Unit.__members__:
            raise ValueError(f"unknown unit {value!r}")
        return value

    def to_domain(
        self, food_item_id: int | None, category: FoodCategory | None
    ) -> FoodItem:
        components = None
        if self.components is not None:
            components = tuple(
                FoodComponent(
                    ingredient_food_item_id=component.ingredient_food_item_id,
                    amount_in_grams=component.amount_in_grams,
                )
                for component in self.components
            )
        return FoodItem(
            id=food_item_id,
            name=self.name,
            calories_per_100g=self.calories_per_100g,
            serving_size_in_grams=self.serving_size_in_grams,
            unit=Unit[self.unit],
            proteins_per_100g=self.proteins_per_100g,
            fats_per_100g=self.fats_per_100g,
            carbs_per_100g=self.carbs_per_100g,
            is_composite=self.is_composite,
            category=category,
            components=components,
        )


class FoodItemResponse(BaseModel):
    """Food item with macros resolved for composite items."""

    id: int
    name: str
    calories_per_100g: float
    serving_size_in_grams: float
    unit: str
    proteins_per_100g: float
    fats_per_100g: float
    carbs_per_100g: float
    is_composite: bool
    category: CategoryResponse | None = None
    components: list[FoodComponentResponse] | None = None

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemResponse":
        components = None
        if item.components is not None:
            components = [
                FoodComponentResponse(
                    id=component.id,
                    ingredient_food_item_id=component.ingredient_food_item_id,
                    amount_in_grams=component.amount_in_grams,
                )
                for component in item.components
            ]
        return cls(
            id=item.id,
            name=item.name,
            calories_per_100g=item.calories_per_100g,
            serving_size_in_grams=item.serving_size_in_grams,
            unit=item.unit.name,
            proteins_per_100g=item.proteins_per_100g,
            fats_per_100g=item.fats_per_100g,
            carbs_per_100g=item.carbs_per_100g,
            is_composite=item.is_composite,
            category=(
                CategoryResponse.from_domain(item.category) if item.category else None
            ),
            components=components,
        )


class MealComponentPayload(BaseModel):
    """Food amount eaten in a meal."""

    food_item_id: int = Field(gt=0)
    amount_in_grams: float = Field(ge=0)


class MealComponentResponse(MealComponentPayload):
    """Stored meal component."""

    id: int | None = None


class MealEntryPayload(BaseModel):
    """Meal entry create or replace payload."""

    date: datetime.date
    time: datetime.time
    category: str
    notes: str | None = None
    components: list[MealComponentPayload] = Field(default_factory=list)

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in MealCategory.__members__:
            raise ValueError(f"unknown meal category {value!r}")
        return value

    def to_domain(self, meal_entry_id: int | None) -> MealEntry:
        return MealEntry(
            id=meal_entry_id,
            date=self.date,
            time=self.time,
            category=MealCategory[self.category],
            notes=self.notes,
            components=tuple(
                MealComponent(
                    food_item_id=component.food_item_id,
                    amount_in_grams=component.amount_in_grams,
                )
                for component in self.components
            ),
        )


class MealEntryResponse(BaseModel):
    """Meal entry with resolved totals."""

    id: int
    date: datetime.date
    time: datetime.time
    category: str
    notes: str | None
    components: list[MealComponentResponse]
    totals: MacrosResponse

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealEntryResponse":
        return cls(
            id=entry.id,
            date=entry.date,
            time=entry.time,
            category=entry.category.name,
            notes=entry.notes,
            components=[
                MealComponentResponse(
                    id=component.id,
                    food_item_id=component.food_item_id,
                    amount_in_grams=component.amount_in_grams,
                )
                for component in entry.components
            ],
            totals=MacrosResponse.from_domain(entry.totals),
        )


class DiaryResponse(BaseModel):
    """Meals of a date with summed totals."""

    date: datetime.date
    meal_entries: list[MealEntryResponse]
    totals: MacrosResponse

    @classmethod
    def from_domain(cls, diary: DailyDiary) -> "DiaryResponse":
        return cls(
            date=diary.day,
            meal_entries=[
                MealEntryResponse.from_domain(entry) for entry in diary.meal_entries
            ],
            totals=MacrosResponse.from_domain(diary.totals),
        )
