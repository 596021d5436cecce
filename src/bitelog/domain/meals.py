"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum

from bitelog.domain.nutrition import MacroProfile


class MealCategory(Enum):
    """Meal slot within a day."""

    BREAKFAST = "Завтрак"
    LUNCH = "Обед"
    DINNER = "Ужин"
    SNACK = "Перекус"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class MealComponent:
    """Amount of a food item eaten as part of a meal."""

    food_item_id: int
    amount_in_grams: float
    id: int | None = None
    meal_entry_id: int | None = None


@dataclass(frozen=True, eq=False)
class MealEntry:
    """Meal eaten at a given date and time."""

    id: int | None
    date: date
    time: time
    category: MealCategory
    notes: str | None = None
    components: tuple[MealComponent, ...] = ()
    totals: MacroProfile = field(default_factory=MacroProfile.zero)


def describe_meal_time(entry: MealEntry) -> str:
    """Return a short human-readable label for log and error messages."""
    return f"{entry.date:%d.%m.%Y} {entry.time:%H:%M}"
