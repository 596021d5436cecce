"""Domain models for the daily diary."""

from dataclasses import dataclass
from datetime import date

from bitelog.domain.meals import MealEntry
from bitelog.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class DailyDiary:
    """Meals eaten on a calendar date with their summed totals."""

    day: date
    meal_entries: list[MealEntry]
    totals: MacroProfile
