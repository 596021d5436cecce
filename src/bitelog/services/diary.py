"""Daily diary aggregation."""

from dataclasses import dataclass
from datetime import date

from bitelog.domain.diary import DailyDiary
from bitelog.domain.nutrition import MacroProfile
from bitelog.services.meals import MealEntryService


@dataclass
class DiaryService:
    """Sums resolved meal totals for a calendar date."""

    meal_entry_service: MealEntryService

    def get_diary(self, day: date) -> DailyDiary:
        """Return all meals of a date and their combined totals."""
        entries = self.meal_entry_service.list_meal_entries(day)
        totals = MacroProfile.zero()
        for entry in entries:
            totals = totals + entry.totals
        return DailyDiary(day=day, meal_entries=entries, totals=totals)
