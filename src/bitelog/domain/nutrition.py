"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile, per 100 g or as absolute totals."""

    calories: float
    proteins: float
    fats: float
    carbs: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return an all-zero profile."""
        return cls(calories=0.0, proteins=0.0, fats=0.0, carbs=0.0)

    def scaled(self, factor: float) -> "MacroProfile":
        """Return the profile multiplied by a factor."""
        return MacroProfile(
            calories=self.calories * factor,
            proteins=self.proteins * factor,
            fats=self.fats * factor,
            carbs=self.carbs * factor,
        )

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            proteins=self.proteins + other.proteins,
            fats=self.fats + other.fats,
            carbs=self.carbs + other.carbs,
        )
