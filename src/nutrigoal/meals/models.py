"""Logged meals and their daily aggregation.

Totals and percentages are computed on access from the meal list and are
never stored, so they cannot drift from the meals they summarise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from nutrigoal.profiles.body_calc import (
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PROTEIN,
)

# Macro calories may differ from labelled calories by this fraction
MACRO_DISCREPANCY_THRESHOLD = 0.10


class MealType(Enum):
    """Slot of the day a meal was eaten in."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def parse(cls, value: str | MealType) -> MealType:
        """Parse a case-insensitive meal type string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = [m.value for m in cls]
            raise ValueError(f"meal_type must be one of {valid}, got '{value}'") from None


def _percent_of(kcal: float, total_calories: float) -> float:
    if total_calories <= 0:
        return 0.0
    return kcal / total_calories * 100


@dataclass(frozen=True)
class Meal:
    """A single logged meal. Corrections are logged as a new Meal."""

    calories: float
    protein_grams: float
    carbs_grams: float
    fat_grams: float
    meal_type: MealType
    name: str = ""
    fiber_grams: Optional[float] = None
    sugar_grams: Optional[float] = None
    sodium_mg: Optional[float] = None

    @property
    def macro_calories(self) -> float:
        """Calories implied by the macros (4/4/9 kcal per gram)."""
        return (
            self.protein_grams * KCAL_PER_GRAM_PROTEIN
            + self.carbs_grams * KCAL_PER_GRAM_CARBS
            + self.fat_grams * KCAL_PER_GRAM_FAT
        )

    @property
    def protein_percent(self) -> float:
        return _percent_of(self.protein_grams * KCAL_PER_GRAM_PROTEIN, self.calories)

    @property
    def carbs_percent(self) -> float:
        return _percent_of(self.carbs_grams * KCAL_PER_GRAM_CARBS, self.calories)

    @property
    def fat_percent(self) -> float:
        return _percent_of(self.fat_grams * KCAL_PER_GRAM_FAT, self.calories)

    @property
    def has_macro_discrepancy(self) -> bool:
        """True when macro calories differ from calories by more than 10%."""
        difference = abs(self.calories - self.macro_calories)
        return difference > self.calories * MACRO_DISCREPANCY_THRESHOLD

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        data = {
            "name": self.name,
            "meal_type": self.meal_type.value,
            "calories": self.calories,
            "protein_grams": self.protein_grams,
            "carbs_grams": self.carbs_grams,
            "fat_grams": self.fat_grams,
        }
        for key in ("fiber_grams", "sugar_grams", "sodium_mg"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class DailyMealSummary:
    """All meals logged for one day, in logging order."""

    date: str  # "YYYY-MM-DD"
    meals: tuple[Meal, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but keep an immutable copy
        object.__setattr__(self, "meals", tuple(self.meals))

    @property
    def meal_count(self) -> int:
        return len(self.meals)

    @property
    def total_calories(self) -> float:
        return sum(m.calories for m in self.meals)

    @property
    def total_protein(self) -> float:
        return sum(m.protein_grams for m in self.meals)

    @property
    def total_carbs(self) -> float:
        return sum(m.carbs_grams for m in self.meals)

    @property
    def total_fat(self) -> float:
        return sum(m.fat_grams for m in self.meals)

    @property
    def total_fiber(self) -> float:
        return sum(m.fiber_grams or 0.0 for m in self.meals)

    @property
    def protein_percent(self) -> float:
        return _percent_of(self.total_protein * KCAL_PER_GRAM_PROTEIN, self.total_calories)

    @property
    def carbs_percent(self) -> float:
        return _percent_of(self.total_carbs * KCAL_PER_GRAM_CARBS, self.total_calories)

    @property
    def fat_percent(self) -> float:
        return _percent_of(self.total_fat * KCAL_PER_GRAM_FAT, self.total_calories)

    @property
    def meals_by_type(self) -> dict[MealType, list[Meal]]:
        """Group meals by type; order within a group follows logging order."""
        groups: dict[MealType, list[Meal]] = {}
        for meal in self.meals:
            groups.setdefault(meal.meal_type, []).append(meal)
        return groups

    @property
    def discrepant_meals(self) -> list[Meal]:
        """Meals whose macros do not add up to their calories."""
        return [m for m in self.meals if m.has_macro_discrepancy]

    def totals_dict(self) -> dict:
        """Totals and percentages for JSON output."""
        return {
            "date": self.date,
            "meal_count": self.meal_count,
            "calories": round(self.total_calories, 1),
            "protein_grams": round(self.total_protein, 1),
            "carbs_grams": round(self.total_carbs, 1),
            "fat_grams": round(self.total_fat, 1),
            "protein_percent": round(self.protein_percent, 1),
            "carbs_percent": round(self.carbs_percent, 1),
            "fat_percent": round(self.fat_percent, 1),
        }
