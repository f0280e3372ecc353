"""Data models for user profiles and nutrition targets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Sex(Enum):
    """Biological sex for BMR calculation."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | Sex) -> Sex:
        """Parse a case-insensitive sex string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = [s.value for s in cls]
            raise ValueError(f"sex must be one of {valid}, got '{value}'") from None


class ActivityLevel(Enum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "sedentary"                  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly_active"        # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderately_active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "very_active"              # Hard exercise 6-7 days/week
    EXTREMELY_ACTIVE = "extremely_active"    # Very hard exercise, physical job

    @property
    def multiplier(self) -> float:
        return ACTIVITY_MULTIPLIERS[self]

    @classmethod
    def parse(cls, value: str | ActivityLevel) -> ActivityLevel:
        """Parse an activity level.

        Accepts the enum values ("moderately_active"), any casing of them,
        and the onboarding workout-day bands ("1-2", "3-4", "5-6").
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        raw = str(value).strip()
        if raw in WORKOUT_DAY_BANDS:
            return WORKOUT_DAY_BANDS[raw]
        try:
            return cls(key)
        except ValueError:
            valid = [a.value for a in cls] + list(WORKOUT_DAY_BANDS)
            raise ValueError(
                f"activity_level must be one of {valid}, got '{value}'"
            ) from None


class Goal(Enum):
    """Body composition goal."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN_WEIGHT = "maintain_weight"
    GAIN_MUSCLE = "gain_muscle"

    @classmethod
    def parse(cls, value: str | Goal) -> Goal:
        """Parse a goal string.

        Accepts "lose_weight", "LoseWeight" and the short forms "lose",
        "maintain" and "gain".
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        if key in GOAL_ALIASES:
            return GOAL_ALIASES[key]
        try:
            return cls(key.lower())
        except ValueError:
            valid = [g.value for g in cls] + ["lose", "maintain", "gain"]
            raise ValueError(f"goal must be one of {valid}, got '{value}'") from None


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

# Onboarding asks for workout days per week instead of a named level
WORKOUT_DAY_BANDS = {
    "1-2": ActivityLevel.SEDENTARY,
    "3-4": ActivityLevel.LIGHTLY_ACTIVE,
    "5-6": ActivityLevel.MODERATELY_ACTIVE,
}

GOAL_ALIASES = {
    "LoseWeight": Goal.LOSE_WEIGHT,
    "MaintainWeight": Goal.MAINTAIN_WEIGHT,
    "GainMuscle": Goal.GAIN_MUSCLE,
    "lose": Goal.LOSE_WEIGHT,
    "maintain": Goal.MAINTAIN_WEIGHT,
    "gain": Goal.GAIN_MUSCLE,
}


@dataclass
class UserProfile:
    """Body metrics and preferences the target calculators read.

    Values are not validated here: age, height and weight must be positive
    for the results to mean anything, and callers check that first.
    """

    age: int
    sex: Sex
    height_cm: float
    weight_kg: float
    goal: Goal
    activity_level: ActivityLevel
    target_bedtime: str = "23:00"  # "HH:MM"
    target_sleep_hours: float = 8.0
    target_weight_kg: Optional[float] = None
    weekly_pace_kg: Optional[float] = None  # None: use TargetsConfig.weekly_pace_kg

    @classmethod
    def from_strings(
        cls,
        age: int,
        sex: str,
        height_cm: float,
        weight_kg: float,
        goal: str,
        activity_level: str,
        **kwargs,
    ) -> UserProfile:
        """Build a profile, parsing the enum fields from strings.

        Raises:
            ValueError: If sex, goal or activity level is not recognised
        """
        return cls(
            age=int(age),
            sex=Sex.parse(sex),
            height_cm=float(height_cm),
            weight_kg=float(weight_kg),
            goal=Goal.parse(goal),
            activity_level=ActivityLevel.parse(activity_level),
            **kwargs,
        )


@dataclass(frozen=True)
class CalorieRange:
    """Daily calorie window, min <= max."""

    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    @property
    def tolerance(self) -> float:
        """Half-width of the window."""
        return (self.max - self.min) / 2

    def contains(self, calories: float) -> bool:
        """Check whether calories fall inside the window (inclusive)."""
        return self.min <= calories <= self.max


@dataclass(frozen=True)
class MacroTargets:
    """Macronutrient targets in grams and as fractions of calories."""

    protein_grams: float
    carbs_grams: float
    fat_grams: float
    protein_percent: float
    carbs_percent: float
    fat_percent: float
    calories: float = 0.0  # calories the grams were derived from

    @property
    def percent_total(self) -> float:
        return self.protein_percent + self.carbs_percent + self.fat_percent


@dataclass(frozen=True)
class DailyGoals:
    """Integer daily goals shown in the onboarding summary."""

    calories: int
    protein: int
    carbs: int
    fat: int
    strategy: str

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "strategy": self.strategy,
        }


def age_from_birth_date(birth_date: date, today: Optional[date] = None) -> int:
    """Return completed years between birth_date and today.

    Args:
        birth_date: Date of birth
        today: Reference date, defaults to date.today()

    Returns:
        Age in whole years (0 for future birth dates)
    """
    if today is None:
        today = date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return max(years, 0)
