"""Personalised nutrition targets and daily lifestyle scoring."""

from __future__ import annotations

from nutrigoal.meals.models import DailyMealSummary, Meal, MealType
from nutrigoal.profiles.body_calc import (
    calculate_calorie_range,
    calculate_daily_goals,
    calculate_macro_targets,
)
from nutrigoal.profiles.models import ActivityLevel, Goal, Sex, UserProfile
from nutrigoal.scoring.calculator import calculate_lifestyle_score

__version__ = "0.1.0"

__all__ = [
    "ActivityLevel",
    "DailyMealSummary",
    "Goal",
    "Meal",
    "MealType",
    "Sex",
    "UserProfile",
    "calculate_calorie_range",
    "calculate_daily_goals",
    "calculate_lifestyle_score",
    "calculate_macro_targets",
]
