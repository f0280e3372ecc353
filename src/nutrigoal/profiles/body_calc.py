"""Body composition calculator for calorie and macro targets.

Calculates TDEE (Total Daily Energy Expenditure), a daily calorie window
and macronutrient targets from body metrics, activity level and goal
(lose weight, maintain, gain muscle).

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate.
"""

from __future__ import annotations

import logging
from typing import Optional

from nutrigoal.config.settings import TargetsConfig
from nutrigoal.profiles.models import (
    ACTIVITY_MULTIPLIERS,
    ActivityLevel,
    CalorieRange,
    DailyGoals,
    Goal,
    MacroTargets,
    Sex,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Mifflin-St Jeor sex offsets
MALE_OFFSET = 5.0
FEMALE_OFFSET = -161.0

# Atwater factors (kcal per gram)
KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_CARBS = 4.0
KCAL_PER_GRAM_FAT = 9.0

# Calorie multiplier applied to TDEE by goal
GOAL_CALORIE_FACTORS = {
    Goal.LOSE_WEIGHT: 0.80,      # 20% deficit
    Goal.MAINTAIN_WEIGHT: 1.00,
    Goal.GAIN_MUSCLE: 1.10,      # 10% surplus
}

# (protein, carbs, fat) as fractions of calories
MACRO_SPLITS = {
    Goal.LOSE_WEIGHT: (0.30, 0.40, 0.30),      # High protein to preserve muscle
    Goal.MAINTAIN_WEIGHT: (0.25, 0.45, 0.30),  # Balanced
    Goal.GAIN_MUSCLE: (0.30, 0.50, 0.20),      # High protein, high carbs
}


def calculate_bmr(
    age: int,
    sex: Sex,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    For Sex.OTHER the male and female results are averaged.

    Args:
        age: Age in years
        sex: Biological sex
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day
    """
    base = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)

    if sex == Sex.MALE:
        return base + MALE_OFFSET
    if sex == Sex.FEMALE:
        return base + FEMALE_OFFSET
    return ((base + MALE_OFFSET) + (base + FEMALE_OFFSET)) / 2


def calculate_tdee(
    bmr: float,
    activity_level: ActivityLevel,
) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level

    Returns:
        TDEE in calories per day
    """
    multiplier = ACTIVITY_MULTIPLIERS[activity_level]
    return bmr * multiplier


def profile_tdee(profile: UserProfile) -> float:
    """BMR x activity multiplier for a profile."""
    bmr = calculate_bmr(profile.age, profile.sex, profile.height_cm, profile.weight_kg)
    tdee = calculate_tdee(bmr, profile.activity_level)
    logger.debug("BMR %.1f, TDEE %.1f (%s)", bmr, tdee, profile.activity_level.value)
    return tdee


def calculate_calorie_range(
    profile: UserProfile,
    config: Optional[TargetsConfig] = None,
) -> CalorieRange:
    """Calculate the daily calorie window for a profile.

    The goal scales TDEE (0.8 to lose, 1.0 to maintain, 1.1 to gain) and
    the window is target +/- calorie_band (100 kcal by default). No lower
    floor is applied.

    Args:
        profile: User profile
        config: Target settings, defaults to TargetsConfig()

    Returns:
        CalorieRange centred on the goal-adjusted TDEE
    """
    if config is None:
        config = TargetsConfig()

    target = profile_tdee(profile) * GOAL_CALORIE_FACTORS[profile.goal]
    return CalorieRange(
        min=target - config.calorie_band,
        max=target + config.calorie_band,
    )


def macro_grams(
    calories: float,
    split: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Convert a (protein, carbs, fat) split of calories to grams."""
    protein_pct, carbs_pct, fat_pct = split
    return (
        calories * protein_pct / KCAL_PER_GRAM_PROTEIN,
        calories * carbs_pct / KCAL_PER_GRAM_CARBS,
        calories * fat_pct / KCAL_PER_GRAM_FAT,
    )


def calculate_macro_targets(
    profile: UserProfile,
    config: Optional[TargetsConfig] = None,
) -> MacroTargets:
    """Calculate macro targets from the midpoint of the calorie window.

    Args:
        profile: User profile
        config: Target settings, defaults to TargetsConfig()

    Returns:
        MacroTargets with grams and percent split for the profile's goal
    """
    calories = calculate_calorie_range(profile, config).midpoint
    split = MACRO_SPLITS[profile.goal]
    protein, carbs, fat = macro_grams(calories, split)

    return MacroTargets(
        protein_grams=protein,
        carbs_grams=carbs,
        fat_grams=fat,
        protein_percent=split[0],
        carbs_percent=split[1],
        fat_percent=split[2],
        calories=calories,
    )


def calculate_daily_goals(
    age: int,
    sex: str | Sex,
    height_cm: float,
    weight_kg: float,
    activity_level: str | ActivityLevel,
    goal: str | Goal,
    weekly_pace_kg: float,
    config: Optional[TargetsConfig] = None,
) -> DailyGoals:
    """Calculate integer daily goals with the pace-driven rule.

    Losing weight subtracts weekly_pace_kg x 7700 / 7 kcal from TDEE with a
    1200 kcal floor; gaining adds a fixed surplus. This is the onboarding
    entry point and the "weekly_pace" strategy.

    Args:
        age: Age in years
        sex: "male", "female" or "other"
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms
        activity_level: Activity level name or onboarding band ("3-4")
        goal: Goal name ("lose_weight", "lose", "LoseWeight", ...)
        weekly_pace_kg: Target weekly change in kg
        config: Target settings, defaults to TargetsConfig()

    Returns:
        DailyGoals with calories and macro grams

    Raises:
        ValueError: If sex, activity level or goal cannot be parsed
    """
    from nutrigoal.profiles.strategies import WeeklyPaceStrategy

    profile = UserProfile(
        age=int(age),
        sex=Sex.parse(sex),
        height_cm=float(height_cm),
        weight_kg=float(weight_kg),
        goal=Goal.parse(goal),
        activity_level=ActivityLevel.parse(activity_level),
        weekly_pace_kg=float(weekly_pace_kg),
    )
    return WeeklyPaceStrategy().daily_goals(profile, config)


def targets_to_dict(calorie_range: CalorieRange, macros: MacroTargets) -> dict:
    """Convert a calorie range and macro targets to dict for JSON output."""
    return {
        "calories": {
            "min": round(calorie_range.min, 1),
            "max": round(calorie_range.max, 1),
            "midpoint": round(calorie_range.midpoint, 1),
        },
        "macros": {
            "protein": {
                "grams": round(macros.protein_grams, 1),
                "percent": macros.protein_percent,
            },
            "carbs": {
                "grams": round(macros.carbs_grams, 1),
                "percent": macros.carbs_percent,
            },
            "fat": {
                "grams": round(macros.fat_grams, 1),
                "percent": macros.fat_percent,
            },
        },
    }
