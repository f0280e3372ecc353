"""Pytest fixtures for nutrigoal tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

import nutrigoal.config.settings as settings_module
from nutrigoal.meals.models import DailyMealSummary, Meal, MealType
from nutrigoal.profiles.models import ActivityLevel, Goal, Sex, UserProfile


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the home directory at tmp_path and drop cached settings."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(settings_module, "_settings", None)
    yield home


@pytest.fixture
def sample_profile() -> UserProfile:
    """30 year old male, 180 cm, 80 kg, moderately active, losing weight."""
    return UserProfile(
        age=30,
        sex=Sex.MALE,
        height_cm=180,
        weight_kg=80,
        goal=Goal.LOSE_WEIGHT,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        target_bedtime="23:00",
        target_sleep_hours=7.0,
    )


@pytest.fixture
def sample_meals() -> list[Meal]:
    """A plain day of eating, logged in order."""
    return [
        Meal(
            name="Oats with berries",
            calories=420,
            protein_grams=18,
            carbs_grams=60,
            fat_grams=12,
            meal_type=MealType.BREAKFAST,
            fiber_grams=8,
        ),
        Meal(
            name="Chicken rice bowl",
            calories=650,
            protein_grams=45,
            carbs_grams=70,
            fat_grams=18,
            meal_type=MealType.LUNCH,
        ),
        Meal(
            name="Greek yogurt",
            calories=150,
            protein_grams=15,
            carbs_grams=12,
            fat_grams=4,
            meal_type=MealType.SNACK,
        ),
        Meal(
            name="Salmon and potatoes",
            calories=700,
            protein_grams=42,
            carbs_grams=55,
            fat_grams=32,
            meal_type=MealType.DINNER,
            fiber_grams=6,
        ),
        Meal(
            name="Apple",
            calories=95,
            protein_grams=0.5,
            carbs_grams=22,
            fat_grams=0.3,
            meal_type=MealType.SNACK,
            fiber_grams=4,
        ),
    ]


@pytest.fixture
def sample_summary(sample_meals) -> DailyMealSummary:
    return DailyMealSummary(date="2025-06-07", meals=sample_meals)


@pytest.fixture
def profile_file(tmp_path) -> Path:
    """Profile YAML with an unquoted bedtime, as people tend to write it."""
    path = tmp_path / "profile.yaml"
    path.write_text(
        "age: 30\n"
        "sex: male\n"
        "height_cm: 180\n"
        "weight_kg: 80\n"
        "activity_level: moderately_active\n"
        "goal: lose_weight\n"
        "target_bedtime: 23:00\n"
        "target_sleep_hours: 7.0\n"
    )
    return path


@pytest.fixture
def day_file(tmp_path, sample_meals) -> Path:
    path = tmp_path / "day.yaml"
    data = {
        "date": "2025-06-07",
        "meals": [m.to_dict() for m in sample_meals],
        "steps": 9200,
        "workout_minutes": 35,
        "sleep_hours": 7.2,
        "actual_bedtime": "23:15",
        "water_liters": 1.8,
    }
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path
