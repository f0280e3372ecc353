"""Loading profiles, day logs and score history from YAML or JSON files.

Profile file:
    age: 30
    sex: male
    height_cm: 180
    weight_kg: 80
    activity_level: moderately_active
    goal: lose_weight
    target_bedtime: "23:00"
    target_sleep_hours: 7.5

Day file:
    date: "2025-06-07"
    meals:
      - {name: Oats, meal_type: breakfast, calories: 420, protein_grams: 18,
         carbs_grams: 60, fat_grams: 12}
    steps: 9200
    workout_minutes: 35
    sleep_hours: 7.2
    actual_bedtime: "23:15"
    water_liters: 1.8

History file: a list of LifestyleScore.to_dict() mappings.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from nutrigoal.config.settings import ScoringWeights
from nutrigoal.meals.models import DailyMealSummary, Meal, MealType
from nutrigoal.profiles.models import UserProfile
from nutrigoal.scoring.models import DailyActuals, LifestyleScore, ScoreComponents

PROFILE_REQUIRED = ("age", "sex", "height_cm", "weight_kg", "activity_level", "goal")
MEAL_REQUIRED = ("calories", "protein_grams", "carbs_grams", "fat_grams", "meal_type")


class LoaderError(ValueError):
    """Raised when an input file is missing data or malformed."""


def _clock(value: Any) -> str:
    """Normalise a clock value to "HH:MM".

    YAML 1.1 reads an unquoted 23:00 as the base-60 integer 1380.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value // 60:02d}:{value % 60:02d}"
    return str(value)


def read_document(path: Path) -> Any:
    """Read a YAML or JSON document, choosing the parser by suffix.

    Raises:
        LoaderError: If the file cannot be parsed
    """
    try:
        with open(path) as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LoaderError(f"Could not parse {path}: {e}") from e


def _require(data: Any, keys: tuple[str, ...], what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise LoaderError(f"{what} must be a mapping")
    missing = [k for k in keys if k not in data]
    if missing:
        raise LoaderError(f"{what} is missing required keys: {', '.join(missing)}")
    return data


def profile_from_dict(data: Any) -> UserProfile:
    """Build a UserProfile from a mapping.

    Raises:
        LoaderError: On missing keys or unparseable values
    """
    data = _require(data, PROFILE_REQUIRED, "profile")
    optional: dict[str, Any] = {}
    if "target_bedtime" in data:
        optional["target_bedtime"] = _clock(data["target_bedtime"])

    try:
        for key in ("target_sleep_hours", "target_weight_kg", "weekly_pace_kg"):
            if data.get(key) is not None:
                optional[key] = float(data[key])
        return UserProfile.from_strings(
            age=data["age"],
            sex=data["sex"],
            height_cm=data["height_cm"],
            weight_kg=data["weight_kg"],
            goal=data["goal"],
            activity_level=data["activity_level"],
            **optional,
        )
    except (TypeError, ValueError) as e:
        raise LoaderError(f"Invalid profile: {e}") from e


def meal_from_dict(data: Any) -> Meal:
    """Build a Meal from a mapping.

    Raises:
        LoaderError: On missing keys or unparseable values
    """
    data = _require(data, MEAL_REQUIRED, "meal")

    def _optional(key: str):
        value = data.get(key)
        return float(value) if value is not None else None

    try:
        return Meal(
            calories=float(data["calories"]),
            protein_grams=float(data["protein_grams"]),
            carbs_grams=float(data["carbs_grams"]),
            fat_grams=float(data["fat_grams"]),
            meal_type=MealType.parse(data["meal_type"]),
            name=str(data.get("name", "")),
            fiber_grams=_optional("fiber_grams"),
            sugar_grams=_optional("sugar_grams"),
            sodium_mg=_optional("sodium_mg"),
        )
    except (TypeError, ValueError) as e:
        raise LoaderError(f"Invalid meal: {e}") from e


def day_from_dict(data: Any) -> tuple[DailyMealSummary, DailyActuals]:
    """Split a day mapping into its meal summary and actuals.

    Missing actuals default to zero and an empty bedtime.

    Raises:
        LoaderError: On missing date, malformed meals or non-numeric actuals
    """
    data = _require(data, ("date",), "day")
    meals = data.get("meals") or []
    if not isinstance(meals, list):
        raise LoaderError("day.meals must be a list")

    summary = DailyMealSummary(
        date=str(data["date"]),
        meals=tuple(meal_from_dict(m) for m in meals),
    )
    try:
        actuals = DailyActuals(
            steps=int(data.get("steps", 0)),
            workout_minutes=float(data.get("workout_minutes", 0.0)),
            sleep_hours=float(data.get("sleep_hours", 0.0)),
            actual_bedtime=_clock(data.get("actual_bedtime", "")),
            water_liters=float(data.get("water_liters", 0.0)),
        )
    except (TypeError, ValueError) as e:
        raise LoaderError(f"Invalid day actuals: {e}") from e
    return summary, actuals


def score_from_dict(
    data: Any,
    weights: ScoringWeights | None = None,
) -> LifestyleScore:
    """Rebuild a LifestyleScore from LifestyleScore.to_dict() output.

    The overall score is recomputed from the stored components.

    Raises:
        LoaderError: On missing keys or unparseable values
    """
    data = _require(data, ("date", "components", "sub_scores"), "score")
    components = _require(
        data["components"], ("hydration", "consistency", "additional"), "score.components"
    )
    sub = _require(
        data["sub_scores"],
        (
            "calorie_adherence",
            "macro_balance",
            "steps",
            "workout",
            "sleep_duration",
            "bedtime_consistency",
        ),
        "score.sub_scores",
    )
    try:
        computed_at = data.get("computed_at") or datetime.min
        if not isinstance(computed_at, datetime):
            computed_at = datetime.fromisoformat(str(computed_at))
        return LifestyleScore(
            date=str(data["date"]),
            components=ScoreComponents(
                calorie_adherence=float(sub["calorie_adherence"]),
                macro_balance=float(sub["macro_balance"]),
                steps_score=float(sub["steps"]),
                workout_score=float(sub["workout"]),
                sleep_duration=float(sub["sleep_duration"]),
                bedtime_consistency=float(sub["bedtime_consistency"]),
                hydration_score=float(components["hydration"]),
                consistency_score=float(components["consistency"]),
                additional_score=float(components["additional"]),
                weights=weights or ScoringWeights(),
            ),
            computed_at=computed_at,
        )
    except (TypeError, ValueError) as e:
        raise LoaderError(f"Invalid score: {e}") from e


def load_profile(path: Path) -> UserProfile:
    """Load a user profile file."""
    return profile_from_dict(read_document(path))


def load_day(path: Path) -> tuple[DailyMealSummary, DailyActuals]:
    """Load a day log file."""
    return day_from_dict(read_document(path))


def load_score_history(
    path: Path,
    weights: ScoringWeights | None = None,
) -> list[LifestyleScore]:
    """Load a list of stored scores."""
    data = read_document(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise LoaderError(f"{path} must contain a list of scores")
    return [score_from_dict(item, weights) for item in data]


def dump_score_history(scores: list[LifestyleScore], path: Path) -> None:
    """Write scores as a JSON list readable by load_score_history()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump([s.to_dict() for s in scores], f, indent=2)
