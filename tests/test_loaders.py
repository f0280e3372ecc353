"""Tests for profile, day and history file loading."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from nutrigoal.data.loaders import (
    LoaderError,
    day_from_dict,
    dump_score_history,
    load_day,
    load_profile,
    load_score_history,
    meal_from_dict,
    profile_from_dict,
    score_from_dict,
)
from nutrigoal.meals.models import MealType
from nutrigoal.profiles.models import ActivityLevel, Goal, Sex
from nutrigoal.scoring.calculator import score_day
from nutrigoal.scoring.models import DailyActuals
from nutrigoal.scoring.report import summarize_scores


class TestProfileLoading:
    """Tests for profile files."""

    def test_unquoted_bedtime(self, profile_file: Path) -> None:
        """An unquoted 23:00 in YAML still reads as a clock time."""
        profile = load_profile(profile_file)
        assert profile.target_bedtime == "23:00"
        assert profile.sex == Sex.MALE
        assert profile.activity_level == ActivityLevel.MODERATELY_ACTIVE
        assert profile.goal == Goal.LOSE_WEIGHT
        assert profile.target_sleep_hours == 7.0

    def test_json_profile(self, tmp_path: Path) -> None:
        path = tmp_path / "profile.json"
        path.write_text(
            json.dumps(
                {
                    "age": 41,
                    "sex": "other",
                    "height_cm": 170,
                    "weight_kg": 68.5,
                    "activity_level": "3-4",
                    "goal": "gain",
                    "target_weight_kg": 72,
                }
            )
        )
        profile = load_profile(path)
        assert profile.sex == Sex.OTHER
        assert profile.activity_level == ActivityLevel.LIGHTLY_ACTIVE
        assert profile.target_weight_kg == 72.0
        assert profile.target_bedtime == "23:00"

    def test_missing_keys(self) -> None:
        with pytest.raises(LoaderError, match="missing required keys: height_cm, goal"):
            profile_from_dict(
                {"age": 30, "sex": "male", "weight_kg": 80, "activity_level": "sedentary"}
            )

    def test_bad_enum(self) -> None:
        with pytest.raises(LoaderError, match="Invalid profile"):
            profile_from_dict(
                {
                    "age": 30,
                    "sex": "male",
                    "height_cm": 180,
                    "weight_kg": 80,
                    "activity_level": "couch",
                    "goal": "lose",
                }
            )

    def test_not_a_mapping(self) -> None:
        with pytest.raises(LoaderError, match="profile must be a mapping"):
            profile_from_dict(["age", 30])

    def test_unparseable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LoaderError, match="Could not parse"):
            load_profile(path)


class TestDayLoading:
    """Tests for day log files."""

    def test_day_file(self, day_file: Path) -> None:
        summary, actuals = load_day(day_file)
        assert summary.date == "2025-06-07"
        assert summary.meal_count == 5
        assert summary.total_calories == pytest.approx(2015)
        assert summary.meals[0].fiber_grams == 8
        assert summary.meals[1].fiber_grams is None
        assert actuals.steps == 9200
        assert actuals.actual_bedtime == "23:15"
        assert actuals.water_liters == 1.8

    def test_defaults_for_missing_actuals(self) -> None:
        summary, actuals = day_from_dict({"date": "2025-06-07"})
        assert summary.meal_count == 0
        assert actuals.steps == 0
        assert actuals.actual_bedtime == ""

    def test_unquoted_date_and_bedtime(self, tmp_path: Path) -> None:
        path = tmp_path / "day.yaml"
        path.write_text("date: 2025-06-07\nactual_bedtime: 22:45\n")
        summary, actuals = load_day(path)
        assert summary.date == "2025-06-07"
        assert actuals.actual_bedtime == "22:45"

    def test_meals_must_be_list(self) -> None:
        with pytest.raises(LoaderError, match="day.meals must be a list"):
            day_from_dict({"date": "2025-06-07", "meals": {"calories": 100}})

    def test_bad_meal(self) -> None:
        with pytest.raises(LoaderError, match="Invalid meal"):
            meal_from_dict(
                {
                    "calories": "lots",
                    "protein_grams": 1,
                    "carbs_grams": 1,
                    "fat_grams": 1,
                    "meal_type": "snack",
                }
            )

    def test_meal_type_parsed(self) -> None:
        meal = meal_from_dict(
            {
                "calories": 100,
                "protein_grams": 5,
                "carbs_grams": 15,
                "fat_grams": 2,
                "meal_type": "Snack",
            }
        )
        assert meal.meal_type == MealType.SNACK
        assert meal.name == ""

    def test_non_numeric_actuals(self) -> None:
        with pytest.raises(LoaderError, match="Invalid day actuals"):
            day_from_dict({"date": "2025-06-07", "steps": "many"})


class TestScoreHistory:
    """Tests for saving and reloading scores."""

    def test_round_trip(self, tmp_path: Path, sample_profile, sample_summary) -> None:
        """Reloaded scores keep their components and overall score."""
        score = score_day(
            sample_profile,
            sample_summary,
            DailyActuals(9200, 35, 7.2, "23:15", 1.8),
            computed_at=datetime(2025, 6, 7, 21, 0),
        )
        path = tmp_path / "history" / "scores.json"
        dump_score_history([score], path)

        loaded = load_score_history(path)
        assert len(loaded) == 1
        assert loaded[0].date == "2025-06-07"
        assert loaded[0].computed_at == datetime(2025, 6, 7, 21, 0)
        assert loaded[0].overall_score == pytest.approx(score.overall_score, abs=0.01)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.yaml"
        path.write_text("")
        assert load_score_history(path) == []

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.json"
        path.write_text('{"date": "2025-06-07"}')
        with pytest.raises(LoaderError, match="must contain a list"):
            load_score_history(path)

    def test_yaml_timestamp(self) -> None:
        """A computed_at already parsed by YAML is accepted as is."""
        score = score_from_dict(
            {
                "date": "2025-06-07",
                "computed_at": datetime(2025, 6, 7, 8, 30),
                "components": {"hydration": 10, "consistency": 5, "additional": 5},
                "sub_scores": {
                    "calorie_adherence": 10,
                    "macro_balance": 10,
                    "steps": 10,
                    "workout": 10,
                    "sleep_duration": 10,
                    "bedtime_consistency": 10,
                },
            }
        )
        assert score.computed_at == datetime(2025, 6, 7, 8, 30)
        assert score.overall_score == pytest.approx(9.0)

    def test_history_with_and_without_offsets(self, tmp_path: Path) -> None:
        """An entry without computed_at and one with a UTC offset share a date."""
        sub_scores = {
            "calorie_adherence": 10,
            "macro_balance": 10,
            "steps": 10,
            "workout": 10,
            "sleep_duration": 10,
            "bedtime_consistency": 10,
        }
        entries = [
            {
                "date": "2025-06-07",
                "components": {"hydration": 0, "consistency": 0, "additional": 0},
                "sub_scores": sub_scores,
            },
            {
                "date": "2025-06-07",
                "computed_at": "2025-06-07T08:00:00+00:00",
                "components": {"hydration": 10, "consistency": 10, "additional": 10},
                "sub_scores": sub_scores,
            },
        ]
        path = tmp_path / "scores.json"
        path.write_text(json.dumps(entries))

        loaded = load_score_history(path)
        assert all(score.computed_at.tzinfo is None for score in loaded)
        report = summarize_scores(loaded, end_date=date(2025, 6, 7))
        assert report.days_scored == 1
        assert report.average_overall == pytest.approx(10.0)

    def test_sub_scores_clamped_on_load(self) -> None:
        """Hand-edited sub-scores above 10 are read back within range."""
        score = score_from_dict(
            {
                "date": "2025-06-07",
                "components": {"hydration": 10, "consistency": 5, "additional": 5},
                "sub_scores": {
                    "calorie_adherence": 40,
                    "macro_balance": 10,
                    "steps": 10,
                    "workout": 10,
                    "sleep_duration": 10,
                    "bedtime_consistency": 10,
                },
            }
        )
        assert score.components.sub_scores()["calorie_adherence"] == 10.0
        assert score.components.nutrition_score == 10.0
        assert score.overall_score == pytest.approx(9.0)

    def test_missing_sub_scores(self) -> None:
        with pytest.raises(LoaderError, match="score is missing required keys: sub_scores"):
            score_from_dict({"date": "2025-06-07", "components": {}})
