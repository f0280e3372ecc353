"""Tests for the lifestyle score calculator."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from nutrigoal.config.settings import ScoringConfig, ScoringWeights
from nutrigoal.meals.models import DailyMealSummary, Meal, MealType
from nutrigoal.profiles.body_calc import calculate_macro_targets
from nutrigoal.profiles.models import CalorieRange, MacroTargets
from nutrigoal.scoring.calculator import (
    bedtime_consistency_score,
    calculate_lifestyle_score,
    calorie_adherence_score,
    clamp_score,
    hydration_score,
    macro_balance_score,
    parse_clock_minutes,
    score_day,
    sleep_duration_score,
    steps_score,
    workout_score,
)
from nutrigoal.scoring.models import DailyActuals, ScoreComponents

RANGE = CalorieRange(min=1900, max=2100)
TARGETS = MacroTargets(
    protein_grams=100,
    carbs_grams=200,
    fat_grams=50,
    protein_percent=0.25,
    carbs_percent=0.45,
    fat_percent=0.30,
)


def on_target_summary(profile) -> DailyMealSummary:
    """One meal matching the profile's targets exactly."""
    macros = calculate_macro_targets(profile)
    meal = Meal(
        calories=macros.calories,
        protein_grams=macros.protein_grams,
        carbs_grams=macros.carbs_grams,
        fat_grams=macros.fat_grams,
        meal_type=MealType.LUNCH,
    )
    return DailyMealSummary(date="2025-06-07", meals=[meal])


class TestCalorieAdherence:
    """Tests for calorie_adherence_score."""

    def test_midpoint_scores_ten(self) -> None:
        assert calorie_adherence_score(2000, RANGE) == 10.0

    def test_bounds_score_ten(self) -> None:
        """The window is inclusive."""
        assert calorie_adherence_score(1900, RANGE) == 10.0
        assert calorie_adherence_score(2100, RANGE) == 10.0

    def test_penalty_outside_window(self) -> None:
        """150 kcal from the midpoint is 1.5 half-widths: 10 - 7.5."""
        assert calorie_adherence_score(2150, RANGE) == pytest.approx(2.5)

    def test_symmetric_about_midpoint(self) -> None:
        """Eating too little costs the same as eating too much."""
        for offset in (101, 150, 180, 250, 1000):
            assert calorie_adherence_score(2000 - offset, RANGE) == pytest.approx(
                calorie_adherence_score(2000 + offset, RANGE)
            )

    def test_far_off_clamps_to_zero(self) -> None:
        assert calorie_adherence_score(5000, RANGE) == 0.0

    def test_negative_or_nan_intake(self) -> None:
        """Malformed intake degrades to 0."""
        assert calorie_adherence_score(-50, RANGE) == 0.0
        assert calorie_adherence_score(float("nan"), RANGE) == 0.0

    def test_zero_width_window(self) -> None:
        """A zero-width window scores 0 anywhere but its single point."""
        point = CalorieRange(min=2000, max=2000)
        assert calorie_adherence_score(2000, point) == 10.0
        assert calorie_adherence_score(2001, point) == 0.0


class TestMacroBalance:
    """Tests for macro_balance_score."""

    def test_exact_match(self) -> None:
        assert macro_balance_score(100, 200, 50, TARGETS) == pytest.approx(10.0)

    def test_average_relative_deviation(self) -> None:
        """Deviations 0.1, 0.1 and 0 average to 1/15: 10 - 0.667."""
        assert macro_balance_score(110, 180, 50, TARGETS) == pytest.approx(10 - 2 / 3)

    def test_large_deviation_clamps(self) -> None:
        assert macro_balance_score(400, 800, 200, TARGETS) == 0.0

    def test_zero_target_does_not_divide(self) -> None:
        """A zero target counts as met only when nothing was eaten."""
        zero_protein = MacroTargets(0, 200, 50, 0.0, 0.6, 0.4)
        assert macro_balance_score(0, 200, 50, zero_protein) == pytest.approx(10.0)
        assert macro_balance_score(10, 200, 50, zero_protein) == pytest.approx(10 - 10 / 3)


class TestActivityScores:
    """Tests for steps, workout and hydration ratios."""

    def test_steps_bounds(self) -> None:
        assert steps_score(0) == 0.0
        assert steps_score(8000) == 10.0
        assert steps_score(20000) == 10.0

    def test_steps_monotonic(self) -> None:
        values = [steps_score(s) for s in range(0, 9000, 500)]
        assert values == sorted(values)

    def test_steps_custom_goal(self) -> None:
        assert steps_score(5000, goal_steps=10000) == pytest.approx(5.0)

    def test_negative_steps(self) -> None:
        assert steps_score(-100) == 0.0

    def test_workout_reference_session(self) -> None:
        """30 minutes is a full score."""
        assert workout_score(15) == pytest.approx(5.0)
        assert workout_score(30) == 10.0
        assert workout_score(90) == 10.0

    def test_hydration(self) -> None:
        assert hydration_score(1.0) == pytest.approx(5.0)
        assert hydration_score(2.5) == 10.0

    def test_zero_goal(self) -> None:
        """A zero goal is met by any positive amount."""
        assert hydration_score(0.5, goal_liters=0) == 10.0
        assert hydration_score(0, goal_liters=0) == 0.0

    @pytest.mark.parametrize("score", [steps_score, workout_score, hydration_score])
    def test_infinite_amount_saturates(self, score) -> None:
        """+inf is a met goal; NaN and -inf score nothing."""
        assert score(float("inf")) == 10.0
        assert score(float("nan")) == 0.0
        assert score(float("-inf")) == 0.0


class TestSleepScores:
    """Tests for sleep duration and bedtime consistency."""

    def test_duration_on_target(self) -> None:
        assert sleep_duration_score(7.0, 7.0) == 10.0

    def test_duration_within_half_hour(self) -> None:
        assert sleep_duration_score(7.5, 7.0) == 10.0

    def test_duration_penalty(self) -> None:
        """1.5 h over target costs 3 points."""
        assert sleep_duration_score(8.5, 7.0) == pytest.approx(7.0)

    def test_duration_clamps(self) -> None:
        assert sleep_duration_score(2.0, 8.0) == 0.0
        assert sleep_duration_score(-1.0, 8.0) == 0.0

    def test_parse_clock(self) -> None:
        assert parse_clock_minutes("23:10") == 23 * 60 + 10
        assert parse_clock_minutes("7:05") == 425
        assert parse_clock_minutes("00:00") == 0
        for bad in ("", "24:00", "12:60", "noon", "12:30:00", "-1:30", "²3:00"):
            assert parse_clock_minutes(bad) is None

    def test_bedtime_within_tolerance(self) -> None:
        assert bedtime_consistency_score("23:10", "23:00") == 10.0

    def test_bedtime_penalty(self) -> None:
        """45 minutes late costs 1.5 points."""
        assert bedtime_consistency_score("23:45", "23:00") == pytest.approx(8.5)

    def test_bedtime_after_midnight_without_wrap(self) -> None:
        """Same-day arithmetic puts 00:30 and 23:00 1350 minutes apart."""
        assert bedtime_consistency_score("00:30", "23:00") == 0.0

    def test_bedtime_after_midnight_with_wrap(self) -> None:
        """Wrapping measures 90 minutes: 10 - 3."""
        score = bedtime_consistency_score("00:30", "23:00", wrap_midnight=True)
        assert score == pytest.approx(7.0)
        assert bedtime_consistency_score("23:50", "00:10", wrap_midnight=True) == 10.0

    def test_unparseable_bedtime(self) -> None:
        assert bedtime_consistency_score("", "23:00") == 0.0
        assert bedtime_consistency_score("23:00", "late") == 0.0


class TestScoreComponents:
    """Tests for composite roll-up."""

    def test_composites(self) -> None:
        components = ScoreComponents(
            calorie_adherence=10,
            macro_balance=5,
            steps_score=10,
            workout_score=0,
            sleep_duration=10,
            bedtime_consistency=0,
            hydration_score=8,
        )
        assert components.nutrition_score == pytest.approx(8.0)
        assert components.activity_score == pytest.approx(6.0)
        assert components.sleep_score == pytest.approx(7.0)
        # 8 x .25 + 6 x .2 + 7 x .2 + 8 x .15 + 5 x .1 + 5 x .1
        assert components.overall() == pytest.approx(6.8)

    def test_nan_component_does_not_escape(self) -> None:
        """A NaN sub-score counts as 0 without zeroing the rest."""
        components = ScoreComponents(
            calorie_adherence=float("nan"),
            macro_balance=10,
            steps_score=10,
            workout_score=10,
            sleep_duration=10,
            bedtime_consistency=10,
            hydration_score=10,
        )
        assert components.nutrition_score == pytest.approx(4.0)
        assert components.overall() == pytest.approx(7.5)

    def test_out_of_range_sub_scores_clamped(self) -> None:
        """Composites stay in [0, 10] when built from out-of-range sub-scores."""
        components = ScoreComponents(
            calorie_adherence=15,
            macro_balance=15,
            steps_score=-4,
            workout_score=-4,
            sleep_duration=25,
            bedtime_consistency=-1,
            hydration_score=12,
            consistency_score=-3,
            additional_score=40,
        )
        assert components.nutrition_score == 10.0
        assert components.activity_score == 0.0
        assert components.sleep_score == pytest.approx(7.0)
        for value in components.composites().values():
            assert 0.0 <= value <= 10.0
        for value in components.sub_scores().values():
            assert 0.0 <= value <= 10.0
        assert components.composites()["hydration"] == 10.0
        assert components.composites()["additional"] == 10.0

    def test_clamp_score(self) -> None:
        assert clamp_score(-3) == 0.0
        assert clamp_score(12) == 10.0
        assert clamp_score(float("nan")) == 0.0
        assert clamp_score(4.2) == 4.2


class TestCalculateLifestyleScore:
    """Tests for calculate_lifestyle_score."""

    def test_perfect_day_with_default_placeholders(self, sample_profile) -> None:
        """All measured sub-scores at 10 and placeholders at 5 give 9.0."""
        result = calculate_lifestyle_score(
            sample_profile,
            on_target_summary(sample_profile),
            steps=8000,
            workout_minutes=30,
            sleep_hours=7.0,
            actual_bedtime="23:10",
            water_liters=2.0,
        )
        for value in result.components.sub_scores().values():
            assert value == pytest.approx(10.0)
        assert result.components.consistency_score == 5.0
        assert result.components.additional_score == 5.0
        assert result.overall_score == pytest.approx(9.0)
        assert result.date == "2025-06-07"

    def test_overrides(self, sample_profile) -> None:
        """Caller-supplied consistency and additional scores are used."""
        result = calculate_lifestyle_score(
            sample_profile,
            on_target_summary(sample_profile),
            steps=8000,
            workout_minutes=30,
            sleep_hours=7.0,
            actual_bedtime="23:00",
            water_liters=2.0,
            consistency_score=10,
            additional_score=10,
        )
        assert result.overall_score == pytest.approx(10.0)

    def test_precomputed_targets(self, sample_profile, sample_summary) -> None:
        """Passed-in targets replace the profile-derived ones."""
        result = calculate_lifestyle_score(
            sample_profile,
            sample_summary,
            steps=0,
            workout_minutes=0,
            sleep_hours=0,
            actual_bedtime="",
            water_liters=0,
            calorie_range=CalorieRange(min=1915, max=2115),
        )
        assert result.components.calorie_adherence == 10.0

    def test_empty_day(self, sample_profile) -> None:
        """Nothing logged is still a valid, low score."""
        result = calculate_lifestyle_score(
            sample_profile,
            DailyMealSummary(date="2025-06-08"),
            steps=0,
            workout_minutes=0,
            sleep_hours=0,
            actual_bedtime="",
            water_liters=0,
        )
        assert result.components.calorie_adherence == 0.0
        assert result.components.macro_balance == 0.0
        # Only the placeholders contribute: 5 x .1 + 5 x .1
        assert result.overall_score == pytest.approx(1.0)

    def test_non_ascii_digit_bedtime(self, sample_profile) -> None:
        """A superscript digit in the bedtime scores 0 instead of raising."""
        result = calculate_lifestyle_score(
            sample_profile,
            on_target_summary(sample_profile),
            steps=8000,
            workout_minutes=30,
            sleep_hours=7.0,
            actual_bedtime="²3:00",
            water_liters=2.0,
        )
        assert result.components.bedtime_consistency == 0.0
        assert result.components.sleep_duration == 10.0

    def test_aware_timestamp_stored_naive(self, sample_profile) -> None:
        """An aware computed_at is kept as naive local time."""
        stamp = datetime(2025, 6, 7, 8, 0, tzinfo=timezone.utc)
        result = calculate_lifestyle_score(
            sample_profile,
            on_target_summary(sample_profile),
            steps=8000,
            workout_minutes=30,
            sleep_hours=7.0,
            actual_bedtime="23:00",
            water_liters=2.0,
            computed_at=stamp,
        )
        assert result.computed_at.tzinfo is None
        assert result.computed_at == stamp.astimezone().replace(tzinfo=None)

    @pytest.mark.parametrize(
        "steps, workout, sleep, bedtime, water, calories",
        [
            (10**12, 1e9, 1e9, "23:00", 1e9, 1e12),
            (-10**6, -5, -8, "", -3, -500),
            (0, float("nan"), float("nan"), "xx:yy", float("nan"), float("nan")),
            (5000, float("inf"), float("-inf"), "00:00", float("inf"), float("inf")),
        ],
    )
    def test_overall_always_in_range(
        self, sample_profile, steps, workout, sleep, bedtime, water, calories
    ) -> None:
        """Extreme and malformed inputs never produce NaN or leave [0, 10]."""
        summary = DailyMealSummary(
            date="2025-06-07",
            meals=[Meal(calories, calories, calories, calories, MealType.DINNER)],
        )
        result = calculate_lifestyle_score(
            sample_profile,
            summary,
            steps=steps,
            workout_minutes=workout,
            sleep_hours=sleep,
            actual_bedtime=bedtime,
            water_liters=water,
            consistency_score=float("nan"),
            additional_score=1e6,
        )
        assert not math.isnan(result.overall_score)
        assert 0.0 <= result.overall_score <= 10.0
        for value in result.components.composites().values():
            assert 0.0 <= value <= 10.0

    def test_custom_config(self, sample_profile) -> None:
        """Goals, wraparound and weights come from ScoringConfig."""
        config = ScoringConfig(
            goal_steps=4000,
            wrap_midnight=True,
            weights=ScoringWeights(
                nutrition=0.0,
                activity=1.0,
                sleep=0.0,
                hydration=0.0,
                consistency=0.0,
                additional=0.0,
            ),
        )
        result = calculate_lifestyle_score(
            sample_profile,
            DailyMealSummary(date="2025-06-07"),
            steps=4000,
            workout_minutes=30,
            sleep_hours=7.0,
            actual_bedtime="00:30",
            water_liters=0,
            config=config,
        )
        assert result.components.steps_score == 10.0
        assert result.components.bedtime_consistency == pytest.approx(7.0)
        assert result.overall_score == pytest.approx(10.0)

    def test_computed_at_and_fresh_values(self, sample_profile, sample_summary) -> None:
        """Each call returns a new score with its own timestamp."""
        stamp = datetime(2025, 6, 7, 21, 30)
        first = calculate_lifestyle_score(
            sample_profile, sample_summary, 8000, 30, 7.0, "23:00", 2.0, computed_at=stamp
        )
        second = calculate_lifestyle_score(
            sample_profile, sample_summary, 8000, 30, 7.0, "23:00", 2.0
        )
        assert first.computed_at == stamp
        assert first is not second
        assert first.overall_score == pytest.approx(second.overall_score)

    def test_score_day_matches(self, sample_profile, sample_summary) -> None:
        """score_day unpacks DailyActuals into the same call."""
        actuals = DailyActuals(
            steps=9200, workout_minutes=35, sleep_hours=7.2,
            actual_bedtime="23:15", water_liters=1.8,
        )
        via_actuals = score_day(sample_profile, sample_summary, actuals)
        direct = calculate_lifestyle_score(
            sample_profile, sample_summary, 9200, 35, 7.2, "23:15", 1.8
        )
        assert via_actuals.overall_score == pytest.approx(direct.overall_score)

    def test_to_dict(self, sample_profile, sample_summary) -> None:
        result = calculate_lifestyle_score(
            sample_profile, sample_summary, 8000, 30, 7.0, "23:00", 2.0
        )
        data = result.to_dict()
        assert data["date"] == "2025-06-07"
        assert set(data["components"]) == {
            "nutrition", "activity", "sleep", "hydration", "consistency", "additional"
        }
        assert data["sub_scores"]["steps"] == 10.0
