"""Lifestyle score calculator.

Combines nutrition adherence (calorie window and macro targets), activity,
sleep and hydration into sub-scores on a 0-10 scale, then rolls them up
with fixed weights:

    nutrition = calorie_adherence x 0.6 + macro_balance x 0.4
    activity  = steps x 0.6 + workout x 0.4
    sleep     = sleep_duration x 0.7 + bedtime_consistency x 0.3
    overall   = nutrition x 0.25 + activity x 0.20 + sleep x 0.20
                + hydration x 0.15 + consistency x 0.10 + additional x 0.10

Every function here is total over numbers: degenerate input (negative
intake, zero targets, unparseable clock times, NaN) maps to a defined
score instead of raising. Validating input is the caller's job.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional

from nutrigoal.config.settings import ScoringConfig, TargetsConfig
from nutrigoal.meals.models import DailyMealSummary
from nutrigoal.profiles.body_calc import calculate_calorie_range, calculate_macro_targets
from nutrigoal.profiles.models import CalorieRange, MacroTargets, UserProfile
from nutrigoal.scoring.models import (
    MAX_SCORE,
    MIN_SCORE,
    DailyActuals,
    LifestyleScore,
    ScoreComponents,
    clamp_score,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def _is_usable(value: float) -> bool:
    """Finite and non-negative."""
    return math.isfinite(value) and value >= 0


def _ratio_score(actual: float, goal: float) -> float:
    """min(actual / goal, 1) x 10, with a zero goal counting as met.

    +inf saturates at 10; NaN and -inf score 0.
    """
    if math.isnan(actual):
        return MIN_SCORE
    if goal <= 0:
        return MAX_SCORE if actual > 0 else MIN_SCORE
    return clamp_score(min(actual / goal, 1.0) * MAX_SCORE)


def calorie_adherence_score(
    consumed: float,
    calorie_range: CalorieRange,
    penalty_per_tolerance: float = 5.0,
) -> float:
    """Score calories eaten against the target window.

    Inside the window scores 10. Outside, the score drops by
    penalty_per_tolerance for every half-width of distance from the
    midpoint, the same for eating too little or too much.

    Args:
        consumed: Calories eaten
        calorie_range: Target window
        penalty_per_tolerance: Points lost per half-width from the midpoint

    Returns:
        Score in [0, 10]
    """
    if not _is_usable(consumed):
        logger.debug("Unusable calorie intake %r, scoring 0", consumed)
        return MIN_SCORE

    if calorie_range.contains(consumed):
        return MAX_SCORE

    tolerance = calorie_range.tolerance
    if not tolerance > 0:
        logger.debug("Calorie window has no width, scoring 0 outside it")
        return MIN_SCORE

    distance = abs(consumed - calorie_range.midpoint)
    return clamp_score(MAX_SCORE - (distance / tolerance) * penalty_per_tolerance)


def _relative_deviation(consumed: float, target: float) -> float:
    if target <= 0:
        # Nothing was expected: exact if nothing was eaten, fully off otherwise
        logger.debug("Zero macro target, deviation from consumed=%r", consumed)
        return 0.0 if consumed == 0 else 1.0
    return abs(consumed - target) / target


def macro_balance_score(
    protein_grams: float,
    carbs_grams: float,
    fat_grams: float,
    targets: MacroTargets,
) -> float:
    """Score macro grams eaten against targets.

    Uses 10 - mean relative deviation x 10 over protein, carbs and fat.

    Returns:
        Score in [0, 10]
    """
    deviations = [
        _relative_deviation(protein_grams, targets.protein_grams),
        _relative_deviation(carbs_grams, targets.carbs_grams),
        _relative_deviation(fat_grams, targets.fat_grams),
    ]
    average = sum(deviations) / len(deviations)
    return clamp_score(MAX_SCORE - average * MAX_SCORE)


def steps_score(steps: float, goal_steps: float = 8000) -> float:
    """min(steps / goal_steps, 1) x 10."""
    return _ratio_score(steps, goal_steps)


def workout_score(minutes: float, reference_minutes: float = 30.0) -> float:
    """min(minutes / reference_minutes, 1) x 10; 30 minutes is a full session."""
    return _ratio_score(minutes, reference_minutes)


def hydration_score(water_liters: float, goal_liters: float = 2.0) -> float:
    """min(water_liters / goal_liters, 1) x 10."""
    return _ratio_score(water_liters, goal_liters)


def sleep_duration_score(
    actual_hours: float,
    target_hours: float,
    tolerance_hours: float = 0.5,
    penalty_per_hour: float = 2.0,
) -> float:
    """Score sleep duration against the target.

    Within tolerance_hours of the target scores 10; otherwise the full
    difference costs penalty_per_hour points per hour.
    """
    if not _is_usable(actual_hours) or not math.isfinite(target_hours):
        logger.debug("Unusable sleep hours %r, scoring 0", actual_hours)
        return MIN_SCORE

    difference = abs(actual_hours - target_hours)
    if difference <= tolerance_hours:
        return MAX_SCORE
    return clamp_score(MAX_SCORE - difference * penalty_per_hour)


def parse_clock_minutes(value: str) -> Optional[int]:
    """Parse "HH:MM" into minutes since midnight.

    Returns:
        Minutes in [0, 1439], or None if the string is not a valid time
    """
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    hours_str, minutes_str = parts
    # isdigit() admits superscripts that int() rejects
    if not (hours_str.isdecimal() and minutes_str.isdecimal()):
        return None
    hours, minutes = int(hours_str), int(minutes_str)
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def bedtime_difference_minutes(
    actual: int,
    target: int,
    wrap_midnight: bool = False,
) -> int:
    """Minutes between two clock times.

    Without wrap_midnight both are treated as same-day times, so 23:50 and
    00:10 are 1420 minutes apart. With it, the shorter way round the clock
    is used (20 minutes).
    """
    delta = abs(actual - target)
    if wrap_midnight:
        delta = min(delta, MINUTES_PER_DAY - delta)
    return delta


def bedtime_consistency_score(
    actual_bedtime: str,
    target_bedtime: str,
    tolerance_minutes: int = 30,
    penalty_per_hour: float = 2.0,
    wrap_midnight: bool = False,
) -> float:
    """Score how close bedtime was to the target bedtime.

    Within tolerance_minutes scores 10; otherwise the score drops by
    penalty_per_hour per hour of difference. Unparseable times score 0.
    """
    actual = parse_clock_minutes(actual_bedtime)
    target = parse_clock_minutes(target_bedtime)
    if actual is None or target is None:
        logger.debug(
            "Unparseable bedtime (actual=%r, target=%r), scoring 0",
            actual_bedtime,
            target_bedtime,
        )
        return MIN_SCORE

    delta = bedtime_difference_minutes(actual, target, wrap_midnight)
    if delta <= tolerance_minutes:
        return MAX_SCORE
    return clamp_score(MAX_SCORE - (delta / 60) * penalty_per_hour)


def calculate_lifestyle_score(
    profile: UserProfile,
    summary: DailyMealSummary,
    steps: int,
    workout_minutes: float,
    sleep_hours: float,
    actual_bedtime: str,
    water_liters: float,
    *,
    consistency_score: Optional[float] = None,
    additional_score: Optional[float] = None,
    calorie_range: Optional[CalorieRange] = None,
    macro_targets: Optional[MacroTargets] = None,
    config: Optional[ScoringConfig] = None,
    targets_config: Optional[TargetsConfig] = None,
    computed_at: Optional[datetime] = None,
) -> LifestyleScore:
    """Calculate the lifestyle score for one day.

    Args:
        profile: User profile (targets, bedtime and sleep goal)
        summary: Meals logged that day
        steps: Step count
        workout_minutes: Minutes of workout
        sleep_hours: Hours slept
        actual_bedtime: Bedtime as "HH:MM"
        water_liters: Water drunk in litres
        consistency_score: Streak/habit score override (default from config)
        additional_score: Mood/stress score override (default from config)
        calorie_range: Precomputed calorie window, computed from profile if None
        macro_targets: Precomputed macro targets, computed from profile if None
        config: Scoring goals, tolerances and weights
        targets_config: Target settings used when computing targets
        computed_at: Timestamp to record, defaults to now

    Returns:
        LifestyleScore with the full component breakdown
    """
    if config is None:
        config = ScoringConfig()
    if calorie_range is None:
        calorie_range = calculate_calorie_range(profile, targets_config)
    if macro_targets is None:
        macro_targets = calculate_macro_targets(profile, targets_config)
    if consistency_score is None:
        consistency_score = config.default_consistency_score
    if additional_score is None:
        additional_score = config.default_additional_score

    components = ScoreComponents(
        calorie_adherence=calorie_adherence_score(
            summary.total_calories,
            calorie_range,
            config.calorie_penalty_per_tolerance,
        ),
        macro_balance=macro_balance_score(
            summary.total_protein,
            summary.total_carbs,
            summary.total_fat,
            macro_targets,
        ),
        steps_score=steps_score(steps, config.goal_steps),
        workout_score=workout_score(workout_minutes, config.reference_workout_minutes),
        sleep_duration=sleep_duration_score(
            sleep_hours,
            profile.target_sleep_hours,
            config.sleep_tolerance_hours,
            config.sleep_penalty_per_hour,
        ),
        bedtime_consistency=bedtime_consistency_score(
            actual_bedtime,
            profile.target_bedtime,
            config.bedtime_tolerance_minutes,
            config.bedtime_penalty_per_hour,
            config.wrap_midnight,
        ),
        hydration_score=hydration_score(water_liters, config.goal_liters),
        consistency_score=clamp_score(consistency_score),
        additional_score=clamp_score(additional_score),
        weights=config.weights,
    )

    score = LifestyleScore(
        date=summary.date,
        components=components,
        computed_at=computed_at or datetime.now(),
    )
    logger.debug("Lifestyle score for %s: %.2f", summary.date, score.overall_score)
    return score


def score_day(
    profile: UserProfile,
    summary: DailyMealSummary,
    actuals: DailyActuals,
    **kwargs,
) -> LifestyleScore:
    """calculate_lifestyle_score taking a DailyActuals bundle."""
    return calculate_lifestyle_score(
        profile,
        summary,
        steps=actuals.steps,
        workout_minutes=actuals.workout_minutes,
        sleep_hours=actuals.sleep_hours,
        actual_bedtime=actuals.actual_bedtime,
        water_liters=actuals.water_liters,
        **kwargs,
    )
