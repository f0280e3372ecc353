"""Named strategies for turning a profile into daily goals.

Two rules coexist:
- fixed_percent: goal scales TDEE by a fixed factor (0.8 / 1.0 / 1.1)
- weekly_pace: deficit derived from a weekly weight-change pace
  (7700 kcal per kg), floored at 1200 kcal/day
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from nutrigoal.config.settings import ConfigError, TargetsConfig
from nutrigoal.profiles.body_calc import (
    calculate_calorie_range,
    calculate_macro_targets,
    macro_grams,
    profile_tdee,
)
from nutrigoal.profiles.models import DailyGoals, Goal, UserProfile

logger = logging.getLogger(__name__)

# Pace-based macro splits, (protein, carbs, fat)
PACE_MACRO_SPLITS = {
    Goal.LOSE_WEIGHT: (0.30, 0.40, 0.30),
    Goal.MAINTAIN_WEIGHT: (0.25, 0.45, 0.30),
    Goal.GAIN_MUSCLE: (0.25, 0.55, 0.20),
}


class TargetStrategy(ABC):
    """Computes integer daily goals for a profile."""

    name: str = ""

    @abstractmethod
    def daily_goals(
        self,
        profile: UserProfile,
        config: Optional[TargetsConfig] = None,
    ) -> DailyGoals:
        """Return daily goals for the profile."""


class FixedPercentStrategy(TargetStrategy):
    """Midpoint of the fixed-percent calorie window and its macro targets."""

    name = "fixed_percent"

    def daily_goals(
        self,
        profile: UserProfile,
        config: Optional[TargetsConfig] = None,
    ) -> DailyGoals:
        calorie_range = calculate_calorie_range(profile, config)
        macros = calculate_macro_targets(profile, config)
        return DailyGoals(
            calories=int(calorie_range.midpoint),
            protein=int(macros.protein_grams),
            carbs=int(macros.carbs_grams),
            fat=int(macros.fat_grams),
            strategy=self.name,
        )


class WeeklyPaceStrategy(TargetStrategy):
    """Pace-driven deficit or fixed surplus with a calorie floor."""

    name = "weekly_pace"

    def target_calories(
        self,
        profile: UserProfile,
        config: Optional[TargetsConfig] = None,
    ) -> float:
        """Goal-adjusted daily calories before rounding."""
        if config is None:
            config = TargetsConfig()

        tdee = profile_tdee(profile)
        if profile.goal == Goal.LOSE_WEIGHT:
            pace = profile.weekly_pace_kg
            if pace is None:
                pace = config.weekly_pace_kg
            daily_deficit = pace * config.kcal_per_kg / 7
            target = tdee - daily_deficit
        elif profile.goal == Goal.GAIN_MUSCLE:
            target = tdee + config.gain_surplus
        else:
            target = tdee

        if target < config.min_calories:
            logger.debug(
                "Target %.1f kcal below floor, using %.0f", target, config.min_calories
            )
            target = config.min_calories
        return target

    def daily_goals(
        self,
        profile: UserProfile,
        config: Optional[TargetsConfig] = None,
    ) -> DailyGoals:
        calories = self.target_calories(profile, config)
        protein, carbs, fat = macro_grams(calories, PACE_MACRO_SPLITS[profile.goal])
        return DailyGoals(
            calories=int(calories),
            protein=int(protein),
            carbs=int(carbs),
            fat=int(fat),
            strategy=self.name,
        )


STRATEGIES: dict[str, type[TargetStrategy]] = {
    FixedPercentStrategy.name: FixedPercentStrategy,
    WeeklyPaceStrategy.name: WeeklyPaceStrategy,
}


def available_strategies() -> list[str]:
    """List registered strategy names."""
    return list(STRATEGIES)


def get_strategy(name: str) -> TargetStrategy:
    """Look up a strategy by name.

    Raises:
        ConfigError: If the name is not registered
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ConfigError(
            f"Unknown target strategy '{name}'. Available: {available_strategies()}"
        ) from None
