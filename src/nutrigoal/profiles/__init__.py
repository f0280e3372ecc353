"""User profiles and personalised nutrition targets.

Key components:
- Mifflin-St Jeor BMR and activity-scaled TDEE
- Calorie window and macro targets per goal
- Named daily-goal strategies (fixed_percent, weekly_pace)
"""

from __future__ import annotations

from nutrigoal.profiles.body_calc import (
    calculate_bmr,
    calculate_calorie_range,
    calculate_daily_goals,
    calculate_macro_targets,
    calculate_tdee,
)
from nutrigoal.profiles.models import (
    ActivityLevel,
    CalorieRange,
    DailyGoals,
    Goal,
    MacroTargets,
    Sex,
    UserProfile,
    age_from_birth_date,
)
from nutrigoal.profiles.strategies import (
    FixedPercentStrategy,
    TargetStrategy,
    WeeklyPaceStrategy,
    get_strategy,
)

__all__ = [
    "ActivityLevel",
    "CalorieRange",
    "DailyGoals",
    "FixedPercentStrategy",
    "Goal",
    "MacroTargets",
    "Sex",
    "TargetStrategy",
    "UserProfile",
    "WeeklyPaceStrategy",
    "age_from_birth_date",
    "calculate_bmr",
    "calculate_calorie_range",
    "calculate_daily_goals",
    "calculate_macro_targets",
    "calculate_tdee",
    "get_strategy",
]
