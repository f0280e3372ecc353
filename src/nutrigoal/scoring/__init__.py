"""Daily lifestyle scoring.

Key components:
- Sub-scores for calories, macros, steps, workout, sleep, bedtime, hydration
- Weighted roll-up into a 0-10 overall score
- Period summaries over stored score history
"""

from __future__ import annotations

from nutrigoal.scoring.calculator import calculate_lifestyle_score, score_day
from nutrigoal.scoring.models import DailyActuals, LifestyleScore, ScoreComponents
from nutrigoal.scoring.report import ReportPeriod, ScoreReport, summarize_scores

__all__ = [
    "DailyActuals",
    "LifestyleScore",
    "ReportPeriod",
    "ScoreComponents",
    "ScoreReport",
    "calculate_lifestyle_score",
    "score_day",
    "summarize_scores",
]
