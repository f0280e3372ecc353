"""Period summaries over a caller-supplied history of daily scores.

The engine does not store history. Callers pass the LifestyleScore values
they kept and get averages for a trailing 7, 30 or 90 day window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

import numpy as np

from nutrigoal.scoring.models import LifestyleScore

COMPONENT_NAMES = ("nutrition", "activity", "sleep", "hydration", "consistency", "additional")


class ReportPeriod(Enum):
    """Trailing window lengths offered by the progress screens."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"

    @property
    def days(self) -> int:
        return {
            ReportPeriod.WEEK: 7,
            ReportPeriod.MONTH: 30,
            ReportPeriod.THREE_MONTHS: 90,
        }[self]

    @classmethod
    def parse(cls, value: str | ReportPeriod) -> ReportPeriod:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = [p.value for p in cls]
            raise ValueError(f"period must be one of {valid}, got '{value}'") from None


@dataclass
class ScoreReport:
    """Averages and extremes of the scores inside one window."""

    period: ReportPeriod
    start_date: Optional[date]
    end_date: Optional[date]
    days_scored: int = 0
    average_overall: float = 0.0
    component_averages: dict[str, float] = field(
        default_factory=lambda: {name: 0.0 for name in COMPONENT_NAMES}
    )
    best_day: Optional[str] = None
    worst_day: Optional[str] = None
    trend: float = 0.0  # last overall minus first overall

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        return {
            "period": self.period.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "days_scored": self.days_scored,
            "average_overall": round(self.average_overall, 2),
            "component_averages": {
                name: round(value, 2) for name, value in self.component_averages.items()
            },
            "best_day": self.best_day,
            "worst_day": self.worst_day,
            "trend": round(self.trend, 2),
        }


def _latest_per_date(scores: Iterable[LifestyleScore]) -> dict[date, LifestyleScore]:
    """Keep the most recently computed score for each date."""
    latest: dict[date, LifestyleScore] = {}
    for score in scores:
        day = date.fromisoformat(score.date)
        current = latest.get(day)
        if current is None or score.computed_at >= current.computed_at:
            latest[day] = score
    return latest


def summarize_scores(
    scores: Iterable[LifestyleScore],
    period: ReportPeriod | str = ReportPeriod.WEEK,
    end_date: Optional[date] = None,
) -> ScoreReport:
    """Summarise daily scores over a trailing window.

    Args:
        scores: Scores in any order; dates must be "YYYY-MM-DD"
        period: Window length
        end_date: Last day of the window, defaults to the latest score date

    Returns:
        ScoreReport; an empty window yields zero averages and no best/worst day

    Raises:
        ValueError: If a score date is not an ISO date or the period is unknown
    """
    period = ReportPeriod.parse(period)
    latest = _latest_per_date(scores)

    if end_date is None:
        if not latest:
            return ScoreReport(period=period, start_date=None, end_date=None)
        end_date = max(latest)
    start_date = end_date - timedelta(days=period.days - 1)

    window = [latest[d] for d in sorted(latest) if start_date <= d <= end_date]
    if not window:
        return ScoreReport(period=period, start_date=start_date, end_date=end_date)

    overall = np.array([s.overall_score for s in window])
    # rows: days, columns: COMPONENT_NAMES
    components = np.array(
        [[s.components.composites()[name] for name in COMPONENT_NAMES] for s in window]
    )
    averages = components.mean(axis=0)

    return ScoreReport(
        period=period,
        start_date=start_date,
        end_date=end_date,
        days_scored=len(window),
        average_overall=float(overall.mean()),
        component_averages={
            name: float(value) for name, value in zip(COMPONENT_NAMES, averages)
        },
        best_day=window[int(np.argmax(overall))].date,
        worst_day=window[int(np.argmin(overall))].date,
        trend=float(overall[-1] - overall[0]) if len(window) > 1 else 0.0,
    )
