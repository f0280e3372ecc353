"""Data models for the daily lifestyle score."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from nutrigoal.config.settings import ScoringWeights

MIN_SCORE = 0.0
MAX_SCORE = 10.0


def clamp_score(value: float) -> float:
    """Clamp to [0, 10]; NaN becomes 0."""
    if not value >= MIN_SCORE:
        return MIN_SCORE
    return min(value, MAX_SCORE)


def naive_local(value: datetime) -> datetime:
    """Convert an aware timestamp to naive local time; naive ones pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@dataclass(frozen=True)
class DailyActuals:
    """Activity, sleep and hydration values resolved for one day."""

    steps: int = 0
    workout_minutes: float = 0.0
    sleep_hours: float = 0.0
    actual_bedtime: str = ""  # "HH:MM"
    water_liters: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        return {
            "steps": self.steps,
            "workout_minutes": self.workout_minutes,
            "sleep_hours": self.sleep_hours,
            "actual_bedtime": self.actual_bedtime,
            "water_liters": self.water_liters,
        }


@dataclass(frozen=True)
class ScoreComponents:
    """Sub-scores (0-10 each) and the composites derived from them.

    The nutrition, activity and sleep composites are properties over the
    sub-scores and weights, so they cannot be set independently. Every
    value read through the properties, composites() or sub_scores() is
    clamped to [0, 10], whatever the instance was built from.
    """

    calorie_adherence: float
    macro_balance: float
    steps_score: float
    workout_score: float
    sleep_duration: float
    bedtime_consistency: float
    hydration_score: float
    consistency_score: float = 5.0  # streak/habit signal supplied by caller
    additional_score: float = 5.0   # mood/stress signal supplied by caller
    weights: ScoringWeights = field(default_factory=ScoringWeights, repr=False)

    @property
    def nutrition_score(self) -> float:
        w = self.weights
        return clamp_score(
            clamp_score(self.calorie_adherence) * w.calorie_adherence
            + clamp_score(self.macro_balance) * w.macro_balance
        )

    @property
    def activity_score(self) -> float:
        w = self.weights
        return clamp_score(
            clamp_score(self.steps_score) * w.steps
            + clamp_score(self.workout_score) * w.workout
        )

    @property
    def sleep_score(self) -> float:
        w = self.weights
        return clamp_score(
            clamp_score(self.sleep_duration) * w.sleep_duration
            + clamp_score(self.bedtime_consistency) * w.bedtime_consistency
        )

    def composites(self) -> dict[str, float]:
        """Top-level scores keyed by name, in roll-up order."""
        return {
            "nutrition": self.nutrition_score,
            "activity": self.activity_score,
            "sleep": self.sleep_score,
            "hydration": clamp_score(self.hydration_score),
            "consistency": clamp_score(self.consistency_score),
            "additional": clamp_score(self.additional_score),
        }

    def sub_scores(self) -> dict[str, float]:
        """Underlying sub-scores keyed by name."""
        return {
            "calorie_adherence": clamp_score(self.calorie_adherence),
            "macro_balance": clamp_score(self.macro_balance),
            "steps": clamp_score(self.steps_score),
            "workout": clamp_score(self.workout_score),
            "sleep_duration": clamp_score(self.sleep_duration),
            "bedtime_consistency": clamp_score(self.bedtime_consistency),
        }

    def overall(self) -> float:
        """Weighted roll-up of the composites, clamped to [0, 10]."""
        w = self.weights
        overall_weights = {
            "nutrition": w.nutrition,
            "activity": w.activity,
            "sleep": w.sleep,
            "hydration": w.hydration,
            "consistency": w.consistency,
            "additional": w.additional,
        }
        weighted = sum(
            value * overall_weights[name] for name, value in self.composites().items()
        )
        return clamp_score(weighted)


@dataclass(frozen=True)
class LifestyleScore:
    """Score for one day. A recomputation produces a new instance.

    computed_at is stored as naive local time so that scores from
    different sources order against each other.
    """

    date: str  # "YYYY-MM-DD"
    components: ScoreComponents
    computed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "computed_at", naive_local(self.computed_at))

    @property
    def overall_score(self) -> float:
        return self.components.overall()

    def to_dict(self) -> dict:
        """Convert to dict for JSON output and history files."""
        return {
            "date": self.date,
            "overall_score": round(self.overall_score, 2),
            "computed_at": self.computed_at.isoformat(),
            "components": {
                name: round(value, 2) for name, value in self.components.composites().items()
            },
            "sub_scores": {
                name: round(value, 2) for name, value in self.components.sub_scores().items()
            },
        }
