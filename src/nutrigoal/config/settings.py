"""Engine settings and configuration management."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

WEIGHT_SUM_TOLERANCE = 1e-6
OUTPUT_FORMATS = ("table", "json", "markdown")
TARGET_STRATEGIES = ("fixed_percent", "weekly_pace")


class ConfigError(ValueError):
    """Raised when configuration values are inconsistent."""


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".nutrigoal"


def default_config_path() -> Path:
    """Return the default config file path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class ScoringWeights:
    """Weight tables for the lifestyle score roll-up.

    Each group must sum to 1.0:
    - nutrition: calorie_adherence + macro_balance
    - activity: steps + workout
    - sleep: sleep_duration + bedtime_consistency
    - overall: nutrition + activity + sleep + hydration + consistency + additional
    """

    calorie_adherence: float = 0.6
    macro_balance: float = 0.4
    steps: float = 0.6
    workout: float = 0.4
    sleep_duration: float = 0.7
    bedtime_consistency: float = 0.3

    nutrition: float = 0.25
    activity: float = 0.20
    sleep: float = 0.20
    hydration: float = 0.15
    consistency: float = 0.10
    additional: float = 0.10

    def groups(self) -> dict[str, tuple[float, ...]]:
        """Return each weight group keyed by the composite it feeds."""
        return {
            "nutrition": (self.calorie_adherence, self.macro_balance),
            "activity": (self.steps, self.workout),
            "sleep": (self.sleep_duration, self.bedtime_consistency),
            "overall": (
                self.nutrition,
                self.activity,
                self.sleep,
                self.hydration,
                self.consistency,
                self.additional,
            ),
        }

    def validate(self) -> None:
        """Check that every weight group sums to 1.0.

        Raises:
            ConfigError: If a group is off by more than WEIGHT_SUM_TOLERANCE
                or contains a negative or non-finite weight
        """
        for name, group in self.groups().items():
            if not all(math.isfinite(w) for w in group):
                raise ConfigError(f"{name} weights must be finite, got {group}")
            if any(w < 0 for w in group):
                raise ConfigError(f"{name} weights must be non-negative, got {group}")
            total = math.fsum(group)
            if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
                raise ConfigError(f"{name} weights must sum to 1.0, got {total:.6f}")


@dataclass
class ScoringConfig:
    """Goals and tolerances used by the lifestyle score calculator."""

    goal_steps: int = 8000
    goal_liters: float = 2.0
    reference_workout_minutes: float = 30.0
    sleep_tolerance_hours: float = 0.5
    sleep_penalty_per_hour: float = 2.0
    bedtime_tolerance_minutes: int = 30
    bedtime_penalty_per_hour: float = 2.0
    calorie_penalty_per_tolerance: float = 5.0
    default_consistency_score: float = 5.0
    default_additional_score: float = 5.0
    wrap_midnight: bool = False  # circular bedtime distance instead of same-day
    weights: ScoringWeights = field(default_factory=ScoringWeights)


@dataclass
class TargetsConfig:
    """Calorie target configuration."""

    strategy: str = "fixed_percent"  # "fixed_percent" or "weekly_pace"
    calorie_band: float = 100.0
    kcal_per_kg: float = 7700.0
    min_calories: float = 1200.0
    weekly_pace_kg: float = 0.5
    gain_surplus: float = 300.0


@dataclass
class OutputConfig:
    """Output defaults for the CLI."""

    output_format: str = "table"  # "table", "json", "markdown"


def _apply(target: Any, data: Any, section: str) -> None:
    """Copy known keys from data onto a config dataclass, coercing types.

    Raises:
        ConfigError: If data is not a mapping or a value has the wrong type
    """
    if data is None:
        return
    if not isinstance(data, dict):
        raise ConfigError(f"{section} must be a mapping, got {data!r}")

    for f in fields(target):
        if f.name not in data or f.name == "weights":
            continue
        current = getattr(target, f.name)
        value = data[f.name]
        try:
            if isinstance(current, bool):
                value = bool(value)
            elif isinstance(current, int):
                value = int(value)
            elif isinstance(current, float):
                value = float(value)
            else:
                value = str(value)
        except (TypeError, ValueError, OverflowError):
            raise ConfigError(
                f"{section}.{f.name} must be {type(current).__name__}, got {value!r}"
            ) from None
        setattr(target, f.name, value)


@dataclass
class Settings:
    """Main engine settings."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    targets: TargetsConfig = field(default_factory=TargetsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Validate the whole settings tree.

        Raises:
            ConfigError: On invalid weights, strategy or output format
        """
        self.scoring.weights.validate()
        if self.targets.strategy not in TARGET_STRATEGIES:
            raise ConfigError(
                f"targets.strategy must be one of {TARGET_STRATEGIES}, "
                f"got '{self.targets.strategy}'"
            )
        if self.output.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output.output_format must be one of {OUTPUT_FORMATS}, "
                f"got '{self.output.output_format}'"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a parsed YAML mapping.

        Unknown keys are ignored; present keys override the defaults.
        """
        settings = cls()

        scoring_data = data.get("scoring")
        _apply(settings.scoring, scoring_data, "scoring")
        if isinstance(scoring_data, dict):
            _apply(settings.scoring.weights, scoring_data.get("weights"), "scoring.weights")

        _apply(settings.targets, data.get("targets"), "targets")
        _apply(settings.output, data.get("output"), "output")

        settings.validate()
        return settings

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.nutrigoal/config.yaml

        Returns:
            Settings instance

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a YAML mapping")

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the nested mapping written by save()."""
        weights = self.scoring.weights
        return {
            "scoring": {
                "goal_steps": self.scoring.goal_steps,
                "goal_liters": self.scoring.goal_liters,
                "reference_workout_minutes": self.scoring.reference_workout_minutes,
                "sleep_tolerance_hours": self.scoring.sleep_tolerance_hours,
                "sleep_penalty_per_hour": self.scoring.sleep_penalty_per_hour,
                "bedtime_tolerance_minutes": self.scoring.bedtime_tolerance_minutes,
                "bedtime_penalty_per_hour": self.scoring.bedtime_penalty_per_hour,
                "calorie_penalty_per_tolerance": self.scoring.calorie_penalty_per_tolerance,
                "default_consistency_score": self.scoring.default_consistency_score,
                "default_additional_score": self.scoring.default_additional_score,
                "wrap_midnight": self.scoring.wrap_midnight,
                "weights": {f.name: getattr(weights, f.name) for f in fields(weights)},
            },
            "targets": {
                "strategy": self.targets.strategy,
                "calorie_band": self.targets.calorie_band,
                "kcal_per_kg": self.targets.kcal_per_kg,
                "min_calories": self.targets.min_calories,
                "weekly_pace_kg": self.targets.weekly_pace_kg,
                "gain_surplus": self.targets.gain_surplus,
            },
            "output": {
                "output_format": self.output.output_format,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.nutrigoal/config.yaml

        Returns:
            The path written
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        return config_path


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
