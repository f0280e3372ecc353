"""CLI interface using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional, Union

import typer
from rich.console import Console

from nutrigoal.app_logging import configure_logging
from nutrigoal.config import (
    ConfigError,
    Settings,
    default_config_path,
    get_settings,
    reload_settings,
)
from nutrigoal.export.response import CommandResponse, create_response, error_response

app = typer.Typer(
    help="Personal nutrition targets and daily lifestyle scores",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")

PROFILE_HINT = (
    "Pass --profile FILE or all of --age --sex --height --weight, e.g. "
    "nutrigoal targets --age 30 --sex male --height 180 --weight 80"
)

# Set by the --config option on every invocation
_config_override: Optional[Path] = None


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: CommandResponse) -> None:
    """Output JSON response to stdout."""
    print(response.to_json())


def fail(
    command: str,
    error: Union[str, Exception],
    json_output: bool,
    suggestions: Optional[list[str]] = None,
) -> NoReturn:
    """Report an error in the requested style and exit with status 1."""
    if json_output:
        output_json(error_response(command, error, suggestions))
    else:
        console.print(f"[red]{error}[/red]")
        for suggestion in suggestions or []:
            console.print(f"[dim]{suggestion}[/dim]")
    raise typer.Exit(1)


def load_settings(command: str, json_output: bool) -> Settings:
    """Return the active settings, failing the command on a bad config file."""
    try:
        if _config_override is not None:
            return reload_settings(_config_override)
        return get_settings()
    except (ConfigError, OSError) as e:
        path = _config_override or default_config_path()
        fail(
            command,
            ConfigError(f"Invalid config {path}: {e}"),
            json_output,
            ["Fix the file or recreate it with: nutrigoal config init --force"],
        )


def resolve_format(output_format: Optional[str], settings: Settings) -> str:
    """Pick the output format, falling back to the configured default."""
    return output_format or settings.output.output_format


def resolve_profile(
    profile_file: Optional[Path],
    age: Optional[int],
    sex: Optional[str],
    height: Optional[float],
    weight: Optional[float],
    activity: str,
    goal: str,
    pace: Optional[float] = None,
):
    """Load a profile file or build a profile from options.

    Raises:
        ValueError: If required options are missing or unparseable
    """
    from nutrigoal.data.loaders import load_profile
    from nutrigoal.profiles.models import UserProfile

    if profile_file is not None:
        profile = load_profile(profile_file)
        if pace is not None:
            profile.weekly_pace_kg = pace
        return profile

    missing = [
        flag
        for flag, value in (
            ("--age", age),
            ("--sex", sex),
            ("--height", height),
            ("--weight", weight),
        )
        if value is None
    ]
    if missing:
        raise ValueError(f"Missing profile options: {', '.join(missing)}")

    extra = {"weekly_pace_kg": pace} if pace is not None else {}
    return UserProfile.from_strings(
        age=age,
        sex=sex,
        height_cm=height,
        weight_kg=weight,
        goal=goal,
        activity_level=activity,
        **extra,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Config file (default: ~/.nutrigoal/config.yaml)"
    ),
) -> None:
    """Nutrition targets and lifestyle scoring."""
    global _config_override
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    _config_override = config_file


# ============================================================================
# Target Commands
# ============================================================================


@app.command()
def targets(
    profile_file: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Profile YAML/JSON file"
    ),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    sex: Optional[str] = typer.Option(None, "--sex", help="Sex (male/female/other)"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    weight: Optional[float] = typer.Option(None, "--weight", help="Weight in kg"),
    activity: str = typer.Option(
        "moderately_active",
        "--activity",
        help="Activity level (sedentary/lightly_active/moderately_active/very_active/extremely_active)",
    ),
    goal: str = typer.Option(
        "maintain_weight", "--goal", help="Goal (lose_weight/maintain_weight/gain_muscle)"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show the daily calorie range and macro targets for a profile."""
    from nutrigoal.export.formatters import format_targets
    from nutrigoal.profiles.body_calc import (
        calculate_calorie_range,
        calculate_macro_targets,
        targets_to_dict,
    )

    settings = load_settings("targets", json_output)
    try:
        profile = resolve_profile(profile_file, age, sex, height, weight, activity, goal)
    except ValueError as e:
        fail("targets", e, json_output, [PROFILE_HINT])

    calorie_range = calculate_calorie_range(profile, settings.targets)
    macros = calculate_macro_targets(profile, settings.targets)

    if json_output:
        output_json(
            create_response(
                "targets",
                data=targets_to_dict(calorie_range, macros),
                human_summary=(
                    f"{calorie_range.min:.0f}-{calorie_range.max:.0f} kcal, "
                    f"{macros.protein_grams:.0f}g protein"
                ),
            )
        )
        return

    try:
        rendered = format_targets(
            calorie_range, macros, resolve_format(output_format, settings), console
        )
    except ValueError as e:
        fail("targets", e, json_output)
    if rendered is not None:
        print(rendered)


@app.command()
def goals(
    profile_file: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Profile YAML/JSON file"
    ),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    sex: Optional[str] = typer.Option(None, "--sex", help="Sex (male/female/other)"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    weight: Optional[float] = typer.Option(None, "--weight", help="Weight in kg"),
    activity: str = typer.Option(
        "moderately_active", "--activity", help="Activity level or workout days (1-2/3-4/5-6)"
    ),
    goal: str = typer.Option("maintain_weight", "--goal", help="Goal (lose/maintain/gain)"),
    pace: Optional[float] = typer.Option(
        None, "--pace", help="Weekly weight change in kg (weekly_pace strategy)"
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Target strategy: fixed_percent or weekly_pace"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show integer daily goals using a named target strategy."""
    from nutrigoal.export.formatters import format_goals
    from nutrigoal.profiles.strategies import available_strategies, get_strategy

    settings = load_settings("goals", json_output)
    strategy_name = strategy or settings.targets.strategy
    try:
        target_strategy = get_strategy(strategy_name)
        profile = resolve_profile(
            profile_file, age, sex, height, weight, activity, goal, pace=pace
        )
    except ValueError as e:
        fail(
            "goals",
            e,
            json_output,
            [PROFILE_HINT, f"Strategies: {', '.join(available_strategies())}"],
        )

    daily = target_strategy.daily_goals(profile, settings.targets)

    if json_output:
        output_json(
            create_response(
                "goals",
                data=daily.to_dict(),
                human_summary=f"{daily.calories} kcal ({daily.strategy})",
            )
        )
        return

    try:
        rendered = format_goals(daily, resolve_format(output_format, settings), console)
    except ValueError as e:
        fail("goals", e, json_output)
    if rendered is not None:
        print(rendered)


# ============================================================================
# Scoring Commands
# ============================================================================


@app.command()
def score(
    profile_file: Path = typer.Option(..., "--profile", "-p", help="Profile YAML/JSON file"),
    day_file: Path = typer.Option(..., "--day", "-d", help="Day log YAML/JSON file"),
    consistency: Optional[float] = typer.Option(
        None, "--consistency", help="Consistency score override (0-10)"
    ),
    additional: Optional[float] = typer.Option(
        None, "--additional", help="Additional score override (0-10)"
    ),
    wrap_midnight: bool = typer.Option(
        False, "--wrap-midnight", help="Measure bedtime difference around midnight"
    ),
    save_to: Optional[Path] = typer.Option(
        None, "--save-to", help="Append the score to a JSON history file"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Calculate the lifestyle score for one day."""
    from dataclasses import replace

    from nutrigoal.data.loaders import (
        dump_score_history,
        load_day,
        load_profile,
        load_score_history,
    )
    from nutrigoal.export.formatters import format_score
    from nutrigoal.scoring.calculator import score_day

    settings = load_settings("score", json_output)
    scoring_config = settings.scoring
    if wrap_midnight:
        scoring_config = replace(scoring_config, wrap_midnight=True)

    try:
        profile = load_profile(profile_file)
        summary, actuals = load_day(day_file)
    except (OSError, ValueError) as e:
        fail("score", e, json_output, ["Check the profile and day files"])

    result = score_day(
        profile,
        summary,
        actuals,
        consistency_score=consistency,
        additional_score=additional,
        config=scoring_config,
        targets_config=settings.targets,
    )

    warnings = []
    if summary.discrepant_meals:
        warnings.append(
            f"{len(summary.discrepant_meals)} meal(s) have macros that do not match their calories"
        )

    if save_to is not None:
        try:
            history = load_score_history(save_to) if save_to.exists() else []
        except ValueError as e:
            fail("score", e, json_output)
        dump_score_history(history + [result], save_to)

    if json_output:
        output_json(
            create_response(
                "score",
                data={"score": result.to_dict(), "meals": summary.totals_dict()},
                warnings=warnings,
                human_summary=f"{summary.date}: {result.overall_score:.1f}/10",
            )
        )
        return

    try:
        rendered = format_score(result, resolve_format(output_format, settings), console)
    except ValueError as e:
        fail("score", e, json_output)
    if rendered is not None:
        print(rendered)
    for warning in warnings:
        console.print(f"[yellow]{warning}[/yellow]")


@app.command()
def report(
    history_file: Path = typer.Option(..., "--history", help="JSON/YAML list of saved scores"),
    period: str = typer.Option("week", "--period", help="week, month or three_months"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Summarise saved daily scores over a trailing period."""
    from nutrigoal.data.loaders import load_score_history
    from nutrigoal.export.formatters import format_report
    from nutrigoal.scoring.report import summarize_scores

    settings = load_settings("report", json_output)
    try:
        history = load_score_history(history_file, settings.scoring.weights)
        summary = summarize_scores(history, period)
    except (OSError, ValueError) as e:
        fail("report", e, json_output, ["Periods: week, month, three_months"])

    if json_output:
        output_json(
            create_response(
                "report",
                data=summary.to_dict(),
                human_summary=(
                    f"{summary.days_scored} days, average {summary.average_overall:.1f}/10"
                ),
            )
        )
        return

    try:
        rendered = format_report(summary, resolve_format(output_format, settings), console)
    except ValueError as e:
        fail("report", e, json_output)
    if rendered is not None:
        print(rendered)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show the active configuration."""
    import yaml

    settings = load_settings("config show", json_output)
    if json_output:
        output_json(create_response("config show", data=settings.to_dict()))
        return
    console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(
        None, "--path", help="Where to write (default: ~/.nutrigoal/config.yaml)"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default values."""
    target = path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)
    written = Settings().save(target)
    console.print(f"[green]Wrote {written}[/green]")


if __name__ == "__main__":
    app()
