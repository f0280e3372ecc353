"""Output formatters for targets, daily scores and period reports."""

from __future__ import annotations

import json
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nutrigoal.profiles.body_calc import targets_to_dict
from nutrigoal.profiles.models import CalorieRange, DailyGoals, MacroTargets
from nutrigoal.scoring.models import LifestyleScore
from nutrigoal.scoring.report import ScoreReport


def _score_color(value: float) -> str:
    if value >= 8:
        return "green"
    if value >= 5:
        return "yellow"
    return "red"


def _label(name: str) -> str:
    return name.replace("_", " ").title()


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format_targets(self, calorie_range: CalorieRange, macros: MacroTargets) -> None:
        """Print the calorie window and macro targets."""
        self.console.print(
            Panel(
                f"[bold]{calorie_range.min:.0f} - {calorie_range.max:.0f} kcal/day[/bold]"
                f"  (target {calorie_range.midpoint:.0f})",
                title="Calorie Range",
            )
        )

        table = Table(title="Macro Targets")
        table.add_column("Macro", style="cyan")
        table.add_column("Grams", justify="right")
        table.add_column("Share", justify="right")
        for name, grams, percent in (
            ("Protein", macros.protein_grams, macros.protein_percent),
            ("Carbs", macros.carbs_grams, macros.carbs_percent),
            ("Fat", macros.fat_grams, macros.fat_percent),
        ):
            table.add_row(name, f"{grams:.0f} g", f"{percent:.0%}")
        self.console.print(table)

    def format_goals(self, goals: DailyGoals) -> None:
        """Print integer daily goals."""
        table = Table(title=f"Daily Goals ({goals.strategy})")
        table.add_column("Goal", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_row("Calories", f"{goals.calories} kcal")
        table.add_row("Protein", f"{goals.protein} g")
        table.add_row("Carbs", f"{goals.carbs} g")
        table.add_row("Fat", f"{goals.fat} g")
        self.console.print(table)

    def format_score(self, score: LifestyleScore) -> None:
        """Print the overall score with its component breakdown."""
        overall = score.overall_score
        color = _score_color(overall)
        self.console.print(
            Panel(
                f"[bold {color}]{overall:.1f} / 10[/bold {color}]",
                title=f"Lifestyle Score - {score.date}",
            )
        )

        table = Table(title="Components")
        table.add_column("Component", style="cyan")
        table.add_column("Score", justify="right")
        for name, value in score.components.composites().items():
            table.add_row(_label(name), f"[{_score_color(value)}]{value:.1f}[/]")
        self.console.print(table)

        detail = Table(title="Breakdown")
        detail.add_column("Sub-score", style="cyan")
        detail.add_column("Score", justify="right")
        for name, value in score.components.sub_scores().items():
            detail.add_row(_label(name), f"{value:.1f}")
        self.console.print(detail)

    def format_report(self, report: ScoreReport) -> None:
        """Print a period summary."""
        if report.days_scored == 0:
            self.console.print(f"[yellow]No scores in the last {report.period.days} days[/yellow]")
            return

        header = [
            f"[bold]{report.start_date} to {report.end_date}[/bold]",
            f"Days scored: {report.days_scored}",
            f"Average: {report.average_overall:.1f} / 10 (trend {report.trend:+.1f})",
            f"Best day: {report.best_day}  Worst day: {report.worst_day}",
        ]
        self.console.print(Panel("\n".join(header), title=f"Report ({report.period.value})"))

        table = Table(title="Component Averages")
        table.add_column("Component", style="cyan")
        table.add_column("Average", justify="right")
        for name, value in report.component_averages.items():
            table.add_row(_label(name), f"{value:.1f}")
        self.console.print(table)


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format_targets(self, calorie_range: CalorieRange, macros: MacroTargets) -> str:
        return json.dumps(targets_to_dict(calorie_range, macros), indent=2)

    def format_goals(self, goals: DailyGoals) -> str:
        return json.dumps(goals.to_dict(), indent=2)

    def format_score(self, score: LifestyleScore) -> str:
        return json.dumps(score.to_dict(), indent=2)

    def format_report(self, report: ScoreReport) -> str:
        return json.dumps(report.to_dict(), indent=2)


class MarkdownFormatter:
    """Format results as Markdown for sharing or journaling."""

    def format_targets(self, calorie_range: CalorieRange, macros: MacroTargets) -> str:
        lines = [
            "# Daily Targets",
            "",
            f"**Calories:** {calorie_range.min:.0f}-{calorie_range.max:.0f} kcal",
            "",
            "| Macro | Grams | Share |",
            "|-------|-------|-------|",
            f"| Protein | {macros.protein_grams:.0f} | {macros.protein_percent:.0%} |",
            f"| Carbs | {macros.carbs_grams:.0f} | {macros.carbs_percent:.0%} |",
            f"| Fat | {macros.fat_grams:.0f} | {macros.fat_percent:.0%} |",
        ]
        return "\n".join(lines)

    def format_goals(self, goals: DailyGoals) -> str:
        lines = [
            f"# Daily Goals ({goals.strategy})",
            "",
            f"- Calories: {goals.calories} kcal",
            f"- Protein: {goals.protein} g",
            f"- Carbs: {goals.carbs} g",
            f"- Fat: {goals.fat} g",
        ]
        return "\n".join(lines)

    def format_score(self, score: LifestyleScore) -> str:
        lines = [
            f"# Lifestyle Score - {score.date}",
            "",
            f"**Overall:** {score.overall_score:.1f} / 10",
            "",
            "| Component | Score |",
            "|-----------|-------|",
        ]
        for name, value in score.components.composites().items():
            lines.append(f"| {_label(name)} | {value:.1f} |")
        lines.extend(["", "| Sub-score | Score |", "|-----------|-------|"])
        for name, value in score.components.sub_scores().items():
            lines.append(f"| {_label(name)} | {value:.1f} |")
        return "\n".join(lines)

    def format_report(self, report: ScoreReport) -> str:
        lines = [f"# Report ({report.period.value})", ""]
        if report.days_scored == 0:
            lines.append("No scores in this period.")
            return "\n".join(lines)
        lines.extend(
            [
                f"**Period:** {report.start_date} to {report.end_date}",
                f"**Days scored:** {report.days_scored}",
                f"**Average:** {report.average_overall:.1f} / 10 (trend {report.trend:+.1f})",
                f"**Best day:** {report.best_day}",
                f"**Worst day:** {report.worst_day}",
                "",
                "| Component | Average |",
                "|-----------|---------|",
            ]
        )
        for name, value in report.component_averages.items():
            lines.append(f"| {_label(name)} | {value:.1f} |")
        return "\n".join(lines)


def _formatter(output_format: str, console: Optional[Console]):
    if output_format == "table":
        return TableFormatter(console)
    elif output_format == "json":
        return JSONFormatter()
    elif output_format == "markdown":
        return MarkdownFormatter()
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_targets(
    calorie_range: CalorieRange,
    macros: MacroTargets,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format targets in the specified format.

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    return _formatter(output_format, console).format_targets(calorie_range, macros)


def format_goals(
    goals: DailyGoals,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format daily goals in the specified format."""
    return _formatter(output_format, console).format_goals(goals)


def format_score(
    score: LifestyleScore,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a lifestyle score in the specified format."""
    return _formatter(output_format, console).format_score(score)


def format_report(
    report: ScoreReport,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a period report in the specified format."""
    return _formatter(output_format, console).format_report(report)
