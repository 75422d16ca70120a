"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of engine results.
"""

from datetime import date, timedelta

from rich.console import Console
from rich.table import Table

from ..core.meso_calendar import MesoCalendar, is_lift_day
from ..core.models import (
    AdjustmentDecision,
    Anchor,
    Decrease,
    Increase,
    MesoPhase,
    ProgressionAction,
    ProgressionDecision,
    WarmupPlan,
)
from ..core.warmup import format_load

console = Console()


def decision_style(decision: AdjustmentDecision) -> str:
    """Rich color for an adjustment decision."""
    if isinstance(decision, Increase):
        return "green"
    if isinstance(decision, Decrease):
        return "red"
    return "yellow"


def format_anchor(anchor: Anchor | None) -> str:
    """Describe the stored anchor."""
    if anchor is None:
        return "[yellow]Not anchored[/yellow] (labels fall back to W1D1)"
    return (
        f"Anchor: [bold]{anchor.anchor_date.isoformat()}[/bold] "
        f"= training day {anchor.training_day_number}"
    )


def format_label_table(calendar: MesoCalendar, start: date, days: int) -> Table:
    """
    Create a Rich table of labels for consecutive days.

    Args:
        calendar: Anchored calendar
        start: First day shown
        days: Number of calendar days

    Returns:
        Rich Table object
    """
    table = Table(title="Mesocycle Calendar")
    table.add_column("Date", style="cyan")
    table.add_column("Weekday")
    table.add_column("Label", justify="center")

    for offset in range(days):
        day = start + timedelta(days=offset)
        if is_lift_day(day):
            label = f"[bold]{calendar.label(day)}[/bold]"
        else:
            label = "[dim]rest[/dim]"
        table.add_row(day.isoformat(), day.strftime("%a"), label)

    return table


def print_decision(
    decision: AdjustmentDecision,
    load: float | None = None,
    new_load: float | None = None,
) -> None:
    """Print an adjustment decision, with the resulting load when known."""
    style = decision_style(decision)
    console.print(f"Next session: [{style}]{decision}[/{style}]")
    if load is not None and new_load is not None:
        console.print(f"Load: {format_load(round(load, 1))} → [bold]{format_load(round(new_load, 1))}[/bold]")


ACTION_STYLES = {
    ProgressionAction.INCREASE_LOAD: "green",
    ProgressionAction.HOLD_LOAD: "yellow",
    ProgressionAction.REDUCE_SETS: "yellow",
    ProgressionAction.REDUCE_LOAD: "red",
    ProgressionAction.DELOAD: "cyan",
}


def print_suggestion(decision: ProgressionDecision, week: int, phase: MesoPhase) -> None:
    """Print a progression engine suggestion with its notes."""
    style = ACTION_STYLES[decision.action]
    console.print(f"Week {week} ({phase.value}): [{style}]{decision.action.value}[/{style}]")
    console.print(
        f"Next: [bold]{format_load(round(decision.next_load, 1))}[/bold]"
        f" × {decision.next_sets} sets"
    )
    for note in decision.notes:
        console.print(f"  [dim]{note}[/dim]")


def print_warmup(plan: WarmupPlan, exercise_name: str) -> None:
    """Print the warm-up card."""
    console.print()
    console.print("[bold]Warm-up (Non-negotiable)[/bold]")

    console.print("\n[dim]1) Base (5–6 min)[/dim]")
    for step in plan.base:
        console.print(f"  • {step}")

    console.print(f"\n[dim]2) Primer (60–90 sec) for {exercise_name}[/dim]")
    for step in plan.primer:
        console.print(f"  • {step}")

    console.print("\n[dim]3) Ramp sets (first lift only)[/dim]")
    for line in plan.ramp_lines():
        console.print(f"  • {line}")

    for note in plan.notes:
        console.print(f"\n[dim]{note}[/dim]")
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
