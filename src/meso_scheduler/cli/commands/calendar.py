"""Calendar commands: anchor set/ensure/show/clear and label."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_ANCHOR_DAY, DEFAULT_ANCHOR_WEEK
from ...core.engine.config_loader import load_host_config
from .. import views
from ..app import (
    DateOption,
    JsonOption,
    StorePathOption,
    ValidationError,
    app,
    get_calendar,
    resolve_date,
)

anchor_app = typer.Typer(help="Manage the mesocycle anchor (a known date ↔ training day).")
app.add_typer(anchor_app, name="anchor")

WeekOption = Annotated[int, typer.Option("--week", "-w", help="Mesocycle week (>= 1)")]
DayOption = Annotated[int, typer.Option("--day", help="Lift day within the week (1-6)")]


@anchor_app.command("set")
def anchor_set(
    week: WeekOption = DEFAULT_ANCHOR_WEEK,
    day: DayOption = DEFAULT_ANCHOR_DAY,
    date_str: DateOption = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Declare a date as W<week>D<day>, replacing any existing anchor.
    """
    try:
        on = resolve_date(date_str)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    calendar = get_calendar(store_path)
    anchor = calendar.set_anchor(week, day, on)
    views.print_success(f"{on.isoformat()} is now {calendar.label(on)}")
    views.console.print(views.format_anchor(anchor))


@anchor_app.command("ensure")
def anchor_ensure(
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Mesocycle week, default from config.yaml"),
    ] = None,
    day: Annotated[
        Optional[int],
        typer.Option("--day", help="Lift day, default from config.yaml"),
    ] = None,
    date_str: DateOption = None,
    store_path: StorePathOption = None,
) -> None:
    """
    Set the anchor only if none is stored yet.
    """
    try:
        on = resolve_date(date_str)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    defaults = load_host_config()["anchor"]
    calendar = get_calendar(store_path)
    already = calendar.anchor()
    anchor = calendar.ensure_anchor(
        week if week is not None else int(defaults["week"]),
        day if day is not None else int(defaults["day"]),
        on,
    )
    if already is not None:
        views.print_info("Anchor already set; left unchanged.")
    else:
        views.print_success(f"{on.isoformat()} is now {calendar.label(on)}")
    views.console.print(views.format_anchor(anchor))


@anchor_app.command("show")
def anchor_show(
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the stored anchor.
    """
    anchor = get_calendar(store_path).anchor()
    if json_out:
        print(json.dumps({
            "anchor_date": anchor.anchor_date.isoformat() if anchor else None,
            "training_day_number": anchor.training_day_number if anchor else None,
        }, indent=2))
        return
    views.console.print(views.format_anchor(anchor))


@anchor_app.command("clear")
def anchor_clear(
    store_path: StorePathOption = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """
    Remove the stored anchor.
    """
    if not force and not typer.confirm("Remove the mesocycle anchor?"):
        raise typer.Exit(0)
    get_calendar(store_path).clear_anchor()
    views.print_success("Anchor removed.")


@app.command()
def label(
    date_str: DateOption = None,
    days: Annotated[
        int,
        typer.Option("--days", "-n", help="Show a table of this many consecutive days"),
    ] = 1,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the W<week>D<day> label for a date.
    """
    try:
        on = resolve_date(date_str)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if days < 1:
        views.print_error("--days must be at least 1")
        raise typer.Exit(1)

    calendar = get_calendar(store_path)

    if json_out:
        wd = calendar.week_day(on)
        print(json.dumps({
            "date": on.isoformat(),
            "week": wd.week,
            "day": wd.day,
            "label": str(wd),
            "anchored": calendar.anchor() is not None,
        }, indent=2))
        return

    if calendar.anchor() is None:
        views.print_warning("No anchor set; showing fallback W1D1. Run 'anchor set' first.")

    if days == 1:
        views.console.print(f"{on.isoformat()}: [bold]{calendar.label(on)}[/bold]")
        return

    views.console.print(views.format_label_table(calendar, on, days))
