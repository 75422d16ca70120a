"""Coaching commands: decide, suggest, readiness, rep-range."""

import json
from typing import Annotated, Optional

import typer

from ...core.models import SetPerformance
from ...core.progression import decide_for, next_load
from ...core.progression_engine import phase_for_week, snapshots_from_logged, suggest_for_week
from ...core.readiness import allow_test_set, load_modifier
from ...core.rep_ranges import display, infer_pattern, range_for
from ...io.serializers import (
    parse_reps,
    parse_snapshot_sets,
    validate_cluster,
    validate_positive,
    validate_stars,
)
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


@app.command()
def decide(
    reps: Annotated[
        str,
        typer.Option("--reps", "-r", help="Reps per working set, e.g. 12,12,11"),
    ],
    target_upper: Annotated[
        Optional[int],
        typer.Option("--target-upper", "-t", help="Top of the rep range"),
    ] = None,
    exercise: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Exercise ID; rep range top is used as target"),
    ] = None,
    rep_drop: Annotated[
        Optional[int],
        typer.Option("--rep-drop", help="Rep drop across sets, default: first minus last"),
    ] = None,
    load: Annotated[
        Optional[float],
        typer.Option("--load", "-l", help="Load used this session"),
    ] = None,
    stars: Annotated[
        Optional[int],
        typer.Option("--stars", "-s", help="Readiness for the next session (1-5)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Decide whether load should increase, decrease or hold next session.
    """
    try:
        actual = parse_reps(reps)
        if target_upper is None:
            if exercise is None:
                raise ValidationError("Give --target-upper or --exercise")
            target_upper = range_for(infer_pattern(exercise)).max
        if stars is not None:
            validate_stars(stars)
        if load is not None:
            validate_positive(load, "Load")
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    performance = SetPerformance.from_reps(actual, target_upper)
    if rep_drop is not None:
        performance = SetPerformance(tuple(actual), target_upper, rep_drop)

    decision = decide_for(performance)
    new_load = next_load(load, decision, stars) if load is not None else None

    if json_out:
        print(json.dumps({
            "decision": type(decision).__name__.lower(),
            "percent": decision.signed_percent,
            "target_upper": target_upper,
            "rep_drop": performance.rep_drop,
            "next_load": round(new_load, 2) if new_load is not None else None,
        }, indent=2))
        return

    views.print_decision(decision, load, new_load)


@app.command()
def suggest(
    sets: Annotated[
        str,
        typer.Option("--sets", help="Last session's sets as reps@load/rir, e.g. '8@100/2, 7@100/1'"),
    ],
    cluster: Annotated[
        str,
        typer.Option(
            "--cluster", "-c",
            help="primary_chest_press, secondary_press_or_arms, primary_leg, "
                 "pump_isolation or low_back_stability",
        ),
    ],
    current_sets: Annotated[
        Optional[int],
        typer.Option("--current-sets", help="Working sets performed, default: number logged"),
    ] = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Meso week, default: week of --date from the anchor"),
    ] = None,
    date_str: DateOption = None,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Suggest next session's load and set count from logged reps, load and RIR.
    """
    try:
        logged = parse_snapshot_sets(sets)
        exercise_cluster = validate_cluster(cluster)
        if current_sets is not None:
            validate_positive(current_sets, "Current sets")
        if week is None:
            week = get_calendar(store_path).week_day(resolve_date(date_str)).week
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    snapshots = snapshots_from_logged(
        [s.reps for s in logged],
        [s.load for s in logged],
        [s.rir for s in logged],
    )
    if current_sets is None:
        current_sets = len(logged)

    decision = suggest_for_week(snapshots, current_sets, week, exercise_cluster)
    if decision is None:
        views.print_error("No complete sets logged (reps and load must both be above 0)")
        raise typer.Exit(1)

    phase = phase_for_week(week)

    if json_out:
        print(json.dumps({
            "week": week,
            "phase": phase.value,
            "cluster": exercise_cluster.value,
            "action": decision.action.value,
            "next_load": decision.next_load,
            "next_sets": decision.next_sets,
            "notes": list(decision.notes),
        }, indent=2, ensure_ascii=False))
        return

    views.print_suggestion(decision, week, phase)


@app.command()
def readiness(
    stars: Annotated[int, typer.Argument(help="Readiness rating (1-5 stars)")],
    json_out: JsonOption = False,
) -> None:
    """
    Show the load modifier and test-set permission for a readiness rating.
    """
    try:
        validate_stars(stars)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    modifier = load_modifier(stars)
    test_ok = allow_test_set(stars)

    if json_out:
        print(json.dumps({
            "stars": stars,
            "load_modifier": modifier,
            "allow_test_set": test_ok,
        }, indent=2))
        return

    views.console.print(f"Readiness: {'★' * stars}{'☆' * (5 - stars)}")
    views.console.print(f"Load modifier: [bold]{modifier:+.0%}[/bold]")
    if test_ok:
        views.print_success("Test set allowed today.")
    else:
        views.print_info("No test set today.")


@app.command("rep-range")
def rep_range(
    exercise_id: Annotated[str, typer.Argument(help="Exercise ID, e.g. bench_press")],
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="Exercise display name, used when the ID is not recognized"),
    ] = None,
    target: Annotated[
        Optional[int],
        typer.Option("--target", help="Planned target reps to display with the range"),
    ] = None,
    spine_sensitive: Annotated[
        bool,
        typer.Option("--spine-sensitive", help="Back is fussy today (hinges fixed at 10)"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Show the rep range for an exercise.
    """
    pattern = infer_pattern(exercise_id, name)
    rr = range_for(pattern, spine_sensitive)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "pattern": pattern.value,
            "min": rr.min,
            "max": rr.max,
        }, indent=2))
        return

    text = display(target, rr) if target is not None else f"{rr.min}–{rr.max}"
    views.console.print(f"{exercise_id} ({pattern.value}): [bold]{text}[/bold]")
