"""Warm-up command."""

import json
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_host_config
from ...core.warmup import build_warmup_plan
from ...io.serializers import validate_rounding
from .. import views
from ..app import JsonOption, ValidationError, app


@app.command()
def warmup(
    exercise: Annotated[
        str,
        typer.Option("--exercise", "-e", help="First exercise of the session, e.g. 'Bench Press'"),
    ],
    top_load: Annotated[
        Optional[float],
        typer.Option("--top-load", "-l", help="Planned working load; omit for % guidance"),
    ] = None,
    rounding: Annotated[
        Optional[str],
        typer.Option("--rounding", "-r", help="barbell, dumbbell or machine (default from config.yaml)"),
    ] = None,
    cranky: Annotated[
        Optional[bool],
        typer.Option("--cranky/--no-cranky", help="Add an extra light ramp for a cranky joint"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the warm-up card for the session's first lift.
    """
    cfg = load_host_config()["warmup"]

    try:
        policy = validate_rounding(rounding if rounding is not None else cfg["rounding"])
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    cranky_joint = cranky if cranky is not None else cfg["cranky_joint"]
    plan = build_warmup_plan(exercise, top_load, policy, cranky_joint)

    if json_out:
        print(json.dumps({
            "exercise": exercise,
            "rounding": policy.value,
            "base": list(plan.base),
            "primer": list(plan.primer),
            "ramp": plan.ramp_lines(),
        }, indent=2, ensure_ascii=False))
        return

    views.print_warmup(plan, exercise)
