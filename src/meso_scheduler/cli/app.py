"""Shared Typer app object, shared option types, and store utility."""

from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.meso_calendar import MesoCalendar
from ..io.serializers import ValidationError, parse_date
from ..io.settings_store import JsonSettingsStore, get_default_settings_path

# Shared --store-path option type used across all commands
StorePathOption = Annotated[
    Optional[Path],
    typer.Option("--store-path", "-p", help="Path to settings JSON file"),
]

# Shared --date option type; defaults to today
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", help="Date (YYYY-MM-DD), default: today"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="meso-scheduler",
    help="Mesocycle day labels, load progression and warm-up ramps for strength training.",
    no_args_is_help=True,
)


def get_store(store_path: Path | None) -> JsonSettingsStore:
    """Get settings store from path or default location."""
    if store_path is None:
        store_path = get_default_settings_path()
    return JsonSettingsStore(store_path)


def get_calendar(store_path: Path | None) -> MesoCalendar:
    """Get a MesoCalendar backed by the settings store."""
    return MesoCalendar(get_store(store_path))


def resolve_date(date_str: str | None) -> date:
    """
    Parse a --date value; the host's wall clock is read only when it is omitted.

    Raises:
        ValidationError: If the date is malformed
    """
    if date_str is None:
        return datetime.now().date()
    return parse_date(date_str)


__all__ = [
    "DateOption",
    "JsonOption",
    "StorePathOption",
    "ValidationError",
    "app",
    "get_calendar",
    "get_store",
    "resolve_date",
]
