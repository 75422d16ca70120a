"""
CLI entry point using Typer.

Provides commands for the training adaptation engine:
- anchor set/ensure/show/clear: Manage the mesocycle anchor
- label: Show W<week>D<day> labels
- decide: Load progression decision for a logged exercise
- readiness: Readiness load modifier and test-set permission
- rep-range: Rep range for an exercise
- warmup: Warm-up card with ramp sets
"""

from .app import app
from .commands import calendar, coaching, warmup  # noqa: F401  (registers commands)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
