"""Timer duration settings commands."""

import typer

from focustimer_cli.models.focus.settings import (
    DEFAULT_BREAK_SECONDS,
    DEFAULT_FOCUS_SECONDS,
    TimerSettings,
)
from focustimer_cli.services.persistence_gateway import create_gateway
from focustimer_cli.utils import exit_codes
from focustimer_cli.utils.ui.console import get_console
from focustimer_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Focus and break durations")


def _as_minutes(settings: TimerSettings) -> dict:
    return {
        "focus_minutes": settings.focus_seconds / 60,
        "break_minutes": settings.break_seconds / 60,
    }


def _ensure_saved(gateway, failures_before: int = 0) -> None:
    if gateway.failure_count > failures_before:
        raise AppError(
            "Could not save settings, see the log for details",
            exit_code=exit_codes.ERROR_STORAGE,
        )


@app.command("show")
@command_wrapper
def show_settings(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
):
    """Show the configured durations."""
    settings = create_gateway().load_settings()
    format_output(_as_minutes(settings), output)


@app.command("set")
@command_wrapper
def set_settings(
    focus: int | None = typer.Option(None, "--focus", "-f", min=1, help="Focus minutes"),
    break_: int | None = typer.Option(None, "--break", "-b", min=1, help="Break minutes"),
):
    """Change focus and/or break duration (whole minutes greater than 0).

    Applies to an idle timer right away and to a running one from its next phase.
    """
    if focus is None and break_ is None:
        raise AppError(
            "Nothing to change. Use --focus and/or --break.",
            exit_code=exit_codes.ERROR_INVALID_ARGS,
        )

    gateway = create_gateway()
    current = gateway.load_settings()
    settings = TimerSettings(
        focus_seconds=focus * 60 if focus is not None else current.focus_seconds,
        break_seconds=break_ * 60 if break_ is not None else current.break_seconds,
    )
    failures_before = gateway.failure_count
    gateway.save_settings(settings)
    gateway.close()
    _ensure_saved(gateway, failures_before)
    format_success("Settings saved")
    format_output(_as_minutes(settings))


@app.command("reset")
@command_wrapper
def reset_settings():
    """Restore the default 25 / 5 minute durations."""
    gateway = create_gateway()
    gateway.save_settings(
        TimerSettings(
            focus_seconds=DEFAULT_FOCUS_SECONDS, break_seconds=DEFAULT_BREAK_SECONDS
        )
    )
    gateway.close()
    _ensure_saved(gateway)
    format_success("Settings reset to defaults")
