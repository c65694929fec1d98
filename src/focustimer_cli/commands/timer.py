"""Pomodoro timer commands for Focus Timer CLI."""

import typer

from focustimer_cli.core.clock import SystemClock
from focustimer_cli.core.lifecycle import ManualLifecycleSource, SignalLifecycleSource
from focustimer_cli.core.scheduler import LoopScheduler
from focustimer_cli.models.focus.engine import TimerEngine
from focustimer_cli.models.focus.history import PomodoroSession
from focustimer_cli.models.focus.keyboard import KeyboardHandler
from focustimer_cli.models.focus.state import TimerState
from focustimer_cli.models.focus.ui import (
    TimerDisplay,
    format_clock,
    show_session_summary,
)
from focustimer_cli.services.config_service import get_config_service
from focustimer_cli.services.persistence_gateway import (
    PersistenceGateway,
    create_gateway,
)
from focustimer_cli.utils.ui.console import get_console
from focustimer_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Pomodoro timer for focus sessions")


def _print_state(state: TimerState) -> None:
    phase = "Break" if state.is_break else "Focus"
    if state.running:
        status = "[green]running[/green]"
    elif state.elapsed_ms > 0:
        status = "[yellow]paused[/yellow]"
    else:
        status = "[dim]idle[/dim]"
    console.print(
        f"{phase} {status}  {format_clock(state.remaining_ms)} remaining"
        f"  •  {state.distractions} distraction(s)"
    )


def _run_headless(operation: str) -> TimerState:
    """Restore the engine from disk, apply one operation and persist.

    The engine is not torn down afterwards: the command only borrows the
    in-flight phase, it does not navigate away from it. The resulting
    phase is checkpointed even when idle so the next command sees it.
    """
    gateway = create_gateway()
    recorded: list[PomodoroSession] = []
    try:
        engine = TimerEngine(
            gateway,
            LoopScheduler(SystemClock()),
            ManualLifecycleSource(),
            tick_interval_ms=get_config_service().config.timer.tick_interval_ms,
            on_session_recorded=recorded.append,
        )
        getattr(engine, operation)()
        engine.checkpoint()
        state = engine.state
    finally:
        gateway.close()

    for session in recorded:
        kind = "Completed" if session.completed else "Partial"
        console.print(
            f"[dim]{kind} session saved ({session.actual_duration_sec / 60:.1f} min)[/dim]"
        )
    return state


@app.command("run")
@command_wrapper
def run_timer():
    """Open the full-screen timer (s start/pause, d distraction, r reset, q quit)."""
    config = get_config_service().config
    gateway: PersistenceGateway = create_gateway(background=True)
    gateway.initialize_settings()

    clock = SystemClock()
    scheduler = LoopScheduler(clock)
    display = TimerDisplay(console)
    recorded: list[PomodoroSession] = []

    def on_session_recorded(session: PomodoroSession) -> None:
        recorded.append(session)
        display.session_recorded(session)

    engine: TimerEngine | None = None
    keyboard = KeyboardHandler()
    lifecycle = SignalLifecycleSource(
        before_stop=keyboard.stop, after_continue=keyboard.setup
    )
    try:
        engine = TimerEngine(
            gateway,
            scheduler,
            lifecycle,
            clock,
            tick_interval_ms=config.timer.tick_interval_ms,
            on_session_recorded=on_session_recorded,
        )
        handlers = {
            "toggle": engine.start,
            "reset": engine.reset,
            "distraction": engine.record_distraction,
        }

        def pump() -> None:
            lifecycle.dispatch_pending()
            scheduler.run_pending()

        lifecycle.install()
        display.run(
            lambda: engine.state,
            keyboard.get_command,
            lambda command: handlers[command](),
            pump,
            refresh_per_second=config.timer.refresh_per_second,
        )
    finally:
        keyboard.stop()
        lifecycle.uninstall()
        if engine is not None:
            state = engine.state
            engine.teardown()
        gateway.close()

    show_session_summary(recorded, console)
    if state.running or state.elapsed_ms > 0:
        console.print(
            "[yellow]Phase in progress saved.[/yellow] "
            "Use 'focustimer run' or 'focustimer timer status' to pick it up."
        )


@app.command("start")
@command_wrapper
def start_timer():
    """Start the current phase in the background (pauses if already running)."""
    _print_state(_run_headless("start"))


@app.command("pause")
@command_wrapper
def pause_timer():
    """Pause the running phase."""
    _print_state(_run_headless("pause"))


@app.command("reset")
@command_wrapper
def reset_timer():
    """Abandon the current phase and switch to the other one."""
    _print_state(_run_headless("reset"))


@app.command("distract")
@command_wrapper
def record_distraction():
    """Count one distraction in the current phase."""
    _print_state(_run_headless("record_distraction"))


@app.command("status")
@command_wrapper
def timer_status(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
):
    """Show the in-flight phase without changing it."""
    gateway = create_gateway()
    snapshot = gateway.load_snapshot()
    settings = gateway.load_settings()

    if snapshot is None:
        data = {
            "phase": "focus",
            "status": "idle",
            "remaining": format_clock(settings.focus_ms),
            "distractions": 0,
        }
    else:
        remaining = snapshot.remaining_at(SystemClock().now_ms())
        total = snapshot.break_ms if snapshot.is_break else snapshot.focus_ms
        if not snapshot.running:
            status = "idle" if remaining >= total else "paused"
        elif remaining > 0:
            status = "running"
        else:
            status = "expired"
        data = {
            "phase": snapshot.phase,
            "status": status,
            "remaining": format_clock(remaining),
            "distractions": snapshot.distractions,
        }

    if output != "pretty":
        format_output(data, output)
        return

    console.print("\n[bold cyan]Current Timer[/bold cyan]\n")
    console.print(f"Phase: {data['phase'].title()}")
    console.print(f"Status: {data['status']}")
    console.print(f"Time remaining: {data['remaining']}")
    console.print(f"Distractions: {data['distractions']}")
    if data["status"] == "expired":
        console.print("\n[yellow]Phase finished while away; it will be recorded on next run.[/yellow]")
    console.print()
