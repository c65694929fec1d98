"""Session history and statistics commands."""

import typer
from rich.table import Table

from focustimer_cli.models.focus.history import (
    calculate_stats,
    recent_sessions,
    sort_sessions,
)
from focustimer_cli.services.config_service import get_config_service
from focustimer_cli.services.persistence_gateway import create_gateway
from focustimer_cli.utils import exit_codes
from focustimer_cli.utils.ui.console import get_console
from focustimer_cli.utils.ui.formatters import format_output

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Focus session history and statistics")


def format_duration(seconds: float) -> str:
    """Format seconds as minutes and seconds."""
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    if mins > 0:
        return f"{mins}m {secs:02d}s"
    return f"{secs}s"


@app.command("list")
@command_wrapper
def show_history(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of sessions to show"),
    order: str = typer.Option("desc", "--order", help="Sort by date: asc or desc"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
):
    """Show recorded focus sessions."""
    if order not in ("asc", "desc"):
        raise AppError("Invalid order. Must be: asc or desc", exit_code=exit_codes.ERROR_INVALID_ARGS)

    sessions = create_gateway().load_history()
    if not sessions:
        console.print("[yellow]No focus sessions recorded yet[/yellow]")
        return

    newest = sort_sessions(sessions, "desc")[:limit]
    selected = sort_sessions(newest, order)

    if output != "table":
        format_output([s.to_dict() for s in selected], output)
        return

    table = Table(title=f"Focus Sessions ({len(selected)} of {len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Planned", justify="right")
    table.add_column("Focused", justify="right")
    table.add_column("Break", justify="right")
    table.add_column("Distractions", justify="right")
    table.add_column("Status", justify="center")

    for session in selected:
        status = "[green]✓[/green]" if session.completed else "[yellow]✗[/yellow]"
        table.add_row(
            session.recorded_at.strftime("%Y-%m-%d %H:%M"),
            format_duration(session.focus_duration_sec),
            format_duration(session.actual_duration_sec),
            format_duration(session.break_duration_sec),
            str(session.distractions),
            status,
        )

    console.print(table)


@app.command("stats")
@command_wrapper
def show_stats(
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Analyse only the N most recent sessions"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
):
    """Show focus statistics."""
    sessions = create_gateway().load_history()
    if limit is None:
        limit = get_config_service().config.history.recent_limit
    stats = calculate_stats(recent_sessions(sessions, limit))

    if stats is None:
        console.print("[yellow]No focus sessions recorded yet[/yellow]")
        return

    if output != "pretty":
        format_output(stats, output)
        return

    console.print(f"\n[bold]Focus Statistics (last {stats['total_sessions']} sessions)[/bold]\n")
    console.print(
        f"Sessions Completed: [green]{stats['completed_sessions']}[/green]"
        f"/{stats['total_sessions']} ({stats['completion_rate']}%)"
    )
    console.print(f"Total Focus Time: {stats['total_focus_hours']} hours")
    console.print(f"Average Focus Time: {stats['avg_focus_minutes']} minutes")
    console.print(f"Average Distractions: {stats['avg_distractions']}")
    console.print()
