"""Main entry point for Focus Timer CLI."""

import typer
from rich.console import Console

from focustimer_cli import __version__
from focustimer_cli.commands import config, history, settings, timer

app = typer.Typer(
    name="focustimer",
    help="A Pomodoro focus timer for the terminal",
    no_args_is_help=True,
)

console = Console()


# Add subcommands
app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(history.app, name="history", help="Session history and statistics")
app.add_typer(settings.app, name="settings", help="Focus and break durations")
app.add_typer(config.app, name="config", help="Configuration management")


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Focus Timer CLI[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def run() -> None:
    """Open the full-screen timer."""
    # Delegate to timer command
    timer.run_timer()


@app.command()
def status(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Show the in-flight phase."""
    timer.timer_status(output=output)


@app.command()
def stats(
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Analyse only the N most recent sessions"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Show focus statistics."""
    history.show_stats(limit=limit, output=output)


if __name__ == "__main__":
    app()
