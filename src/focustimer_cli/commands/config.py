"""Configuration management commands."""

import typer

from focustimer_cli.services.config_service import get_config_service
from focustimer_cli.utils.logger import log_file_path
from focustimer_cli.utils.ui.console import get_console
from focustimer_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    service = get_config_service()
    data = service.config.model_dump()
    data["resolved_data_dir"] = str(service.data_dir)
    data["log_file"] = str(log_file_path())
    format_output(data, output)


@app.command("set-tick")
@command_wrapper
def set_tick(
    interval_ms: int = typer.Argument(..., help="Tick interval in milliseconds (1-50)"),
) -> None:
    """Set how often the running timer recomputes remaining time."""
    get_config_service().update_config(timer={"tick_interval_ms": interval_ms})
    format_success(f"Tick interval set to {interval_ms} ms")


@app.command("set-data-dir")
@command_wrapper
def set_data_dir(
    path: str = typer.Argument(..., help="Directory for history, snapshot and settings"),
) -> None:
    """Store timer data in a different directory."""
    get_config_service().update_config(storage={"data_dir": path})
    format_success(f"Data directory set to {path}")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?", default=False):
        console.print("[yellow]Cancelled.[/yellow]")
        return
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
