"""Full-screen timer UI for focus mode."""

import math
import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .history import PomodoroSession
from .state import TimerState


def format_clock(ms: int) -> str:
    """Render milliseconds as MM:SS, rounding partial seconds up."""
    seconds = max(0, math.ceil(ms / 1000))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.message: str | None = None

    def create_layout(self, state: TimerState) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        if state.is_break:
            emoji, title, color = "☕", "Break Time", "green"
        else:
            emoji, title, color = "🍅", "Focus Time", "cyan"
        if not state.running:
            title += " (paused)" if state.elapsed_ms > 0 else ""
            color = "yellow" if state.elapsed_ms > 0 else color

        header_text = Text(f"{emoji}  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(Align.center(self._create_body(state), vertical="middle"))
        layout["footer"].update(
            Align.center(self._create_footer_text(state), vertical="middle")
        )
        return layout

    def _create_body(self, state: TimerState) -> Group:
        components = []

        if not state.running and state.elapsed_ms > 0:
            timer_color = "yellow"
        elif state.remaining_ms < 60_000:
            timer_color = "red"
        else:
            timer_color = "green" if state.is_break else "cyan"

        components.append(
            Text(format_clock(state.remaining_ms), style=f"bold {timer_color}", justify="center")
        )
        components.append(Text(""))

        total = state.total_ms
        progress_pct = min(100, int(state.elapsed_ms / total * 100)) if total > 0 else 0
        bar_width = 40
        filled = int(bar_width * progress_pct / 100)
        progress_text = Text(justify="center")
        progress_text.append(
            "▓" * filled + "░" * (bar_width - filled) + f"  {progress_pct}%", style="dim"
        )
        components.append(progress_text)
        components.append(Text(""))

        components.append(
            Text(f"Distractions: {state.distractions}", style="bold red", justify="center")
        )

        if self.message:
            components.append(Text(""))
            components.append(Text(self.message, style="dim", justify="center"))

        return Group(*components)

    def _create_footer_text(self, state: TimerState) -> Text:
        """Create footer with keyboard hints."""
        action = "pause" if state.running else "start"
        hints = f"'s' {action}  •  'd' distraction  •  'r' reset  •  'q' quit"
        return Text(hints, style="dim", justify="center")

    def session_recorded(self, session: PomodoroSession) -> None:
        """Show a one-line note about a freshly recorded session."""
        if session.completed:
            self.message = f"Focus session complete ({session.actual_duration_sec / 60:.0f} min) 🎉"
        else:
            self.message = f"Partial session saved ({session.actual_duration_sec / 60:.1f} min)"

    def run(
        self,
        get_state: Callable[[], TimerState],
        poll: Callable[[], str | None],
        handle: Callable[[str], None],
        pump: Callable[[], None],
        refresh_per_second: int = 4,
        poll_interval: float = 0.01,
    ) -> str:
        """
        Run the fullscreen timer loop.

        ``poll`` returns the next keyboard command (or None), ``handle``
        applies it, ``pump`` delivers due scheduler ticks.

        Returns 'quit' or 'interrupted'.
        """
        try:
            with Live(
                self.create_layout(get_state()),
                console=self.console,
                refresh_per_second=refresh_per_second,
                screen=True,
            ) as live:
                while True:
                    command = poll()
                    if command == "quit":
                        return "quit"
                    if command:
                        handle(command)

                    pump()
                    live.update(self.create_layout(get_state()))
                    time.sleep(poll_interval)
        except KeyboardInterrupt:
            return "interrupted"


def show_session_summary(sessions: list[PomodoroSession], console: Console | None = None):
    """Show a panel summarising sessions recorded during a run."""
    console = console or Console()
    if not sessions:
        return

    completed = sum(1 for s in sessions if s.completed)
    focused_min = sum(s.actual_duration_sec for s in sessions) / 60
    distractions = sum(s.distractions for s in sessions)

    panel = Panel(
        f"""[bold green]Sessions recorded: {len(sessions)}[/bold green]

Completed: {completed}
Focus time: {focused_min:.1f} minutes
Distractions: {distractions}""",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)
