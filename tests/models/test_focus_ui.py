"""Unit tests for models/focus/ui.py.

Tests clock formatting, TimerDisplay layout content, the run loop with
stubbed input, and the end-of-run summary panel.
"""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console
from rich.layout import Layout

from focustimer_cli.models.focus.history import PomodoroSession
from focustimer_cli.models.focus.state import TimerState
from focustimer_cli.models.focus.ui import (
    TimerDisplay,
    format_clock,
    show_session_summary,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _state(
    *,
    phase: str = "focus",
    running: bool = False,
    remaining_ms: int = 1_500_000,
    distractions: int = 0,
) -> TimerState:
    return TimerState(
        phase=phase,
        running=running,
        remaining_ms=remaining_ms,
        distractions=distractions,
        focus_ms=1_500_000,
        break_ms=300_000,
    )


def _session(completed: bool = True, actual: float = 1500.0, distractions: int = 0):
    return PomodoroSession(
        id="1",
        date="2026-03-01T09:00:00+00:00",
        focus_duration_sec=1500.0,
        actual_duration_sec=actual,
        break_duration_sec=300.0,
        distractions=distractions,
        completed=completed,
    )


def _string_console() -> tuple[Console, StringIO]:
    """Return a Console that writes to a StringIO buffer."""
    buf = StringIO()
    con = Console(file=buf, force_terminal=False, no_color=True, width=100)
    return con, buf


def _render(layout: Layout) -> str:
    con, buf = _string_console()
    con.print(layout, height=20)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# format_clock
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "ms,expected",
    [
        (1_500_000, "25:00"),
        (59_001, "01:00"),
        (59_000, "00:59"),
        (1, "00:01"),
        (0, "00:00"),
        (-500, "00:00"),
        (6_000_000, "100:00"),
    ],
)
def test_format_clock(ms, expected):
    assert format_clock(ms) == expected


# ---------------------------------------------------------------------------
# TimerDisplay.create_layout
# ---------------------------------------------------------------------------


class TestCreateLayout:
    def test_returns_layout_with_sections(self):
        layout = TimerDisplay().create_layout(_state())
        assert isinstance(layout, Layout)
        for name in ("header", "body", "footer"):
            assert layout[name] is not None

    def test_idle_focus(self):
        text = _render(TimerDisplay().create_layout(_state()))
        assert "Focus Time" in text
        assert "25:00" in text
        assert "'s' start" in text
        assert "(paused)" not in text

    def test_running_shows_pause_hint(self):
        text = _render(TimerDisplay().create_layout(_state(running=True, remaining_ms=600_000)))
        assert "10:00" in text
        assert "'s' pause" in text

    def test_paused_phase_is_labelled(self):
        text = _render(TimerDisplay().create_layout(_state(remaining_ms=750_000)))
        assert "(paused)" in text
        assert "50%" in text

    def test_break_phase(self):
        text = _render(
            TimerDisplay().create_layout(_state(phase="break", remaining_ms=300_000))
        )
        assert "Break Time" in text
        assert "05:00" in text

    def test_distractions_and_message(self):
        display = TimerDisplay()
        display.message = "hello there"
        text = _render(display.create_layout(_state(distractions=3)))
        assert "Distractions: 3" in text
        assert "hello there" in text


class TestSessionRecorded:
    def test_completed_message(self):
        display = TimerDisplay()
        display.session_recorded(_session(completed=True))
        assert "complete (25 min)" in display.message

    def test_partial_message(self):
        display = TimerDisplay()
        display.session_recorded(_session(completed=False, actual=90.0))
        assert "Partial session saved (1.5 min)" in display.message


# ---------------------------------------------------------------------------
# TimerDisplay.run
# ---------------------------------------------------------------------------


class TestRun:
    def _display(self):
        con, _ = _string_console()
        return TimerDisplay(con)

    def test_quit_command_ends_loop(self):
        commands = iter([None, "toggle", "quit"])
        handled = []
        pumps = []

        result = self._display().run(
            lambda: _state(),
            lambda: next(commands),
            handled.append,
            lambda: pumps.append(1),
            poll_interval=0,
        )

        assert result == "quit"
        assert handled == ["toggle"]
        assert len(pumps) == 2

    def test_keyboard_interrupt_is_reported(self):
        def poll():
            raise KeyboardInterrupt

        result = self._display().run(
            lambda: _state(), poll, lambda c: None, lambda: None, poll_interval=0
        )
        assert result == "interrupted"


# ---------------------------------------------------------------------------
# show_session_summary
# ---------------------------------------------------------------------------


class TestShowSessionSummary:
    def test_nothing_printed_without_sessions(self):
        con, buf = _string_console()
        show_session_summary([], con)
        assert buf.getvalue() == ""

    def test_summarises_sessions(self):
        con, buf = _string_console()
        show_session_summary(
            [_session(distractions=2), _session(completed=False, actual=300.0, distractions=1)],
            con,
        )
        text = buf.getvalue()
        assert "Sessions recorded: 2" in text
        assert "Completed: 1" in text
        assert "Focus time: 30.0 minutes" in text
        assert "Distractions: 3" in text
