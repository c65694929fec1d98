"""Turns engine state into session history records."""

from __future__ import annotations

from focustimer_cli.core.clock import to_datetime

from .history import PomodoroSession
from .state import TimerState


class SessionIdFactory:
    """Time-derived session ids, strictly increasing within a process."""

    def __init__(self):
        self._last = 0

    def next_id(self, now_ms: int) -> str:
        value = max(now_ms, self._last + 1)
        self._last = value
        return str(value)


def create_session_record(
    state: TimerState,
    completed: bool,
    *,
    now_ms: int,
    session_id: str,
) -> PomodoroSession:
    """
    Build the history record for the focus phase described by ``state``.

    ``state.focus_ms`` and ``state.break_ms`` must be the durations captured
    when the focus phase began, not live settings.

    Args:
        state: Engine state at the moment of the event
        completed: True when the phase ran to the end
        now_ms: Event time in epoch milliseconds
        session_id: Unique id for the record
    """
    actual_ms = max(0, state.focus_ms - state.remaining_ms)
    return PomodoroSession(
        id=session_id,
        date=to_datetime(now_ms).isoformat(),
        focus_duration_sec=state.focus_ms / 1000,
        actual_duration_sec=actual_ms / 1000,
        break_duration_sec=state.break_ms / 1000,
        distractions=state.distractions,
        completed=completed,
    )
