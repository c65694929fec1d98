"""Focus mode - Pomodoro timer core for Focus Timer CLI."""

from .history import PomodoroSession, calculate_stats, recent_sessions, sort_sessions
from .recorder import SessionIdFactory, create_session_record
from .settings import TimerSettings
from .state import ActiveSessionSnapshot, Phase, TimerState
from .engine import TimerEngine

__all__ = [
    "ActiveSessionSnapshot",
    "Phase",
    "PomodoroSession",
    "SessionIdFactory",
    "TimerEngine",
    "TimerSettings",
    "TimerState",
    "calculate_stats",
    "create_session_record",
    "recent_sessions",
    "sort_sessions",
]
