"""Focus session history records and statistics."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Literal

from focustimer_cli.models.exceptions import InvalidPersistedShape

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class PomodoroSession:
    """A finished or abandoned focus phase. Never mutated once created."""

    id: str
    date: str  # ISO 8601
    focus_duration_sec: float
    actual_duration_sec: float
    break_duration_sec: float
    distractions: int
    completed: bool

    @property
    def recorded_at(self) -> datetime:
        """Parse date as datetime."""
        return parse_date(self.date)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "PomodoroSession":
        """Create from dictionary, normalising counters.

        Raises:
            InvalidPersistedShape: If the record is not usable at all
        """
        if not isinstance(data, dict) or "id" not in data or "date" not in data:
            raise InvalidPersistedShape("Session record needs 'id' and 'date'")
        try:
            parse_date(str(data["date"]))
        except ValueError as e:
            raise InvalidPersistedShape(
                f"Session date is not ISO 8601: {data['date']!r}"
            ) from e
        for key in _NUMERIC_FIELDS:
            value = data.get(key)
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidPersistedShape(f"Session '{key}' must be finite")
        return cls(**normalize_session(data))


_NUMERIC_FIELDS = (
    "focus_duration_sec",
    "actual_duration_sec",
    "break_duration_sec",
    "distractions",
)


def parse_date(value: str) -> datetime:
    """Parse an ISO 8601 date; naive dates are taken as local time.

    Raises:
        ValueError: If ``value`` is not ISO 8601
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.astimezone()


def _non_negative(value: Any) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def normalize_session(data: dict) -> dict:
    """Coerce missing or negative durations/distractions to zero.

    Older records may lack fields or carry negative durations from clock
    adjustments; readers should never have to special-case them.
    """
    return {
        "id": str(data["id"]),
        "date": str(data["date"]),
        "focus_duration_sec": _non_negative(data.get("focus_duration_sec")),
        "actual_duration_sec": _non_negative(data.get("actual_duration_sec")),
        "break_duration_sec": _non_negative(data.get("break_duration_sec")),
        "distractions": int(_non_negative(data.get("distractions"))),
        "completed": bool(data.get("completed", False)),
    }


def sort_sessions(
    sessions: list[PomodoroSession], order: SortOrder = "desc"
) -> list[PomodoroSession]:
    """Sort sessions by their date."""
    if order not in ("asc", "desc"):
        raise ValueError(f"Invalid sort order: {order}")
    return sorted(sessions, key=lambda s: s.recorded_at, reverse=order == "desc")


def recent_sessions(
    sessions: list[PomodoroSession], limit: int = 6
) -> list[PomodoroSession]:
    """
    Get the most recently recorded sessions, newest first.

    Args:
        sessions: History in append order
        limit: Maximum number of sessions to return

    Returns:
        Up to ``limit`` sessions
    """
    if limit <= 0:
        return []
    return list(reversed(sessions[-limit:]))


def calculate_stats(sessions: list[PomodoroSession]) -> dict[str, Any] | None:
    """
    Summarise a list of sessions.

    Args:
        sessions: Sessions to analyse

    Returns:
        Dictionary with statistics, or None if there are no sessions
    """
    if not sessions:
        return None

    total = len(sessions)
    completed = sum(1 for s in sessions if s.completed)
    total_focus_minutes = sum(s.actual_duration_sec for s in sessions) / 60
    total_distractions = sum(s.distractions for s in sessions)

    return {
        "total_sessions": total,
        "completed_sessions": completed,
        "completion_rate": round(completed / total * 100, 1),
        "total_focus_hours": round(total_focus_minutes / 60, 2),
        "avg_focus_minutes": round(total_focus_minutes / total, 1),
        "avg_distractions": round(total_distractions / total),
    }
