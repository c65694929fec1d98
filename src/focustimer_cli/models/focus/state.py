"""Timer state and the persisted in-flight snapshot."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Literal

from focustimer_cli.models.exceptions import InvalidPersistedShape

Phase = Literal["focus", "break"]


def other_phase(phase: Phase) -> Phase:
    """The phase that follows ``phase``."""
    return "break" if phase == "focus" else "focus"


@dataclass(frozen=True)
class TimerState:
    """Read-only view of the engine's in-memory state."""

    phase: Phase
    running: bool
    remaining_ms: int
    distractions: int
    focus_ms: int
    break_ms: int

    @property
    def is_break(self) -> bool:
        return self.phase == "break"

    @property
    def total_ms(self) -> int:
        """Duration of the current phase."""
        return self.break_ms if self.is_break else self.focus_ms

    @property
    def elapsed_ms(self) -> int:
        return self.total_ms - self.remaining_ms


@dataclass(frozen=True)
class ActiveSessionSnapshot:
    """Persisted record of an in-progress phase.

    While ``running`` is true, ``start_anchor_ms`` is the clock reading at
    which the current run segment began and ``remaining_ms`` is what was
    left at that instant, so the remaining time at ``now`` is
    ``remaining_ms - (now - start_anchor_ms)``. While paused,
    ``remaining_ms`` is simply the time left.
    """

    running: bool
    is_break: bool
    remaining_ms: int
    start_anchor_ms: int
    distractions: int
    focus_ms: int
    break_ms: int

    @property
    def phase(self) -> Phase:
        return "break" if self.is_break else "focus"

    def remaining_at(self, now_ms: int) -> int:
        """Time left at ``now_ms``; may be negative if the phase expired."""
        if not self.running:
            return self.remaining_ms
        return self.remaining_ms - (now_ms - self.start_anchor_ms)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "ActiveSessionSnapshot":
        """Create from dictionary.

        Raises:
            InvalidPersistedShape: If fields are missing or have the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidPersistedShape("Snapshot record is not an object")

        values = {}
        for field in fields(cls):
            if field.name not in data:
                raise InvalidPersistedShape(f"Snapshot missing '{field.name}'")
            value = data[field.name]
            if field.name in ("running", "is_break"):
                if not isinstance(value, bool):
                    raise InvalidPersistedShape(f"Snapshot '{field.name}' must be bool")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidPersistedShape(f"Snapshot '{field.name}' must be a number")
            elif isinstance(value, float) and not math.isfinite(value):
                raise InvalidPersistedShape(f"Snapshot '{field.name}' must be finite")
            else:
                value = int(value)
            values[field.name] = value

        if values["remaining_ms"] < 0 or values["distractions"] < 0:
            raise InvalidPersistedShape("Snapshot has negative counters")
        if values["focus_ms"] <= 0 or values["break_ms"] <= 0:
            raise InvalidPersistedShape("Snapshot durations must be positive")
        return cls(**values)
