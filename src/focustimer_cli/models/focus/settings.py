"""Timer duration settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FOCUS_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60


class TimerSettings(BaseModel):
    """Configured focus/break durations, in seconds."""

    model_config = ConfigDict(frozen=True)

    focus_seconds: int = Field(default=DEFAULT_FOCUS_SECONDS, gt=0)
    break_seconds: int = Field(default=DEFAULT_BREAK_SECONDS, gt=0)

    @property
    def focus_ms(self) -> int:
        return self.focus_seconds * 1000

    @property
    def break_ms(self) -> int:
        return self.break_seconds * 1000

    @classmethod
    def from_minutes(cls, focus_minutes: int, break_minutes: int) -> "TimerSettings":
        """Build settings from whole minutes, as entered by the user."""
        return cls(focus_seconds=focus_minutes * 60, break_seconds=break_minutes * 60)
