"""Configuration models for Focus Timer CLI.

Application-level settings (where data lives, how fast the timer ticks)
are kept in config.json. Focus/break durations are user data and live in
the key-value store alongside history, see ``models.focus.settings``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: str | None = Field(
        default=None, description="Directory for history, snapshot and settings"
    )


class TimerConfig(BaseModel):
    """Timer loop configuration."""

    tick_interval_ms: int = Field(default=10, ge=1, le=50)
    refresh_per_second: int = Field(default=4, ge=1, le=30)


class HistoryConfig(BaseModel):
    """History/statistics configuration."""

    recent_limit: int = Field(default=6, ge=1)


class AppConfig(BaseModel):
    """Main Focus Timer configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
