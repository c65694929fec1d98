"""Wall-clock time source for the timer engine."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """The only time source the timer engine consults."""

    @abstractmethod
    def now_ms(self) -> int:
        """Current wall-clock time in epoch milliseconds."""
        raise NotImplementedError("Clock.now_ms() must be implemented")


class SystemClock(Clock):
    """Clock reading the host's wall clock."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


def to_datetime(epoch_ms: int) -> datetime:
    """Convert epoch milliseconds to a timezone-aware local datetime."""
    return datetime.fromtimestamp(epoch_ms / 1000).astimezone()
