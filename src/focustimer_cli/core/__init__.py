"""Host-facing collaborators of the timer engine: clock, scheduler, lifecycle."""

from .clock import Clock, SystemClock
from .lifecycle import (
    LifecycleSource,
    ManualLifecycleSource,
    SignalLifecycleSource,
)
from .scheduler import LoopScheduler, Scheduler

__all__ = [
    "Clock",
    "SystemClock",
    "Scheduler",
    "LoopScheduler",
    "LifecycleSource",
    "ManualLifecycleSource",
    "SignalLifecycleSource",
]
