"""Periodic callback scheduling.

The engine only needs ``schedule``/``cancel``. ``LoopScheduler`` is the
cooperative implementation used by the CLI: the host loop calls
``run_pending()`` between keyboard polls, so callbacks always run on the
host's thread and never overlap.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from .clock import Clock

TickCallback = Callable[[], None]


class Scheduler(ABC):
    """Fires a callback at a fixed period until cancelled."""

    @abstractmethod
    def schedule(self, period_ms: int, callback: TickCallback) -> int:
        """Start firing ``callback`` every ``period_ms``; returns a handle."""
        raise NotImplementedError("Scheduler.schedule() must be implemented")

    @abstractmethod
    def cancel(self, handle: int) -> None:
        """Stop a schedule. Unknown or already-cancelled handles are ignored."""
        raise NotImplementedError("Scheduler.cancel() must be implemented")


@dataclass
class _Job:
    period_ms: int
    callback: TickCallback
    next_due_ms: int


class LoopScheduler(Scheduler):
    """Scheduler pumped by the caller's event loop."""

    def __init__(self, clock: Clock):
        self._clock = clock
        self._jobs: dict[int, _Job] = {}
        self._handles = itertools.count(1)

    def schedule(self, period_ms: int, callback: TickCallback) -> int:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive")
        handle = next(self._handles)
        self._jobs[handle] = _Job(
            period_ms=period_ms,
            callback=callback,
            next_due_ms=self._clock.now_ms() + period_ms,
        )
        return handle

    def cancel(self, handle: int) -> None:
        self._jobs.pop(handle, None)

    @property
    def active(self) -> int:
        """Number of live schedules."""
        return len(self._jobs)

    def run_pending(self) -> int:
        """Fire every due callback once; returns how many fired.

        Missed periods are not replayed: a late job fires once and its next
        due time is measured from now.
        """
        fired = 0
        now = self._clock.now_ms()
        for handle, job in list(self._jobs.items()):
            # an earlier callback in this pass may have cancelled it
            if handle not in self._jobs or now < job.next_due_ms:
                continue
            job.next_due_ms = now + job.period_ms
            job.callback()
            fired += 1
        return fired

    def ms_until_next(self) -> int | None:
        """Milliseconds until the next job is due, or None when idle."""
        if not self._jobs:
            return None
        now = self._clock.now_ms()
        return max(0, min(job.next_due_ms for job in self._jobs.values()) - now)
