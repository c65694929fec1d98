"""Host lifecycle notifications (suspend / resume).

For a terminal program the host "backgrounds" us through job control:
Ctrl-Z delivers SIGTSTP and ``fg`` delivers SIGCONT.
``SignalLifecycleSource`` turns those into ``suspended``/``resumed`` events.
"""

from __future__ import annotations

import os
import signal
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from typing import Literal

from focustimer_cli.utils.logger import get_child_logger

LifecycleEvent = Literal["suspended", "resumed"]
LifecycleListener = Callable[[LifecycleEvent], None]


class LifecycleSource(ABC):
    """Emits suspend/resume notifications for the host process."""

    @abstractmethod
    def subscribe(self, listener: LifecycleListener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unsubscribes it."""
        raise NotImplementedError("LifecycleSource.subscribe() must be implemented")


class ManualLifecycleSource(LifecycleSource):
    """Lifecycle source whose events are emitted by the owner."""

    def __init__(self):
        self._listeners: list[LifecycleListener] = []

    def subscribe(self, listener: LifecycleListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: LifecycleEvent) -> None:
        """Deliver ``event`` to every current listener."""
        get_child_logger("lifecycle").info("host %s", event)
        for listener in list(self._listeners):
            listener(event)


class SignalLifecycleSource(ManualLifecycleSource):
    """Maps SIGTSTP/SIGCONT to lifecycle events.

    The signal handlers only queue the event. The owner's loop calls
    ``dispatch_pending`` to deliver it, so listeners (and the storage
    writes they trigger) never run inside a signal handler.

    ``before_stop`` runs after listeners have seen ``suspended`` and right
    before the process actually stops (e.g. to restore terminal modes);
    ``after_continue`` runs before listeners see ``resumed``.
    """

    def __init__(
        self,
        before_stop: Callable[[], None] | None = None,
        after_continue: Callable[[], None] | None = None,
    ):
        super().__init__()
        self._before_stop = before_stop
        self._after_continue = after_continue
        self._previous: dict[int, object] = {}
        self._pending: deque[LifecycleEvent] = deque()

    @staticmethod
    def supported() -> bool:
        return hasattr(signal, "SIGTSTP") and hasattr(signal, "SIGCONT")

    def install(self) -> None:
        """Install signal handlers (main thread only). No-op on Windows."""
        if not self.supported() or self._previous:
            return
        self._previous[signal.SIGTSTP] = signal.signal(signal.SIGTSTP, self._on_stop)
        self._previous[signal.SIGCONT] = signal.signal(signal.SIGCONT, self._on_cont)

    def uninstall(self) -> None:
        """Restore the handlers that were active before ``install``."""
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def dispatch_pending(self) -> int:
        """Deliver queued events in arrival order; returns how many ran."""
        count = 0
        while self._pending:
            event = self._pending.popleft()
            count += 1
            if event == "suspended":
                self.emit("suspended")
                if self._before_stop:
                    self._before_stop()
                self._stop_process()
            else:
                if self._after_continue:
                    self._after_continue()
                self.emit("resumed")
        return count

    def _stop_process(self) -> None:
        # Stop for real with the default action, then re-arm once continued.
        signal.signal(signal.SIGTSTP, signal.SIG_DFL)
        os.kill(os.getpid(), signal.SIGTSTP)
        signal.signal(signal.SIGTSTP, self._on_stop)

    def _on_stop(self, signum, frame) -> None:
        self._pending.append("suspended")

    def _on_cont(self, signum, frame) -> None:
        self._pending.append("resumed")
