"""Focus/break timer state machine.

The engine alternates focus and break phases. Elapsed time is always
recomputed from an anchor timestamp instead of being decremented per tick,
so scheduler jitter and host suspension never accumulate drift.

Inputs are discrete and delivered on one thread: operation calls from the
UI, scheduler ticks and lifecycle events. Persistence goes through the
gateway and is never awaited.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from focustimer_cli.core.clock import Clock, SystemClock
from focustimer_cli.core.lifecycle import LifecycleEvent, LifecycleSource
from focustimer_cli.core.scheduler import Scheduler
from focustimer_cli.utils.logger import get_child_logger

from .history import PomodoroSession
from .recorder import SessionIdFactory, create_session_record
from .settings import TimerSettings
from .state import ActiveSessionSnapshot, Phase, TimerState, other_phase

if TYPE_CHECKING:
    from focustimer_cli.services.persistence_gateway import PersistenceGateway

TICK_INTERVAL_MS = 10

# Focus time below this is noise and is not worth an incomplete record.
NOISE_THRESHOLD_MS = 1000


class TimerEngine:
    """
    Pomodoro timer state machine.

    States are Idle/Running crossed with the focus/break phase. The engine
    starts Idle in focus with a full focus duration and cycles forever.

    Durations come in two flavours: the configured ones (from settings,
    applied to the next phase) and the ones captured when the current phase
    began, which drive tick math and history records.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        scheduler: Scheduler,
        lifecycle: LifecycleSource,
        clock: Clock | None = None,
        *,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        on_state_changed: Callable[[TimerState], None] | None = None,
        on_session_recorded: Callable[[PomodoroSession], None] | None = None,
        on_distractions_changed: Callable[[int], None] | None = None,
        on_phase_changed: Callable[[Phase], None] | None = None,
        restore: bool = True,
    ):
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")

        self._gateway = gateway
        self._scheduler = scheduler
        self._clock = clock or SystemClock()
        self._tick_interval_ms = tick_interval_ms
        self._ids = SessionIdFactory()
        self._log = get_child_logger("engine")

        self.on_state_changed = on_state_changed
        self.on_session_recorded = on_session_recorded
        self.on_distractions_changed = on_distractions_changed
        self.on_phase_changed = on_phase_changed

        defaults = TimerSettings()
        self._focus_ms = defaults.focus_ms
        self._break_ms = defaults.break_ms
        self._phase: Phase = "focus"
        self._running = False
        self._remaining_ms = self._focus_ms
        self._distractions = 0

        self._phase_focus_ms = self._focus_ms
        self._phase_break_ms = self._break_ms
        # now - anchor == time spent in the current phase
        self._anchor_ms = 0
        self._segment_start_ms = 0
        self._segment_remaining_ms = 0
        self._tick_handle: int | None = None
        self._suspended = False
        self._closed = False

        self._unsubscribe = lifecycle.subscribe(self._on_lifecycle)
        if restore:
            self.resume_from_host()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        return TimerState(
            phase=self._phase,
            running=self._running,
            remaining_ms=self._remaining_ms,
            distractions=self._distractions,
            focus_ms=self._phase_focus_ms,
            break_ms=self._phase_break_ms,
        )

    @property
    def settings(self) -> TimerSettings:
        """Configured durations that the next phase will use."""
        return TimerSettings(
            focus_seconds=self._focus_ms // 1000, break_seconds=self._break_ms // 1000
        )

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._running

    @property
    def remaining_ms(self) -> int:
        return self._remaining_ms

    @property
    def distractions(self) -> int:
        return self._distractions

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def _total_ms(self) -> int:
        return self._phase_break_ms if self._phase == "break" else self._phase_focus_ms

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the current phase, or pause it if already running."""
        self._ensure_open()
        if self._running:
            self.pause()
            return

        self._running = True
        self._begin_segment(self._clock.now_ms())
        self._persist_snapshot()
        self._log.info(
            "started %s phase with %d ms remaining", self._phase, self._remaining_ms
        )
        self._notify()

    def pause(self) -> None:
        """Stop ticking and keep the remaining time. No-op when idle."""
        if not self._running:
            return

        remaining = self._remaining_now()
        self._cancel_ticks()
        if remaining <= 0:
            self._complete_phase()
            return

        self._running = False
        self._remaining_ms = remaining
        self._persist_snapshot()
        self._log.info("paused %s phase at %d ms", self._phase, remaining)
        self._notify()

    def reset(self) -> None:
        """Abandon the current phase and switch to the other one.

        Leaving a focus phase after more than a second of work records an
        incomplete session first.
        """
        self._remaining_ms = max(0, self._remaining_now())
        self._cancel_ticks()
        if self._phase == "focus" and self._elapsed_ms() > NOISE_THRESHOLD_MS:
            self._record(completed=False)

        self._running = False
        self._gateway.clear_snapshot()
        self._log.info("reset %s phase", self._phase)
        self._flip_phase()

    def record_distraction(self) -> None:
        """Count one interruption in the current phase."""
        self._distractions += 1
        if self._running:
            self._persist_snapshot()
        if self.on_distractions_changed:
            self.on_distractions_changed(self._distractions)
        self._notify()

    def apply_settings(self, focus_seconds: int, break_seconds: int) -> None:
        """Update configured durations.

        When idle the current phase is reset to its new duration at once;
        while running, the change applies from the next phase.

        Raises:
            pydantic.ValidationError: If a duration is not a positive integer
        """
        self._apply_settings(
            TimerSettings(focus_seconds=focus_seconds, break_seconds=break_seconds)
        )
        self._notify()

    def suspend(self) -> None:
        """Host is going to the background: persist and stop ticking."""
        if self._suspended:
            return
        self._suspended = True
        if not self._running:
            return

        self._cancel_ticks()
        self._remaining_ms = max(0, self._remaining_now())
        self._persist_snapshot()
        self._log.info("suspended with %d ms remaining", self._remaining_ms)

    def resume_from_host(self) -> None:
        """Rebuild state from stored settings and snapshot.

        Used at cold start and when the host returns to the foreground. A
        running phase that expired meanwhile is completed immediately.
        """
        self._ensure_open()
        self._cancel_ticks()
        self._suspended = False

        settings = self._gateway.load_settings()
        snapshot = self._gateway.load_snapshot()
        self._focus_ms = settings.focus_ms
        self._break_ms = settings.break_ms

        if snapshot is None:
            self._phase = "focus"
            self._running = False
            self._distractions = 0
            self._phase_focus_ms = self._focus_ms
            self._phase_break_ms = self._break_ms
            self._remaining_ms = self._focus_ms
            self._log.debug("no active snapshot, starting fresh")
            self._notify()
            return

        self._phase = snapshot.phase
        self._distractions = snapshot.distractions
        self._phase_focus_ms = snapshot.focus_ms
        self._phase_break_ms = snapshot.break_ms

        if not snapshot.running:
            self._running = False
            self._remaining_ms = min(snapshot.remaining_ms, self._total_ms)
            if (snapshot.focus_ms, snapshot.break_ms) != (self._focus_ms, self._break_ms):
                # settings were edited while paused
                self._apply_settings(settings)
            self._log.debug("restored paused %s phase", self._phase)
            self._notify()
            return

        now = self._clock.now_ms()
        remaining = snapshot.remaining_at(now)
        if remaining > 0:
            # a clock moved backwards must not grow the phase
            self._remaining_ms = min(remaining, self._total_ms)
            self._running = True
            self._begin_segment(now)
            self._persist_snapshot()
            self._log.info(
                "resumed %s phase with %d ms remaining", self._phase, self._remaining_ms
            )
            self._notify()
        else:
            self._log.info("%s phase expired while suspended", self._phase)
            self._running = True
            self._remaining_ms = 0
            self._complete_phase()

    def checkpoint(self) -> None:
        """Persist the current phase even when idle.

        For callers that exit between operations: without it an idle phase
        only lives in memory and the next process starts over in focus.
        """
        self._ensure_open()
        self._persist_snapshot()

    def teardown(self) -> None:
        """Discard the engine, e.g. when its view goes away.

        A running focus phase is recorded as incomplete like ``reset`` does.
        The snapshot is kept so a later ``resume_from_host`` can pick the
        phase up; a paused phase is left alone, it is recorded when it is
        finally reset or completed.
        """
        if self._closed:
            return
        self._remaining_ms = max(0, self._remaining_now())
        self._cancel_ticks()
        if (
            self._running
            and self._phase == "focus"
            and self._elapsed_ms() > NOISE_THRESHOLD_MS
        ):
            self._record(completed=False)
        self._unsubscribe()
        self._closed = True
        self._log.debug("engine torn down")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("TimerEngine has been torn down")

    def _on_lifecycle(self, event: LifecycleEvent) -> None:
        if event == "suspended":
            self.suspend()
        elif event == "resumed":
            if not self._suspended:
                self._log.debug("ignoring resume without a preceding suspend")
            elif self._running:
                self.resume_from_host()
            else:
                # idle: in-memory state is authoritative, only pick up settings
                self._suspended = False
                settings = self._gateway.load_settings()
                if settings != self.settings:
                    self._apply_settings(settings)
                    self._notify()

    def _begin_segment(self, now: int) -> None:
        self._cancel_ticks()
        self._anchor_ms = now - (self._total_ms - self._remaining_ms)
        self._segment_start_ms = now
        self._segment_remaining_ms = self._remaining_ms
        self._suspended = False
        self._tick_handle = self._scheduler.schedule(self._tick_interval_ms, self._tick)

    def _cancel_ticks(self) -> None:
        if self._tick_handle is not None:
            self._scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _remaining_now(self) -> int:
        """Remaining time per the clock; negative once the phase has expired."""
        if not self._running:
            return self._remaining_ms
        return self._total_ms - (self._clock.now_ms() - self._anchor_ms)

    def _elapsed_ms(self) -> int:
        return self._total_ms - self._remaining_ms

    def _tick(self) -> None:
        if not self._running:
            return
        remaining = self._total_ms - (self._clock.now_ms() - self._anchor_ms)
        if remaining <= 0:
            self._complete_phase()
        else:
            self._remaining_ms = remaining
            self._notify()

    def _complete_phase(self) -> None:
        self._cancel_ticks()
        self._running = False
        if self._phase == "focus":
            self._remaining_ms = 0
            self._record(completed=True)
        # a stale running snapshot would replay this completion on resume
        self._gateway.clear_snapshot()
        self._log.info("%s phase complete", self._phase)
        self._flip_phase()

    def _flip_phase(self) -> None:
        self._phase = other_phase(self._phase)
        self._phase_focus_ms = self._focus_ms
        self._phase_break_ms = self._break_ms
        self._remaining_ms = self._total_ms
        had_distractions = self._distractions > 0
        self._distractions = 0
        self._suspended = False

        if had_distractions and self.on_distractions_changed:
            self.on_distractions_changed(0)
        if self.on_phase_changed:
            self.on_phase_changed(self._phase)
        self._notify()

    def _apply_settings(self, settings: TimerSettings) -> None:
        self._focus_ms = settings.focus_ms
        self._break_ms = settings.break_ms
        if not self._running:
            self._phase_focus_ms = self._focus_ms
            self._phase_break_ms = self._break_ms
            self._remaining_ms = self._total_ms
        self._log.debug(
            "settings applied: focus=%ds break=%ds",
            settings.focus_seconds,
            settings.break_seconds,
        )

    def _snapshot(self) -> ActiveSessionSnapshot:
        if self._running:
            remaining, anchor = self._segment_remaining_ms, self._segment_start_ms
        else:
            remaining, anchor = self._remaining_ms, self._segment_start_ms
        return ActiveSessionSnapshot(
            running=self._running,
            is_break=self._phase == "break",
            remaining_ms=max(0, remaining),
            start_anchor_ms=anchor,
            distractions=self._distractions,
            focus_ms=self._phase_focus_ms,
            break_ms=self._phase_break_ms,
        )

    def _persist_snapshot(self) -> None:
        self._gateway.save_snapshot(self._snapshot())

    def _record(self, completed: bool) -> PomodoroSession:
        now = self._clock.now_ms()
        session = create_session_record(
            self.state, completed, now_ms=now, session_id=self._ids.next_id(now)
        )
        self._gateway.append_session(session)
        self._log.info(
            "recorded %s session %s (%.1fs of %.1fs, %d distractions)",
            "completed" if completed else "incomplete",
            session.id,
            session.actual_duration_sec,
            session.focus_duration_sec,
            session.distractions,
        )
        if self.on_session_recorded:
            self.on_session_recorded(session)
        return session

    def _notify(self) -> None:
        if self.on_state_changed:
            self.on_state_changed(self.state)
