"""Background writer for fire-and-forget persistence.

Writes are submitted from the engine's thread and executed in submission
order on a single worker, so the tick path never waits on disk I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait

from .logger import get_child_logger

WriteJob = Callable[[], None]


class InlineWriter:
    """Runs each job immediately on the caller's thread.

    Used by tests and one-shot commands where blocking is harmless.
    """

    def submit(self, job: WriteJob, description: str = "write") -> None:
        """Run ``job`` now."""
        job()

    def drain(self) -> None:
        """Nothing is ever pending."""

    def close(self) -> None:
        """Nothing to release."""


class BackgroundWriter:
    """Single-worker executor for storage writes."""

    def __init__(self, thread_name: str = "focustimer-writer"):
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=thread_name
        )
        self._pending: set[Future] = set()
        self._closed = False

    def submit(self, job: WriteJob, description: str = "write") -> None:
        """Queue ``job``; failures are logged, never raised to the caller."""
        if self._closed:
            raise RuntimeError("BackgroundWriter is closed")

        def run() -> None:
            try:
                job()
            except Exception:
                get_child_logger("background").exception(
                    "background %s failed", description
                )

        future = self._executor.submit(run)
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)

    def drain(self) -> None:
        """Block until every job submitted so far has finished."""
        pending = list(self._pending)
        if pending:
            wait(pending)

    def close(self) -> None:
        """Flush outstanding writes and stop the worker."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
