"""Background expiry for secret values.

Two strategies share the same contract: call ``expire_if_due()`` on a value
until it reports destruction, and stop as soon as the value is destroyed.

- ``ExpirySweeper`` is one daemon thread per value, polling at the value's
  sweep interval.
- ``SweepScheduler`` is one daemon thread for many values, sleeping until the
  earliest expiry timestamp in a heap.

Both hold weak references so a forgotten value can still be collected.
"""

import heapq
import itertools
import logging
import threading
import time
import weakref
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .secret import SecretValue

logger = logging.getLogger(__name__)


class ExpirySweeper(threading.Thread):
    """Polls a single secret value and destroys it once it has expired."""

    def __init__(self, value: "SecretValue"):
        """
        Initialize the sweeper.

        Args:
            value: The secret value this sweeper is bound to
        """
        super().__init__(name=f"securestring-sweeper-{id(value):x}", daemon=True)
        self._value_ref = weakref.ref(value)
        self._wakeup = threading.Event()
        self._active = True
        self._launched = False
        self._start_lock = threading.Lock()

    @property
    def active(self) -> bool:
        """Whether the sweeper still intends to poll."""
        return self._active

    def start(self) -> None:
        """Start polling; further calls are no-ops."""
        with self._start_lock:
            if self._launched:
                return
            self._launched = True
        super().start()

    def stop(self) -> None:
        """Ask the loop to exit and interrupt its current wait."""
        self._active = False
        self._wakeup.set()

    def nudge(self) -> None:
        """Cut the current wait short so a new sweep interval takes effect."""
        self._wakeup.set()

    def run(self) -> None:
        while self._active:
            value = self._value_ref()
            if value is None:
                logger.debug("%s: bound value was collected, exiting", self.name)
                break

            value.expire_if_due()
            interval = value.sweep_interval_ms / 1000.0
            # Drop the strong reference before sleeping
            del value

            self._wakeup.wait(interval)
            self._wakeup.clear()

        self._active = False


class SweepScheduler:
    """Shared expiry scheduler keyed by expiry timestamp.

    Values register once at construction and unregister when destroyed. The
    scheduler thread starts lazily on the first registration.
    """

    def __init__(self, name: str = "securestring-scheduler"):
        self.name = name
        self._heap: List[Tuple[float, int, weakref.ref]] = []
        self._counter = itertools.count()
        self._cond = threading.Condition()
        self._thread: Optional[threading.Thread] = None
        self._running = False

    def __len__(self) -> int:
        with self._cond:
            return sum(1 for _, _, ref in self._heap if ref() is not None)

    @property
    def running(self) -> bool:
        return self._running

    def register(self, value: "SecretValue") -> None:
        """
        Schedule ``value`` for destruction at its expiry time.

        Raises:
            ValueError: If the value lives forever
        """
        expires_at = value.expires_at
        if expires_at is None:
            raise ValueError("Only values with a finite lifetime can be scheduled")

        with self._cond:
            heapq.heappush(self._heap, (expires_at.timestamp(), next(self._counter), weakref.ref(value)))
            self._ensure_started()
            self._cond.notify()

    def unregister(self, value: "SecretValue") -> None:
        """Remove ``value`` (and any collected values) from the schedule."""
        with self._cond:
            self._heap = [entry for entry in self._heap if entry[2]() is not None and entry[2]() is not value]
            heapq.heapify(self._heap)
            self._cond.notify()

    def shutdown(self, wait: bool = True, timeout: Optional[float] = 5.0) -> None:
        """
        Stop the scheduler thread.

        Values still registered are destroyed immediately.
        """
        with self._cond:
            self._running = False
            thread = self._thread
            self._thread = None
            pending = [ref for _, _, ref in self._heap]
            self._heap = []
            self._cond.notify_all()

        for ref in pending:
            value = ref()
            if value is not None:
                value.destroy()
            del value

        if wait and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _ensure_started(self) -> None:
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            with self._cond:
                while self._running and not self._heap:
                    self._cond.wait()
                if not self._running:
                    return

                due, _, ref = self._heap[0]
                delay = due - time.time()
                if delay > 0:
                    self._cond.wait(delay)
                    continue

                heapq.heappop(self._heap)

            value = ref()
            if value is None:
                continue

            if not value.expire_if_due() and not value.is_destroyed:
                # Clock granularity left it a hair short of expiry
                with self._cond:
                    heapq.heappush(self._heap, (due, next(self._counter), ref))
                    self._cond.wait(0.001)
            del value


_default_scheduler: Optional[SweepScheduler] = None
_default_scheduler_lock = threading.Lock()


def default_scheduler() -> SweepScheduler:
    """Return the process-wide shared scheduler, creating it on first use."""
    global _default_scheduler
    with _default_scheduler_lock:
        if _default_scheduler is None:
            _default_scheduler = SweepScheduler()
        return _default_scheduler
