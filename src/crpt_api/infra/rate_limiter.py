from __future__ import annotations

import heapq
import itertools
import logging
import time
from collections import deque
from threading import Condition, Event, Lock, Thread
from typing import Optional

from ..core.domain.errors import CancellationError, ConfigurationError
from ..core.ports.rate_limiter_port import PermitPoolPort, ReleaseSchedulerPort

logger = logging.getLogger(__name__)

# How often a waiter re-checks its cancel event while blocked.
_CANCEL_POLL_SECONDS = 0.05


class PermitPool(PermitPoolPort):
    """Counting admission primitive with a fixed capacity and FIFO waiters.

    Each caller of ``acquire`` takes a ticket; only the oldest waiting ticket
    may take a permit, so a late arrival never overtakes a blocked caller.

    Example:
        pool = PermitPool(capacity=10)
        pool.acquire()
        ...
        pool.release()  # from any thread, at any later time
    """

    def __init__(self, capacity: int) -> None:
        if capacity is None or capacity <= 0:
            raise ConfigurationError("Request limit should be positive non-zero integer!")
        self._capacity = capacity
        self._available = capacity
        self._lock = Lock()
        # One condition per waiter, all on the same lock, so only the head is woken
        self._waiters: deque[Condition] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def acquire(self, *, timeout: Optional[float] = None, cancel_event: Optional[Event] = None) -> None:
        """Block until a permit is free, then take it.

        Args:
            timeout: Give up after this many seconds. None waits forever.
            cancel_event: Setting this event from another thread aborts the wait.

        Raises:
            CancellationError: The wait was cancelled or timed out. No permit is taken.
        """
        ticket = Condition(self._lock)
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._lock:
            self._waiters.append(ticket)
            try:
                while not (self._waiters[0] is ticket and self._available > 0):
                    if cancel_event is not None and cancel_event.is_set():
                        raise CancellationError("Wait for a permit was cancelled")
                    wait = _CANCEL_POLL_SECONDS if cancel_event is not None else None
                    if deadline is not None:
                        remaining = deadline - time.monotonic()
                        if remaining <= 0:
                            raise CancellationError(f"Timed out after {timeout}s waiting for a permit")
                        wait = remaining if wait is None else min(wait, remaining)
                    ticket.wait(wait)
                self._available -= 1
            finally:
                self._waiters.remove(ticket)
                self._wake_head()

    def release(self) -> None:
        with self._lock:
            if self._available >= self._capacity:
                logger.warning("Ignoring release into a full permit pool (capacity=%d)", self._capacity)
                return
            self._available += 1
            self._wake_head()

    def _wake_head(self) -> None:
        if self._waiters and self._available > 0:
            self._waiters[0].notify()

    def available_permits(self) -> int:
        """Return the number of free permits at this instant.

        The value may be stale by the time the caller reads it. Use it for
        observability only.
        """
        return self._available


class ReleaseScheduler(ReleaseSchedulerPort):
    """Delay queue that returns permits to their pool after a fixed delay.

    Pending releases live in a min-heap keyed by fire time and are serviced by a
    small fixed set of daemon worker threads, so scheduling is O(log n) and no
    thread is spawned per acquisition. Releases fire whether or not the caller
    that took the permit ever finishes its own work.

    Example:
        with ReleaseScheduler(workers=1) as scheduler:
            pool.acquire()
            scheduler.schedule_release(pool, delay=1.0)
    """

    def __init__(self, workers: int = 1, name: str = "crpt-release") -> None:
        if workers <= 0:
            raise ConfigurationError("Release scheduler needs at least one worker")
        self._workers = workers
        self._name = name
        self._heap: list[tuple[float, int, PermitPoolPort]] = []
        self._seq = itertools.count()
        self._cond = Condition(Lock())
        self._threads: list[Thread] = []
        self._accepting = True
        self._drain = False

    def start(self) -> "ReleaseScheduler":
        with self._cond:
            if self._threads:
                return self
            for i in range(self._workers):
                t = Thread(target=self._run, name=f"{self._name}-{i}", daemon=True)
                self._threads.append(t)
                t.start()
        logger.debug("Started release scheduler with %d worker(s)", self._workers)
        return self

    def schedule_release(self, pool: PermitPoolPort, delay: float) -> bool:
        fire_at = time.monotonic() + max(0.0, delay)
        with self._cond:
            if not self._accepting:
                logger.warning("Release scheduler is shut down; cannot schedule permit release")
                return False
            entry = (fire_at, next(self._seq), pool)
            heapq.heappush(self._heap, entry)
            if self._heap[0] is entry:
                self._cond.notify()
        logger.debug("Scheduled permit release in %.3fs", delay)
        return True

    def pending(self) -> int:
        with self._cond:
            return len(self._heap)

    def shutdown(self, *, drain: bool = False, timeout: Optional[float] = None) -> None:
        """Stop accepting releases and stop the workers.

        Args:
            drain: If True, workers keep firing pending releases at their due
                time before exiting. If False, pending releases are dropped.
            timeout: Max seconds to wait for each worker to exit.
        """
        with self._cond:
            self._accepting = False
            self._drain = drain
            if not drain and self._heap:
                logger.warning("Dropping %d pending permit release(s) on shutdown", len(self._heap))
                self._heap.clear()
            self._cond.notify_all()
            threads = list(self._threads)
        for t in threads:
            t.join(timeout)
            if t.is_alive():
                logger.warning("Release worker %s did not stop within %ss", t.name, timeout)

    def _next_due(self) -> Optional[PermitPoolPort]:
        """Pop the next due entry, waiting as needed. None means the worker should exit."""
        with self._cond:
            while True:
                if not self._heap:
                    if not self._accepting:
                        return None
                    self._cond.wait()
                    continue
                if not self._accepting and not self._drain:
                    return None
                fire_at = self._heap[0][0]
                now = time.monotonic()
                if fire_at <= now:
                    _, _, pool = heapq.heappop(self._heap)
                    return pool
                self._cond.wait(fire_at - now)

    def _run(self) -> None:
        while True:
            pool = self._next_due()
            if pool is None:
                return
            try:
                pool.release()
            except Exception:
                logger.warning("Scheduled permit release failed", exc_info=True)

    def __enter__(self) -> "ReleaseScheduler":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
