from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Event, Lock
from typing import Iterator, Optional

from ..domain.errors import CapacityError, ConfigurationError
from ..domain.models import RateWindow
from ..ports.rate_limiter_port import PermitPoolPort, RateLimiterPort, ReleaseSchedulerPort

logger = logging.getLogger(__name__)


class RateLimitedGate(RateLimiterPort):
    """Admission gate: at most ``pool.capacity`` admissions per rate window.

    Every successful ``acquire`` immediately schedules the return of its permit
    one window later, so the caller's own latency never holds a permit longer.
    Independently, ``in_flight`` caps how many calls may be inside the gate at
    once (waiting for a permit or still submitting).
    """

    def __init__(
        self,
        pool: PermitPoolPort,
        scheduler: ReleaseSchedulerPort,
        window: RateWindow,
        max_in_flight: Optional[int] = None,
    ) -> None:
        if max_in_flight is not None and max_in_flight <= 0:
            raise ConfigurationError("In-flight ceiling should be positive non-zero integer!")
        self._pool = pool
        self._scheduler = scheduler
        self._window = window
        self._max_in_flight = max_in_flight
        self._in_flight = 0
        self._in_flight_lock = Lock()

    @property
    def window(self) -> RateWindow:
        return self._window

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    def acquire(self, *, timeout: Optional[float] = None, cancel_event: Optional[Event] = None) -> None:
        """Block until a permit is taken, then schedule its release.

        Raises:
            CancellationError: The wait was cancelled; nothing was consumed or scheduled.
        """
        self._pool.acquire(timeout=timeout, cancel_event=cancel_event)
        if not self._scheduler.schedule_release(self._pool, self._window.seconds):
            # Returning the permit now beats losing it for good
            logger.warning("Permit release could not be scheduled; returning permit immediately")
            self._pool.release()
            return
        logger.debug("Admitted; %d permit(s) left", self._pool.available_permits())

    @contextmanager
    def in_flight(self) -> Iterator[None]:
        """Hold one in-flight slot for the duration of the block.

        Raises:
            CapacityError: The ceiling is already reached. Nothing is consumed.
        """
        with self._in_flight_lock:
            if self._max_in_flight is not None and self._in_flight >= self._max_in_flight:
                raise CapacityError(self._in_flight, self._max_in_flight)
            self._in_flight += 1
        try:
            yield
        finally:
            with self._in_flight_lock:
                self._in_flight -= 1

    def is_saturated(self) -> bool:
        return self._pool.available_permits() == 0
