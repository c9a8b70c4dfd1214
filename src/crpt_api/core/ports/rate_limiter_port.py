from __future__ import annotations

from threading import Event
from typing import Optional, Protocol


class PermitPoolPort(Protocol):
    def acquire(self, *, timeout: Optional[float] = None, cancel_event: Optional[Event] = None) -> None:
        """Block until a permit is available, then take it."""

    def release(self) -> None:
        """Return one permit to the pool. Safe to call from any thread."""

    def available_permits(self) -> int:
        """Point-in-time snapshot of free permits; never use it for admission."""
        ...


class ReleaseSchedulerPort(Protocol):
    def schedule_release(self, pool: PermitPoolPort, delay: float) -> bool:
        """Arrange one ``pool.release()`` after ``delay`` seconds without blocking.

        Returns False when the release could not be scheduled.
        """
        ...


class RateLimiterPort(Protocol):
    def acquire(self, *, timeout: Optional[float] = None, cancel_event: Optional[Event] = None) -> None:
        """Block until admitted according to the configured rate."""

    def is_saturated(self) -> bool:
        """True when no permit is free right now (best effort)."""
        ...
