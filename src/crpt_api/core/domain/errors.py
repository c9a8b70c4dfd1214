"""Domain exceptions raised by the admission gate and the submitter."""

from __future__ import annotations


class CrptApiError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(CrptApiError, ValueError):
    """Raised at construction time for invalid limits, units or settings."""


class DocumentValidationError(CrptApiError):
    """Raised when a document cannot be submitted as given."""


class CapacityError(CrptApiError):
    """Raised when the in-flight ceiling is already reached."""

    def __init__(self, in_flight: int, ceiling: int) -> None:
        super().__init__(f"Too many requests: {in_flight} in flight (ceiling {ceiling})")
        self.in_flight = in_flight
        self.ceiling = ceiling


class TransportError(CrptApiError):
    """Raised when serialization or the HTTP exchange fails."""


class CancellationError(CrptApiError):
    """Raised when a wait for a permit is cancelled or times out.

    No permit is consumed and no release is scheduled when this is raised.
    """
