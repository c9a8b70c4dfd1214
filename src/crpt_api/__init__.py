"""crpt_api package: app/core/infra/config.

Expose the rate-limited client and domain types at the package level.
"""

from .app.api import AppConfig, CrptApiClient
from .core.domain.enums import TimeUnit
from .core.domain.errors import (
    CancellationError,
    CapacityError,
    ConfigurationError,
    CrptApiError,
    DocumentValidationError,
    TransportError,
)
from .core.domain.models import Document, Product
from .core.domain.outcomes import InvalidInput, RejectedByCapacity, SubmissionOutcome, Success, TransportFailure

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptApiClient",
    "AppConfig",
    "TimeUnit",
    "Document",
    "Product",
    "SubmissionOutcome",
    "Success",
    "RejectedByCapacity",
    "InvalidInput",
    "TransportFailure",
    "CrptApiError",
    "ConfigurationError",
    "DocumentValidationError",
    "CapacityError",
    "TransportError",
    "CancellationError",
]
