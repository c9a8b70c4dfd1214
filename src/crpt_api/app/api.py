from __future__ import annotations

from threading import Event
from typing import Optional

from pydantic import ValidationError

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import TimeUnit
from ..core.domain.errors import ConfigurationError
from ..core.domain.models import Document
from ..core.domain.outcomes import SubmissionOutcome


class CrptApiClient:
    """Rate-limited client for the document create API.

    At most ``request_limit`` documents are sent per ``time_unit``; callers
    beyond that block until a permit comes back. The client is safe to share
    between threads.

    Example:
        with CrptApiClient(TimeUnit.SECONDS, 10, api_token="xxx") as client:
            outcome = client.submit_document(document)
            if outcome.ok:
                print(outcome.body)
    """

    def __init__(
        self,
        time_unit: TimeUnit,
        request_limit: int,
        *,
        endpoint_url: str | None = None,
        api_token: str | None = None,
        category_tag: str | None = None,
        max_in_flight: int | None = None,
        timeout_seconds: float | None = None,
        release_workers: int | None = None,
    ):
        """Initialize the client.

        Args:
            time_unit: Length of the rate window (one unit).
            request_limit: Maximum documents sent per window. Must be positive.
            endpoint_url: Optional endpoint override. If None, uses CRPT_API_ENDPOINT_URL or the default.
            api_token: Optional bearer credential. If None, uses CRPT_API_API_TOKEN.
            category_tag: Optional product group for the 'pg' header. If None, uses CRPT_API_CATEGORY_TAG or 'clothes'.
            max_in_flight: Optional in-flight ceiling. If None, uses CRPT_API_MAX_IN_FLIGHT or 10000.
            timeout_seconds: Optional HTTP timeout. If None, uses CRPT_API_TIMEOUT_SECONDS or 20.
            release_workers: Optional number of release scheduler threads. If None, uses CRPT_API_RELEASE_WORKERS or 1.

        Raises:
            ConfigurationError: If time_unit is None, request_limit is not positive,
                or any other setting is invalid.
        """
        if time_unit is None:
            raise ConfigurationError("Provided TimeUnit is null!")
        if request_limit is None or request_limit <= 0:
            raise ConfigurationError("Request limit should be positive non-zero integer!")

        config_dict: dict[str, object] = {"time_unit": time_unit, "request_limit": request_limit}
        if endpoint_url is not None:
            config_dict["endpoint_url"] = endpoint_url
        if api_token is not None:
            config_dict["api_token"] = api_token
        if category_tag is not None:
            config_dict["category_tag"] = category_tag
        if max_in_flight is not None:
            config_dict["max_in_flight"] = max_in_flight
        if timeout_seconds is not None:
            config_dict["timeout_seconds"] = timeout_seconds
        if release_workers is not None:
            config_dict["release_workers"] = release_workers

        try:
            config = AppConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        self._container = Container()
        self._container.config.from_pydantic(config)
        self._container.init_resources()

        self._gate = self._container.gate()
        self._submit_uc = self._container.submit_uc()

    def submit_document(
        self,
        document: Optional[Document],
        *,
        timeout: float | None = None,
        cancel_event: Event | None = None,
    ) -> SubmissionOutcome:
        """Send one document, blocking until the rate limit admits it.

        Args:
            document: Document to create. None yields an InvalidInput outcome
                (the permit is still spent).
            timeout: Optional max seconds to wait for admission.
            cancel_event: Optional event that aborts the wait when set.

        Returns:
            Success with the API status and body, InvalidInput or TransportFailure
            (status 500), or RejectedByCapacity (status 429).

        Raises:
            CancellationError: The wait for admission was cancelled or timed out.
        """
        return self._submit_uc.execute(document, timeout=timeout, cancel_event=cancel_event)

    def is_saturated(self) -> bool:
        """True if no permit is free right now. A snapshot, not a guarantee."""
        return self._gate.is_saturated()

    def close(self) -> None:
        """Stop the release scheduler and close the HTTP client."""
        self._container.shutdown_resources()

    def __enter__(self) -> CrptApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CrptApiClient",
    "AppConfig",
]
