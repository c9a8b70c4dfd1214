from __future__ import annotations

import logging
from threading import Event
from typing import Optional

from ..domain.errors import CapacityError, DocumentValidationError, TransportError
from ..domain.models import Document, Product
from ..domain.outcomes import InvalidInput, RejectedByCapacity, SubmissionOutcome, Success, TransportFailure
from ..ports.submitter_port import DocumentSubmitterPort
from ..services.rate_limited_gate import RateLimitedGate

logger = logging.getLogger(__name__)


def _validate(document: Optional[Document]) -> Document:
    if document is None:
        raise DocumentValidationError("Provided document is null!")
    if not isinstance(document, Document):
        raise DocumentValidationError(f"Expected Document, got {type(document).__name__}")
    for i, product in enumerate(document.products):
        if not isinstance(product, Product):
            raise DocumentValidationError(f"products[{i}]: expected Product, got {type(product).__name__}")
    return document


class SubmitDocumentUseCase:
    def __init__(self, gate: RateLimitedGate, submitter: DocumentSubmitterPort) -> None:
        self._gate = gate
        self._submitter = submitter

    def execute(
        self,
        document: Optional[Document],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[Event] = None,
    ) -> SubmissionOutcome:
        """Admit one call through the gate and submit the document.

        The permit is spent as soon as the call is admitted, even if the
        document turns out to be invalid or the transport fails.

        Raises:
            CancellationError: The wait for a permit was cancelled.
        """
        try:
            with self._gate.in_flight():
                self._gate.acquire(timeout=timeout, cancel_event=cancel_event)
                return self._submit(document)
        except CapacityError as e:
            logger.warning("Rejecting document: %s", e)
            return RejectedByCapacity(str(e))

    def _submit(self, document: Optional[Document]) -> SubmissionOutcome:
        try:
            doc = _validate(document)
        except DocumentValidationError as e:
            logger.info("Invalid document: %s", e)
            return InvalidInput(str(e))

        try:
            raw = self._submitter.submit(doc)
        except TransportError as e:
            message = f"Failed to send document to api: {e}"
            logger.warning(message)
            return TransportFailure(message)

        logger.debug("Document %s submitted: HTTP %d", doc.doc_id, raw.status_code)
        return Success(status_code=raw.status_code, body=raw.body)
