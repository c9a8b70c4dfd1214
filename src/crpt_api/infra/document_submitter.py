from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..core.domain.errors import TransportError
from ..core.domain.models import Document
from ..core.ports.submitter_port import DocumentSubmitterPort, RawResponse
from .http_client import HttpClient
from .schemas import DocumentPayload

logger = logging.getLogger(__name__)

CATEGORY_HEADER = "pg"


def build_headers(api_token: Optional[str], category_tag: str) -> dict[str, str]:
    """Fixed headers sent with every document create request."""
    headers = {
        "Content-Type": "application/json",
        CATEGORY_HEADER: category_tag,
    }
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"
    return headers


class HttpDocumentSubmitter(DocumentSubmitterPort):
    def __init__(self, http_client: HttpClient, endpoint_url: str) -> None:
        self._http = http_client
        self._endpoint_url = endpoint_url

    def submit(self, document: Document) -> RawResponse:
        try:
            payload = DocumentPayload.from_domain(document).to_wire()
        except (ValidationError, AttributeError, TypeError) as e:
            raise TransportError(f"Failed to serialize document {document.doc_id}: {e}") from e

        logger.debug("POST %s (doc_id=%s, %d product(s))", self._endpoint_url, document.doc_id, len(document.products))
        try:
            resp = self._http.post_json(self._endpoint_url, payload)
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        return RawResponse(status_code=resp.status_code, body=resp.text)
