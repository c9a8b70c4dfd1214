"""tests/crpt_api/conftest.py

Common fixtures for the entire test suite.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import date

import httpx
import pytest
from typer.testing import CliRunner

from crpt_api.core.domain.errors import TransportError
from crpt_api.core.domain.models import Document, Product
from crpt_api.core.ports.submitter_port import RawResponse


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep CRPT_API_* variables and any local .env out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("CRPT_API_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def document() -> Document:
    d = date(2024, 3, 15)
    return Document(
        participant_inn="participantInnValue",
        doc_id="docIdValue",
        doc_status="docStatusValue",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="ownerInnValue",
        producer_inn="producerInnValue",
        production_date=d,
        production_type="productionTypeValue",
        products=(
            Product(
                certificate_document="certificateDocumentValue",
                certificate_document_date=d,
                certificate_document_number="certificateDocumentNumberValue",
                owner_inn="ownerInnValue",
                producer_inn="producerInnValue",
                production_date=d,
                tnved_code="tnvedCodeValue",
                uit_code="uitCodeValue",
                uitu_code="uituCodeValue",
            ),
        ),
        reg_date=d,
        reg_number="regNumberValue",
    )


class StubSubmitter:
    """In-memory DocumentSubmitterPort that records calls.

    ``gate`` (a threading.Event) makes submit() block until it is set.
    ``error`` makes submit() raise TransportError.
    """

    def __init__(self, status_code: int = 200, body: str = '{"value":"ok"}') -> None:
        self.status_code = status_code
        self.body = body
        self.error: str | None = None
        self.gate: threading.Event | None = None
        self.calls: list[Document] = []
        self._lock = threading.Lock()

    def submit(self, document: Document) -> RawResponse:
        with self._lock:
            self.calls.append(document)
        if self.gate is not None:
            self.gate.wait(5.0)
        if self.error is not None:
            raise TransportError(self.error)
        return RawResponse(status_code=self.status_code, body=self.body)


@pytest.fixture
def stub_submitter() -> StubSubmitter:
    return StubSubmitter()


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request seen by the transport is appended to ``add_response.calls``.
    """
    responses = {}
    calls_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        json_payload: dict | None = None,
        content: bytes | None = None,
    ):
        """Register a mock response for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = content if content is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        request.read()
        calls_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, body = responses[key]
            headers = {"Content-Length": str(len(body))}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
