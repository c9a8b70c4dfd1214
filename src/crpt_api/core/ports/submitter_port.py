from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..domain.models import Document


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: str


class DocumentSubmitterPort(Protocol):
    def submit(self, document: Document) -> RawResponse:
        """Serialize the document and POST it once.

        Raises TransportError on network or serialization failure.
        """
        ...
