from __future__ import annotations

from typing import Mapping, Optional

import httpx


class HttpClient:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10
        )

    def post_json(self, url: str, payload: dict) -> httpx.Response:
        """POST ``payload`` as JSON and return the response whatever its status."""
        return self._client.post(url, json=payload)

    def close(self) -> None:
        self._client.close()
