# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

from collections.abc import Sequence

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and offline use.

    Responses are keyed by ``(method, url)``. Registering a sequence replays
    its entries in order and then keeps returning the last one, which models
    a backend that fills in results between polls.
    """

    def __init__(self, responses: dict[tuple[str, str], HttpResponse | Sequence[HttpResponse]] | None = None):
        self._responses: dict[tuple[str, str], list[HttpResponse]] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False
        for (method, url), response in (responses or {}).items():
            self.add(method, url, response)

    def add(self, method: str, url: str, response: HttpResponse | Sequence[HttpResponse]) -> None:
        queue = [response] if isinstance(response, HttpResponse) else list(response)
        if not queue:
            raise ValueError("at least one response is required")
        self._responses[(method.upper(), url)] = queue

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._responses.get((request.method.upper(), request.url))
        if not queue:
            return HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured")
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def close(self) -> None:
        self.closed = True


def json_response(payload: str, status_code: int = 200) -> HttpResponse:
    """Build a received response carrying a JSON text body."""
    return HttpResponse(
        ok=True,
        status_code=status_code,
        headers={"content-type": "application/json"},
        text=payload,
        content=payload.encode("utf-8"),
    )
