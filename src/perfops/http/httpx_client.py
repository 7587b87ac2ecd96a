# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import suppress
from typing import Any

import httpx

from ..config import ClientSettings, load_client_settings
from ..errors import RequestCancelledError, RequestTimeoutError, categorize_exception
from ..utils.context import get_request_context
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# Upper bound on how long a cancelled call keeps blocking its caller.
CANCEL_POLL_INTERVAL = 0.05


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    When a call carries a cancel event or a deadline, the round trip runs on a
    worker thread while the caller waits on it, so cancellation and the
    wall-clock timeout also cover connecting and waiting for headers. The
    abandoned exchange is closed and left to finish on its own.
    """

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_client_settings()
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        context = get_request_context()
        cancel_event = request.cancel_event if request.cancel_event is not None else context.cancel_event
        timeout = request.timeout
        if timeout is None:
            timeout = context.timeout if context.timeout is not None else self.settings.timeout
        deadline = time.monotonic() + timeout if timeout and timeout > 0 else None

        try:
            if cancel_event is not None and cancel_event.is_set():
                raise RequestCancelledError("request cancelled", url=request.url)

            logger.debug("%s %s", request.method, request.url)
            if cancel_event is None and deadline is None:
                return self._fetch(request, headers, timeout, cancel_event, deadline, {})
            return self._fetch_interruptible(request, headers, timeout, cancel_event, deadline)
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

    def _fetch_interruptible(
        self,
        request: HttpRequest,
        headers: dict[str, str],
        timeout: float | None,
        cancel_event: threading.Event | None,
        deadline: float | None,
    ) -> HttpResponse:
        outcome: dict[str, Any] = {}
        in_flight: dict[str, Any] = {}
        done = threading.Event()

        def worker() -> None:
            try:
                outcome["response"] = self._fetch(request, headers, timeout, cancel_event, deadline, in_flight)
            except Exception as exc:  # noqa: BLE001
                outcome["error"] = exc
            finally:
                done.set()

        threading.Thread(target=worker, name="perfops-http", daemon=True).start()

        while not done.is_set():
            if cancel_event is not None and cancel_event.is_set():
                reason: Exception = RequestCancelledError("request cancelled", url=request.url)
            elif deadline is not None and time.monotonic() >= deadline:
                reason = RequestTimeoutError(f"request timed out after {timeout}s", url=request.url)
            else:
                wait = CANCEL_POLL_INTERVAL
                if deadline is not None:
                    wait = min(wait, max(0.0, deadline - time.monotonic()))
                done.wait(wait)
                continue
            response = in_flight.get("response")
            if response is not None:
                with suppress(Exception):
                    response.close()
            raise reason

        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def _fetch(
        self,
        request: HttpRequest,
        headers: dict[str, str],
        timeout: float | None,
        cancel_event: threading.Event | None,
        deadline: float | None,
        in_flight: dict[str, Any],
    ) -> HttpResponse:
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        with self._client.stream(
            request.method,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
        ) as resp:
            in_flight["response"] = resp
            content = bytearray()
            truncated = False
            for chunk in resp.iter_bytes():
                if cancel_event is not None and cancel_event.is_set():
                    raise RequestCancelledError("request cancelled", url=request.url)
                if deadline is not None and time.monotonic() >= deadline:
                    raise RequestTimeoutError(f"request timed out after {timeout}s", url=request.url)
                if not chunk:
                    continue
                remaining = max_body_bytes - len(content)
                if remaining <= 0:
                    truncated = True
                    break
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)

            encoding = resp.encoding or "utf-8"
            try:
                text = bytes(content).decode(encoding, errors="replace")
            except LookupError:
                text = bytes(content).decode("utf-8", errors="replace")

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=text,
            content=bytes(content),
            url=str(resp.url),
            meta={
                "body_truncated": truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    def close(self) -> None:
        self._client.close()
