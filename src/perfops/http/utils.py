# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON request helpers shared by the API services."""

from __future__ import annotations

import json
from typing import Any

from ..config import ClientSettings
from ..errors import (
    DecodeError,
    ErrorCategory,
    PerfOpsError,
    RequestCancelledError,
    RequestTimeoutError,
    TransportError,
    categorize_exception,
)
from ..utils.context import RequestContext, resolve_request_context
from .client import HttpClient
from .models import HttpRequest, HttpResponse

ERROR_BODY_SNIPPET_CHARS = 512


def build_json_request(
    method: str,
    url: str,
    *,
    settings: ClientSettings,
    body: Any | None = None,
    context: RequestContext | None = None,
) -> HttpRequest:
    """Build an HttpRequest carrying a JSON body, auth headers, and the caller's context."""
    ctx = resolve_request_context(context)
    headers = {
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }
    if settings.api_key:
        headers["Authorization"] = settings.api_key

    data: bytes | None = None
    if body is not None:
        data = json.dumps(body).encode("utf-8")
        headers["Content-Type"] = "application/json"

    return HttpRequest(
        url=url,
        method=method.upper(),
        headers=headers,
        body=data,
        timeout=ctx.timeout,
        cancel_event=ctx.cancel_event,
    )


def _error_message_from_body(text: str) -> str:
    try:
        payload = json.loads(text) if text else None
    except json.JSONDecodeError:
        payload = None
    if isinstance(payload, dict):
        for key in ("error", "Error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    snippet = (text or "").strip()
    if len(snippet) > ERROR_BODY_SNIPPET_CHARS:
        snippet = snippet[:ERROR_BODY_SNIPPET_CHARS] + "..."
    return snippet or "request failed"


def _raise_for_transport(request: HttpRequest, response: HttpResponse) -> None:
    message = response.error_message or "request failed"
    if response.error_category == ErrorCategory.TIMEOUT:
        raise RequestTimeoutError(message, url=request.url)
    if response.error_category == ErrorCategory.CANCELLED:
        raise RequestCancelledError(message, url=request.url)
    category = response.error_category if response.error_category != ErrorCategory.NONE else None
    raise TransportError(message, category=category, url=request.url)


def request_json(client: HttpClient, request: HttpRequest) -> Any:
    """
    Send ``request`` and decode its JSON body.

    Raises TransportError when no response arrives or the status is not 2xx,
    and DecodeError when the body is not valid JSON or was cut off at the
    body size limit.
    """
    if request.cancel_event is not None and request.cancel_event.is_set():
        raise RequestCancelledError("request cancelled", url=request.url)
    try:
        response = client.request(request)
    except PerfOpsError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise TransportError(str(exc), category=categorize_exception(exc), url=request.url) from exc

    if not response.ok:
        _raise_for_transport(request, response)

    if not response.is_success:
        raise TransportError(
            _error_message_from_body(response.text),
            status_code=response.status_code,
            url=response.url or request.url,
            response_body=response.text,
        )

    if response.meta.get("body_truncated"):
        limit = response.meta.get("body_bytes_limit")
        raise DecodeError(f"response from {request.url} exceeds the {limit}-byte body limit and was truncated")

    try:
        return json.loads(response.text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON response from {request.url}: {exc}") from exc


__all__ = [
    "build_json_request",
    "request_json",
]
