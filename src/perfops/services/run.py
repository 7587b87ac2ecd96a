# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run API: submit ping tests and read their output."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..config import ClientSettings
from ..errors import DecodeError, RunError
from ..http.client import HttpClient
from ..http.url import join_path
from ..http.utils import build_json_request, request_json
from ..models.run import Ping, PingID, PingOutput
from ..utils.context import RequestContext

logger = logging.getLogger(__name__)

RUN_PING_PATH = "/run/ping"


def _field(payload: Mapping[str, Any], name: str) -> Any:
    """Return the value under ``name``, preferring an exact key over other casings of it."""
    if name in payload:
        return payload[name]
    return next((value for key, value in payload.items() if isinstance(key, str) and key.lower() == name), None)


def _decode_run_envelope(payload: Any) -> tuple[str, str]:
    """Extract ``(error, id)`` from a run submission response."""
    if payload is None:
        return "", ""
    if not isinstance(payload, Mapping):
        raise DecodeError(f"run response: expected a JSON object, got {type(payload).__name__}")
    error = _field(payload, "error")
    test_id = _field(payload, "id")
    if error is None:
        error = ""
    if test_id is None:
        test_id = ""
    if not isinstance(error, str) or not isinstance(test_id, str):
        raise DecodeError("run response: 'error' and 'id' must be strings")
    return error, test_id


class RunService:
    """
    Client for the ``/run`` endpoints.

    The service borrows the settings and transport of its owning client; it
    keeps no state between calls, so one instance may serve concurrent callers.
    """

    def __init__(self, http_client: HttpClient, settings: ClientSettings):
        self.http_client = http_client
        self.settings = settings

    def ping(self, ping: Ping, *, context: RequestContext | None = None) -> PingID:
        """
        Start a ping test and return its ID.

        Raises RunError when the backend answers with an ``error`` message
        instead of an ID.
        """
        url = join_path(self.settings.base_path, RUN_PING_PATH)
        request = build_json_request("POST", url, settings=self.settings, body=ping.to_dict(), context=context)
        error, test_id = _decode_run_envelope(request_json(self.http_client, request))
        if error:
            logger.warning("ping run for %r rejected: %s", ping.target, error)
            raise RunError(error)
        logger.debug("ping run for %r started as %s", ping.target, test_id)
        return PingID(test_id)

    def ping_output(self, ping_id: PingID, *, context: RequestContext | None = None) -> PingOutput:
        """Return the current output of a ping test."""
        url = join_path(self.settings.base_path, f"{RUN_PING_PATH}/{ping_id}")
        request = build_json_request("GET", url, settings=self.settings, context=context)
        return PingOutput.from_mapping(request_json(self.http_client, request))


__all__ = ["RUN_PING_PATH", "RunService"]
