# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level PerfOps client facade."""

from __future__ import annotations

from contextlib import suppress

from .config import ClientSettings, load_client_settings
from .http.client import HttpClient, create_default_http_client
from .models.run import Ping, PingID, PingOutput
from .services.run import RunService
from .utils.context import RequestContext


class PerfOpsClient:
    """
    Convenience wrapper that wires one set of settings and one HTTP client
    across the API services.

    Services borrow the client's settings and transport; closing the client
    closes the transport.
    """

    def __init__(self, settings: ClientSettings | None = None, http_client: HttpClient | None = None):
        self.settings = settings or load_client_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.run = RunService(self.http_client, self.settings)

    def ping(self, ping: Ping, *, context: RequestContext | None = None) -> PingID:
        return self.run.ping(ping, context=context)

    def ping_output(self, ping_id: PingID, *, context: RequestContext | None = None) -> PingOutput:
        return self.run.ping_output(ping_id, context=context)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> PerfOpsClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
