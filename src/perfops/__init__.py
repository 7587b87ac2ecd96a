# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PerfOps API client.

This package submits ping tests to the PerfOps network-diagnostics API and
reads back the per-node results. HTTP behavior is abstracted behind an
injectable client interface, and API objects are modeled with typed
dataclasses.
"""

from .client import PerfOpsClient
from .config import ClientSettings, load_client_settings
from .errors import (
    DecodeError,
    ErrorCategory,
    PerfOpsError,
    RequestCancelledError,
    RequestTimeoutError,
    RunError,
    TransportError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import Ping, PingID, PingItem, PingOutput, PingResult, is_complete
from .services import RunService
from .utils.context import RequestContext, cancellable_context, request_context
from .version import __version__

__all__ = [
    "ClientSettings",
    "DecodeError",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "PerfOpsClient",
    "PerfOpsError",
    "Ping",
    "PingID",
    "PingItem",
    "PingOutput",
    "PingResult",
    "RequestCancelledError",
    "RequestContext",
    "RequestTimeoutError",
    "RunError",
    "RunService",
    "StubHttpClient",
    "TransportError",
    "cancellable_context",
    "create_default_http_client",
    "is_complete",
    "load_client_settings",
    "request_context",
    "setup_logging",
    "__version__",
]
