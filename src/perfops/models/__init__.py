# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for the PerfOps client."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .run import Ping, PingID, PingItem, PingOutput, PingResult, is_complete

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "Ping",
    "PingID",
    "PingItem",
    "PingOutput",
    "PingResult",
    "is_complete",
]
