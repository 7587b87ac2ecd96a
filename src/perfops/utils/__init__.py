# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared helpers."""

from .context import (
    RequestContext,
    cancellable_context,
    check_cancelled,
    get_request_context,
    request_context,
    resolve_request_context,
)

__all__ = [
    "RequestContext",
    "cancellable_context",
    "check_cancelled",
    "get_request_context",
    "request_context",
    "resolve_request_context",
]
