# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-call request context.

A RequestContext carries the caller's timeout and cooperative cancel signal.
Service calls accept one explicitly; when omitted they read the ambient
context installed with ``request_context()``. The ambient value lives in a
ContextVar so concurrent threads and tasks each see their own.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any

from ..errors import RequestCancelledError


@dataclass(frozen=True)
class RequestContext:
    timeout: float | None = None
    cancel_event: threading.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def cancel(self) -> None:
        """Signal cancellation to every call running under this context."""
        if self.cancel_event is None:
            raise ValueError("context has no cancel_event; create it with cancellable_context()")
        self.cancel_event.set()


_current_request_context: ContextVar[RequestContext | None] = ContextVar("perfops_request_context", default=None)


def get_request_context() -> RequestContext:
    """Return the current ambient request context."""
    return _current_request_context.get() or RequestContext()


def resolve_request_context(context: RequestContext | None = None) -> RequestContext:
    """Prefer an explicitly supplied context over the ambient one."""
    return context if context is not None else get_request_context()


def cancellable_context(timeout: float | None = None) -> RequestContext:
    """Build a context with a fresh cancel event."""
    return RequestContext(timeout=timeout, cancel_event=threading.Event())


def check_cancelled(context: RequestContext, *, url: str | None = None) -> None:
    """Raise RequestCancelledError when the context has been cancelled."""
    if context.cancelled:
        raise RequestCancelledError("request cancelled", url=url)


@contextmanager
def request_context(**overrides: Any) -> Iterator[RequestContext]:
    """
    Context manager that layers overrides onto the ambient RequestContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_request_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_request_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_request_context.reset(token)


__all__ = [
    "RequestContext",
    "cancellable_context",
    "check_cancelled",
    "get_request_context",
    "request_context",
    "resolve_request_context",
]
