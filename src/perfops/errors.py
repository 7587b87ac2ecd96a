# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    HTTP_ERROR = "HTTP_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class PerfOpsError(Exception):
    """Base class for every error raised by this package."""


class TransportError(PerfOpsError):
    """The HTTP call could not be completed or returned a non-success status."""

    category = ErrorCategory.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        category: ErrorCategory | None = None,
        url: str | None = None,
        response_body: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        if category is not None:
            self.category = category
        elif status_code is not None:
            self.category = ErrorCategory.HTTP_ERROR
        self.url = url
        self.response_body = response_body
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class RequestCancelledError(TransportError):
    """The request context was cancelled before the call finished."""

    category = ErrorCategory.CANCELLED


class RequestTimeoutError(RequestCancelledError):
    """The request context timeout elapsed before the call finished."""

    category = ErrorCategory.TIMEOUT


class DecodeError(PerfOpsError):
    """A response body is not valid JSON or does not fit the expected shape."""

    category = ErrorCategory.DECODE_ERROR


class RunError(PerfOpsError):
    """The backend accepted the HTTP call but rejected the run request."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, PerfOpsError):
        return getattr(exc, "category", ErrorCategory.UNKNOWN_ERROR)

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.CANCELLED: "Request cancelled",
        ErrorCategory.HTTP_ERROR: "API returned an error status",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.DECODE_ERROR: "Malformed API response",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "DecodeError",
    "ErrorCategory",
    "PerfOpsError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "RunError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
