# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import httpx

from perfops import config
from perfops.config import DEFAULT_BASE_PATH, DEFAULT_USER_AGENT, ClientSettings
from perfops.errors import (
    DecodeError,
    ErrorCategory,
    RequestCancelledError,
    RequestTimeoutError,
    RunError,
    TransportError,
    categorize_exception,
    error_category_to_reason,
)


def test_client_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("PERFOPS_BASE_PATH", "https://perfops.example/api/")
    monkeypatch.setenv("PERFOPS_API_KEY", "secret-key")
    monkeypatch.setenv("PERFOPS_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("PERFOPS_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("PERFOPS_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("PERFOPS_HTTP_MAX_BODY_BYTES", "1024")

    settings = config.load_client_settings()

    assert settings.base_path == "https://perfops.example/api"
    assert settings.api_key == "secret-key"
    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 1024


def test_client_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("PERFOPS_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("PERFOPS_HTTP_MAX_BODY_BYTES", "-5")
    monkeypatch.setenv("PERFOPS_API_KEY", "   ")
    monkeypatch.delenv("PERFOPS_BASE_PATH", raising=False)
    monkeypatch.delenv("PERFOPS_USER_AGENT", raising=False)

    settings = config.load_client_settings()

    assert settings.timeout == ClientSettings.timeout
    assert settings.max_body_bytes == ClientSettings.max_body_bytes
    assert settings.api_key is None
    assert settings.base_path == DEFAULT_BASE_PATH
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_blank_base_path_uses_default():
    assert ClientSettings(base_path="").base_path == DEFAULT_BASE_PATH
    assert ClientSettings(base_path="http://h//").base_path == "http://h"


def test_load_client_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("PERFOPS_HTTP_TIMEOUT", "7.7")
    assert config.load_client_settings().timeout == 7.7
    monkeypatch.setenv("PERFOPS_HTTP_TIMEOUT", "8.8")
    assert config.load_client_settings().timeout == 8.8


def test_transport_error_message_and_category():
    err = TransportError("boom", status_code=500, url="http://x")
    assert str(err) == "HTTP 500: boom"
    assert err.category == ErrorCategory.HTTP_ERROR

    network = TransportError("unreachable", category=ErrorCategory.DNS_ERROR)
    assert str(network) == "unreachable"
    assert network.status_code is None
    assert network.category == ErrorCategory.DNS_ERROR


def test_cancellation_errors_are_transport_errors():
    assert issubclass(RequestTimeoutError, RequestCancelledError)
    assert issubclass(RequestCancelledError, TransportError)
    assert RequestTimeoutError("slow").category == ErrorCategory.TIMEOUT
    assert RequestCancelledError("stop").category == ErrorCategory.CANCELLED


def test_run_error_keeps_backend_message():
    err = RunError("invalid target")
    assert str(err) == "invalid target"
    assert not isinstance(err, TransportError)


def test_categorize_exception():
    request = httpx.Request("GET", "http://example")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(socket.gaierror("no such host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(DecodeError("bad")) == ErrorCategory.DECODE_ERROR
    assert categorize_exception(ValueError("other")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_connect_error_with_dns_cause():
    try:
        try:
            raise socket.gaierror("no such host")
        except socket.gaierror as exc:
            raise httpx.ConnectError("failed") from exc
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) == ErrorCategory.DNS_ERROR


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Request timed out"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
