# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the PerfOps client."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_BASE_PATH = "https://api.perfops.net"
DEFAULT_USER_AGENT = f"perfops-python/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or None


def normalize_base_path(base_path: str) -> str:
    """Strip trailing slashes so endpoint paths can be appended directly."""
    return str(base_path or "").strip().rstrip("/")


@dataclass
class ClientSettings:
    """Connection defaults shared by every service of a client."""

    base_path: str = DEFAULT_BASE_PATH
    api_key: str | None = None
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    def __post_init__(self) -> None:
        self.base_path = normalize_base_path(self.base_path) or DEFAULT_BASE_PATH

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("PERFOPS_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("PERFOPS_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            base_path=os.getenv("PERFOPS_BASE_PATH", cls.base_path),
            api_key=_optional_str_env("PERFOPS_API_KEY", cls.api_key),
            timeout=timeout,
            user_agent=os.getenv("PERFOPS_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("PERFOPS_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
