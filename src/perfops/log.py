# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for the PerfOps client."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def resolve_log_level(level: str | None = None) -> int:
    """Map an explicit level, else ``PERFOPS_LOG_LEVEL``, to a logging constant (evaluated at call time)."""
    name = (level or os.getenv("PERFOPS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    logging.basicConfig(level=resolve_log_level(level), format=LOG_FORMAT)


__all__ = ["resolve_log_level", "setup_logging"]
