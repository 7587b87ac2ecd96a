# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from perfops import log
from perfops.log import resolve_log_level, setup_logging


def test_resolve_log_level_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("PERFOPS_LOG_LEVEL", "debug")
    assert resolve_log_level() == logging.DEBUG
    monkeypatch.setenv("PERFOPS_LOG_LEVEL", "error")
    assert resolve_log_level() == logging.ERROR


def test_resolve_log_level_explicit_and_fallback(monkeypatch):
    monkeypatch.delenv("PERFOPS_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.WARNING
    assert resolve_log_level("info") == logging.INFO
    assert resolve_log_level("not-a-level") == logging.WARNING


def test_setup_logging_passes_level_and_format(monkeypatch):
    captured = {}
    monkeypatch.setattr(log.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    monkeypatch.setenv("PERFOPS_LOG_LEVEL", "INFO")
    setup_logging()
    assert captured == {"level": logging.INFO, "format": log.LOG_FORMAT}
    setup_logging("debug")
    assert captured["level"] == logging.DEBUG
