# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared across services."""

from __future__ import annotations


def join_path(base_path: str, path: str) -> str:
    """
    Append an endpoint path to a base path.

    Only the seam between the two is normalized; the rest of ``path`` is used
    verbatim, so identifiers interpolated into it are not escaped.

    Example:
      join_path("https://api.perfops.net/", "/run/ping") -> https://api.perfops.net/run/ping
    """
    return f"{str(base_path or '').rstrip('/')}/{str(path or '').lstrip('/')}"


__all__ = ["join_path"]
