# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""API service exports."""

from .run import RunService

__all__ = ["RunService"]
