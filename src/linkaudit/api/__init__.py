# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP API exports."""

from .app import create_app

__all__ = ["create_app"]
