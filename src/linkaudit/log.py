# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for LinkAudit."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("LINKAUDIT_LOG_LEVEL", "WARNING").upper()

# httpx/httpcore announce every request at INFO, which drowns the per-link progress output.
NOISY_LOGGERS = ("httpx", "httpcore")


def level_for_verbosity(verbosity: int) -> str | None:
    """Map a repeated ``-v`` count onto a level name (None keeps the default)."""
    if verbosity <= 0:
        return None
    if verbosity == 1:
        return "INFO"
    return "DEBUG"


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, effective_level, logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["level_for_verbosity", "setup_logging"]
