# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cooperative cancellation signal shared by one audit run."""

from __future__ import annotations

import threading


class CancelToken:
    """
    One-shot cancellation flag.

    Setting it is idempotent and thread-safe, so a signal handler, a UI thread or an
    ``on_progress`` callback can all request cancellation. Consumers only poll it at
    iteration boundaries.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.RLock()
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> bool:
        """Request cancellation; returns False when it was already requested."""
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
        return True

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled})"


__all__ = ["CancelToken"]
