# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe result model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FAILED_STATUS = 0
FAILED_STATUS_TEXT = "Request Failed"


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of probing one discovered link.

    Exactly one of these holds: ``status > 0`` (a response arrived, whatever its code) or
    ``error`` is set with ``status == 0`` (the request failed before any status existed).
    """

    url: str
    status: int
    status_text: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    cache_hit: bool = False
    error: str | None = None
    error_type: str | None = None
    final_url: str | None = None
    method: str | None = None
    fallback_used: bool = False

    def __post_init__(self) -> None:
        if self.error is None and self.status == FAILED_STATUS:
            raise ValueError("a ProbeResult without a status must carry an error message")
        if self.error is not None and self.status != FAILED_STATUS:
            raise ValueError("a ProbeResult with an HTTP status cannot carry an error message")

    @classmethod
    def failure(
        cls,
        url: str,
        message: str,
        *,
        error_type: str | None = None,
        method: str | None = None,
        fallback_used: bool = False,
    ) -> ProbeResult:
        return cls(
            url=url,
            status=FAILED_STATUS,
            status_text=FAILED_STATUS_TEXT,
            headers={},
            error=message or "Unknown error",
            error_type=error_type,
            method=method,
            fallback_used=fallback_used,
        )

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def hit_label(self) -> str:
        return "HIT" if self.cache_hit else "MISS"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the external probe shape (camelCase keys, optional fields omitted)."""
        data: dict[str, Any] = {
            "url": self.url,
            "status": self.status,
            "statusText": self.status_text,
            "headers": dict(self.headers),
            "hit": self.cache_hit,
        }
        if self.body is not None:
            data["body"] = self.body
        if self.error is not None:
            data["error"] = self.error
        return data
