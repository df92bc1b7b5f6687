# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Seed request and discovery result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..http.url import parse_seed_url


@dataclass(frozen=True)
class SeedRequest:
    """A validated absolute http(s) seed URL. Build with ``SeedRequest.parse``."""

    url: str

    @classmethod
    def parse(cls, url: str | None) -> SeedRequest:
        """Validate ``url`` (raises InvalidSeedUrl) without touching the network."""
        return cls(url=parse_seed_url(url))


@dataclass(frozen=True)
class DiscoveryResult:
    """Unique same-domain links found on the seed page, in first-occurrence document order."""

    seed_url: str
    links: tuple[str, ...] = ()
    status_code: int | None = None
    final_url: str | None = None
    anchors_seen: int = 0
    meta: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def total_links(self) -> int:
        return len(self.links)

    def to_dict(self) -> dict[str, Any]:
        return {"links": list(self.links), "totalLinks": self.total_links}
