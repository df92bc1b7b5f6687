# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Audit run state, progress and report models."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .probe import ProbeResult


class AuditState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def terminal(self) -> bool:
        return self in {AuditState.COMPLETED, AuditState.CANCELLED}


class AuditPhase(str, Enum):
    IDLE = "IDLE"
    DISCOVERING = "DISCOVERING"
    PROBING = "PROBING"


@dataclass(frozen=True)
class RunProgress:
    completed: int = 0
    total: int = 0
    phase: AuditPhase = AuditPhase.IDLE

    @property
    def fraction(self) -> float:
        return self.completed / self.total if self.total > 0 else 0.0

    @property
    def percent(self) -> float:
        return self.fraction * 100


@dataclass(frozen=True)
class AuditSummary:
    """Aggregate counters for a report."""

    probed: int
    total_links: int
    hits: int
    failed: int
    status_counts: dict[str, int] = field(default_factory=dict)

    @property
    def misses(self) -> int:
        return self.probed - self.hits


@dataclass(frozen=True)
class AuditReport:
    """
    Ordered probe results of one audit run.

    ``results`` follows discovery order and is shorter than ``total_links`` only when the run
    was cancelled.
    """

    results: tuple[ProbeResult, ...] = ()
    total_links: int = 0
    state: AuditState = AuditState.COMPLETED

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[ProbeResult]:
        return iter(self.results)

    def __getitem__(self, index: int) -> ProbeResult:
        return self.results[index]

    @property
    def cancelled(self) -> bool:
        return self.state == AuditState.CANCELLED

    @property
    def complete(self) -> bool:
        return self.state == AuditState.COMPLETED and len(self.results) == self.total_links

    def summary(self) -> AuditSummary:
        status_counts: Counter[str] = Counter()
        for result in self.results:
            status_counts["error" if result.failed else str(result.status)] += 1
        return AuditSummary(
            probed=len(self.results),
            total_links=self.total_links,
            hits=sum(1 for result in self.results if result.cache_hit),
            failed=sum(1 for result in self.results if result.failed),
            status_counts=dict(sorted(status_counts.items())),
        )

    def to_dicts(self) -> list[dict[str, Any]]:
        return [result.to_dict() for result in self.results]

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "totalLinks": self.total_links,
            "results": self.to_dicts(),
        }

    def to_csv(self) -> str:
        from ..audit.export import to_delimited_text

        return to_delimited_text(self)
