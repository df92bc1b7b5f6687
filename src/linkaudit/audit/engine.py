# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Audit engine: probes discovered links one at a time, in order, until done or cancelled."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Protocol

from ..errors import ProbeCancelled
from ..http.client import HttpClient
from ..models import AuditPhase, AuditReport, AuditState, ProbeResult, RunProgress
from ..utils.cancel import CancelToken
from ..utils.context import get_audit_context
from .probe import probe_link

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[RunProgress, ProbeResult], None]


class ProbeFunction(Protocol):
    def __call__(
        self,
        url: str,
        capture_body: bool = False,
        *,
        client: HttpClient | None = None,
        cancel_token: CancelToken | None = None,
    ) -> ProbeResult: ...


class AuditRun:
    """
    One sequential probing pass over a fixed list of links.

    State moves ``IDLE -> RUNNING -> COMPLETED | CANCELLED`` exactly once; iterate again with a
    new instance. Iterating yields ``(index, ProbeResult)`` pairs lazily, one probe in flight
    at most. Cancellation is checked before each probe starts; a probe already running is
    allowed to finish and its result is kept.
    """

    def __init__(
        self,
        links: Iterable[str],
        *,
        capture_body: bool = False,
        client: HttpClient | None = None,
        cancel_token: CancelToken | None = None,
        on_progress: ProgressCallback | None = None,
        probe: ProbeFunction = probe_link,
    ):
        self.links: tuple[str, ...] = tuple(links)
        self.capture_body = capture_body
        self.client = client or get_audit_context().http_client
        self.cancel_token = cancel_token if cancel_token is not None else CancelToken()
        self.on_progress = on_progress
        self._probe = probe
        self._state = AuditState.IDLE
        self._started = False
        self._results: list[ProbeResult] = []

    @property
    def state(self) -> AuditState:
        return self._state

    @property
    def total(self) -> int:
        return len(self.links)

    @property
    def progress(self) -> RunProgress:
        phase = AuditPhase.PROBING if self._state == AuditState.RUNNING else AuditPhase.IDLE
        return RunProgress(completed=len(self._results), total=self.total, phase=phase)

    @property
    def report(self) -> AuditReport:
        """Snapshot of the results accumulated so far."""
        return AuditReport(results=tuple(self._results), total_links=self.total, state=self._state)

    def cancel(self, reason: str | None = None) -> None:
        self.cancel_token.cancel(reason)

    def __iter__(self) -> Iterator[tuple[int, ProbeResult]]:
        if self._started:
            raise RuntimeError(f"audit run already started ({self._state.value.lower()}); start a new AuditRun")
        self._started = True
        return self._iterate()

    def _iterate(self) -> Iterator[tuple[int, ProbeResult]]:
        # Entered on the first next(); an iterator dropped before that leaves the run IDLE.
        self._state = AuditState.RUNNING
        try:
            for index, url in enumerate(self.links):
                if self.cancel_token.cancelled:
                    self._finish(AuditState.CANCELLED)
                    return
                try:
                    result = self._probe(url, self.capture_body, client=self.client, cancel_token=self.cancel_token)
                except ProbeCancelled:
                    # Aborted mid-probe: nothing to record for this link.
                    self._finish(AuditState.CANCELLED)
                    return
                self._results.append(result)
                progress = RunProgress(completed=len(self._results), total=self.total, phase=AuditPhase.PROBING)
                if self.on_progress is not None:
                    self.on_progress(progress, result)
                yield index, result
            self._finish(AuditState.COMPLETED)
        finally:
            # The consumer stopped iterating early (break/close): treat it as a cancellation.
            if self._state == AuditState.RUNNING:
                self.cancel_token.cancel("iteration stopped")
                self._finish(AuditState.CANCELLED)

    def _finish(self, state: AuditState) -> None:
        self._state = state
        if state == AuditState.CANCELLED:
            logger.info(
                "Audit cancelled after %d of %d links (%s)",
                len(self._results),
                self.total,
                self.cancel_token.reason or "cancel requested",
            )
        else:
            logger.info("Audit completed: %d links probed", len(self._results))

    def run(self) -> AuditReport:
        """Drive the run to its end and return the final report."""
        for _ in self:
            pass
        return self.report


__all__ = ["AuditRun", "ProbeFunction", "ProgressCallback"]
