# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level LinkAudit facade for discovery and probing workflows."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import AbstractContextManager, suppress

from .audit.discovery import discover_links
from .audit.engine import AuditRun, ProgressCallback
from .audit.probe import probe_link
from .config import AuditSettings, HttpSettings, load_audit_settings, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .models import AuditReport, DiscoveryResult, ProbeResult
from .utils.cancel import CancelToken
from .utils.context import AuditContext, audit_context


class LinkAudit:
    """
    Convenience wrapper that wires a shared HTTP client across discovery and probing.

    One instance may serve many audits; each ``start``/``audit`` call creates its own
    AuditRun, so no report state is shared between runs.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        audit_settings: AuditSettings | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.audit_settings = audit_settings or load_audit_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)

    def _context(self) -> AbstractContextManager[AuditContext]:
        return audit_context(
            http_client=self.http_client,
            http_settings=self.http_settings,
            audit_settings=self.audit_settings,
        )

    def _capture_body(self, capture_body: bool | None) -> bool:
        return self.audit_settings.capture_body if capture_body is None else capture_body

    def discover(self, url: str) -> DiscoveryResult:
        with self._context():
            return discover_links(url)

    def probe(self, url: str, capture_body: bool | None = None) -> ProbeResult:
        with self._context():
            return probe_link(url, self._capture_body(capture_body))

    def start(
        self,
        links: Iterable[str],
        *,
        capture_body: bool | None = None,
        cancel_token: CancelToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AuditRun:
        """Prepare (but do not start) a sequential probing run over ``links``."""
        return AuditRun(
            links,
            capture_body=self._capture_body(capture_body),
            client=self.http_client,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )

    def audit(
        self,
        url: str,
        *,
        capture_body: bool | None = None,
        cancel_token: CancelToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> AuditReport:
        """Discover the seed page's links, then probe every one of them in order."""
        discovery = self.discover(url)
        run = self.start(
            discovery.links,
            capture_body=capture_body,
            cancel_token=cancel_token,
            on_progress=on_progress,
        )
        return run.run()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> LinkAudit:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["LinkAudit"]
