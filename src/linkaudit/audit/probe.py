# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header probe: one HTTP request per link, HEAD (or GET) first, plain GET on transport failure."""

from __future__ import annotations

import logging

from ..http.client import HttpClient
from ..http.headers import BROWSER_HEADERS, FALLBACK_HEADERS, normalize_headers
from ..http.heuristics import is_cache_hit
from ..http.models import HttpRequest
from ..http.retry import send_with_fallback
from ..models import ProbeResult
from ..utils.cancel import CancelToken
from ..utils.context import get_http_client

logger = logging.getLogger(__name__)


def build_probe_requests(url: str, capture_body: bool) -> tuple[HttpRequest, HttpRequest]:
    """Return the (primary, fallback) request pair for ``url``."""
    # A HEAD response has no body, so capturing forces GET up front.
    primary = HttpRequest(
        url=url,
        method="GET" if capture_body else "HEAD",
        headers=dict(BROWSER_HEADERS),
        read_body=capture_body,
    )
    fallback = HttpRequest(
        url=url,
        method="GET",
        headers=dict(FALLBACK_HEADERS),
        read_body=capture_body,
    )
    return primary, fallback


def probe_link(
    url: str,
    capture_body: bool = False,
    *,
    client: HttpClient | None = None,
    cancel_token: CancelToken | None = None,
) -> ProbeResult:
    """
    Probe ``url`` and return a ProbeResult.

    Failures never escape: a request that fails at the transport level on both attempts
    becomes a ``status=0`` / "Request Failed" result carrying the last error message. HTTP
    error statuses are ordinary results. Only ProbeCancelled propagates, when cancellation is
    observed between the two attempts.
    """
    client = client or get_http_client()
    primary, fallback = build_probe_requests(url, capture_body)
    response = send_with_fallback(client, primary, fallback, cancel_token=cancel_token)

    method = str(response.meta.get("method") or primary.method)
    fallback_used = bool(response.meta.get("fallback_used", False))

    if not response.ok or response.status_code is None:
        message = response.error_message or "Unknown error"
        logger.warning("Probe of %s failed: %s", url, message)
        return ProbeResult.failure(
            url,
            message,
            error_type=response.error_type,
            method=method,
            fallback_used=fallback_used,
        )

    body: str | None = None
    if capture_body:
        if response.body_available:
            body = response.text
        else:
            logger.info("Could not capture body of %s: %s", url, response.body_error)

    headers = normalize_headers(response.headers)
    return ProbeResult(
        url=url,
        status=response.status_code,
        status_text=response.status_text,
        headers=headers,
        body=body,
        cache_hit=is_cache_hit(headers),
        final_url=response.url,
        method=method,
        fallback_used=fallback_used,
    )


__all__ = ["build_probe_requests", "probe_link"]
