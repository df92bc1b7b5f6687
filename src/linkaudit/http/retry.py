# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fallback helper for HttpClient implementations."""

from __future__ import annotations

import logging

from ..errors import ProbeCancelled, categorize_exception, exception_message
from ..utils.cancel import CancelToken
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def send_once(client: HttpClient, request: HttpRequest) -> HttpResponse:
    """Send a single request, converting stray client exceptions into a failed response."""
    try:
        response = client.request(request)
    except Exception as exc:  # noqa: BLE001
        response = HttpResponse(
            ok=False,
            error_message=exception_message(exc),
            error_type=categorize_exception(exc).value,
        )
    if response.url is None:
        response.url = request.url
    return response


def send_with_fallback(
    client: HttpClient,
    request: HttpRequest,
    fallback: HttpRequest,
    *,
    cancel_token: CancelToken | None = None,
) -> HttpResponse:
    """
    Send ``request``; on a transport failure, send ``fallback`` exactly once.

    Only transport-level failures (no status code) trigger the fallback. A response with any
    status, including 4xx/5xx, is returned as-is. When ``cancel_token`` is set by the time the
    primary attempt fails, ProbeCancelled is raised instead of starting the fallback.
    """
    response = send_once(client, request)
    response.meta.setdefault("method", request.method)
    if response.ok or response.status_code is not None:
        return response

    if cancel_token is not None and cancel_token.cancelled:
        raise ProbeCancelled(f"cancelled before fallback for {request.url}")

    logger.info(
        "%s %s failed (%s); retrying with %s",
        request.method,
        request.url,
        response.error_message,
        fallback.method,
    )
    fallback_response = send_once(client, fallback)
    fallback_response.meta.setdefault("method", fallback.method)
    fallback_response.meta["fallback_used"] = True
    fallback_response.meta["primary_error"] = response.error_message
    return fallback_response


__all__ = ["send_once", "send_with_fallback"]
