# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

StubResponder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and offline runs.

    Responses are keyed by URL, or by ``(METHOD, url)`` when a method-specific answer is
    needed (for example a HEAD that fails while GET succeeds). A value may be a callable
    that receives the request.
    """

    def __init__(self, responses: dict[str | tuple[str, str], HttpResponse | StubResponder] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | StubResponder, *, method: str | None = None) -> None:
        key: str | tuple[str, str] = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        entry = self._responses.get((request.method.upper(), request.url))
        if entry is None:
            entry = self._responses.get(request.url)
        if entry is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        response = entry(request) if callable(entry) else entry
        if response.ok and request.method.upper() == "HEAD":
            # HEAD responses never carry a body.
            return HttpResponse(
                ok=True,
                status_code=response.status_code,
                status_text=response.status_text,
                headers=dict(response.headers),
                url=response.url or request.url,
                meta=dict(response.meta),
            )
        return response

    def close(self) -> None:
        self.closed = True
