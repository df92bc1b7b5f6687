# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import DEFAULT_MAX_BODY_BYTES, HttpSettings, load_http_settings
from ..errors import categorize_exception, exception_message
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = (
            request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        )

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=follow_redirects,
            ) as resp:
                meta: dict[str, object] = {"body_read": False}
                content = b""
                text = ""
                if request.read_body and request.method.upper() != "HEAD":
                    content, text = self._read_body(resp, meta)

                return HttpResponse(
                    ok=True,
                    status_code=resp.status_code,
                    status_text=resp.reason_phrase or "",
                    # multi_items() keeps repeated fields; normalize_headers lets the last one win.
                    headers=normalize_headers(resp.headers.multi_items()),
                    text=text,
                    content=content,
                    url=str(resp.url),
                    meta=meta,
                )
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %r", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=exception_message(exc),
                error_type=categorize_exception(exc).value,
            )

    def _read_body(self, resp: httpx.Response, meta: dict[str, object]) -> tuple[bytes, str]:
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = DEFAULT_MAX_BODY_BYTES

        content = bytearray()
        truncated = False
        try:
            for chunk in resp.iter_bytes():
                if not chunk:
                    continue
                remaining = max_body_bytes - len(content)
                if remaining <= 0:
                    truncated = True
                    break
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)
        except httpx.HTTPError as exc:
            # Status and headers already arrived; only the body is lost.
            meta["body_error"] = exception_message(exc)
            return b"", ""

        encoding = resp.encoding or "utf-8"
        try:
            text = bytes(content).decode(encoding, errors="replace")
        except LookupError:
            text = bytes(content).decode("utf-8", errors="replace")

        meta.update(
            body_read=True,
            body_truncated=truncated,
            body_bytes_read=len(content),
            body_bytes_limit=max_body_bytes,
        )
        return bytes(content), text

    def close(self) -> None:
        self._client.close()
