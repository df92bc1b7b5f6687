# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across LinkAudit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    ``read_body=False`` lets a client return as soon as the status line and headers arrive;
    ``allow_redirects=None`` defers to the client settings.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None
    read_body: bool = True


@dataclass
class HttpResponse:
    """Normalized HTTP response.

    ``ok`` means a response was received at all; any status code (including 4xx/5xx) is a
    successful transport outcome. Transport failures carry ``ok=False`` and no status code.
    Headers are lowercase-keyed.
    """

    ok: bool
    status_code: int | None = None
    status_text: str = ""
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def body_error(self) -> str | None:
        """Message recorded when headers arrived but the body could not be read."""
        value = self.meta.get("body_error")
        return str(value) if value else None

    @property
    def body_available(self) -> bool:
        return self.ok and self.body_error is None
