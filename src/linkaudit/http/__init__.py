# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import BROWSER_HEADERS, FALLBACK_HEADERS, flatten_headers, header_value, normalize_headers
from .heuristics import is_cache_hit, looks_like_html
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .retry import send_once, send_with_fallback
from .url import is_same_domain, parse_seed_url, resolve_href

__all__ = [
    "BROWSER_HEADERS",
    "FALLBACK_HEADERS",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "flatten_headers",
    "header_value",
    "is_cache_hit",
    "is_same_domain",
    "looks_like_html",
    "normalize_headers",
    "parse_seed_url",
    "resolve_href",
    "send_once",
    "send_with_fallback",
]
