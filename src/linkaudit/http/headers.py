# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities and the request header sets used by probes.

HTTP header field names are case-insensitive (RFC 9110). LinkAudit stores response headers
as lowercase-keyed dicts so lookups (``age``, ``x-cache``) never depend on server casing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

# Browser-like request headers for the primary probe attempt; naive bot filters tend to
# reject or downgrade anything that does not look like a desktop browser.
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36"
)
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": BROWSER_USER_AGENT,
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
        "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Encoding": "gzip, deflate, br, zstd",
    "Accept-Language": "en-NL,en-GB;q=0.9,en-US;q=0.8,en;q=0.7",
}

# Minimal header set for the GET fallback after a transport failure.
FALLBACK_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
FALLBACK_HEADERS: dict[str, str] = {"User-Agent": FALLBACK_USER_AGENT}

DISCOVERY_ACCEPT = "text/html, */*"


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Supports plain dicts, httpx.Headers (via ``.items()``) and iterable-of-pairs such as
    ``httpx.Headers.multi_items()``. For pairs, a repeated name keeps its last value.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Mapping[object, object] | Iterable[tuple[str, str]] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping, preserving first-seen order."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths the lowercase key (the normalized form) before falling back to a full scan.
    """
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key in (lower, name):
        if key in coerced:
            value = coerced.get(key)
            return default if value is None else str(value).strip()

    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def flatten_headers(headers: Mapping[str, str] | None, *, separator: str = "; ") -> str:
    """Render headers as ``name: value`` pairs joined by ``separator`` (report/CSV form)."""
    if not headers:
        return ""
    return separator.join(f"{name}: {value}" for name, value in headers.items())


__all__ = [
    "BROWSER_HEADERS",
    "BROWSER_USER_AGENT",
    "DISCOVERY_ACCEPT",
    "FALLBACK_HEADERS",
    "FALLBACK_USER_AGENT",
    "flatten_headers",
    "header_value",
    "normalize_headers",
]
