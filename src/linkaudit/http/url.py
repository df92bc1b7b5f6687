# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL resolution and same-domain filtering for discovered links."""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit, urlunsplit

import httpx

from ..errors import InvalidSeedUrl

WEB_SCHEMES = frozenset({"http", "https"})
_DEFAULT_PORTS = {"http": 80, "https": 443}
# Browsers drop ASCII tab/newline anywhere in a URL and trim surrounding whitespace/controls.
_STRIPPED_CHARS = "".join(chr(c) for c in range(0x21))
_REMOVED_CHARS = str.maketrans("", "", "\t\n\r")


def _clean_href(href: str | None) -> str:
    return str(href or "").strip(_STRIPPED_CHARS).translate(_REMOVED_CHARS)


def _serialize(parts: SplitResult) -> str:
    """Serialize like a browser URL parser: lowercase scheme/host, no default port, ``/`` path."""
    scheme = parts.scheme.lower()
    if scheme not in WEB_SCHEMES:
        return urlunsplit(parts._replace(scheme=scheme))

    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        host = f"{host}:{port}"
    userinfo, _, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}@{host}" if userinfo else host
    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def _split(url: str | httpx.URL) -> SplitResult:
    parts = urlsplit(str(url))
    # Accessing .port validates it (raises ValueError when non-numeric/out of range).
    parts.port
    return parts


def resolve_href(base_url: str, href: str | None) -> str | None:
    """
    Resolve ``href`` against ``base_url`` into an absolute URL string.

    Resolution follows RFC 3986 via ``httpx.URL.join``: dot segments are removed and unsafe
    characters percent-encoded, so ``/a/../b`` and ``/b`` (or ``/a b`` and ``/a%20b``) resolve
    to the same string. Returns None when the href is empty, malformed (bad port, broken IPv6
    literal, ...) or does not produce an absolute URL. Non-web schemes (``mailto:``,
    ``javascript:``) carry no hostname, so the same-domain filter drops them.
    """
    raw = _clean_href(href)
    if not raw:
        return None
    try:
        parts = _split(httpx.URL(base_url).join(raw))
    except (httpx.InvalidURL, ValueError):
        return None
    if not parts.scheme:
        return None
    if parts.scheme.lower() in WEB_SCHEMES and not parts.hostname:
        return None
    return _serialize(parts)


def hostname_of(url: str) -> str | None:
    try:
        return urlsplit(str(url or "")).hostname
    except ValueError:
        return None


def is_same_domain(candidate: str, base: str) -> bool:
    """Return True when both URLs carry the exact same hostname (scheme and port are ignored)."""
    candidate_host = hostname_of(candidate)
    if not candidate_host:
        return False
    return candidate_host == hostname_of(base)


def parse_seed_url(url: str | None) -> str:
    """
    Validate a seed URL and return its serialized absolute form.

    Raises InvalidSeedUrl when the value is missing or not an absolute http(s) URL.
    """
    raw = _clean_href(url)
    if not raw:
        raise InvalidSeedUrl("URL is required")
    try:
        parts = _split(httpx.URL(raw))
    except (httpx.InvalidURL, ValueError) as exc:
        raise InvalidSeedUrl("Invalid URL format") from exc
    if parts.scheme.lower() not in WEB_SCHEMES or not parts.hostname:
        raise InvalidSeedUrl("Invalid URL format")
    return _serialize(parts)


__all__ = ["WEB_SCHEMES", "hostname_of", "is_same_domain", "parse_seed_url", "resolve_href"]
