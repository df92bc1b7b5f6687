# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Heuristics for interpreting HTTP responses."""

from __future__ import annotations

import math
from collections.abc import Mapping

from .headers import header_value


def _positive_number(value: str) -> bool:
    try:
        number = float(value)
    except ValueError:
        return False
    return math.isfinite(number) and number > 0


def is_cache_hit(headers: Mapping[object, object] | None) -> bool:
    """
    Return True when a response looks like it was served by an intermediary cache.

    Either signal is enough: a numeric ``Age`` above zero, or an ``X-Cache`` value containing
    ``HIT`` (case-sensitive, as CDNs emit it: ``HIT``, ``TCP_HIT``, ``Hit from cloudfront`` does
    not match). A positive Age wins even when X-Cache reports a MISS.
    """
    if not headers:
        return False
    age = header_value(headers, "age")
    if age and _positive_number(age):
        return True
    return "HIT" in header_value(headers, "x-cache")


def looks_like_html(headers: Mapping[object, object] | None, body: str | None) -> bool:
    """
    Return True when a response likely contains HTML.

    Uses both content-type and body sniffing.
    """
    content_type = header_value(headers, "content-type").lower()
    if "text/html" in content_type or "application/xhtml" in content_type:
        return True

    text = str(body or "").lstrip()
    lowered = text[:256].lower()
    return lowered.startswith("<!doctype") or lowered.startswith("<html") or "<html" in lowered or "<a " in lowered


__all__ = ["is_cache_hit", "looks_like_html"]
