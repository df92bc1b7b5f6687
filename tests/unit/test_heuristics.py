# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkaudit.http.heuristics import is_cache_hit, looks_like_html


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        ({"age": "120"}, True),
        ({"x-cache": "TCP_HIT"}, True),
        ({"x-cache": "HIT, HIT"}, True),
        ({"age": "0"}, False),
        ({}, False),
        (None, False),
        ({"age": "abc"}, False),
        ({"age": "-5"}, False),
        ({"x-cache": "hit"}, False),
        ({"x-cache": "MISS"}, False),
        # A positive Age wins even when X-Cache says MISS.
        ({"age": "5", "x-cache": "MISS"}, True),
        ({"Age": "3"}, True),
    ],
)
def test_is_cache_hit(headers, expected):
    assert is_cache_hit(headers) is expected


def test_looks_like_html():
    assert looks_like_html({"content-type": "text/html; charset=utf-8"}, "") is True
    assert looks_like_html({}, "<!DOCTYPE html><html></html>") is True
    assert looks_like_html({"content-type": "application/json"}, '{"a": 1}') is False
