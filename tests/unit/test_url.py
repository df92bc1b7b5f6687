# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkaudit.audit.discovery import filter_same_domain_links
from linkaudit.errors import InvalidSeedUrl
from linkaudit.http.url import is_same_domain, parse_seed_url, resolve_href

BASE = "https://example.com/dir/page"


def test_resolve_relative_and_absolute_hrefs():
    assert resolve_href(BASE, "/a") == "https://example.com/a"
    assert resolve_href(BASE, "b") == "https://example.com/dir/b"
    assert resolve_href(BASE, "../c?x=1") == "https://example.com/c?x=1"
    assert resolve_href(BASE, "//other.com/x") == "https://other.com/x"
    assert resolve_href(BASE, "https://other.com/b") == "https://other.com/b"


def test_resolve_serializes_like_a_browser():
    assert resolve_href(BASE, "HTTPS://Example.COM:443/A") == "https://example.com/A"
    assert resolve_href(BASE, "http://example.com") == "http://example.com/"
    assert resolve_href(BASE, "http://example.com:8080/x") == "http://example.com:8080/x"
    assert resolve_href("https://example.com/", "#top") == "https://example.com/#top"
    assert resolve_href(BASE, "\n /a\t ") == "https://example.com/a"


def test_resolve_removes_dot_segments_and_percent_encodes():
    assert resolve_href(BASE, "https://example.com/a/../b") == "https://example.com/b"
    assert resolve_href(BASE, "/a/./b/../c") == "https://example.com/a/c"
    assert resolve_href(BASE, "/a b") == "https://example.com/a%20b"
    assert resolve_href(BASE, "/a%20b") == "https://example.com/a%20b"
    assert parse_seed_url("https://example.com/x/../y") == "https://example.com/y"


def test_equivalent_hrefs_collapse_to_one_link():
    hrefs = ["/b", "https://example.com/a/../b", "/a b", "/a%20b"]
    assert filter_same_domain_links("https://example.com/", hrefs) == [
        "https://example.com/b",
        "https://example.com/a%20b",
    ]


@pytest.mark.parametrize("href", ["", "   ", None, "http://[::1", "http://example.com:abc/", "http://"])
def test_resolve_rejects_empty_and_malformed(href):
    assert resolve_href(BASE, href) is None


def test_non_web_schemes_resolve_but_are_never_same_domain():
    assert is_same_domain(resolve_href(BASE, "mailto:someone@example.com"), BASE) is False
    assert is_same_domain(resolve_href(BASE, "javascript:void(0)"), BASE) is False


def test_same_domain_is_exact_hostname_equality():
    assert is_same_domain("http://example.com:8080/a", "https://example.com/") is True
    assert is_same_domain("https://www.example.com/", "https://example.com/") is False
    assert is_same_domain("https://example.com.evil.net/", "https://example.com/") is False
    assert is_same_domain("not a url", "https://example.com/") is False


def test_parse_seed_url_validation():
    assert parse_seed_url("https://example.com") == "https://example.com/"
    assert parse_seed_url("  https://Example.com/path  ") == "https://example.com/path"

    with pytest.raises(InvalidSeedUrl, match="URL is required"):
        parse_seed_url(None)
    with pytest.raises(InvalidSeedUrl, match="URL is required"):
        parse_seed_url("  ")
    for bad in ("example.com", "not a url", "ftp://example.com/", "https://", "http://[::1"):
        with pytest.raises(InvalidSeedUrl, match="Invalid URL format"):
            parse_seed_url(bad)
