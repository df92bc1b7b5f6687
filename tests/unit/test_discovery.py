# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkaudit.audit.discovery import discover_links, extract_hrefs, filter_same_domain_links
from linkaudit.config import AuditSettings, HttpSettings
from linkaudit.errors import FetchError, HttpError, InvalidSeedUrl
from linkaudit.http import HttpResponse, StubHttpClient
from linkaudit.models import SeedRequest

SEED = "https://example.com/"


def _html_response(html: str, status: int = 200, status_text: str = "OK") -> HttpResponse:
    return HttpResponse(
        ok=True,
        status_code=status,
        status_text=status_text,
        headers={"content-type": "text/html; charset=utf-8"},
        text=html,
    )


def _discover(client, url=SEED, *, strict=False):
    return discover_links(
        url,
        client=client,
        settings=HttpSettings(user_agent="LinkAuditTest/1.0"),
        audit_settings=AuditSettings(strict_discovery=strict),
    )


def test_discovery_keeps_unique_same_domain_links():
    html = '<a href="/a">A</a><a href="https://other.com/b">B</a><a href="/a">again</a>'
    client = StubHttpClient({SEED: _html_response(html)})

    result = _discover(client, "https://example.com")

    assert result.links == ("https://example.com/a",)
    assert result.total_links == 1
    assert result.to_dict() == {"links": ["https://example.com/a"], "totalLinks": 1}
    assert result.anchors_seen == 3

    request = client.requests[0]
    assert request.method == "GET"
    assert request.url == SEED
    assert request.headers["User-Agent"] == "LinkAuditTest/1.0"


def test_discovery_preserves_first_occurrence_order():
    html = """
    <nav><a href="/c">c</a><a href="/a">a</a></nav>
    <main><A HREF="/b">b</A><a href="https://example.com/a">a again</a></main>
    """
    client = StubHttpClient({SEED: _html_response(html)})

    result = _discover(client)

    assert result.links == ("https://example.com/c", "https://example.com/a", "https://example.com/b")


def test_discovery_skips_malformed_and_empty_hrefs():
    html = (
        '<a href="http://[broken">x</a><a href="">empty</a><a>no href</a>'
        '<a href="mailto:hi@example.com">mail</a><a href="/ok">ok</a>'
    )
    client = StubHttpClient({SEED: _html_response(html)})

    result = _discover(client)

    assert result.links == ("https://example.com/ok",)


def test_discovery_returns_empty_list_for_page_without_links():
    client = StubHttpClient({SEED: _html_response("<p>nothing here</p>")})

    result = _discover(client)

    assert result.links == ()
    assert result.to_dict() == {"links": [], "totalLinks": 0}


def test_invalid_seed_is_rejected_before_any_request():
    client = StubHttpClient()

    with pytest.raises(InvalidSeedUrl, match="URL is required"):
        _discover(client, "")
    with pytest.raises(InvalidSeedUrl, match="Invalid URL format"):
        _discover(client, "example.com/page")

    assert client.requests == []


def test_non_2xx_seed_is_parsed_by_default():
    client = StubHttpClient({SEED: _html_response('<a href="/home">home</a>', 404, "Not Found")})

    result = _discover(client)

    assert result.status_code == 404
    assert result.links == ("https://example.com/home",)


def test_non_2xx_seed_raises_in_strict_mode():
    client = StubHttpClient({SEED: _html_response('<a href="/home">home</a>', 503, "Service Unavailable")})

    with pytest.raises(HttpError) as excinfo:
        _discover(client, strict=True)

    assert excinfo.value.status == 503
    assert str(excinfo.value) == "Failed to fetch URL: Service Unavailable"


def test_transport_failure_raises_fetch_error():
    client = StubHttpClient(
        {SEED: HttpResponse(ok=False, error_message="connection refused", error_type="CONNECTION_ERROR")}
    )

    with pytest.raises(FetchError, match="connection refused") as excinfo:
        _discover(client)

    assert excinfo.value.error_type == "CONNECTION_ERROR"


def test_unreadable_body_raises_fetch_error():
    response = HttpResponse(ok=True, status_code=200, status_text="OK", meta={"body_error": "connection reset"})
    client = StubHttpClient({SEED: response})

    with pytest.raises(FetchError, match="connection reset"):
        _discover(client)


def test_client_exception_becomes_fetch_error():
    def _boom(request):
        raise RuntimeError("socket exploded")

    client = StubHttpClient({SEED: _boom})

    with pytest.raises(FetchError, match="socket exploded"):
        _discover(client)


def test_seed_request_is_accepted_directly():
    client = StubHttpClient({"https://example.com/docs": _html_response('<a href="guide">g</a>')})

    result = _discover(client, SeedRequest.parse("https://example.com/docs"))

    assert result.seed_url == "https://example.com/docs"
    assert result.links == ("https://example.com/guide",)


def test_discovery_records_whether_seed_looks_like_html():
    html_client = StubHttpClient({SEED: _html_response("<p>hi</p>")})
    assert _discover(html_client).meta["looks_like_html"] is True

    json_client = StubHttpClient(
        {SEED: HttpResponse(ok=True, status_code=200, headers={"content-type": "application/json"}, text="{}")}
    )
    result = _discover(json_client)
    assert result.meta["looks_like_html"] is False
    assert result.links == ()

def test_extract_and_filter_helpers():
    hrefs = extract_hrefs('<a href="/x" href="/ignored">x</a><a name="n">n</a><a href="//example.com/y">y</a>')
    assert hrefs == ["/x", "//example.com/y"]
    assert filter_same_domain_links(SEED, hrefs) == ["https://example.com/x", "https://example.com/y"]
