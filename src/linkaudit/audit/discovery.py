# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Link discovery: fetch the seed page once and collect its unique same-domain links."""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from ..config import AuditSettings, HttpSettings
from ..errors import FetchError, HttpError
from ..http.client import HttpClient
from ..http.headers import DISCOVERY_ACCEPT, header_value
from ..http.heuristics import looks_like_html
from ..http.models import HttpRequest
from ..http.retry import send_once
from ..http.url import is_same_domain, resolve_href
from ..models import DiscoveryResult, SeedRequest
from ..utils.context import get_audit_settings, get_http_client, get_http_settings

logger = logging.getLogger(__name__)


class _HrefParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() != "a":
            return
        for key, value in attrs:
            if key.lower() == "href":
                if value:
                    self.hrefs.append(value)
                # Only the first href attribute counts, as in a DOM.
                return


def extract_hrefs(html: str) -> list[str]:
    """Return every non-empty ``<a href>`` value in document order."""
    parser = _HrefParser()
    parser.feed(html or "")
    parser.close()
    return parser.hrefs


def filter_same_domain_links(seed_url: str, hrefs: list[str]) -> list[str]:
    """
    Resolve ``hrefs`` against ``seed_url`` and keep unique same-hostname URLs.

    Unresolvable hrefs and other hostnames are skipped silently; the first occurrence of a
    resolved URL string fixes its position.
    """
    links: list[str] = []
    seen: set[str] = set()
    for href in hrefs:
        resolved = resolve_href(seed_url, href)
        if resolved is None:
            continue
        if not is_same_domain(resolved, seed_url):
            continue
        if resolved in seen:
            continue
        seen.add(resolved)
        links.append(resolved)
    return links


def discover_links(
    url: str | SeedRequest,
    *,
    client: HttpClient | None = None,
    settings: HttpSettings | None = None,
    audit_settings: AuditSettings | None = None,
) -> DiscoveryResult:
    """
    Fetch the seed page and return its unique same-domain links.

    Raises InvalidSeedUrl before any network call, FetchError on a transport failure or an
    unreadable body, and HttpError for a non-2xx seed only when strict discovery is enabled;
    otherwise an error page is parsed for links like any other page.
    """
    seed = url if isinstance(url, SeedRequest) else SeedRequest.parse(url)
    client = client or get_http_client()
    settings = settings or get_http_settings()
    audit_settings = audit_settings or get_audit_settings()

    logger.info("Fetching seed page %s", seed.url)
    response = send_once(
        client,
        HttpRequest(
            url=seed.url,
            method="GET",
            headers={"User-Agent": settings.user_agent, "Accept": DISCOVERY_ACCEPT},
            read_body=True,
        ),
    )

    if not response.ok:
        raise FetchError(response.error_message or "Failed to fetch URL", error_type=response.error_type)

    status = response.status_code
    if not response.is_success_status:
        if audit_settings.strict_discovery and status is not None:
            raise HttpError(status, response.status_text)
        logger.warning("Seed %s answered HTTP %s; parsing the error page for links anyway", seed.url, status)

    if response.body_error:
        raise FetchError(f"Failed to read response body: {response.body_error}")

    html = response.text or ""
    is_html = looks_like_html(response.headers, html)
    if html and not is_html:
        logger.info(
            "Seed %s does not look like HTML (content-type %r)",
            seed.url,
            header_value(response.headers, "content-type"),
        )

    hrefs = extract_hrefs(html)
    links = filter_same_domain_links(seed.url, hrefs)
    logger.info("Discovered %d same-domain links out of %d anchors on %s", len(links), len(hrefs), seed.url)

    return DiscoveryResult(
        seed_url=seed.url,
        links=tuple(links),
        status_code=status,
        final_url=response.url,
        anchors_seen=len(hrefs),
        meta={
            **{key: value for key, value in response.meta.items() if key.startswith("body_")},
            "looks_like_html": is_html,
        },
    )


__all__ = ["discover_links", "extract_hrefs", "filter_same_domain_links"]
