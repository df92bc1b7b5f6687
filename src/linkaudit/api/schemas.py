# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response schemas for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models import DiscoveryResult, ProbeResult


class CrawlRequest(BaseModel):
    # Missing/blank URLs are reported as 400 by the endpoint, not as schema errors.
    url: str | None = None


class CrawlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    links: list[str]
    total_links: int = Field(alias="totalLinks")

    @classmethod
    def from_result(cls, result: DiscoveryResult) -> CrawlResponse:
        return cls(links=list(result.links), total_links=result.total_links)


class FetchHeadersRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str | None = None
    capture_body: bool = Field(default=False, alias="captureBody")


class FetchHeadersResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    status: int
    status_text: str = Field(alias="statusText")
    headers: dict[str, str]
    hit: bool = False
    body: str | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: ProbeResult) -> FetchHeadersResponse:
        return cls(
            url=result.url,
            status=result.status,
            status_text=result.status_text,
            headers=dict(result.headers),
            hit=result.cache_hit,
            body=result.body,
            error=result.error,
        )


class ErrorResponse(BaseModel):
    error: str
