# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""FastAPI application factory.

Routes
------
POST /api/crawl          Body: {"url": "https://..."}                   -> link discovery
POST /api/fetch-headers  Body: {"url": "https://...", "captureBody": b}  -> one probe

Probing is driven by the caller, one link per request, so the caller owns ordering,
progress and cancellation. A single LinkAudit (and its HTTP client) is shared by all
requests and closed on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import DiscoveryError, HttpError, InvalidSeedUrl
from ..runtime import LinkAudit
from ..version import __version__
from .schemas import CrawlRequest, CrawlResponse, ErrorResponse, FetchHeadersRequest, FetchHeadersResponse

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(runtime: LinkAudit | None = None) -> FastAPI:
    """Return a configured app; ``runtime`` is created on startup when not injected."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = runtime is None
        app.state.runtime = runtime or LinkAudit()
        try:
            yield
        finally:
            if owned:
                app.state.runtime.close()

    app = FastAPI(
        title="LinkAudit API",
        description="Same-domain link discovery and per-link header probing.",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
        return _error("Invalid request body", 400)

    @app.post("/api/crawl", response_model=CrawlResponse, responses={400: {"model": ErrorResponse}})
    def crawl(body: CrawlRequest, request: Request) -> JSONResponse:
        auditor: LinkAudit = request.app.state.runtime
        try:
            result = auditor.discover(body.url or "")
        except InvalidSeedUrl as exc:
            return _error(str(exc), exc.status_code)
        except HttpError as exc:
            return _error(str(exc), exc.status)
        except DiscoveryError as exc:
            logger.warning("Discovery of %s failed: %s", body.url, exc)
            return _error(str(exc), exc.status_code)
        except Exception:
            logger.exception("Error in crawl endpoint")
            return _error("Internal server error", 500)
        return JSONResponse(content=CrawlResponse.from_result(result).model_dump(by_alias=True))

    @app.post("/api/fetch-headers", response_model=FetchHeadersResponse, responses={400: {"model": ErrorResponse}})
    def fetch_headers(body: FetchHeadersRequest, request: Request) -> JSONResponse:
        if not (body.url or "").strip():
            return _error("URL is required", 400)
        auditor: LinkAudit = request.app.state.runtime
        try:
            result = auditor.probe(body.url.strip(), capture_body=body.capture_body)
        except Exception:
            logger.exception("Error in fetch-headers endpoint")
            return _error("Internal server error", 500)
        payload = FetchHeadersResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
        return JSONResponse(content=payload)

    return app


# Module-level instance used by uvicorn:
#   uvicorn linkaudit.api.app:app
app = create_app()
