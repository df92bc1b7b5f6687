# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
LinkAudit package entrypoint.

This package audits the same-domain links of a single web page: it discovers the links on
a seed page, probes each one sequentially for status, headers and (optionally) body, flags
likely cache hits and exports the report as CSV. HTTP behavior is abstracted behind an
injectable client interface, and domain objects are modeled with typed dataclasses.
"""

from .audit import AuditRun, discover_links, probe_link, to_delimited_text
from .config import AuditSettings, HttpSettings, load_audit_settings, load_http_settings
from .errors import DiscoveryError, FetchError, HttpError, InvalidSeedUrl, LinkAuditError, ProbeCancelled
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
    is_cache_hit,
)
from .log import setup_logging
from .models import (
    AuditPhase,
    AuditReport,
    AuditState,
    DiscoveryResult,
    ProbeResult,
    RunProgress,
    SeedRequest,
)
from .runtime import LinkAudit
from .utils.cancel import CancelToken
from .version import __version__

__all__ = [
    "AuditPhase",
    "AuditReport",
    "AuditRun",
    "AuditSettings",
    "AuditState",
    "CancelToken",
    "DiscoveryError",
    "DiscoveryResult",
    "FetchError",
    "HttpClient",
    "HttpError",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidSeedUrl",
    "LinkAudit",
    "LinkAuditError",
    "ProbeCancelled",
    "ProbeResult",
    "RunProgress",
    "SeedRequest",
    "StubHttpClient",
    "create_default_http_client",
    "discover_links",
    "is_cache_hit",
    "load_audit_settings",
    "load_http_settings",
    "probe_link",
    "setup_logging",
    "to_delimited_text",
    "__version__",
]
