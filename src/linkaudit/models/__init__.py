# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for LinkAudit."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .discovery import DiscoveryResult, SeedRequest
from .probe import FAILED_STATUS, FAILED_STATUS_TEXT, ProbeResult
from .report import AuditPhase, AuditReport, AuditState, AuditSummary, RunProgress

__all__ = [
    "FAILED_STATUS",
    "FAILED_STATUS_TEXT",
    "AuditPhase",
    "AuditReport",
    "AuditState",
    "AuditSummary",
    "DiscoveryResult",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeResult",
    "RunProgress",
    "SeedRequest",
]
