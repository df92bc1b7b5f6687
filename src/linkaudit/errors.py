# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class LinkAuditError(Exception):
    """Base class for errors surfaced to LinkAudit callers."""


class InvalidSeedUrl(LinkAuditError):
    """The seed URL is missing or cannot be parsed as an absolute http(s) URL."""

    status_code = 400


class DiscoveryError(LinkAuditError):
    """Link discovery could not complete; fatal to the run."""

    status_code = 500


class FetchError(DiscoveryError):
    """The seed page could not be fetched or its body could not be read."""

    def __init__(self, message: str, *, error_type: str | None = None):
        super().__init__(message)
        self.error_type = error_type


class HttpError(DiscoveryError):
    """The seed page answered with a failure status (strict discovery only)."""

    def __init__(self, status: int, status_text: str = ""):
        super().__init__(f"Failed to fetch URL: {status_text}" if status_text else f"Failed to fetch URL: HTTP {status}")
        self.status = status
        self.status_text = status_text
        self.status_code = status


class ProbeCancelled(LinkAuditError):
    """A probe observed cancellation before finishing; its result must not be counted."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    # httpx wraps the underlying socket/ssl failure; inspect the cause chain first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR
    if isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_URL: "URL cannot be requested",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


def exception_message(exc: BaseException) -> str:
    """Return a non-empty message for ``exc`` (some httpx timeouts carry an empty string)."""
    return str(exc).strip() or type(exc).__name__


__all__ = [
    "DiscoveryError",
    "ErrorCategory",
    "FetchError",
    "HttpError",
    "InvalidSeedUrl",
    "LinkAuditError",
    "ProbeCancelled",
    "categorize_exception",
    "error_category_to_reason",
    "exception_message",
]
