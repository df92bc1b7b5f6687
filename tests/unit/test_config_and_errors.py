# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx

from linkaudit import config
from linkaudit.config import DEFAULT_USER_AGENT
from linkaudit.errors import (
    ErrorCategory,
    FetchError,
    HttpError,
    InvalidSeedUrl,
    LinkAuditError,
    categorize_exception,
    error_category_to_reason,
    exception_message,
)
from linkaudit.log import level_for_verbosity


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("LINKAUDIT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("LINKAUDIT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("LINKAUDIT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("LINKAUDIT_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("LINKAUDIT_HTTP_MAX_BODY_BYTES", "1024")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 1024


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("LINKAUDIT_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("LINKAUDIT_HTTP_MAX_BODY_BYTES", "-1")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout == 10.0
    assert settings.max_body_bytes == config.DEFAULT_MAX_BODY_BYTES
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_http_settings_non_positive_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("LINKAUDIT_HTTP_TIMEOUT", "0")
    assert config.load_http_settings().timeout == 10.0


def test_audit_settings_truthy_variants(monkeypatch):
    assert config.load_audit_settings() == config.AuditSettings(capture_body=False, strict_discovery=False)

    monkeypatch.setenv("LINKAUDIT_CAPTURE_BODY", "yes")
    monkeypatch.setenv("LINKAUDIT_STRICT_DISCOVERY", "ON")
    settings = config.load_audit_settings()
    assert settings.capture_body is True
    assert settings.strict_discovery is True

    monkeypatch.setenv("LINKAUDIT_CAPTURE_BODY", "nope")
    assert config.load_audit_settings().capture_body is False


def test_error_hierarchy():
    assert issubclass(FetchError, LinkAuditError)
    assert InvalidSeedUrl("URL is required").status_code == 400

    err = HttpError(404, "Not Found")
    assert err.status == err.status_code == 404
    assert str(err) == "Failed to fetch URL: Not Found"
    assert str(HttpError(500)) == "Failed to fetch URL: HTTP 500"


def test_categorize_exception():
    assert categorize_exception(httpx.ConnectTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.UnsupportedProtocol("ftp")) == ErrorCategory.INVALID_URL
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("odd")) == ErrorCategory.UNKNOWN_ERROR

    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as exc:
            raise httpx.ConnectError("dns failed") from exc
    except httpx.ConnectError as wrapped:
        assert categorize_exception(wrapped) == ErrorCategory.DNS_ERROR

    try:
        try:
            raise ssl.SSLCertVerificationError("certificate verify failed")
        except ssl.SSLError as exc:
            raise httpx.ConnectError("tls failed") from exc
    except httpx.ConnectError as wrapped:
        assert categorize_exception(wrapped) == ErrorCategory.SSL_ERROR


def test_error_reasons_and_messages():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout during probe"
    assert error_category_to_reason(None) == ""
    assert exception_message(httpx.ReadTimeout("")) == "ReadTimeout"
    assert exception_message(RuntimeError(" boom ")) == "boom"


def test_level_for_verbosity():
    assert level_for_verbosity(0) is None
    assert level_for_verbosity(1) == "INFO"
    assert level_for_verbosity(3) == "DEBUG"
