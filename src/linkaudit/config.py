# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for LinkAudit."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"LinkAudit/{__version__} (+same-domain link auditor)"
DEFAULT_MAX_BODY_BYTES = 16 * 1024 * 1024


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults shared by discovery and probing."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("LINKAUDIT_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("LINKAUDIT_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("LINKAUDIT_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("LINKAUDIT_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("LINKAUDIT_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class AuditSettings:
    """Audit behavior defaults.

    ``strict_discovery`` makes a non-2xx seed response fatal (``HttpError``) instead of
    parsing the error page for links.
    """

    capture_body: bool = False
    strict_discovery: bool = False

    @classmethod
    def from_env(cls) -> "AuditSettings":
        return cls(
            capture_body=_bool_env("LINKAUDIT_CAPTURE_BODY", cls.capture_body),
            strict_discovery=_bool_env("LINKAUDIT_STRICT_DISCOVERY", cls.strict_discovery),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_audit_settings() -> AuditSettings:
    return AuditSettings.from_env()


__all__ = [
    "DEFAULT_USER_AGENT",
    "AuditSettings",
    "HttpSettings",
    "load_audit_settings",
    "load_http_settings",
]
