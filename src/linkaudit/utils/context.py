# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-audit ambient context.

This module provides a ContextVar-backed AuditContext that carries common audit
plumbing (http client, settings). Discovery and probe helpers read from this
context when explicit arguments are omitted.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any

from ..config import AuditSettings, HttpSettings, load_audit_settings, load_http_settings
from ..http.client import HttpClient


@dataclass(frozen=True)
class AuditContext:
    http_client: HttpClient | None = None
    http_settings: HttpSettings | None = None
    audit_settings: AuditSettings | None = None


_current_audit_context: ContextVar[AuditContext | None] = ContextVar("linkaudit_audit_context", default=None)


def get_audit_context() -> AuditContext:
    """Return the current ambient audit context."""
    return _current_audit_context.get() or AuditContext()


def get_http_client() -> HttpClient:
    """Return the ambient HttpClient from AuditContext."""
    context = get_audit_context()
    if context.http_client is None:
        raise RuntimeError("No HttpClient configured; wrap the call in audit_context(http_client=...)")
    return context.http_client


def get_http_settings() -> HttpSettings:
    """Return HttpSettings from context, falling back to loading defaults."""
    context = get_audit_context()
    if context.http_settings is not None:
        return context.http_settings
    return load_http_settings()


def get_audit_settings() -> AuditSettings:
    context = get_audit_context()
    if context.audit_settings is not None:
        return context.audit_settings
    return load_audit_settings()


@contextmanager
def audit_context(**overrides: Any) -> Iterator[AuditContext]:
    """
    Context manager that layers overrides onto the ambient AuditContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_audit_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_audit_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_audit_context.reset(token)


__all__ = [
    "AuditContext",
    "audit_context",
    "get_audit_context",
    "get_audit_settings",
    "get_http_client",
    "get_http_settings",
]
