# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility exports."""

from .cancel import CancelToken
from .context import AuditContext, audit_context, get_audit_context

__all__ = [
    "AuditContext",
    "CancelToken",
    "audit_context",
    "get_audit_context",
]
