# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Audit pipeline: discovery, probing, orchestration and export."""

from .discovery import discover_links, extract_hrefs, filter_same_domain_links
from .engine import AuditRun
from .export import CSV_COLUMNS, to_delimited_text
from .probe import probe_link

__all__ = [
    "CSV_COLUMNS",
    "AuditRun",
    "discover_links",
    "extract_hrefs",
    "filter_same_domain_links",
    "probe_link",
    "to_delimited_text",
]
