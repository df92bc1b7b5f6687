# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report export: CSV text and JSON-ready rows."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from ..http.headers import flatten_headers
from ..models import ProbeResult

CSV_COLUMNS = ("URL", "Status", "Status Text", "Hit", "All Headers", "Error")


def result_row(result: ProbeResult) -> list[str]:
    """Column values for one result, in CSV_COLUMNS order."""
    return [
        result.url,
        str(result.status),
        result.status_text,
        result.hit_label,
        flatten_headers(result.headers),
        result.error or "",
    ]


def to_delimited_text(results: Iterable[ProbeResult], *, delimiter: str = ",") -> str:
    """
    Render results as CSV: a header row plus one row per result, joined by ``\\n``.

    Fields containing the delimiter, a quote or a line break are quoted with embedded quotes
    doubled. There is no trailing newline, so an empty report is exactly the header row.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for result in results:
        writer.writerow(result_row(result))
    text = buffer.getvalue()
    # Quoted fields end in '"', so the final newline is always the writer's row terminator.
    return text[:-1] if text.endswith("\n") else text


def export_filename(timestamp_ms: int, *, extension: str = "csv") -> str:
    return f"link-report-{timestamp_ms}.{extension}"


__all__ = ["CSV_COLUMNS", "export_filename", "result_row", "to_delimited_text"]
