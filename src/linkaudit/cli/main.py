# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""LinkAudit CLI."""

from __future__ import annotations

import argparse
import json
import signal
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO

from ..audit.export import export_filename, to_delimited_text
from ..config import AuditSettings, HttpSettings, load_audit_settings, load_http_settings
from ..errors import ErrorCategory, LinkAuditError, error_category_to_reason
from ..http import create_default_http_client
from ..log import level_for_verbosity, setup_logging
from ..models import AuditReport, ProbeResult, RunProgress
from ..runtime import LinkAudit
from ..utils.cancel import CancelToken

CLI_URL_WIDTH = 72
EXIT_OK = 0
EXIT_DISCOVERY_FAILED = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit the same-domain links of a page: status, headers, cache hits (CSV/JSON export)"
    )
    parser.add_argument("url", help="Seed URL whose links are audited")
    parser.add_argument(
        "--capture-body",
        action="store_true",
        default=None,
        help="Fetch each link with GET and keep the response body",
    )
    parser.add_argument(
        "--format",
        choices=("table", "csv", "json"),
        default="table",
        help="Report format (default: table)",
    )
    parser.add_argument(
        "--out",
        help="Write the report to this file, or into this directory as link-report-<ms>.<ext> ('-' for stdout)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the seed page answers with a non-2xx status instead of parsing it",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress and summary output")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def _shorten(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def print_progress(progress: RunProgress, result: ProbeResult, *, stream: TextIO | None = None) -> None:
    """Rewrite the progress line on stderr after each probe."""
    stream = stream or sys.stderr
    status = str(result.status) if not result.failed else "ERR"
    stream.write(
        f"\r\033[K[{progress.completed}/{progress.total}] {progress.percent:5.1f}% "
        f"{status} {_shorten(result.url, CLI_URL_WIDTH)}"
    )
    stream.flush()


def print_summary(report: AuditReport, *, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    summary = report.summary()
    stream.write("=" * 50 + "\n")
    stream.write("AUDIT SUMMARY\n")
    stream.write("=" * 50 + "\n\n")
    stream.write(f"Links probed:     {summary.probed}/{summary.total_links}\n")
    stream.write(f"Run state:        {report.state.value}\n")
    stream.write(f"Cache hits:       {summary.hits}\n")
    stream.write(f"Cache misses:     {summary.misses}\n")
    stream.write(f"Request failures: {summary.failed}\n")
    if summary.status_counts:
        stream.write("\nResponses by status:\n")
        for status, count in summary.status_counts.items():
            label = "Request failed" if status == "error" else f"HTTP {status}"
            stream.write(f"  {label}: {count}\n")
    stream.write("\n")


def _failure_reason(result: ProbeResult) -> str:
    try:
        category = ErrorCategory(result.error_type) if result.error_type else None
    except ValueError:
        category = None
    reason = error_category_to_reason(category)
    return f"{reason}: {result.error}" if reason else str(result.error)


def render_table(report: AuditReport) -> str:
    lines = [f"{'STATUS':<7} {'HIT':<5} URL"]
    for result in report:
        status = str(result.status) if not result.failed else "ERR"
        line = f"{status:<7} {result.hit_label:<5} {result.url}"
        if result.failed:
            line += f"  ({_failure_reason(result)})"
        lines.append(line)
    return "\n".join(lines)


def render_report(report: AuditReport, fmt: str) -> str:
    if fmt == "csv":
        return to_delimited_text(report)
    if fmt == "json":
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    return render_table(report)


def resolve_output_path(out: str, fmt: str) -> Path:
    """Map ``--out`` to a file; a directory gets a timestamped ``link-report-*`` name."""
    path = Path(out)
    if path.is_dir():
        extension = "txt" if fmt == "table" else fmt
        return path / export_filename(int(time.time() * 1000), extension=extension)
    return path


@contextmanager
def cancel_on_interrupt(token: CancelToken) -> Iterator[None]:
    """
    Turn the first Ctrl-C into a cooperative cancel; a second one interrupts for real.
    """
    previous = signal.getsignal(signal.SIGINT)

    def _handler(signum: int, frame: Any) -> None:  # noqa: ARG001
        if not token.cancel("interrupted"):
            raise KeyboardInterrupt
        sys.stderr.write("\nStopping after the current link (Ctrl-C again to abort)...\n")

    try:
        signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # Not in the main thread; keep default handling.
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _build_settings(args: argparse.Namespace) -> tuple[HttpSettings, AuditSettings]:
    http_settings = load_http_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False
    if args.timeout is not None and args.timeout > 0:
        http_settings.timeout = args.timeout

    audit_settings = load_audit_settings()
    if args.strict:
        audit_settings.strict_discovery = True
    if args.capture_body is not None:
        audit_settings.capture_body = args.capture_body
    return http_settings, audit_settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level_for_verbosity(args.verbose))

    http_settings, audit_settings = _build_settings(args)
    http_client = create_default_http_client(http_settings)
    cancel_token = CancelToken()
    on_progress = None if args.quiet else print_progress

    with LinkAudit(http_client=http_client, http_settings=http_settings, audit_settings=audit_settings) as auditor:
        try:
            discovery = auditor.discover(args.url)
        except LinkAuditError as exc:
            sys.stderr.write(f"Error: {exc}\n")
            return EXIT_DISCOVERY_FAILED

        if not args.quiet:
            sys.stderr.write(f"Found {discovery.total_links} same-domain links on {discovery.seed_url}\n")

        run = auditor.start(discovery.links, cancel_token=cancel_token, on_progress=on_progress)
        with cancel_on_interrupt(cancel_token):
            report = run.run()

    if not args.quiet:
        if report.total_links:
            sys.stderr.write("\n")
        print_summary(report)

    text = render_report(report, args.format)
    if not args.out or args.out == "-":
        sys.stdout.write(text + "\n")
    else:
        output_path = resolve_output_path(args.out, args.format)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        if not args.quiet:
            sys.stderr.write(f"Report written to: {output_path}\n")

    return EXIT_CANCELLED if report.cancelled else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
