"""
cc-standup — daily standup from a Claude Code proof-log.

Reads <dir>/YYYY-MM-DD.md, totals the day's sessions per project, and prints
a copy-paste-ready standup.

Usage:
  cc-standup                         # Yesterday's standup
  cc-standup --date 2026-02-27       # Specific date
  cc-standup --format slack          # Slack-formatted output
  cc-standup --format tweet          # Tweet-length (280 chars)
  cc-standup --format plain          # Plain text (default)

A missing proof-log is not an error: it produces a "ghost day" report.
"""
from __future__ import annotations

import argparse
import os
import sys

import structlog
from pydantic import ValidationError

from app_config import init_app
from formatters import FORMATTERS, render_report
from query_validator import StandupQuery
from report_builder import load_day_report

__version__ = "1.0.0"

log = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cc-standup",
        description="AI-generated daily standup from proof-log.",
        epilog="Output: Copy-paste ready standup for Slack, GitHub, or Twitter.",
    )
    parser.add_argument("--date", metavar="YYYY-MM-DD", help="Date to report on (default: yesterday)")
    parser.add_argument("--dir", metavar="PATH", help="Proof-log directory (default: ~/ops/proof-log)")
    parser.add_argument(
        "--format",
        metavar="FORMAT",
        help=f"Output format: {', '.join(FORMATTERS)} (default: plain)",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def user_friendly_error(exc: Exception) -> str:
    """Convert startup exceptions to a one-line message."""
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first.get("loc", ()))
        return f"Invalid configuration{f' ({where})' if where else ''}: {first['msg']}"
    return str(exc) or type(exc).__name__


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = init_app()
        query = StandupQuery(
            target_date=args.date,
            log_dir=args.dir or settings.proof_log_dir,
            log_ext=settings.proof_log_ext,
            output_format=args.format or settings.standup_format,
        )
    except ValidationError as exc:
        print(f"Error: {user_friendly_error(exc)}", file=sys.stderr)
        return 2

    log.info(
        "standup.run",
        target_date=query.target_date,
        log_path=str(query.log_path()),
        output_format=query.output_format,
    )

    report = load_day_report(query.log_path(), query.target_date)
    output = render_report(report, query.output_format)

    try:
        print(output)
        sys.stdout.flush()
    except BrokenPipeError:
        # Reader went away (e.g. `| head`); silence the flush at interpreter exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
