"""
Proof-log parser — turns one day's Markdown proof-log into Session records.

A proof-log is a sequence of blocks. Each block starts with a header line and
carries up to four labelled field lines, in any order:

    ### 2026-02-27 09:00-10:30 JST
    - いつ: 2026-02-27 09:00-10:30 JST（90分）
    - どこで: alpha
    - 誰が: CC: 7件
    - 何を: 3ファイル変更 (+120/-5)

Parsing rules:
  - Lines are stripped before matching; unrecognised lines are ignored
  - Lines before the first header are ignored
  - Every header yields exactly one Session, even with no field lines
  - A field line that does not match its pattern leaves the prior value alone

Nothing here touches settings or the environment; callers pass paths in.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Typed exceptions
# ---------------------------------------------------------------------------


class ProofLogError(Exception):
    """Base class for proof-log errors."""


class ProofLogReadError(ProofLogError):
    """Raised when a proof-log cannot be read for any reason other than being absent."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read proof-log {path}: {reason}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass
class Session:
    """One logged work block. Numeric fields stay zero unless a field line sets them."""

    date: str  # ISO YYYY-MM-DD, exactly as written in the header
    start_time: str = ""
    end_time: str = ""
    duration_minutes: int = 0
    project: str | None = None
    action_count: int = 0
    files_changed: int = 0
    lines_added: int = 0
    lines_removed: int = 0


class LineKind(Enum):
    HEADER = "header"
    DURATION = "duration"
    WHERE = "where"
    WHO = "who"
    WHAT = "what"


# ---------------------------------------------------------------------------
# Line patterns (ASCII digits only)
# ---------------------------------------------------------------------------

_LINE_PATTERNS: tuple[tuple[LineKind, re.Pattern[str]], ...] = (
    (
        LineKind.HEADER,
        re.compile(
            r"^### (?P<date>\d{4}-\d{2}-\d{2}) "
            r"(?P<start>\d{2}:\d{2})-(?P<end>\d{2}:\d{2}) JST",
            re.ASCII,
        ),
    ),
    (LineKind.DURATION, re.compile(r"^- いつ: .+JST（(?P<minutes>\d+)分）", re.ASCII)),
    (LineKind.WHERE, re.compile(r"^- どこで: (?P<project>.+)$")),
    (LineKind.WHO, re.compile(r"^- 誰が: CC: (?P<actions>\d+)件", re.ASCII)),
    (
        LineKind.WHAT,
        re.compile(
            r"^- 何を: (?P<files>\d+)ファイル変更 "
            r"\(\+(?P<added>\d+)/-(?P<removed>\d+)\)",
            re.ASCII,
        ),
    ),
)


def classify_line(line: str) -> tuple[LineKind, dict[str, str]] | None:
    """
    Return (kind, named captures) for a recognised line, or None.

    The line is matched as given; parse_proof_log strips it first.
    """
    for kind, pattern in _LINE_PATTERNS:
        match = pattern.match(line)
        if match:
            return kind, match.groupdict()
    return None


def _apply_field(session: Session, kind: LineKind, fields: dict[str, str]) -> None:
    """Update one session from a classified field line."""
    try:
        if kind is LineKind.DURATION:
            session.duration_minutes = int(fields["minutes"])
        elif kind is LineKind.WHERE:
            project = fields["project"].strip()
            if project:
                session.project = project
        elif kind is LineKind.WHO:
            session.action_count = int(fields["actions"])
        elif kind is LineKind.WHAT:
            files = int(fields["files"])
            added = int(fields["added"])
            removed = int(fields["removed"])
            session.files_changed = files
            session.lines_added = added
            session.lines_removed = removed
    except ValueError:
        # Field skipped; the rest of the block still parses.
        log.debug("proof_log.field_skipped", kind=kind.value)


def _trim(raw: str) -> str:
    """Strip whitespace and any byte-order mark from both ends of a line."""
    return raw.strip().strip("\ufeff").strip()


def _close_block(sessions: list[Session], session: Session, field_lines: int) -> None:
    if field_lines == 0:
        log.debug("proof_log.empty_block", date=session.date, start=session.start_time)
    sessions.append(session)


def parse_proof_log(content: str) -> list[Session]:
    """
    Parse proof-log text into sessions, in file order.

    The result has one Session per header line. Sessions without a project
    are kept here; report_builder drops them.
    """
    sessions: list[Session] = []
    current: Session | None = None
    field_lines = 0
    ignored = 0

    # Only "\n" ends a line; other separators belong to the line's text.
    for raw in content.split("\n"):
        line = _trim(raw)
        classified = classify_line(line)

        if classified is not None and classified[0] is LineKind.HEADER:
            if current is not None:
                _close_block(sessions, current, field_lines)
            fields = classified[1]
            current = Session(
                date=fields["date"],
                start_time=fields["start"],
                end_time=fields["end"],
            )
            field_lines = 0
            continue

        if current is None:
            if line:
                ignored += 1
            continue

        if classified is not None:
            field_lines += 1
            _apply_field(current, *classified)

    if current is not None:
        _close_block(sessions, current, field_lines)

    if ignored:
        log.debug("proof_log.preamble_ignored", lines=ignored)
    log.debug("proof_log.parsed", sessions=len(sessions))
    return sessions


def read_proof_log(path: Path) -> str | None:
    """
    Read a proof-log file as UTF-8 text (a leading BOM is dropped).

    Returns None when the file does not exist. Raises ProofLogReadError for
    any other failure: permissions, a directory, a name the OS rejects, or
    bad encoding.
    """
    try:
        content = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        log.info("proof_log.missing", path=str(path))
        return None
    except UnicodeDecodeError as exc:
        raise ProofLogReadError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise ProofLogReadError(path, exc.strerror or type(exc).__name__) from exc

    log.info("proof_log.read", path=str(path), chars=len(content))
    return content
