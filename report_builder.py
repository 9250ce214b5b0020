"""
Day report aggregation — groups parsed sessions by project and sums totals.

Sessions without a project are excluded from every count. Projects are keyed
by exact string match and listed by minutes, highest first; ties keep the
order in which each project first appeared in the log.

A "ghost day" is a day with no retained sessions: the log is missing,
unreadable, or holds no session with a project.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from formatters import day_of_week
from proof_log import ProofLogReadError, Session, parse_proof_log, read_proof_log

log = structlog.get_logger(__name__)


@dataclass
class ProjectAggregate:
    project: str
    minutes: int = 0
    sessions: int = 0
    lines_added: int = 0
    files_changed: int = 0


@dataclass
class DayTotals:
    minutes: int = 0
    sessions: int = 0
    lines_added: int = 0
    files_changed: int = 0
    actions: int = 0


@dataclass
class DayReport:
    """Everything a formatter needs for one day. Built fresh on every run."""

    target_date: str
    day_of_week: str
    is_ghost_day: bool
    projects: list[ProjectAggregate] = field(default_factory=list)
    totals: DayTotals = field(default_factory=DayTotals)
    source_path: Path | None = None

    @property
    def project_names(self) -> list[str]:
        return [p.project for p in self.projects]


def aggregate_sessions(sessions: list[Session]) -> tuple[list[ProjectAggregate], DayTotals]:
    """
    Sum sessions into per-project buckets and day totals.

    Returns (projects sorted by minutes descending, totals).
    """
    buckets: dict[str, ProjectAggregate] = {}
    totals = DayTotals()

    for s in sessions:
        if s.project is None:
            continue

        totals.minutes += s.duration_minutes
        totals.sessions += 1
        totals.lines_added += s.lines_added
        totals.files_changed += s.files_changed
        totals.actions += s.action_count

        bucket = buckets.get(s.project)
        if bucket is None:
            bucket = buckets[s.project] = ProjectAggregate(project=s.project)
        bucket.minutes += s.duration_minutes
        bucket.sessions += 1
        bucket.lines_added += s.lines_added
        bucket.files_changed += s.files_changed

    # sorted() is stable, so equal minutes keep first-appearance order
    projects = sorted(buckets.values(), key=lambda p: p.minutes, reverse=True)
    return projects, totals


def build_day_report(
    target_date: str,
    content: str | None,
    source_path: Path | None = None,
) -> DayReport:
    """
    Build a DayReport from proof-log text.

    content=None means the log could not be found or read.
    """
    sessions = parse_proof_log(content) if content else []
    projects, totals = aggregate_sessions(sessions)

    report = DayReport(
        target_date=target_date,
        day_of_week=day_of_week(target_date),
        is_ghost_day=totals.sessions == 0,
        projects=projects,
        totals=totals,
        source_path=source_path,
    )
    log.info(
        "report.built",
        target_date=target_date,
        parsed_sessions=len(sessions),
        retained_sessions=totals.sessions,
        projects=len(projects),
        ghost_day=report.is_ghost_day,
    )
    return report


def load_day_report(log_path: Path, target_date: str) -> DayReport:
    """
    Read the proof-log at log_path and build its DayReport.

    Never raises for a missing or unreadable file — both become a ghost day.
    """
    try:
        content = read_proof_log(log_path)
    except ProofLogReadError as exc:
        log.warning("report.unreadable_log", path=str(exc.path), reason=exc.reason)
        content = None

    return build_day_report(target_date, content, source_path=log_path)
