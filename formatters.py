"""
Report formatters — plain text, Slack markup, and tweet-length output.

Each format_* function is pure: DayReport in, one string out. render_report
picks one by name and falls back to plain for anything it does not know.
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from report_builder import DayReport

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_UNKNOWN_DAY = "???"

TWEET_MAX_CHARS = 280
_TWEET_ELLIPSIS = "..."
_TWEET_TOP_PROJECTS = 3

DEFAULT_FORMAT = "plain"


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------


def day_of_week(target_date: str) -> str:
    """Three-letter weekday for an ISO date, or '???' if it is not a real date."""
    try:
        d = date.fromisoformat(target_date)
    except ValueError:
        return _UNKNOWN_DAY
    # isoweekday(): Mon=1 … Sun=7, so % 7 puts Sunday at index 0
    return _DAY_NAMES[d.isoweekday() % 7]


def fmt_hours(minutes: int) -> str:
    """Format whole minutes as e.g. '1h 30m', '1h 0m', or '45m'."""
    hrs, mins = divmod(minutes, 60)
    if hrs > 0:
        return f"{hrs}h {mins}m"
    return f"{mins}m"


def fmt_lines(count: int) -> str:
    """Line count with thousands separators: 1234 → '1,234'."""
    return f"{count:,}"


def fmt_kilo_lines(count: int) -> str:
    """
    Line count in thousands, one decimal: 15000 → '15.0K'.

    Rounds the binary float count / 1000 at its exact value, ties up, so
    1150 (stored as 1.14999…) gives '1.1K' and 1250 gives '1.3K'.
    """
    kilo = Decimal(count / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{kilo}K"


def _label(report: DayReport) -> str:
    return f"{report.target_date} ({report.day_of_week})"


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------


def format_plain(report: DayReport) -> str:
    lines = [f"📋 AI Standup — {_label(report)}", ""]

    if report.is_ghost_day:
        lines.append("👻 Ghost Day — AI worked autonomously. No sessions logged.")
        lines.append("")
    else:
        lines.append("✅ Yesterday's work:")
        for p in report.projects:
            parts = [fmt_hours(p.minutes)]
            if p.sessions > 0:
                parts.append(f"{p.sessions} sessions")
            if p.lines_added > 0:
                parts.append(f"+{fmt_lines(p.lines_added)} lines")
            lines.append(f"  • {p.project} — {' | '.join(parts)}")
        lines.append("")

        t = report.totals
        total_parts = [
            fmt_hours(t.minutes),
            f"{t.sessions} sessions",
            f"+{fmt_lines(t.lines_added)} lines",
        ]
        if t.files_changed > 0:
            total_parts.append(f"{t.files_changed} files")
        lines.append(f"📊 Total: {' | '.join(total_parts)}")
        lines.append("")

    if report.projects:
        lines.append(f"🔜 Continuing: {', '.join(report.project_names)}")
        lines.append("")

    lines.append("Generated by cc-standup")
    return "\n".join(lines)


def format_slack(report: DayReport) -> str:
    """Slack mrkdwn: bold headings, code-formatted project names, no footer."""
    lines = [f"*AI Standup — {_label(report)}*", ""]

    if report.is_ghost_day:
        lines.append("👻 *Ghost Day* — AI worked autonomously. No sessions logged.")
        return "\n".join(lines)

    lines.append("✅ *Yesterday's work:*")
    for p in report.projects:
        parts = [fmt_hours(p.minutes)]
        if p.lines_added > 0:
            parts.append(f"+{fmt_lines(p.lines_added)} lines")
        lines.append(f"• `{p.project}` — {', '.join(parts)}")
    lines.append("")

    t = report.totals
    lines.append(
        f"📊 *Total:* {fmt_hours(t.minutes)} | {t.sessions} sessions"
        f" | +{fmt_lines(t.lines_added)} lines"
    )
    if report.projects:
        names = ", ".join(f"`{name}`" for name in report.project_names)
        lines.append(f"🔜 *Continuing:* {names}")

    return "\n".join(lines)


def format_tweet(report: DayReport) -> str:
    """
    Tweet-length summary: top three projects and a totals line.

    Never longer than TWEET_MAX_CHARS; overflow is cut and ends with '...'.
    """
    month_day = report.target_date[5:]

    if report.is_ghost_day:
        parts = [
            f"AI Standup {month_day} 👻",
            "Ghost Day — AI ran autonomously",
            "#claudecode",
        ]
    else:
        parts = [f"AI Standup {month_day} 🤖"]
        for p in report.projects[:_TWEET_TOP_PROJECTS]:
            entry = f"✅ {p.project}: {fmt_hours(p.minutes)}"
            if p.lines_added > 0:
                entry += f" (+{fmt_kilo_lines(p.lines_added)} lines)"
            parts.append(entry)
        parts.append("")
        parts.append(f"Total: {fmt_hours(report.totals.minutes)} | {report.totals.sessions} sessions")
        parts.append("#claudecode #aidev")

    tweet = "\n".join(parts)
    if len(tweet) > TWEET_MAX_CHARS:
        return tweet[: TWEET_MAX_CHARS - len(_TWEET_ELLIPSIS)] + _TWEET_ELLIPSIS
    return tweet


FORMATTERS: dict[str, Callable[[DayReport], str]] = {
    "plain": format_plain,
    "slack": format_slack,
    "tweet": format_tweet,
}


def render_report(report: DayReport, output_format: str) -> str:
    """Render with the named formatter; unknown names use plain."""
    formatter = FORMATTERS.get(output_format, FORMATTERS[DEFAULT_FORMAT])
    return formatter(report)
