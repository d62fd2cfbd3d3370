"""Render categorized summaries into the weekly Markdown worklog."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from worklog.extraction.models import TAG_CATEGORIES
from worklog.pipeline_config import ReportStyle


def current_iso_week(today: date | None = None) -> tuple[int, int]:
    """Return ``(iso_year, iso_week)`` for *today* (defaults to the current date)."""
    iso = (today or date.today()).isocalendar()
    return iso.year, iso.week


def _ordered_categories(summaries: Mapping[str, list[str]]) -> list[str]:
    """Known categories in their predeclared order, then any others as given."""
    known = [str(c) for c in TAG_CATEGORIES if str(c) in summaries]
    extra = [name for name in summaries if name not in known]
    return known + extra


def _format_detailed(category: str, lines: list[str]) -> list[str]:
    parts = [f"### {category.title()}\n", f"{lines[0]}\n"]
    if len(lines) > 1:
        parts.append("**Key Points:**")
        parts.extend(f"- {line}" for line in lines[1:])
        parts.append("")
    return parts


def _format_simple(category: str, lines: list[str]) -> list[str]:
    return [category, *(f"- {line}" for line in lines), ""]


def build_markdown_summary(
    summaries: Mapping[str, list[str]],
    year: int,
    week: int,
    style: str | ReportStyle = ReportStyle.DETAILED,
) -> str:
    """Build the worklog text for one week.

    Args:
        summaries: Category name -> lines (summary bullets or raw items).
        year: ISO year for the header.
        week: ISO week number for the header.
        style: ``detailed`` writes a ``###`` heading, the first line as a lead
            paragraph and the rest under "Key Points"; ``simple`` writes the
            category name followed by every line as a bullet.

    Returns:
        Markdown text. Categories with no lines are left out entirely.
    """
    style = ReportStyle(style)
    parts: list[str] = [f"## Week {week} {year}\n"]

    for category in _ordered_categories(summaries):
        lines = summaries[category]
        if not lines:
            continue
        if style is ReportStyle.SIMPLE:
            parts.extend(_format_simple(category, lines))
        else:
            parts.extend(_format_detailed(category, lines))

    return "\n".join(parts) + "\n"
