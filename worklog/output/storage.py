"""Filesystem helpers for the worklog report and raw item listings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from worklog.exceptions import OutputWriteError

logger = logging.getLogger(__name__)


def worklog_filename(year: int, week: int) -> str:
    """Return the report file name for an ISO week."""
    return f"worklog-week-{week}-{year}.md"


def item_listing_filename(category: str) -> str:
    """Return the listing file name for *category* (``/`` becomes ``_``)."""
    return f"{category.replace('/', '_')}_items.txt"


def _ensure_folder(output_folder: str | Path) -> Path:
    folder = Path(output_folder)
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create output folder '{folder}': {exc}"
        raise OutputWriteError(msg, str(folder)) from exc
    return folder


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write '{path}': {exc}"
        raise OutputWriteError(msg, str(path)) from exc


def save_worklog(output_folder: str | Path, year: int, week: int, content: str) -> Path:
    """Write the worklog into *output_folder*, creating it if needed.

    Returns:
        Path of the written file.

    Raises:
        OutputWriteError: If the folder or file cannot be written.
    """
    folder = _ensure_folder(output_folder)
    path = folder / worklog_filename(year, week)
    _write_text(path, content)
    logger.info("Saved worklog to %s", path)
    return path


def save_item_listings(
    output_folder: str | Path,
    categories: Mapping[str, list[str]],
) -> list[Path]:
    """Write one numbered ``{category}_items.txt`` listing per non-empty category.

    Returns:
        Paths of the written files, in category order.

    Raises:
        OutputWriteError: If the folder or a file cannot be written.
    """
    folder = _ensure_folder(output_folder)
    written: list[Path] = []

    for category, items in categories.items():
        if not items:
            continue
        lines = [f"{i}. {item}" for i, item in enumerate(items, 1)]
        path = folder / item_listing_filename(category)
        _write_text(path, "\n".join(lines) + "\n")
        logger.info("Wrote %d item(s) for category '%s' to %s", len(items), category, path)
        written.append(path)

    return written
