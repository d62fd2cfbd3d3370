"""Column extraction: collect checklist items under one level-2 heading."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

from worklog.exceptions import SectionNotFoundError
from worklog.ingestion.models import BoardNode, NodeKind
from worklog.ingestion.parsers import iter_board_nodes, parse_board

logger = logging.getLogger(__name__)

# Only level-2 headings delimit board columns.
COLUMN_HEADING_LEVEL = 2


class _ScanState(StrEnum):
    SEEKING = "seeking"
    COLLECTING = "collecting"
    DONE = "done"


def checklist_payload(text: str) -> str | None:
    """Return the card text that follows a ``[ ]`` / ``[x]`` marker.

    Everything after the first ``]`` is kept with runs of whitespace collapsed.
    Returns ``None`` when there is no marker or nothing follows it.
    """
    if "[" not in text or "]" not in text:
        return None

    _, _, remainder = text.partition("]")
    payload = " ".join(remainder.split())
    return payload or None


def extract_items_from_nodes(nodes: Iterable[BoardNode], column: str) -> list[str]:
    """Collect checklist payloads from the section headed ``## {column}``.

    The section opens at the first level-2 heading whose stripped text equals
    *column* exactly and closes at the next heading of level 2 or above.
    Deeper headings inside the section do not close it.

    Args:
        nodes: Board nodes in document order.
        column: Heading text of the column to extract.

    Returns:
        Item payloads in document order (possibly empty).

    Raises:
        SectionNotFoundError: If no matching heading exists.
    """
    state = _ScanState.SEEKING
    items: list[str] = []

    for node in nodes:
        if node.kind is NodeKind.HEADING:
            if state is _ScanState.COLLECTING and node.level <= COLUMN_HEADING_LEVEL:
                state = _ScanState.DONE
                break
            if node.level == COLUMN_HEADING_LEVEL and node.text.strip() == column:
                state = _ScanState.COLLECTING
        elif node.kind is NodeKind.LIST_ITEM and state is _ScanState.COLLECTING:
            payload = checklist_payload(node.text)
            if payload:
                items.append(payload)

    if state is _ScanState.SEEKING:
        raise SectionNotFoundError(column)

    return items


def extract_column_items(content: str, column: str) -> list[str]:
    """Parse board Markdown and return the checklist items of *column*.

    Raises:
        SectionNotFoundError: If the board has no ``## {column}`` heading.
    """
    root = parse_board(content)
    items = extract_items_from_nodes(iter_board_nodes(root), column)
    logger.debug("Column %r yielded %d item(s)", column, len(items))
    return items
