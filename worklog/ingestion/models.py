"""Data models for the board ingestion step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class NodeKind(StrEnum):
    """Structural node types the section extractor cares about."""

    HEADING = "heading"
    LIST_ITEM = "list_item"


@dataclass(frozen=True)
class BoardNode:
    """A structural element of a parsed board, in document order."""

    kind: NodeKind
    text: str
    level: int = 0  # heading level (1-6); 0 for list items
