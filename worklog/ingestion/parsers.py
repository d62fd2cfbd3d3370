"""Markdown board parsing: raw text -> element tree -> flat node sequence."""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Iterator
from pathlib import Path
from xml.etree.ElementTree import Element

import markdown
from markdown import util
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from worklog.exceptions import BoardNotFoundError, BoardReadError
from worklog.ingestion.models import BoardNode, NodeKind

logger = logging.getLogger(__name__)

HEADING_TAGS: dict[str, int] = {f"h{level}": level for level in range(1, 7)}
LIST_TAGS = frozenset({"ul", "ol"})

# A list marker that can open a top-level list ("- x", "* x", "1. x").
_LIST_START_RE = re.compile(r"^[ ]{0,3}(?:[*+-]|\d+[.)])[ ]+\S")
_ANY_LIST_ITEM_RE = re.compile(r"^\s*(?:[*+-]|\d+[.)])[ ]+")
_LINE_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


class _ListBreakPreprocessor(Preprocessor):
    """Lets a list start straight after a paragraph line.

    Obsidian Kanban writes ``**Complete**`` directly above the cards of a
    finished column; without a blank line Python-Markdown folds the whole
    list into that paragraph.
    """

    def run(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        for line in lines:
            if result and _LIST_START_RE.match(line):
                previous = result[-1]
                if (
                    previous.strip()
                    and not previous[0].isspace()
                    and not _ANY_LIST_ITEM_RE.match(previous)
                ):
                    result.append("")
            result.append(line)
        return result


class _TreeCapture(Treeprocessor):
    """Keeps the finished element tree, with raw-HTML placeholders resolved."""

    def __init__(self, md: markdown.Markdown | None = None) -> None:
        super().__init__(md)
        self.root: Element | None = None

    def run(self, root: Element) -> None:
        for element in root.iter():
            element.text = self._resolve(element.text)
            element.tail = self._resolve(element.tail)
        self.root = root

    def _resolve(self, text: str | None) -> str | None:
        if not text:
            return text
        text = util.HTML_PLACEHOLDER_RE.sub(self._stashed_text, text)
        return text.replace(util.AMP_SUBSTITUTE, "&")

    def _stashed_text(self, match: re.Match[str]) -> str:
        """Plain text of a stashed HTML fragment: tags dropped, entities decoded."""
        blocks = self.md.htmlStash.rawHtmlBlocks
        index = int(match.group(1))
        if index >= len(blocks):
            return ""
        raw = blocks[index]
        if not isinstance(raw, str):
            return "".join(raw.itertext())
        return html.unescape(_TAG_RE.sub("", _LINE_BREAK_RE.sub(" ", raw)))


class BoardTreeExtension(Extension):
    """Python-Markdown extension exposing the parsed document tree.

    The capture runs after the inline and unescape processors so list item
    text already has emphasis, code spans and backslash escapes resolved.
    """

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.capture: _TreeCapture | None = None

    def extendMarkdown(self, md: markdown.Markdown) -> None:  # noqa: N802
        # Runs after fenced code blocks are stashed (priority 25).
        md.preprocessors.register(_ListBreakPreprocessor(md), "board_list_break", 15)
        self.capture = _TreeCapture(md)
        md.treeprocessors.register(self.capture, "board_tree_capture", -10)


def parse_board(content: str) -> Element:
    """Parse board Markdown into an element tree.

    Args:
        content: Raw board text.

    Returns:
        The root element; headings are ``h1``-``h6`` and list items ``li``.
    """
    extension = BoardTreeExtension()
    md = markdown.Markdown(extensions=[extension, "fenced_code"])
    md.convert(content)

    if extension.capture is None or extension.capture.root is None:
        # Python-Markdown short-circuits blank documents before tree processing.
        return Element("div")
    return extension.capture.root


def _list_item_text(item: Element) -> str:
    """Return the text of a list item, leaving out any nested sub-lists."""
    parts: list[str] = [item.text or ""]
    for child in item:
        if child.tag not in LIST_TAGS:
            parts.extend(child.itertext())
        parts.append(child.tail or "")
    return "".join(parts)


def iter_board_nodes(root: Element) -> Iterator[BoardNode]:
    """Yield headings and list items of *root* in document (pre-)order.

    Nested list items are yielded as their own nodes, right after the item
    that contains them.
    """
    for element in root.iter():
        if element is root:
            continue

        level = HEADING_TAGS.get(element.tag)
        if level is not None:
            yield BoardNode(kind=NodeKind.HEADING, text="".join(element.itertext()), level=level)
        elif element.tag == "li":
            yield BoardNode(kind=NodeKind.LIST_ITEM, text=_list_item_text(element))


def load_board(path: str | Path) -> str:
    """Read a board file as UTF-8 text.

    Raises:
        BoardNotFoundError: If *path* does not exist.
        BoardReadError: If the file exists but cannot be read or decoded.
    """
    board_path = Path(path)
    if not board_path.exists():
        raise BoardNotFoundError(str(board_path))

    logger.info("Reading board file: %s", board_path)
    try:
        return board_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read board file '{board_path}': {exc}"
        raise BoardReadError(msg, str(board_path)) from exc
