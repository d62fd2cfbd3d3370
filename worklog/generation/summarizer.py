"""LLM-powered condensing of each category's checklist items into point form."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from worklog.exceptions import (
    ConfigurationError,
    EmptyRemoteResponseError,
    GenerationError,
    NoChoicesError,
    RemoteCallError,
)
from worklog.generation.llm import TextGenerator, build_generator
from worklog.pipeline_config import LLMProvider

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = """\
As an expert software engineer with strong communication skills, write a concise \
technical summary of the following items in the '{category}' category.
Focus on technical impact, architectural decisions, and engineering outcomes. \
Write in a clear, professional tone suitable for team communication or management updates.
Keep it brief but informative, highlighting key technical achievements and challenges.

Items to summarize:
- {items}

Format your response as bullet points, one per line, each starting with "- ". \
The first bullet is a one-sentence overview of the category; the remaining bullets \
are the key points.
"""

# "- point", "• point", "1. point"; the prefix is stripped.
_BULLET_PREFIX_RE = re.compile(r"^(?:[-•] |\d\.(?: |$))")
# "1.5x faster" still counts as a numbered line but is kept whole.
_NUMBERED_RE = re.compile(r"^\d\.")


def build_summary_prompt(category: str, items: list[str]) -> str:
    """Return the instruction sent to the model for one category."""
    return SUMMARY_PROMPT.format(category=category, items="\n- ".join(items))


def extract_bullet_points(text: str) -> list[str]:
    """Return the bulleted or numbered lines of a model reply.

    Lines starting with ``- ``, ``• `` or ``N. `` are kept with that prefix
    removed. A line starting with a digit and ``.`` but no space (``1.5x``)
    is kept whole. Prose lines and blank results are dropped.
    """
    bullets: list[str] = []

    for line in text.splitlines():
        line = line.strip()
        prefix = _BULLET_PREFIX_RE.match(line)
        if prefix:
            body = line[prefix.end() :].strip()
        elif _NUMBERED_RE.match(line):
            body = line
        else:
            continue
        if body:
            bullets.append(body)

    return bullets


def summarize_categories(
    categories: Mapping[str, list[str]],
    generator: TextGenerator,
) -> dict[str, list[str]]:
    """Summarize every non-empty category with one remote call each.

    Args:
        categories: Category name -> checklist items.
        generator: Text generator used for the remote calls.

    Returns:
        Category name -> point-form lines. Empty categories are absent; a
        category whose reply had no bullets maps to an empty list.

    Raises:
        RemoteCallError: On the first failed call; nothing partial is returned.
    """
    result: dict[str, list[str]] = {}

    for category, items in categories.items():
        if not items:
            continue

        logger.info("Summarizing %d item(s) in category '%s'", len(items), category)
        prompt = build_summary_prompt(category, items)

        try:
            reply = generator.generate(prompt)
        except NoChoicesError as exc:
            raise EmptyRemoteResponseError(category) from exc
        except GenerationError as exc:
            raise RemoteCallError(category, exc) from exc

        bullets = extract_bullet_points(reply)
        if not bullets:
            logger.warning("Empty summary received for category '%s'", category)

        result[category] = bullets

    return result


def summarize(
    categories: Mapping[str, list[str]],
    credential: str,
    provider: str | LLMProvider = LLMProvider.OPENAI,
    model: str | None = None,
) -> dict[str, list[str]]:
    """Summarize *categories* using a freshly built generator.

    Raises:
        ConfigurationError: If *credential* is empty.
        RemoteCallError: If any remote call fails.
    """
    if not credential:
        msg = "An API key is required to generate summaries"
        raise ConfigurationError(msg)

    generator = build_generator(provider, credential, model=model)
    return summarize_categories(categories, generator)
