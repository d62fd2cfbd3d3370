"""Sort checklist items into categories by ``#tag`` or by text prefix."""

from __future__ import annotations

from collections.abc import Iterable

from worklog.extraction.models import PREFIX_CATEGORIES, TAG_CATEGORIES, Category
from worklog.pipeline_config import CategorizationPolicy

# Tag (lowercase, without '#') -> category
_TAG_TABLE: dict[str, Category] = {
    "build": Category.FEATURES,
    "feat": Category.FEATURES,
    "feature": Category.FEATURES,
    "bug": Category.BUGS,
    "plan": Category.PLANNING_DESIGN,
    "design": Category.PLANNING_DESIGN,
    "doc": Category.DOCUMENTATION,
    "docs": Category.DOCUMENTATION,
    "review": Category.REVIEWS,
    "learn": Category.LEARNING,
}

# Checked in order; "feat" also covers "feature".
_PREFIX_TABLE: list[tuple[str, Category]] = [
    ("feat", Category.FEATURES),
    ("bug", Category.BUGS),
    ("plan", Category.PLANNING_DESIGN),
    ("design", Category.PLANNING_DESIGN),
]


def category_names(policy: str | CategorizationPolicy = CategorizationPolicy.TAG) -> list[str]:
    """Return the predeclared category keys for *policy*, in report order."""
    policy = CategorizationPolicy(policy)
    if policy is CategorizationPolicy.PREFIX:
        return [str(c) for c in PREFIX_CATEGORIES]
    return [str(c) for c in TAG_CATEGORIES]


def extract_tags(item: str) -> list[str]:
    """Return the lowercased ``#tags`` of *item*, without the ``#``."""
    return [word[1:].lower() for word in item.split() if word.startswith("#")]


def classify_by_tag(item: str) -> Category:
    """Return the category of the first recognised tag, or ``other``."""
    for tag in extract_tags(item):
        category = _TAG_TABLE.get(tag)
        if category is not None:
            return category
    return Category.OTHER


def classify_by_prefix(item: str) -> Category:
    """Return the category whose prefix starts the (lowercased) item text."""
    lowered = item.lower()
    for prefix, category in _PREFIX_TABLE:
        if lowered.startswith(prefix):
            return category
    return Category.OTHER


def categorize(
    items: Iterable[str],
    policy: str | CategorizationPolicy = CategorizationPolicy.TAG,
) -> dict[str, list[str]]:
    """Group checklist items by category.

    Every predeclared category of *policy* is present in the result, even when
    empty. Items keep their input order within a category.

    Args:
        items: Checklist item payloads.
        policy: ``tag`` (``#feat`` etc. anywhere in the text) or ``prefix``
            (leading word of the text).

    Returns:
        Mapping of category name to its items.
    """
    # Normalise to enum
    policy = CategorizationPolicy(policy)
    classify = classify_by_prefix if policy is CategorizationPolicy.PREFIX else classify_by_tag
    categories: dict[str, list[str]] = {name: [] for name in category_names(policy)}

    for item in items:
        categories[str(classify(item))].append(item)

    return categories
