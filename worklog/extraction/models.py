"""Category names shared by the categorizer, summarizer and report."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    """Buckets checklist items are filed under."""

    FEATURES = "features"
    BUGS = "bugs"
    PLANNING_DESIGN = "planning/design"
    DOCUMENTATION = "documentation"
    REVIEWS = "reviews"
    LEARNING = "learning"
    OTHER = "other"


# Predeclared key order for each categorization policy.
TAG_CATEGORIES: tuple[Category, ...] = (
    Category.FEATURES,
    Category.BUGS,
    Category.PLANNING_DESIGN,
    Category.DOCUMENTATION,
    Category.REVIEWS,
    Category.LEARNING,
    Category.OTHER,
)

PREFIX_CATEGORIES: tuple[Category, ...] = (
    Category.FEATURES,
    Category.BUGS,
    Category.PLANNING_DESIGN,
    Category.OTHER,
)
