"""End-to-end worklog pipeline: read -> extract -> categorize -> summarize -> write."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from worklog.config import Settings, settings
from worklog.exceptions import ConfigurationError
from worklog.extraction.categorizer import categorize
from worklog.generation.llm import TextGenerator, build_generator
from worklog.generation.summarizer import summarize_categories
from worklog.ingestion.parsers import load_board
from worklog.ingestion.sections import extract_column_items
from worklog.output.report import build_markdown_summary, current_iso_week
from worklog.output.storage import save_item_listings, save_worklog
from worklog.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


@dataclass
class WorklogResult:
    """Outcome of a successful run."""

    path: Path
    year: int
    week: int
    total_items: int
    categories: dict[str, list[str]] = field(default_factory=dict)
    summaries: dict[str, list[str]] = field(default_factory=dict)
    listing_paths: list[Path] = field(default_factory=list)


def resolve_credential(
    credential: str | None,
    config: PipelineConfig,
    app_settings: Settings | None = None,
) -> str:
    """Return the explicit credential, or the provider's key from the environment.

    Raises:
        ConfigurationError: If neither is set.
    """
    if credential:
        return credential

    cfg = app_settings or settings
    fallback = cfg.credential_for(config.provider)
    if not fallback:
        msg = f"No {config.provider} API key provided (flag or {config.provider.upper()}_API_KEY)"
        raise ConfigurationError(msg)
    return fallback


def generate_worklog(
    board_path: str | Path,
    column: str,
    output_folder: str | Path,
    config: PipelineConfig | None = None,
    credential: str | None = None,
    generator: TextGenerator | None = None,
    today: date | None = None,
) -> WorklogResult:
    """Run the full worklog pipeline once.

    Args:
        board_path: Markdown board file.
        column: Heading text of the column to summarize.
        output_folder: Destination folder, created if absent.
        config: Pipeline options; defaults to :class:`PipelineConfig`.
        credential: API key; falls back to the provider's environment variable.
        generator: Pre-built text generator (skips credential lookup).
        today: Date used for the ISO week header and file name.

    Returns:
        A :class:`WorklogResult` describing what was written.
    """
    config = config or PipelineConfig()

    # Resolve the credential before touching any file.
    if config.summarize and generator is None:
        api_key = resolve_credential(credential, config)
        generator = build_generator(config.provider, api_key, model=config.model)

    # 1. Read and extract
    content = load_board(board_path)
    logger.info("Extracting items from column: %s", column)
    items = extract_column_items(content, column)

    if not items:
        logger.warning("No cards found in the specified column")
    else:
        logger.info("Found %d cards in column '%s'", len(items), column)

    # 2. Categorize
    categories = categorize(items, config.policy)

    # 3. Optional raw listings, written before any remote call
    listing_paths: list[Path] = []
    if config.write_item_listings:
        listing_paths = save_item_listings(output_folder, categories)

    # 4. Summarize
    if config.summarize and generator is not None:
        logger.info("Generating summaries using %s", config.provider)
        summaries = summarize_categories(categories, generator)
        if not any(summaries.values()):
            logger.warning("All summaries are empty")
    else:
        summaries = {name: list(values) for name, values in categories.items() if values}

    # 5. Build and save
    year, week = current_iso_week(today)
    logger.info("Building worklog summary for week %d, %d", week, year)
    report = build_markdown_summary(summaries, year, week, config.report_style)
    path = save_worklog(output_folder, year, week, report)

    return WorklogResult(
        path=path,
        year=year,
        week=week,
        total_items=len(items),
        categories=categories,
        summaries=summaries,
        listing_paths=listing_paths,
    )
