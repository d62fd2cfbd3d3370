"""Command-line entry point for the weekly worklog generator.

Run as a module::

    python -m worklog.cli \\
        --board ~/notes/Board.md \\
        --column Done \\
        --output-folder ~/notes/worklogs

Use ``--help`` for full argument documentation.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from worklog.config import settings
from worklog.exceptions import ConfigurationError, WorklogError
from worklog.pipeline import generate_worklog
from worklog.pipeline_config import CategorizationPolicy, LLMProvider, PipelineConfig, ReportStyle

logger = logging.getLogger("worklog")

LOG_FORMAT = "WORKLOG-GEN: %(asctime)s %(levelname)s: %(message)s"


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="worklog-gen",
        description=(
            "Kanban Worklog Generator\n\n"
            "Extracts the checklist cards of one column of a Markdown Kanban board,\n"
            "groups them by #tag, summarizes each group with an LLM and writes a\n"
            "weekly Markdown worklog (worklog-week-{week}-{year}.md)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--board",
        required=True,
        metavar="PATH",
        help="Path to the Kanban board markdown file.",
    )
    parser.add_argument(
        "--column",
        required=True,
        metavar="NAME",
        help="Column (level-2 heading text) to summarize, matched exactly.",
    )
    parser.add_argument(
        "--output-folder",
        required=True,
        metavar="PATH",
        help="Folder to write the worklog into. Created if it does not exist.",
    )
    parser.add_argument(
        "--credential",
        "--api-key",
        dest="credential",
        default=None,
        metavar="KEY",
        help=(
            "API key for the summarization service. Defaults to OPENAI_API_KEY "
            "(or ANTHROPIC_API_KEY with --provider anthropic)."
        ),
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in CategorizationPolicy],
        default=CategorizationPolicy.TAG.value,
        help=(
            "Categorization policy: 'tag' files cards by their first known #tag, "
            "'prefix' by the leading word of the card (default: tag)."
        ),
    )
    parser.add_argument(
        "--style",
        choices=[s.value for s in ReportStyle],
        default=ReportStyle.DETAILED.value,
        help=(
            "Report layout: 'detailed' (lead paragraph + key points) or "
            "'simple' (category name + bullets). Default: detailed."
        ),
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in LLMProvider],
        default=settings.llm_provider,
        help="Summarization service (default: LLM_PROVIDER or openai).",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model name; defaults to OPENAI_MODEL / ANTHROPIC_MODEL.",
    )
    parser.add_argument(
        "--no-summarize",
        action="store_true",
        default=False,
        help="Skip the LLM and list the raw cards of each category instead.",
    )
    parser.add_argument(
        "--write-item-listings",
        action="store_true",
        default=False,
        help="Also write a numbered {category}_items.txt per non-empty category.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    return parser


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger once for the whole run."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _build_config(args: argparse.Namespace) -> PipelineConfig:
    # argparse does not check defaults against choices, so LLM_PROVIDER lands here unchecked.
    try:
        provider = LLMProvider(args.provider)
    except ValueError as exc:
        choices = ", ".join(p.value for p in LLMProvider)
        msg = f"Unknown provider '{args.provider}' (expected one of: {choices})"
        raise ConfigurationError(msg) from exc

    return PipelineConfig(
        policy=CategorizationPolicy(args.policy),
        report_style=ReportStyle(args.style),
        provider=provider,
        model=args.model,
        summarize=not args.no_summarize,
        write_item_listings=args.write_item_listings,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        config = _build_config(args)
        result = generate_worklog(
            board_path=args.board,
            column=args.column,
            output_folder=args.output_folder,
            config=config,
            credential=args.credential,
        )
    except WorklogError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("SUCCESS: Summarized %d items to %s", result.total_items, result.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
