"""Pipeline configuration: policy/style enums and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CategorizationPolicy(StrEnum):
    """How checklist items are sorted into categories."""

    TAG = "tag"
    PREFIX = "prefix"


class ReportStyle(StrEnum):
    """Layout of each category block in the worklog."""

    DETAILED = "detailed"
    SIMPLE = "simple"


class LLMProvider(StrEnum):
    """Remote text-generation services available for summaries."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for a worklog run.

    Defaults mirror the project's usual behaviour (tag categories, detailed
    report, OpenAI summaries, no raw item listings).
    """

    policy: CategorizationPolicy = CategorizationPolicy.TAG
    report_style: ReportStyle = ReportStyle.DETAILED
    provider: LLMProvider = LLMProvider.OPENAI
    model: str | None = None
    summarize: bool = True
    write_item_listings: bool = False
