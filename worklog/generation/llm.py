"""Text-generation clients behind a narrow ``generate(prompt) -> str`` interface."""

from __future__ import annotations

import logging
from typing import Protocol

from anthropic import Anthropic, AnthropicError
from anthropic.types import TextBlock
from openai import OpenAI, OpenAIError

from worklog.config import Settings, settings
from worklog.exceptions import ConfigurationError, GenerationError, NoChoicesError
from worklog.pipeline_config import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 500


class TextGenerator(Protocol):
    """Anything that turns a prompt into free text.

    Implementations raise :class:`GenerationError` when the remote call fails
    and :class:`NoChoicesError` when it answers without any text.
    """

    def generate(self, prompt: str) -> str: ...


class OpenAIGenerator:
    """Chat-completion generator backed by the OpenAI API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.client = OpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            raise GenerationError(str(exc)) from exc

        if not response.choices:
            msg = f"OpenAI returned no choices (model {self.model})"
            raise NoChoicesError(msg)

        return response.choices[0].message.content or ""


class AnthropicGenerator:
    """Messages-API generator backed by Claude."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.client = Anthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except AnthropicError as exc:
            raise GenerationError(str(exc)) from exc

        # We always request plain text, so only TextBlocks carry the answer.
        texts = [block.text for block in response.content if isinstance(block, TextBlock)]
        if not texts:
            msg = f"Claude returned no text content (model {self.model})"
            raise NoChoicesError(msg)

        return "".join(texts)


def build_generator(
    provider: str | LLMProvider,
    credential: str,
    model: str | None = None,
    config: Settings | None = None,
) -> TextGenerator:
    """Create the text generator for *provider*.

    Args:
        provider: ``"openai"`` or ``"anthropic"`` (string or enum).
        credential: API key for the provider.
        model: Model name; defaults to the provider's configured model.
        config: Settings to read defaults from (the global settings if None).

    Raises:
        ConfigurationError: If *credential* is empty.
    """
    cfg = config or settings
    provider = LLMProvider(provider)

    if not credential:
        msg = f"No {provider} API key provided"
        raise ConfigurationError(msg)

    model_name = model or cfg.model_for(provider)
    logger.debug("Using %s model %s", provider, model_name)

    if provider is LLMProvider.ANTHROPIC:
        return AnthropicGenerator(credential, model=model_name, max_tokens=cfg.summary_max_tokens)
    return OpenAIGenerator(credential, model=model_name, max_tokens=cfg.summary_max_tokens)
