"""Tests for the LLM clients and category summarizer (mocked, no network)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from anthropic import AnthropicError
from anthropic.types import TextBlock
from openai import OpenAIError

from worklog.exceptions import (
    ConfigurationError,
    EmptyRemoteResponseError,
    GenerationError,
    NoChoicesError,
    RemoteCallError,
)
from worklog.generation.llm import AnthropicGenerator, OpenAIGenerator, build_generator
from worklog.generation.summarizer import (
    build_summary_prompt,
    extract_bullet_points,
    summarize,
    summarize_categories,
)


class FakeGenerator:
    """Records prompts and replies from a fixed script."""

    def __init__(self, replies: list[str | Exception]) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def _openai_response(content: str | None) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


# ---------------------------------------------------------------------------
# Bullet parsing
# ---------------------------------------------------------------------------


class TestExtractBulletPoints:
    def test_drops_prose_lines(self) -> None:
        text = "Summary line.\n- Point one\n- Point two\nTrailing prose"
        assert extract_bullet_points(text) == ["Point one", "Point two"]

    def test_bullet_glyph_and_numbers(self) -> None:
        text = "• First\n1. Second\n  - Indented"
        assert extract_bullet_points(text) == ["First", "Second", "Indented"]

    def test_decimal_is_not_a_number_prefix(self) -> None:
        text = "1.5x faster builds\n2. Cut CI time"
        assert extract_bullet_points(text) == ["1.5x faster builds", "Cut CI time"]

    def test_blank_bullets_are_dropped(self) -> None:
        assert extract_bullet_points("- \n-   \n1.\n- real") == ["real"]

    def test_other_markers_are_not_bullets(self) -> None:
        assert extract_bullet_points("* star\n-dash\n**Bold**") == []

    def test_empty_text(self) -> None:
        assert extract_bullet_points("") == []


# ---------------------------------------------------------------------------
# Prompt construction
# ---------------------------------------------------------------------------


class TestBuildSummaryPrompt:
    def test_embeds_category_and_items(self) -> None:
        prompt = build_summary_prompt("bugs", ["#bug one", "#bug two"])
        assert "'bugs' category" in prompt
        assert "- #bug one\n- #bug two" in prompt


# ---------------------------------------------------------------------------
# Summarizer
# ---------------------------------------------------------------------------


class TestSummarizeCategories:
    def test_skips_empty_categories(self) -> None:
        generator = FakeGenerator(["- Overview\n- Detail"])
        result = summarize_categories(
            {"features": ["#feat a"], "bugs": [], "other": []},
            generator,
        )
        assert result == {"features": ["Overview", "Detail"]}
        assert len(generator.prompts) == 1
        assert "'features'" in generator.prompts[0]

    def test_empty_reply_is_recorded_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        generator = FakeGenerator(["Just prose, no bullets."])
        with caplog.at_level("WARNING"):
            result = summarize_categories({"bugs": ["#bug a"]}, generator)
        assert result == {"bugs": []}
        assert "Empty summary received for category 'bugs'" in caplog.text

    def test_remote_failure_aborts(self) -> None:
        generator = FakeGenerator(["- ok", GenerationError("timeout")])
        with pytest.raises(RemoteCallError) as exc_info:
            summarize_categories({"features": ["a"], "bugs": ["b"], "other": ["c"]}, generator)
        assert exc_info.value.category == "bugs"
        assert "timeout" in str(exc_info.value)
        # Nothing after the failing category is attempted.
        assert len(generator.prompts) == 2

    def test_no_choices_maps_to_empty_response(self) -> None:
        generator = FakeGenerator([NoChoicesError("none")])
        with pytest.raises(EmptyRemoteResponseError) as exc_info:
            summarize_categories({"other": ["x"]}, generator)
        assert exc_info.value.category == "other"
        assert isinstance(exc_info.value, RemoteCallError)


class TestSummarize:
    def test_requires_credential(self) -> None:
        with pytest.raises(ConfigurationError):
            summarize({"features": ["a"]}, "")

    @patch("worklog.generation.llm.OpenAI")
    def test_uses_openai_by_default(self, mock_openai_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_openai_cls.return_value = mock_client
        mock_client.chat.completions.create.return_value = _openai_response("- Shipped")

        result = summarize({"features": ["#feat a"], "bugs": []}, "sk-test")

        assert result == {"features": ["Shipped"]}
        mock_openai_cls.assert_called_once_with(api_key="sk-test")


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


class TestOpenAIGenerator:
    @patch("worklog.generation.llm.OpenAI")
    def test_request_shape(self, mock_openai_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_openai_cls.return_value = mock_client
        mock_client.chat.completions.create.return_value = _openai_response("- done")

        text = OpenAIGenerator("sk-test", model="gpt-4o-mini", max_tokens=500).generate("hi")

        assert text == "- done"
        call_kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["max_tokens"] == 500
        assert call_kwargs["messages"] == [{"role": "user", "content": "hi"}]

    @patch("worklog.generation.llm.OpenAI")
    def test_zero_choices(self, mock_openai_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_openai_cls.return_value = mock_client
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response

        with pytest.raises(NoChoicesError):
            OpenAIGenerator("sk-test").generate("hi")

    @patch("worklog.generation.llm.OpenAI")
    def test_none_content_is_empty_text(self, mock_openai_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_openai_cls.return_value = mock_client
        mock_client.chat.completions.create.return_value = _openai_response(None)

        assert OpenAIGenerator("sk-test").generate("hi") == ""

    @patch("worklog.generation.llm.OpenAI")
    def test_api_error_is_wrapped(self, mock_openai_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_openai_cls.return_value = mock_client
        mock_client.chat.completions.create.side_effect = OpenAIError("bad key")

        with pytest.raises(GenerationError, match="bad key"):
            OpenAIGenerator("sk-test").generate("hi")


class TestAnthropicGenerator:
    @patch("worklog.generation.llm.Anthropic")
    def test_returns_text_blocks(self, mock_anthropic_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_anthropic_cls.return_value = mock_client
        response = MagicMock()
        response.content = [TextBlock(type="text", text="- one\n- two")]
        mock_client.messages.create.return_value = response

        text = AnthropicGenerator("key", max_tokens=300).generate("hi")

        assert text == "- one\n- two"
        assert mock_client.messages.create.call_args.kwargs["max_tokens"] == 300

    @patch("worklog.generation.llm.Anthropic")
    def test_no_text_blocks(self, mock_anthropic_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_anthropic_cls.return_value = mock_client
        response = MagicMock()
        response.content = []
        mock_client.messages.create.return_value = response

        with pytest.raises(NoChoicesError):
            AnthropicGenerator("key").generate("hi")

    @patch("worklog.generation.llm.Anthropic")
    def test_api_error_is_wrapped(self, mock_anthropic_cls: MagicMock) -> None:
        mock_client = MagicMock()
        mock_anthropic_cls.return_value = mock_client
        mock_client.messages.create.side_effect = AnthropicError("overloaded")

        with pytest.raises(GenerationError, match="overloaded"):
            AnthropicGenerator("key").generate("hi")


class TestBuildGenerator:
    def test_missing_credential(self) -> None:
        with pytest.raises(ConfigurationError):
            build_generator("openai", "")

    @patch("worklog.generation.llm.Anthropic")
    def test_anthropic_provider(self, mock_anthropic_cls: MagicMock) -> None:
        generator = build_generator("anthropic", "key", model="claude-test")
        assert isinstance(generator, AnthropicGenerator)
        assert generator.model == "claude-test"

    @patch("worklog.generation.llm.OpenAI")
    def test_openai_provider(self, mock_openai_cls: MagicMock) -> None:
        generator = build_generator("openai", "sk-test", model="gpt-test")
        assert isinstance(generator, OpenAIGenerator)
        assert generator.model == "gpt-test"

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError):
            build_generator("cohere", "key")
