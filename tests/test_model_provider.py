"""
Tests for the Vertex AI model provider abstraction.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from campaign_story.errors import GenerationFailure
from campaign_story.story.model_provider import (
    GenerationResult,
    ModelInfo,
    VertexClaudeProvider,
    VertexGeminiProvider,
    extract_text,
    get_provider,
    parse_model_spec,
)


class TestParseModelSpec:
    """Tests for parse_model_spec function."""

    def test_none_returns_default(self):
        """None should return the default Gemini model."""
        info = parse_model_spec(None)

        assert info.provider == "vertex_gemini"
        assert info.model_name == "gemini-2.5-flash"

    def test_empty_returns_default(self):
        """Blank spec behaves like None."""
        assert parse_model_spec("  ").model_name == "gemini-2.5-flash"

    def test_gemini_prefix(self):
        """Explicit gemini prefix is stripped from the model name."""
        info = parse_model_spec("gemini:gemini-2.5-pro")

        assert info == ModelInfo(
            provider="vertex_gemini",
            model_name="gemini-2.5-pro",
            full_spec="gemini:gemini-2.5-pro",
        )

    def test_bare_gemini_name(self):
        """Bare model names go to Gemini."""
        info = parse_model_spec("gemini-2.0-flash-001")

        assert info.provider == "vertex_gemini"
        assert info.model_name == "gemini-2.0-flash-001"
        assert info.full_spec == "gemini:gemini-2.0-flash-001"

    def test_claude_prefix(self):
        """claude: prefix selects Claude on Vertex."""
        info = parse_model_spec("claude:claude-sonnet-4-5@20250929")

        assert info.provider == "vertex_claude"
        assert info.model_name == "claude-sonnet-4-5@20250929"

    def test_bare_claude_name(self):
        """Bare Claude names select Claude on Vertex."""
        info = parse_model_spec("claude-sonnet-4-5@20250929")

        assert info.provider == "vertex_claude"
        assert info.model_name == "claude-sonnet-4-5@20250929"


class TestExtractText:
    """Tests for response text extraction across shapes."""

    def test_none(self):
        """None yields empty text."""
        assert extract_text(None) == ""

    def test_plain_string(self):
        """Strings pass through."""
        assert extract_text("story") == "story"

    def test_text_attribute(self):
        """google-genai style .text attribute."""
        assert extract_text(SimpleNamespace(text="story")) == "story"

    def test_text_method(self):
        """Older SDKs expose text as a method."""
        response = MagicMock()
        response.text = MagicMock(return_value="story")

        assert extract_text(response) == "story"

    def test_raising_text_property_falls_through(self):
        """A text property that raises falls through to candidates."""
        class Response:
            @property
            def text(self):
                raise ValueError("no text parts")

            candidates = [SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text="from parts")]))]

        assert extract_text(Response()) == "from parts"

    def test_candidates_parts_joined(self):
        """Raw Gemini candidate parts are concatenated."""
        response = SimpleNamespace(
            text=None,
            candidates=[
                SimpleNamespace(content=SimpleNamespace(parts=[
                    SimpleNamespace(text="Once "),
                    SimpleNamespace(text="upon a time"),
                ]))
            ],
        )
        assert extract_text(response) == "Once upon a time"

    def test_dict_candidates(self):
        """Dict-shaped responses are supported."""
        response = {"candidates": [{"content": {"parts": [{"text": "dict story"}]}}]}
        assert extract_text(response) == "dict story"

    def test_anthropic_content_blocks(self):
        """Anthropic message content blocks are joined."""
        message = SimpleNamespace(content=[SimpleNamespace(type="text", text="Claude story")])
        assert extract_text(message) == "Claude story"

    def test_empty_candidates(self):
        """No candidates and no content yields empty text."""
        assert extract_text(SimpleNamespace(text=None, candidates=[])) == ""


class TestVertexGeminiProvider:
    """Tests for VertexGeminiProvider with a patched client."""

    def _response(self, text="A story", usage=True):
        usage_metadata = None
        if usage:
            usage_metadata = SimpleNamespace(
                prompt_token_count=100,
                candidates_token_count=50,
                total_token_count=150,
            )
        return SimpleNamespace(text=text, usage_metadata=usage_metadata)

    def test_client_configured_for_vertex(self):
        """Client is built in Vertex AI mode with project and location."""
        with patch("google.genai.Client") as mock_client_cls:
            VertexGeminiProvider("gemini-2.5-flash", "my-project", "europe-west4", timeout=30)

        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["vertexai"] is True
        assert kwargs["project"] == "my-project"
        assert kwargs["location"] == "europe-west4"
        assert kwargs["http_options"] is not None

    def test_generate_success(self):
        """Returns text and token usage."""
        with patch("google.genai.Client") as mock_client_cls:
            mock_client = mock_client_cls.return_value
            mock_client.models.generate_content.return_value = self._response()

            provider = VertexGeminiProvider("gemini-2.5-flash", "my-project")
            result = provider.generate("prompt", {"max_tokens": 512, "temperature": 0.5})

        assert isinstance(result, GenerationResult)
        assert result.text == "A story"
        assert result.provider == "vertex_gemini"
        assert result.model == "gemini-2.5-flash"
        assert result.usage == {"input_tokens": 100, "output_tokens": 50, "total_tokens": 150}

        call_kwargs = mock_client.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["contents"] == "prompt"
        assert call_kwargs["config"].max_output_tokens == 512
        assert call_kwargs["config"].temperature == 0.5

    def test_generate_empty_raises(self):
        """Empty response text raises GenerationFailure."""
        with patch("google.genai.Client") as mock_client_cls:
            mock_client_cls.return_value.models.generate_content.return_value = self._response(text="   ")

            provider = VertexGeminiProvider("gemini-2.5-flash", "my-project")
            with pytest.raises(GenerationFailure):
                provider.generate("prompt", {})

    def test_generate_without_usage(self):
        """Missing usage metadata gives usage None."""
        with patch("google.genai.Client") as mock_client_cls:
            mock_client_cls.return_value.models.generate_content.return_value = self._response(usage=False)

            provider = VertexGeminiProvider("gemini-2.5-flash", "my-project")
            result = provider.generate("prompt", {})

        assert result.usage is None


class TestVertexClaudeProvider:
    """Tests for VertexClaudeProvider with a patched client."""

    def test_generate_success(self):
        """Returns text and token usage from the message."""
        message = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Claude story")],
            usage=SimpleNamespace(input_tokens=10, output_tokens=20),
        )
        with patch("anthropic.AnthropicVertex") as mock_client_cls:
            mock_client_cls.return_value.messages.create.return_value = message

            provider = VertexClaudeProvider("claude-sonnet-4-5@20250929", "my-project", "us-east5", timeout=15)
            result = provider.generate("prompt", {"max_tokens": 1024})

        client_kwargs = mock_client_cls.call_args.kwargs
        assert client_kwargs == {"project_id": "my-project", "region": "us-east5", "timeout": 15.0}

        assert result.text == "Claude story"
        assert result.provider == "vertex_claude"
        assert result.usage == {"input_tokens": 10, "output_tokens": 20, "total_tokens": 30}

        create_kwargs = mock_client_cls.return_value.messages.create.call_args.kwargs
        assert create_kwargs["max_tokens"] == 1024
        assert create_kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_generate_empty_raises(self):
        """A message without text raises GenerationFailure."""
        with patch("anthropic.AnthropicVertex") as mock_client_cls:
            mock_client_cls.return_value.messages.create.return_value = SimpleNamespace(content=[], usage=None)

            provider = VertexClaudeProvider("claude-sonnet-4-5@20250929", "my-project")
            with pytest.raises(GenerationFailure):
                provider.generate("prompt", {})


class TestGetProvider:
    """Tests for get_provider factory."""

    def test_gemini(self):
        """Default spec builds a Gemini provider."""
        with patch("google.genai.Client"):
            provider = get_provider(None, project_id="my-project")

        assert isinstance(provider, VertexGeminiProvider)
        assert provider.provider_name == "vertex_gemini"
        assert provider.model_name == "gemini-2.5-flash"

    def test_claude(self):
        """Claude spec builds a Claude provider."""
        with patch("anthropic.AnthropicVertex"):
            provider = get_provider("claude:claude-sonnet-4-5@20250929", project_id="my-project")

        assert isinstance(provider, VertexClaudeProvider)
        assert provider.location == "us-central1"
