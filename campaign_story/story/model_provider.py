"""
Model provider abstraction for story generation.

Both backends run on Google Cloud Vertex AI and share the same project and
region configuration:
- Gemini (google-genai, vertexai=True) - default
- Claude (anthropic AnthropicVertex)

Usage:
    provider = get_provider("gemini-2.5-flash", project_id="my-project")
    result = provider.generate(prompt, config)

Response shapes differ between SDKs and SDK versions; extract_text() is the
only place that knows about them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import DEFAULT_LOCATION, DEFAULT_STORY_MODEL
from ..errors import GenerationFailure

logger = logging.getLogger(__name__)


@dataclass
class ModelInfo:
    """Model identification information."""
    provider: str  # "vertex_gemini", "vertex_claude"
    model_name: str  # e.g., "gemini-2.5-flash", "claude-sonnet-4-5@20250929"
    full_spec: str  # e.g., "gemini:gemini-2.5-flash", "claude-sonnet-4-5@20250929"


@dataclass
class GenerationResult:
    """Result from text generation."""
    text: str
    usage: Optional[Dict[str, int]]
    provider: str
    model: str


def parse_model_spec(model_spec: Optional[str]) -> ModelInfo:
    """
    Parse model specification string into provider and model name.

    Formats:
    - None -> default Gemini model
    - "gemini:gemini-2.5-pro" -> provider="vertex_gemini", model="gemini-2.5-pro"
    - "gemini-2.5-flash" -> provider="vertex_gemini", model="gemini-2.5-flash"
    - "claude:claude-sonnet-4-5@20250929" or "claude-sonnet-4-5@20250929"
      -> provider="vertex_claude"

    Args:
        model_spec: Model specification string or None for default

    Returns:
        ModelInfo with provider and model name
    """
    spec = (model_spec or "").strip() or DEFAULT_STORY_MODEL

    if spec.startswith("claude:"):
        model_name = spec.split(":", 1)[1]
        return ModelInfo(provider="vertex_claude", model_name=model_name, full_spec=spec)

    if spec.startswith("claude"):
        return ModelInfo(provider="vertex_claude", model_name=spec, full_spec=spec)

    if spec.startswith("gemini:"):
        model_name = spec.split(":", 1)[1]
        return ModelInfo(provider="vertex_gemini", model_name=model_name, full_spec=spec)

    # Default: treat as a Gemini model name
    return ModelInfo(provider="vertex_gemini", model_name=spec, full_spec=f"gemini:{spec}")


def _get(obj: Any, name: str) -> Any:
    """Attribute or key lookup that tolerates either shape."""
    if isinstance(obj, dict):
        return obj.get(name)
    try:
        return getattr(obj, name, None)
    except Exception:
        # Some SDK properties raise when the response has no text parts
        return None


def _join_parts(parts: Any) -> str:
    if not parts:
        return ""
    if isinstance(parts, str):
        return parts
    texts = []
    for part in parts:
        text = part if isinstance(part, str) else _get(part, "text")
        if isinstance(text, str) and text:
            texts.append(text)
    return "".join(texts)


def extract_text(response: Any) -> str:
    """
    Extract generated text from a service response.

    Tried in order:
    - plain string
    - `text` property or method (google-genai responses)
    - candidates[0].content.parts[*].text (raw Gemini shape)
    - content[*].text (Anthropic messages)

    Returns:
        The text, or "" when the response carries none
    """
    if response is None:
        return ""
    if isinstance(response, str):
        return response

    text = _get(response, "text")
    if callable(text):
        try:
            text = text()
        except Exception:
            text = None
    if isinstance(text, str) and text:
        return text

    candidates = _get(response, "candidates")
    if candidates:
        try:
            first = candidates[0]
        except (IndexError, KeyError, TypeError):
            first = None
        if first is not None:
            joined = _join_parts(_get(_get(first, "content"), "parts"))
            if joined:
                return joined

    return _join_parts(_get(response, "content"))


class ModelProvider(ABC):
    """Abstract base class for model providers."""

    @abstractmethod
    def generate(self, prompt: str, config: Dict[str, Any]) -> GenerationResult:
        """
        Generate text using the model.

        Args:
            prompt: Complete generation instruction
            config: Configuration dict with max_tokens, temperature, timeout, etc.

        Returns:
            GenerationResult with generated text and metadata

        Raises:
            GenerationFailure: If the service returns no usable text
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for metadata."""
        pass


class VertexGeminiProvider(ModelProvider):
    """Gemini on Vertex AI via google-genai."""

    def __init__(self, model_name: str, project_id: str, location: str = DEFAULT_LOCATION,
                 timeout: Optional[float] = None):
        from google import genai
        from google.genai import types

        self.model_name = model_name
        self.project_id = project_id
        self.location = location

        http_options = None
        if timeout:
            http_options = types.HttpOptions(timeout=int(timeout * 1000))

        self._types = types
        self._client = genai.Client(
            vertexai=True,
            project=project_id,
            location=location,
            http_options=http_options,
        )

    @property
    def provider_name(self) -> str:
        return "vertex_gemini"

    def generate(self, prompt: str, config: Dict[str, Any]) -> GenerationResult:
        """Generate using the Vertex AI Gemini API."""
        logger.info(f"[VertexGemini] Generating with {self.model_name}")

        response = self._client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self._types.GenerateContentConfig(
                max_output_tokens=int(config.get("max_tokens", 2048)),
                temperature=float(config.get("temperature", 0.7)),
                top_p=float(config.get("top_p", 0.8)),
                top_k=float(config.get("top_k", 40)),
            ),
        )

        text = extract_text(response)
        if not text.strip():
            raise GenerationFailure(f"Gemini returned no text (model={self.model_name})")

        usage = None
        usage_metadata = _get(response, "usage_metadata")
        if usage_metadata:
            try:
                usage = {
                    "input_tokens": int(usage_metadata.prompt_token_count or 0),
                    "output_tokens": int(usage_metadata.candidates_token_count or 0),
                    "total_tokens": int(usage_metadata.total_token_count or 0),
                }
            except (AttributeError, TypeError, ValueError):
                usage = None

        logger.info(f"[VertexGemini] Generated {len(text)} chars")

        return GenerationResult(
            text=text,
            usage=usage,
            provider=self.provider_name,
            model=self.model_name,
        )


class VertexClaudeProvider(ModelProvider):
    """Claude on Vertex AI via the anthropic SDK."""

    def __init__(self, model_name: str, project_id: str, location: str = DEFAULT_LOCATION,
                 timeout: Optional[float] = None):
        import anthropic

        self.model_name = model_name
        self.project_id = project_id
        self.location = location

        client_kwargs: Dict[str, Any] = {"project_id": project_id, "region": location}
        if timeout:
            client_kwargs["timeout"] = float(timeout)
        self._client = anthropic.AnthropicVertex(**client_kwargs)

    @property
    def provider_name(self) -> str:
        return "vertex_claude"

    def generate(self, prompt: str, config: Dict[str, Any]) -> GenerationResult:
        """Generate using Claude on Vertex AI."""
        logger.info(f"[VertexClaude] Generating with {self.model_name}")

        message = self._client.messages.create(
            model=self.model_name,
            max_tokens=int(config.get("max_tokens", 2048)),
            temperature=float(config.get("temperature", 0.7)),
            messages=[{"role": "user", "content": prompt}],
        )

        text = extract_text(message)
        if not text.strip():
            raise GenerationFailure(f"Claude returned no text (model={self.model_name})")

        usage = None
        if getattr(message, "usage", None):
            try:
                usage = {
                    "input_tokens": message.usage.input_tokens,
                    "output_tokens": message.usage.output_tokens,
                    "total_tokens": message.usage.input_tokens + message.usage.output_tokens,
                }
            except (AttributeError, TypeError):
                usage = None

        logger.info(f"[VertexClaude] Generated {len(text)} chars")

        return GenerationResult(
            text=text,
            usage=usage,
            provider=self.provider_name,
            model=self.model_name,
        )


def get_provider(
    model_spec: Optional[str] = None,
    project_id: str = "",
    location: str = DEFAULT_LOCATION,
    timeout: Optional[float] = None,
) -> ModelProvider:
    """
    Get appropriate model provider for the given model specification.

    Args:
        model_spec: Model specification (e.g., "gemini-2.5-flash" or "claude-sonnet-4-5@20250929")
        project_id: Google Cloud project id
        location: Vertex AI region
        timeout: Request timeout in seconds

    Returns:
        ModelProvider instance
    """
    info = parse_model_spec(model_spec)

    if info.provider == "vertex_claude":
        return VertexClaudeProvider(info.model_name, project_id, location, timeout)
    return VertexGeminiProvider(info.model_name, project_id, location, timeout)
