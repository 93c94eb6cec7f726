"""
Environment configuration for the campaign story service.

Values are read once at startup. A missing or placeholder Google Cloud
project forces mock story generation for the lifetime of the process.

Environment Variables:
- GOOGLE_CLOUD_PROJECT: Vertex AI project id (default: unset)
- GOOGLE_CLOUD_LOCATION: Vertex AI region (default: us-central1)
- GOOGLE_APPLICATION_CREDENTIALS: Service account key path (read by Google SDKs)
- STORY_MODEL: Model spec, e.g. "gemini-2.5-flash" or "claude-sonnet-4-5@20250929"
- STORY_MAX_TOKENS / STORY_TEMPERATURE / STORY_TOP_P / STORY_TOP_K: Generation parameters
- STORY_TIMEOUT_SECONDS: Bound on a single generation call (default: 60)
- ORGANIZATION_NAME: Organization named in the writer directive
- LOG_LEVEL / LOG_DIR: Logging configuration
- API_PREFIX: Optional route prefix (e.g. "/api")
- CORS_ALLOW_ORIGINS: Comma separated origins (default: *)
- HOST / PORT: Defaults for the serve command
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger("campaign_story")

PLACEHOLDER_PROJECT_ID = "your-project-id"
DEFAULT_LOCATION = "us-central1"
DEFAULT_STORY_MODEL = "gemini-2.5-flash"
DEFAULT_ORGANIZATION = "Help Hope Live"


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None and val.strip():
        try:
            return int(val)
        except ValueError:
            logger.warning(f"[Config] Invalid integer for {key}: {val}, using default: {default}")
    return default


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    val = os.getenv(key)
    if val is not None and val.strip():
        try:
            return float(val)
        except ValueError:
            logger.warning(f"[Config] Invalid float for {key}: {val}, using default: {default}")
    return default


def _get_env_list(key: str, default: str) -> List[str]:
    raw = os.getenv(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Process-wide settings snapshot."""

    project_id: str = ""
    location: str = DEFAULT_LOCATION
    credentials_path: Optional[str] = None
    story_model: str = DEFAULT_STORY_MODEL
    max_tokens: int = 2048
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    timeout_seconds: float = 60.0
    organization_name: str = DEFAULT_ORGANIZATION
    log_level: str = "INFO"
    log_dir: str = "logs"
    api_prefix: str = ""
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 3001

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        prefix = os.getenv("API_PREFIX", "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix

        return cls(
            project_id=os.getenv("GOOGLE_CLOUD_PROJECT", "").strip(),
            location=os.getenv("GOOGLE_CLOUD_LOCATION", DEFAULT_LOCATION).strip() or DEFAULT_LOCATION,
            credentials_path=os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None,
            story_model=os.getenv("STORY_MODEL", DEFAULT_STORY_MODEL).strip() or DEFAULT_STORY_MODEL,
            max_tokens=_get_env_int("STORY_MAX_TOKENS", 2048),
            temperature=_get_env_float("STORY_TEMPERATURE", 0.7),
            top_p=_get_env_float("STORY_TOP_P", 0.8),
            top_k=_get_env_int("STORY_TOP_K", 40),
            timeout_seconds=_get_env_float("STORY_TIMEOUT_SECONDS", 60.0),
            organization_name=os.getenv("ORGANIZATION_NAME", DEFAULT_ORGANIZATION),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("LOG_DIR", "logs"),
            api_prefix=prefix,
            cors_allow_origins=_get_env_list("CORS_ALLOW_ORIGINS", "*"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=_get_env_int("PORT", 3001),
        )

    @property
    def vertex_configured(self) -> bool:
        """True when a usable Vertex AI project id is present."""
        return bool(self.project_id) and self.project_id != PLACEHOLDER_PROJECT_ID

    def generation_config(self) -> dict:
        """Generation parameters handed to model providers."""
        return {
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
            "timeout": self.timeout_seconds,
        }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
