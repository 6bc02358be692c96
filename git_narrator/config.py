"""Process-wide configuration loaded from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_PROVIDER = "openai"
DEFAULT_OPENAI_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OPENAI_MODEL = "google/gemini-2.5-flash-lite"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-sonnet-20241022"


def load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try to find .env file in project root (parent of git_narrator package)
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Fallback: try current directory
        load_dotenv()


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Settings shared by every pipeline invocation of the process.

    Attributes:
        provider: LLM backend name ("openai" or "anthropic")
        openai_api_key: Key for the OpenAI-compatible backend
        openai_model: Model identifier for the OpenAI-compatible backend
        openai_base_url: Base URL of the OpenAI-compatible backend
        anthropic_api_key: Key for the Anthropic backend
        anthropic_model: Model identifier for the Anthropic backend
        timezone: IANA zone used when resolving dates, local zone if None
        template_path: Instruction template override, built-in if None
        timeout: Default invocation deadline in seconds, none if None
        log_level: Logging level name
    """

    provider: str = DEFAULT_PROVIDER
    openai_api_key: str | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    anthropic_api_key: str | None = None
    anthropic_model: str = DEFAULT_ANTHROPIC_MODEL
    timezone: str | None = None
    template_path: Path | None = None
    timeout: float | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables, loading .env first.

        Returns:
            Settings instance

        Raises:
            ValueError: If GIT_NARRATOR_TIMEOUT is not a number
        """
        load_env_file()

        template = _optional("GIT_NARRATOR_TEMPLATE")
        timeout = _optional("GIT_NARRATOR_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else None
        except ValueError as e:
            raise ValueError(
                f"GIT_NARRATOR_TIMEOUT must be a number of seconds, got {timeout!r}"
            ) from e

        return cls(
            provider=(_optional("LLM_PROVIDER") or DEFAULT_PROVIDER).lower(),
            openai_api_key=_optional("OPENAI_API_KEY"),
            openai_model=_optional("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            openai_base_url=_optional("OPENAI_BASE_URL") or DEFAULT_OPENAI_BASE_URL,
            anthropic_api_key=_optional("ANTHROPIC_API_KEY"),
            anthropic_model=_optional("ANTHROPIC_MODEL") or DEFAULT_ANTHROPIC_MODEL,
            timezone=_optional("GIT_NARRATOR_TIMEZONE"),
            template_path=Path(template) if template else None,
            timeout=timeout_value,
            log_level=(_optional("LOG_LEVEL") or "INFO").upper(),
        )

    def api_key_for(self, provider: str) -> str | None:
        """Return the configured API key for ``provider``."""
        if provider in ("anthropic", "claude"):
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, provider: str) -> str:
        """Return the configured model identifier for ``provider``."""
        if provider in ("anthropic", "claude"):
            return self.anthropic_model
        return self.openai_model
