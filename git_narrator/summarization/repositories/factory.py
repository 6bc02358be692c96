"""Factory for creating LLM agent instances."""

from git_narrator.config import Settings
from git_narrator.summarization.repositories.implementations import (
    LangChainClaudeAgent,
    LangChainOpenAIAgent,
)
from git_narrator.summarization.repositories.interfaces import LLMAgentRepository


def create_llm_agent(
    api_key: str,
    model_name: str | None = None,
    provider: str | None = None,
    settings: Settings | None = None,
) -> LLMAgentRepository:
    """
    Create an LLM agent instance based on configuration.

    Args:
        api_key: Credentials for the selected backend
        model_name: Optional model name override. If not provided, uses
                   the model configured for the provider.
        provider: Optional provider override. If not provided, uses LLM_PROVIDER.
        settings: Process settings, read from the environment if None

    Returns:
        LLM agent instance (Claude or OpenAI-compatible)

    Raises:
        ValueError: If the provider is invalid or the API key is missing
    """
    settings = settings or Settings.from_env()
    provider = (provider or settings.provider).lower()
    model = model_name or settings.model_for(provider)

    if provider == "anthropic" or provider == "claude":
        return LangChainClaudeAgent(api_key=api_key, model_name=model)
    elif provider == "openai" or provider == "openrouter":
        return LangChainOpenAIAgent(
            api_key=api_key, model_name=model, base_url=settings.openai_base_url
        )
    else:
        raise ValueError(
            f"Invalid LLM_PROVIDER: {provider}. "
            "Supported values: 'openai', 'openrouter', 'anthropic', 'claude'"
        )
