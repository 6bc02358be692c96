"""Concrete implementations of LLM summarization using LangChain."""

from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI

from git_narrator.config import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
)
from git_narrator.summarization.repositories.base_langchain_agent import (
    SUMMARY_TEMPERATURE,
    BaseLangChainAgent,
)


class LangChainClaudeAgent(BaseLangChainAgent):
    """LangChain implementation using Claude for history summarization."""

    def __init__(self, api_key: str, model_name: str | None = None) -> None:
        """
        Initialize the Claude agent.

        Args:
            api_key: Anthropic API key
            model_name: Optional model name override. Defaults to claude-3-5-sonnet-20241022
        """
        if not api_key:
            raise ValueError("API key is required")

        self._llm = ChatAnthropic(  # type: ignore[call-arg]
            model=model_name or DEFAULT_ANTHROPIC_MODEL,
            api_key=api_key,
            temperature=SUMMARY_TEMPERATURE,
        )

        super().__init__()


class LangChainOpenAIAgent(BaseLangChainAgent):
    """LangChain implementation for OpenAI-compatible chat completion APIs.

    Defaults to OpenRouter, which serves many vendors' models behind the
    OpenAI wire protocol.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> None:
        """
        Initialize the OpenAI-compatible agent.

        Args:
            api_key: API key for the backend
            model_name: Optional model name override. Defaults to google/gemini-2.5-flash-lite
            base_url: Optional base URL override. Defaults to https://openrouter.ai/api/v1
        """
        if not api_key:
            raise ValueError("API key is required")

        self._llm = ChatOpenAI(  # type: ignore[call-arg]
            model=model_name or DEFAULT_OPENAI_MODEL,
            api_key=api_key,
            base_url=base_url or DEFAULT_OPENAI_BASE_URL,
            temperature=SUMMARY_TEMPERATURE,
        )

        super().__init__()
