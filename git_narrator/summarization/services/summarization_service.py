"""Summarization service for turning a commit corpus into a narrative."""

import logging

from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import (
    GitNarratorError,
    InvalidArgumentError,
    SummarizationFailedError,
)
from git_narrator.summarization.repositories.interfaces import LLMAgentRepository

logger = logging.getLogger(__name__)


class SummarizationService:
    """Service for streaming a narrative summary of commit messages."""

    def __init__(self, llm_agent: LLMAgentRepository, instruction: str) -> None:
        """
        Initialize SummarizationService.

        Args:
            llm_agent: Repository for LLM-based summarization
            instruction: System instruction sent ahead of every corpus
        """
        self._llm_agent = llm_agent
        self._instruction = instruction

    async def summarize(self, ctx: ExecutionContext, corpus: str) -> str:
        """
        Generate a narrative summary of a commit-message corpus.

        Single attempt, no retries.

        Args:
            ctx: Execution context raced against the stream
            corpus: Concatenated commit messages

        Returns:
            Markdown narrative

        Raises:
            InvalidArgumentError: If corpus is empty
            SummarizationCancelledError: If the context finishes mid-stream
            SummarizationFailedError: If the backend call fails
        """
        if not corpus:
            raise InvalidArgumentError("Commit messages cannot be empty")

        logger.info("Summarizing %d characters of commit messages", len(corpus))
        try:
            return await self._llm_agent.summarize_corpus(ctx, corpus, self._instruction)
        except GitNarratorError:
            raise
        except Exception as e:
            raise SummarizationFailedError(
                f"Failed to summarize commit messages: {str(e)}"
            ) from e
