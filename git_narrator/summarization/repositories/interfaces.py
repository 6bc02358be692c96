"""Repository interfaces for LLM summarization operations."""

from abc import ABC, abstractmethod

from git_narrator.core.context import ExecutionContext


class LLMAgentRepository(ABC):
    """Interface for LLM-based summarization of commit history."""

    @abstractmethod
    async def summarize_corpus(
        self, ctx: ExecutionContext, corpus: str, instruction: str
    ) -> str:
        """
        Stream a narrative summary of a commit-message corpus.

        Args:
            ctx: Execution context raced against every received fragment
            corpus: Concatenated commit messages
            instruction: System instruction sent ahead of the corpus

        Returns:
            The complete narrative

        Raises:
            InvalidArgumentError: If corpus is empty
            SummarizationCancelledError: If the context finishes mid-stream
            SummarizationFailedError: If the backend call fails
        """
        ...
