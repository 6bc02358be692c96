"""Base class for LangChain-based LLM agents."""

import logging
from abc import ABC
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from langchain_core.messages import BaseMessageChunk, HumanMessage, SystemMessage

from git_narrator.core.context import ContextCancelledError, ExecutionContext
from git_narrator.core.exceptions import (
    InvalidArgumentError,
    SummarizationCancelledError,
    SummarizationFailedError,
)
from git_narrator.summarization.repositories.interfaces import LLMAgentRepository

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = logging.getLogger(__name__)

# Low randomness so repeated runs over the same history read alike
SUMMARY_TEMPERATURE = 0.1


async def _next_chunk(stream: AsyncIterator[BaseMessageChunk]) -> BaseMessageChunk | None:
    """Return the next chunk of a stream, or None at end of stream."""
    try:
        return await anext(stream)
    except StopAsyncIteration:
        return None


class BaseLangChainAgent(LLMAgentRepository, ABC):
    """Base class for LangChain-based streaming summarization agents."""

    def __init__(self) -> None:
        """Initialize the base agent with common configuration."""
        self._llm: BaseChatModel  # Set by subclasses

    async def summarize_corpus(
        self, ctx: ExecutionContext, corpus: str, instruction: str
    ) -> str:
        """
        Stream a narrative summary of a commit-message corpus.

        Every fragment wait is raced against the context. Fragments are
        appended in arrival order.

        Args:
            ctx: Execution context
            corpus: Concatenated commit messages
            instruction: System instruction sent ahead of the corpus

        Returns:
            The complete narrative

        Raises:
            InvalidArgumentError: If corpus is empty
            SummarizationCancelledError: If the context finishes mid-stream;
                carries the fragments received so far
            SummarizationFailedError: If the backend call fails
        """
        if not corpus:
            raise InvalidArgumentError("Commit messages cannot be empty")

        messages = [
            SystemMessage(content=instruction),
            HumanMessage(content=corpus),
        ]
        fragments: list[str] = []

        try:
            stream = self._llm.astream(messages)
        except Exception as e:
            raise SummarizationFailedError(f"LLM stream error: {str(e)}") from e

        try:
            while True:
                chunk = await ctx.race(_next_chunk(stream))
                if chunk is None:
                    break
                fragments.append(self._content_to_text(chunk.content))
        except ContextCancelledError as e:
            logger.warning("Summary stream cancelled after %d fragment(s)", len(fragments))
            raise SummarizationCancelledError(
                f"Summary stream cancelled: {str(e)}", partial_text="".join(fragments)
            ) from e
        except Exception as e:
            raise SummarizationFailedError(
                f"LLM stream recv error: {str(e)}", partial_text="".join(fragments)
            ) from e
        finally:
            await self._close_stream(stream)

        logger.info("Summary stream completed with %d fragment(s)", len(fragments))
        return "".join(fragments)

    @staticmethod
    async def _close_stream(stream: Any) -> None:
        """Close an async generator stream if it is still open."""
        aclose = getattr(stream, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception:
            logger.debug("Error while closing summary stream", exc_info=True)

    @staticmethod
    def _content_to_text(content: Any) -> str:
        """Extract the text of a streamed chunk's content."""
        if isinstance(content, str):
            return content
        elif isinstance(content, list):
            # Block-style content, e.g. [{"type": "text", "text": "..."}]
            return "".join(
                item if isinstance(item, str) else str(item.get("text", ""))
                for item in content
            )
        else:
            return str(content)
