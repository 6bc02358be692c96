"""Tests for streaming consumption in ``BaseLangChainAgent``."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Any

import pytest
from langchain_core.messages import AIMessageChunk, HumanMessage, SystemMessage

from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import (
    InvalidArgumentError,
    SummarizationCancelledError,
    SummarizationFailedError,
)
from git_narrator.summarization.repositories.base_langchain_agent import BaseLangChainAgent

INSTRUCTION = "Summarize these commits."


class StubChatModel:
    """Chat model double whose astream yields scripted chunks."""

    def __init__(
        self,
        chunks: Sequence[Any],
        after: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.chunks = chunks
        self.after = after
        self.messages: list[Any] = []

    async def astream(self, messages: list[Any]) -> AsyncIterator[AIMessageChunk]:
        self.messages = messages
        for content in self.chunks:
            yield AIMessageChunk(content=content)
        if self.after is not None:
            await self.after()


class StubAgent(BaseLangChainAgent):
    def __init__(self, llm: StubChatModel) -> None:
        super().__init__()
        self._llm = llm  # type: ignore[assignment]


class TestStreaming:
    @pytest.mark.asyncio
    async def test_fragments_joined_in_arrival_order(self) -> None:
        llm = StubChatModel(["# Work Summary\n", "- **Search** ", "was added."])
        text = await StubAgent(llm).summarize_corpus(
            ExecutionContext(), "Add search\n", INSTRUCTION
        )
        assert text == "# Work Summary\n- **Search** was added."

    @pytest.mark.asyncio
    async def test_sends_instruction_then_corpus(self) -> None:
        llm = StubChatModel(["ok"])
        await StubAgent(llm).summarize_corpus(ExecutionContext(), "Add search\n", INSTRUCTION)
        system, human = llm.messages
        assert isinstance(system, SystemMessage)
        assert system.content == INSTRUCTION
        assert isinstance(human, HumanMessage)
        assert human.content == "Add search\n"

    @pytest.mark.asyncio
    async def test_block_content_is_flattened(self) -> None:
        llm = StubChatModel(
            [[{"type": "text", "text": "Hello"}], [{"type": "text", "text": " world"}]]
        )
        text = await StubAgent(llm).summarize_corpus(ExecutionContext(), "corpus", INSTRUCTION)
        assert text == "Hello world"

    @pytest.mark.asyncio
    async def test_empty_corpus_rejected(self) -> None:
        llm = StubChatModel(["never"])
        with pytest.raises(InvalidArgumentError):
            await StubAgent(llm).summarize_corpus(ExecutionContext(), "", INSTRUCTION)
        assert llm.messages == []


class TestStreamingFailures:
    @pytest.mark.asyncio
    async def test_cancellation_returns_exactly_received_fragments(self) -> None:
        ctx = ExecutionContext()

        async def cancel_and_hang() -> None:
            ctx.cancel()
            await asyncio.sleep(3600)

        llm = StubChatModel(["Hello", ", ", "world"], after=cancel_and_hang)
        with pytest.raises(SummarizationCancelledError) as excinfo:
            await StubAgent(llm).summarize_corpus(ctx, "corpus", INSTRUCTION)

        assert excinfo.value.partial_text == "Hello, world"
        assert excinfo.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_deadline_mid_stream(self) -> None:
        ctx = ExecutionContext.with_timeout(0.05)

        async def hang() -> None:
            await asyncio.sleep(3600)

        llm = StubChatModel(["partial"], after=hang)
        with pytest.raises(SummarizationCancelledError) as excinfo:
            await StubAgent(llm).summarize_corpus(ctx, "corpus", INSTRUCTION)
        assert excinfo.value.partial_text == "partial"

    @pytest.mark.asyncio
    async def test_backend_error_wrapped_with_partial_text(self) -> None:
        async def explode() -> None:
            raise ConnectionError("stream reset")

        llm = StubChatModel(["partial"], after=explode)
        with pytest.raises(SummarizationFailedError) as excinfo:
            await StubAgent(llm).summarize_corpus(ExecutionContext(), "corpus", INSTRUCTION)

        assert not isinstance(excinfo.value, SummarizationCancelledError)
        assert excinfo.value.partial_text == "partial"
        assert isinstance(excinfo.value.__cause__, ConnectionError)
