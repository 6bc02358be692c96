"""Pipeline orchestrating date resolution, fetch, corpus assembly and summarization."""

import logging
from collections.abc import Callable

from git_narrator.config import Settings
from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import ValidationFailedError
from git_narrator.git.services.date_range_resolver import DateRangeResolver
from git_narrator.git.services.git_service import GitService
from git_narrator.summarization.domain.value_objects import NarrativeResult, SummaryRequest
from git_narrator.summarization.repositories.factory import create_llm_agent
from git_narrator.summarization.repositories.interfaces import LLMAgentRepository
from git_narrator.summarization.services.summarization_service import SummarizationService

logger = logging.getLogger(__name__)

AgentFactory = Callable[[SummaryRequest], LLMAgentRepository]


def settings_agent_factory(settings: Settings) -> AgentFactory:
    """Build an agent factory that fills provider defaults from settings."""

    def factory(request: SummaryRequest) -> LLMAgentRepository:
        return create_llm_agent(
            api_key=request.api_key,
            model_name=request.model,
            provider=request.provider,
            settings=settings,
        )

    return factory


class SummaryPipeline:
    """Single-pass pipeline producing a narrative of a branch's history.

    Steps run strictly in order and the first failure ends the invocation:
    validate, resolve dates, fetch, collect corpus, summarize. An empty
    corpus ends it successfully with the no-commits result.

    Build one pipeline per process and reuse it; invocations share no
    mutable state.
    """

    def __init__(
        self,
        date_resolver: DateRangeResolver,
        git_service: GitService,
        agent_factory: AgentFactory,
        instruction: str,
    ) -> None:
        """
        Initialize SummaryPipeline.

        Args:
            date_resolver: Resolver for start/end date strings
            git_service: Service for fetching and walking repositories
            agent_factory: Creates the LLM agent for a request's credentials
            instruction: System instruction sent ahead of every corpus
        """
        self._date_resolver = date_resolver
        self._git_service = git_service
        self._agent_factory = agent_factory
        self._instruction = instruction

    async def run(self, ctx: ExecutionContext, request: SummaryRequest) -> NarrativeResult:
        """
        Summarize the history selected by a request.

        Args:
            ctx: Execution context shared by the fetch and the stream
            request: Repository coordinates, dates, filter and credentials

        Returns:
            The narrative, or the no-commits result when nothing matched

        Raises:
            ValidationFailedError: If a required field is missing
            InvalidDateError: If a date cannot be resolved
            FetchFailedError: If the repository cannot be fetched
            FetchCancelledError: If the context finishes during the fetch
            CollectionFailedError: If the history walk fails
            CollectionCancelledError: If the context finishes during the walk
            SummarizationFailedError: If the summarization stream fails or
                is cancelled
        """
        request.validate()
        summarizer = self._create_summarizer(request)

        corpus = await self._collect(ctx, request)
        if not corpus:
            logger.info(
                "No commits found between %s and %s",
                request.start_date,
                request.end_date or "today",
            )
            return NarrativeResult.no_commits()

        text = await summarizer.summarize(ctx, corpus)
        return NarrativeResult(text=text)

    async def build_corpus(self, ctx: ExecutionContext, request: SummaryRequest) -> str:
        """
        Run every step up to corpus assembly, without summarizing.

        Author and credentials are not required; an empty author keeps every
        non-bot commit.

        Args:
            ctx: Execution context bounding the fetch
            request: Repository coordinates, dates and filter

        Returns:
            Concatenated commit messages, empty when nothing matched
        """
        request.validate(for_summary=False)
        return await self._collect(ctx, request)

    async def _collect(self, ctx: ExecutionContext, request: SummaryRequest) -> str:
        window = self._date_resolver.resolve(request.start_date, request.end_date)
        handle = await self._git_service.acquire(ctx, request.repo_url, request.branch)
        with handle:
            return self._git_service.collect_corpus(ctx, handle, window, request.author)

    def _create_summarizer(self, request: SummaryRequest) -> SummarizationService:
        try:
            llm_agent = self._agent_factory(request)
        except ValueError as e:
            raise ValidationFailedError(f"Invalid summarization backend settings: {str(e)}") from e
        return SummarizationService(llm_agent, self._instruction)
