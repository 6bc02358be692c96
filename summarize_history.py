#!/usr/bin/env python3
"""
Script to summarize what changed in a remote git repository over a date range:
- Repository URL
- Branch name
- Start date (natural language, e.g. "2024-01-01", "3 weeks ago", "last monday")
- --author: Only summarize commits whose author name contains this text
- --end-date: End date (optional, defaults to today)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

from git_narrator.config import Settings
from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import (
    GitNarratorError,
    SummarizationFailedError,
    ValidationFailedError,
)
from git_narrator.git.repositories.implementations import DulwichGitRepository
from git_narrator.git.services.date_range_resolver import DateRangeResolver
from git_narrator.git.services.git_service import GitService
from git_narrator.summarization.domain.value_objects import SummaryRequest
from git_narrator.summarization.services.pipeline_service import (
    SummaryPipeline,
    settings_agent_factory,
)
from git_narrator.summarization.templates import load_instruction_template


def configure_logging(level: str) -> None:
    """Send log records to stderr with the tool prefix."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[git-narrator] %(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Summarize the commit history of a remote git repository between two dates "
            "using AI-powered analysis"
        )
    )
    parser.add_argument(
        "repo_url",
        type=str,
        help="URL of the git repository",
    )
    parser.add_argument(
        "branch",
        type=str,
        help="Name of the branch to analyze",
    )
    parser.add_argument(
        "start_date",
        type=str,
        help="Start date for commit analysis (natural language accepted)",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        default="",
        help="End date for commit analysis (default: today)",
    )
    parser.add_argument(
        "--author",
        type=str,
        required=True,
        help="Only include commits whose author name contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="LLM provider: openai, openrouter, anthropic or claude (default: LLM_PROVIDER)",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model identifier (default: OPENAI_MODEL or ANTHROPIC_MODEL)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="API key (default: OPENAI_API_KEY or ANTHROPIC_API_KEY)",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Path to a custom instruction template (default: built-in work summary)",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA timezone used to resolve dates (default: local timezone)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the whole run after this many seconds",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Also write the summary to this file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and filter commits but skip summarization",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def build_pipeline(
    settings: Settings, template: Path | None, timezone: str | None
) -> SummaryPipeline:
    """Wire the pipeline collaborators once for this process."""
    git_service = GitService(DulwichGitRepository())
    return SummaryPipeline(
        date_resolver=DateRangeResolver(timezone=timezone or settings.timezone),
        git_service=git_service,
        agent_factory=settings_agent_factory(settings),
        instruction=load_instruction_template(template or settings.template_path),
    )


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Run the pipeline for the parsed arguments and print the outcome."""
    provider = (args.provider or settings.provider).lower()
    request = SummaryRequest(
        repo_url=args.repo_url,
        branch=args.branch,
        start_date=args.start_date,
        end_date=args.end_date,
        author=args.author,
        api_key=args.api_key or settings.api_key_for(provider) or "",
        model=args.model,
        provider=provider,
    )
    pipeline = build_pipeline(settings, args.template, args.timezone)

    timeout = args.timeout if args.timeout is not None else settings.timeout
    ctx = ExecutionContext.with_timeout(timeout) if timeout else ExecutionContext()

    if args.dry_run:
        corpus = await pipeline.build_corpus(ctx, request)
        print(f"✓ Collected {len(corpus)} characters of commit messages")
        print("  (Skipping summarization as requested)")
        return 0

    print(f"\n📝 Summarizing {args.repo_url} ({args.branch}) from {args.start_date}...")
    result = await pipeline.run(ctx, request)

    print("=" * 80)
    print("WORK SUMMARY")
    print("=" * 80)
    print(result.text)
    print("=" * 80)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as f:
            f.write(result.text)
            if not result.text.endswith("\n"):
                f.write("\n")
        print(f"  Output file: {args.output.absolute()}")

    print("\n✓ Summary generated successfully!")
    return 0


def main() -> None:
    """Main function to parse arguments and generate the summary."""
    args = build_parser().parse_args()

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        sys.exit(asyncio.run(run(args, settings)))
    except ValidationFailedError as e:
        print(f"✗ Validation failed: {e}", file=sys.stderr)
        if "api_key" in e.missing_fields:
            print(
                "  Hint: Set OPENAI_API_KEY or ANTHROPIC_API_KEY in .env file or environment",
                file=sys.stderr,
            )
        sys.exit(1)
    except SummarizationFailedError as e:
        print(f"✗ Failed to generate summary: {e}", file=sys.stderr)
        if e.partial_text:
            print(
                f"  ({len(e.partial_text)} characters received before the failure)",
                file=sys.stderr,
            )
        sys.exit(1)
    except GitNarratorError as e:
        print(f"✗ {e.kind.value}: {e}", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, RuntimeError, ZoneInfoNotFoundError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
