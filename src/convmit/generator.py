"""CommitGenerator: staged changes in, conventional commit message out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .git import GitError, GitRepo, StagedChange, filter_changes
from .message import CommitMessage, normalize_message
from .models import DEFAULT_MODEL, Model
from .prompts import SYSTEM_PROMPT, build_prompt
from .providers import HTTPProvider, create_provider

logger = logging.getLogger(__name__)


@dataclass
class GenerateOptions:
    """Options for a generation run."""

    model: Model = DEFAULT_MODEL
    only: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    quiet: bool = False
    verbose: bool = False


@dataclass
class GeneratedCommit:
    """Result of a generation run."""

    message: str
    parsed: CommitMessage | None
    files: list[str]

    @property
    def is_conventional(self) -> bool:
        return self.parsed is not None


class CommitGenerator:
    """Generates commit messages for the staged changes of a repository."""

    def __init__(
        self,
        options: GenerateOptions,
        api_key: str,
        repo_path: str | Path | None = None,
        transport: httpx.BaseTransport | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            options: Generation options
            api_key: API key for the model's provider
            repo_path: Path to the git repository (defaults to cwd)
            transport: Optional httpx transport for the provider's client
            console: Console for progress output (stderr by default)
        """
        self.options = options
        self.console = console or Console(stderr=True, quiet=self.options.quiet)
        self.repo = GitRepo(repo_path)
        self._api_key = api_key
        self._transport = transport
        self._provider: HTTPProvider | None = None

    def _get_provider(self) -> HTTPProvider:
        """Lazily create and return the AI provider."""
        if self._provider is None:
            self._provider = create_provider(
                self.options.model,
                self._api_key,
                transport=self._transport,
            )
        return self._provider

    def collect_changes(self) -> list[StagedChange]:
        """Read staged changes and apply --only / --exclude filters.

        Raises:
            GitError: If nothing is staged or every file was filtered out
        """
        self.repo.check_repository()

        changes = self.repo.get_staged_changes()
        if not changes:
            raise GitError("No staged changes found. Stage your changes with: git add <files>")

        filtered = filter_changes(changes, self.options.only, self.options.exclude)
        if not filtered:
            raise GitError("No staged files left after applying --only/--exclude")

        if len(filtered) != len(changes):
            logger.debug("Using %d of %d staged files", len(filtered), len(changes))
        return filtered

    def generate(self) -> GeneratedCommit:
        """Generate a commit message for the staged changes."""
        changes = self.collect_changes()

        if self.options.verbose:
            self.console.print(f"[yellow]📋 Staged files sent to the model ({len(changes)}):[/]")
            for change in changes:
                self.console.print(f"[dim]  {escape(change.path)}[/]")

        provider = self._get_provider()
        prompt = build_prompt(changes, provider.MAX_PROMPT_CHARS)
        logger.debug("Built prompt of %d chars for %d files", len(prompt), len(changes))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
            disable=self.options.quiet,
        ) as progress:
            progress.add_task(f"Generating commit message with {provider.get_name()}...")
            raw = provider.generate_commit_message(prompt, SYSTEM_PROMPT)

        message, parsed = normalize_message(raw)
        if parsed is None:
            logger.debug("Response is not a conventional commit: %r", message[:80])

        return GeneratedCommit(
            message=message,
            parsed=parsed,
            files=[c.path for c in changes],
        )

    def commit(self, message: str) -> None:
        """Commit the staged changes with the message."""
        self.repo.commit(message)

    def close(self) -> None:
        if self._provider is not None:
            self._provider.close()


__all__ = ["CommitGenerator", "GenerateOptions", "GeneratedCommit"]
