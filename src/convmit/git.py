"""Git operations wrapper using subprocess."""

from __future__ import annotations

import fnmatch
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import ConvmitError

logger = logging.getLogger(__name__)

_DIFF_HEADER = re.compile(r"^diff --git ", re.MULTILINE)


@dataclass
class StagedChange:
    """A staged file and its diff text."""

    path: str
    diff: str


class GitError(ConvmitError):
    """Error during git operations."""

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class GitRepo:
    """Wrapper for git operations using subprocess."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize git repository wrapper.

        Args:
            path: Path to the repository (defaults to current directory)
        """
        self.path = Path(path) if path else Path.cwd()

    def _run(
        self,
        *args: str,
        input: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Args:
            *args: Git command arguments
            input: Text fed to the command's stdin

        Returns:
            CompletedProcess result

        Raises:
            GitError: If git is missing or the command exits non-zero
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                check=True,
                capture_output=True,
                input=input,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found. Is git installed?") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitError(
                f"Command failed: {' '.join(cmd)}\nExit code: {e.returncode}\nStderr: {stderr}",
                returncode=e.returncode,
            ) from e

    def is_repository(self) -> bool:
        """Check if this is a valid git repository."""
        try:
            self._run("rev-parse", "--git-dir")
            return True
        except GitError:
            return False

    def check_repository(self) -> None:
        """Check if this is a valid git repository.

        Raises:
            GitError: If not a git repository
        """
        if not self.is_repository():
            raise GitError("Not a git repository!")

    def get_staged_diff(self) -> str:
        """Get diff of staged changes."""
        result = self._run("-c", "core.quotepath=false", "diff", "--cached")
        return result.stdout

    def get_staged_files(self) -> list[str]:
        """Get list of staged files, unquoted."""
        result = self._run("-c", "core.quotepath=false", "diff", "--cached", "--name-only", "-z")
        return [f for f in result.stdout.split("\0") if f]

    def get_staged_changes(self) -> list[StagedChange]:
        """Get every staged file paired with its part of the staged diff."""
        files = self.get_staged_files()
        if not files:
            return []
        sections = split_diff(self.get_staged_diff(), files)
        return [StagedChange(path=f, diff=sections.get(f, "")) for f in files]

    def commit(self, message: str) -> None:
        """Commit the staged changes with the given message.

        Raises:
            GitError: If git commit fails; ``returncode`` is git's exit status
        """
        try:
            self._run("commit", "-F", "-", input=message)
        except GitError as e:
            raise GitError(f"Failed to commit: {e}", returncode=e.returncode) from e


def split_diff(diff: str, paths: list[str]) -> dict[str, str]:
    """Split a multi-file diff into per-file sections keyed by staged path.

    A section belongs to the longest staged path its ``diff --git`` header
    ends with as ``b/<path>``, so paths containing `` b/`` stay intact.
    """
    starts = [m.start() for m in _DIFF_HEADER.finditer(diff)]
    candidates = sorted(paths, key=len, reverse=True)
    sections: dict[str, str] = {}
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(diff)
        header = diff[start:end].split("\n", 1)[0]
        for path in candidates:
            if header.endswith(f" b/{path}") or header.endswith(f' "b/{path}"'):
                sections[path] = diff[start:end]
                break
    return sections


def _matches(path: str, pattern: str) -> bool:
    pattern = pattern.strip()
    if not pattern:
        return False
    prefix = pattern.rstrip("/") + "/"
    return path == pattern or path.startswith(prefix) or fnmatch.fnmatch(path, pattern)


def filter_changes(
    changes: list[StagedChange],
    only: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[StagedChange]:
    """Apply --only and --exclude patterns to staged changes.

    A pattern matches a path exactly, as a glob, or as a directory prefix.
    """
    result = changes
    if only:
        result = [c for c in result if any(_matches(c.path, p) for p in only)]
    if exclude:
        result = [c for c in result if not any(_matches(c.path, p) for p in exclude)]
    return result
