"""Parsing and validation of generated commit messages."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import ProviderError

COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "ci",
    "build",
    "revert",
)

_HEADER_PATTERN = re.compile(
    rf"^(?P<type>{'|'.join(COMMIT_TYPES)})"
    r"(?:\((?P<scope>[^()]+)\))?"
    r"(?P<breaking>!)?"
    r": (?P<summary>\S.*)$"
)
_FENCE = re.compile(r"^```[\w-]*\s*$")
_LABEL = re.compile(r"^(?:suggested\s+)?commit message:\s*", re.IGNORECASE)


@dataclass
class CommitMessage:
    """A conventional commit message."""

    type: str
    summary: str
    scope: str | None = None
    breaking: bool = False
    body: str | None = None

    @property
    def header(self) -> str:
        scope = f"({self.scope})" if self.scope else ""
        bang = "!" if self.breaking else ""
        return f"{self.type}{scope}{bang}: {self.summary}"

    def __str__(self) -> str:
        if self.body:
            return f"{self.header}\n\n{self.body}"
        return self.header

    @classmethod
    def parse(cls, text: str) -> CommitMessage | None:
        """Parse text as a conventional commit.

        Returns:
            The parsed message, or None if the first line is not
            ``type(scope)!: summary`` with a known type
        """
        lines = clean_response(text).split("\n")
        match = _HEADER_PATTERN.match(lines[0].strip())
        if not match:
            return None
        body = "\n".join(lines[1:]).strip() or None
        return cls(
            type=match.group("type"),
            summary=match.group("summary").strip(),
            scope=match.group("scope"),
            breaking=bool(match.group("breaking")),
            body=body,
        )


def clean_response(text: str) -> str:
    """Strip code fences, quotes and labels the model wrapped around the message."""
    lines = [line for line in text.strip().split("\n") if not _FENCE.match(line.strip())]
    cleaned = "\n".join(lines).strip()
    cleaned = _LABEL.sub("", cleaned)
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'`":
        cleaned = cleaned[1:-1].strip()
    return cleaned


def normalize_message(text: str) -> tuple[str, CommitMessage | None]:
    """Turn raw model output into the message to use.

    Returns:
        Tuple of (message text, parsed message or None). When the text is
        not a conventional commit the cleaned raw text is returned as is.

    Raises:
        ProviderError: If there is no text at all
    """
    cleaned = clean_response(text)
    if not cleaned:
        raise ProviderError("Empty commit message returned by the provider")
    parsed = CommitMessage.parse(cleaned)
    if parsed is None:
        return cleaned, None
    return str(parsed), parsed
