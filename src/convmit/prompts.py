"""Prompt templates for commit message generation."""

from __future__ import annotations

from .git import StagedChange

SYSTEM_PROMPT = """Generate a conventional commit message based on the staged files and git diff below.

FORMAT: type(scope): description
- Use lowercase for type and description
- Scope is optional but recommended (file/module/feature affected)
- Description should be 50-72 characters, imperative mood
- Add '!' after type for breaking changes

COMMIT TYPES:
- feat: new feature or enhancement
- fix: bug fix or error correction
- docs: documentation changes only
- style: formatting, whitespace (no logic changes)
- refactor: code restructuring (no feature/bug changes)
- test: adding or updating tests
- chore: maintenance, deps, config, build
- perf: performance improvements
- ci: CI/CD pipeline changes

SCOPE GUIDELINES:
- Use filename/module for single file changes
- Use feature name for multi-file features
- Use 'readme' for README changes
- Omit scope for broad changes

EXAMPLES:
- feat(auth): add OAuth2 login support
- fix(parser): handle empty input correctly
- docs(readme): update installation instructions
- refactor(models.py): derive provider from model enum
- style: format code with black
- chore(deps): bump httpx to 0.28

INSTRUCTIONS:
- Analyze the changes to determine the most appropriate type
- Look for breaking changes (API changes, removed features)
- Focus on the 'why' not the 'what' in the description
- Return ONLY the commit message, no explanations"""

TRUNCATION_MARKER = "\n[diff truncated: {shown} of {total} characters shown]"


def build_prompt(changes: list[StagedChange], max_chars: int) -> str:
    """Build the user prompt from staged changes.

    The file list is always included in full. The diff is cut so the whole
    prompt stays within ``max_chars``.

    Args:
        changes: Staged changes to describe
        max_chars: Size limit of the provider the prompt is sent to

    Returns:
        The complete prompt string
    """
    files_list = "\n".join(c.path for c in changes) if changes else "(no files)"
    head = f"Staged files:\n\n{files_list}\n\nDiff:\n\n"
    diff = "".join(c.diff for c in changes)

    budget = max_chars - len(head)
    if len(diff) <= budget:
        return head + diff

    marker_room = len(TRUNCATION_MARKER.format(shown=len(diff), total=len(diff)))
    shown = max(budget - marker_room, 0)
    return head + diff[:shown] + TRUNCATION_MARKER.format(shown=shown, total=len(diff))
