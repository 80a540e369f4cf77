import json
import shutil
import subprocess

import httpx
import pytest

API_KEY_ENV_VARS = [
    "CLAUDE_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "MISTRAL_API_KEY",
]


def git(repo, *args):
    return subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    ).stdout


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file into tmp_path and hide real API keys."""
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("CONVMIT_CONFIG", str(path))
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return path


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository with an identity configured."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def staged_repo(git_repo):
    """A repository with two staged files."""
    (git_repo / "app.py").write_text("def login():\n    return True\n")
    (git_repo / "README.md").write_text("# Demo\n")
    git(git_repo, "add", "app.py", "README.md")
    return git_repo


class RecordingTransport(httpx.MockTransport):
    """MockTransport that returns a fixed response and records requests."""

    def __init__(self, status_code=200, body=None, content=None):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=body)

        super().__init__(handler)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


def claude_body(text):
    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-5-haiku-20241022",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


def openai_body(text):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def gemini_body(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}
