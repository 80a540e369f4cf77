import httpx
import pytest

from conftest import RecordingTransport, claude_body, gemini_body, openai_body
from convmit.errors import ProviderError
from convmit.models import Model
from convmit.providers import (
    ClaudeProvider,
    GeminiProvider,
    MistralProvider,
    OpenAIProvider,
    create_provider,
)


def test_create_provider_picks_class():
    assert isinstance(create_provider(Model.SONNET_4, "k"), ClaudeProvider)
    assert isinstance(create_provider(Model.GPT_5, "k"), OpenAIProvider)
    assert isinstance(create_provider(Model.GEMINI_2_5_FLASH, "k"), GeminiProvider)
    assert isinstance(create_provider(Model.MISTRAL_MEDIUM_3_1, "k"), MistralProvider)


def test_provider_rejects_foreign_model():
    with pytest.raises(ProviderError, match="not a Claude model"):
        ClaudeProvider("k", Model.GPT_5)


def test_provider_requires_key():
    with pytest.raises(ProviderError, match="API key is required"):
        OpenAIProvider("", Model.GPT_5)


def test_claude_request_and_response():
    transport = RecordingTransport(body=claude_body("feat(auth): add login\n"))
    provider = create_provider(Model.HAIKU_3_5, "claude-key", transport=transport)

    assert provider.generate_commit_message("the diff", "system text") == "feat(auth): add login"

    request = transport.requests[0]
    assert str(request.url) == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == "claude-key"
    assert request.headers["anthropic-version"] == "2023-06-01"
    body = transport.last_json
    assert body["model"] == "claude-3-5-haiku-20241022"
    assert body["system"] == "system text"
    assert body["max_tokens"] == 1024
    assert body["messages"] == [{"role": "user", "content": "the diff"}]


def test_openai_request_and_response():
    transport = RecordingTransport(body=openai_body("fix: handle empty input"))
    provider = create_provider(Model.GPT_5_MINI, "openai-key", transport=transport)

    assert provider.generate_commit_message("p", "s") == "fix: handle empty input"

    request = transport.requests[0]
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer openai-key"
    body = transport.last_json
    assert body["model"] == "gpt-5-mini-2025-08-07"
    assert body["messages"][0] == {"role": "system", "content": "s"}
    assert "temperature" not in body


def test_mistral_sends_sampling_parameters():
    transport = RecordingTransport(body=openai_body("docs: update readme"))
    provider = create_provider(Model.MINISTRAL_8B, "mistral-key", transport=transport)

    assert provider.generate_commit_message("p", "s") == "docs: update readme"
    assert str(transport.requests[0].url) == "https://api.mistral.ai/v1/chat/completions"
    body = transport.last_json
    assert body["model"] == "ministral-8b-2410"
    assert body["temperature"] == 0.3
    assert body["max_tokens"] == 1024


def test_gemini_request_and_response():
    transport = RecordingTransport(body=gemini_body("ci: add lint job"))
    provider = create_provider(Model.GEMINI_2_5_FLASH, "gemini-key", transport=transport)

    assert provider.generate_commit_message("p", "s") == "ci: add lint job"

    request = transport.requests[0]
    assert str(request.url) == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"
    )
    assert request.headers["x-goog-api-key"] == "gemini-key"
    body = transport.last_json
    assert body["system_instruction"] == {"parts": [{"text": "s"}]}
    assert body["contents"][0]["parts"] == [{"text": "p"}]


def test_api_error_message_is_reported():
    transport = RecordingTransport(
        status_code=401,
        body={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
    )
    provider = create_provider(Model.SONNET_4, "bad", transport=transport)
    with pytest.raises(ProviderError, match="Claude API error: invalid x-api-key"):
        provider.generate_commit_message("p", "s")


def test_http_error_without_json_body():
    transport = RecordingTransport(status_code=502, content=b"Bad Gateway")
    provider = create_provider(Model.GPT_5, "k", transport=transport)
    with pytest.raises(ProviderError, match="HTTP error 502: Bad Gateway"):
        provider.generate_commit_message("p", "s")


def test_malformed_json_is_reported():
    transport = RecordingTransport(content=b"<html>not json</html>")
    provider = create_provider(Model.GPT_5, "k", transport=transport)
    with pytest.raises(ProviderError, match="Malformed response from OpenAI"):
        provider.generate_commit_message("p", "s")


def test_unexpected_shape_is_reported():
    transport = RecordingTransport(body={"choices": []})
    provider = create_provider(Model.GPT_5, "k", transport=transport)
    with pytest.raises(ProviderError, match="Malformed response from OpenAI"):
        provider.generate_commit_message("p", "s")


def test_empty_response_is_reported():
    transport = RecordingTransport(body={"content": []})
    provider = create_provider(Model.HAIKU_3, "k", transport=transport)
    with pytest.raises(ProviderError, match="No response from Claude"):
        provider.generate_commit_message("p", "s")


def test_network_failure_is_reported():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = create_provider(Model.GPT_5, "k", transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError, match="Request to OpenAI failed"):
        provider.generate_commit_message("p", "s")


@pytest.mark.parametrize(
    "model, body, provider_name",
    [
        (Model.GPT_5, {"choices": [{"message": {"content": 5}}]}, "OpenAI"),
        (Model.MISTRAL_MEDIUM_3_1, {"choices": [{"message": {"content": {"text": "x"}}}]}, "Mistral"),
        (Model.HAIKU_3_5, {"content": [{"type": "text", "text": ["feat: x"]}]}, "Claude"),
        (
            Model.GEMINI_2_5_FLASH,
            {"candidates": [{"content": {"parts": [{"text": {"value": "feat: x"}}]}}]},
            "Google Gemini",
        ),
    ],
)
def test_non_text_message_is_reported(model, body, provider_name):
    provider = create_provider(model, "k", transport=RecordingTransport(body=body))
    with pytest.raises(ProviderError, match=f"Malformed response from {provider_name}: expected text"):
        provider.generate_commit_message("p", "s")
