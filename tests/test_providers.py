"""
Tests for LLM provider selection
"""

from praxis.config import Config
from praxis.services.providers import (
    ClaudeProvider, MockProvider, OpenRouterProvider,
    get_provider, get_provider_status,
)


def test_no_key_falls_back_to_mock():
    provider = get_provider(Config())
    assert isinstance(provider, MockProvider)


def test_unknown_provider_falls_back_to_mock():
    assert isinstance(get_provider(Config.from_dict({"llm": {"provider": "nope"}})), MockProvider)


def test_openrouter_uses_openai_client_with_base_url(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")

    provider = get_provider(Config())

    assert isinstance(provider, OpenRouterProvider)
    assert provider.name == "openrouter"
    assert str(provider._client.base_url).startswith("https://openrouter.ai/api/v1")


def test_claude_provider(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

    provider = get_provider(Config.from_dict({"llm": {"provider": "claude"}}))

    assert isinstance(provider, ClaudeProvider)
    assert provider.is_available


def test_mock_counts_calls():
    mock = MockProvider("No")
    response = mock.complete("system", "user")
    assert response.text == "No"
    assert mock.calls == 1


def test_status_text(monkeypatch):
    assert get_provider_status(Config()) == "openrouter: not configured (set OPENROUTER_API_KEY)"
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")
    assert get_provider_status(Config()) == "openrouter: anthropic/claude-sonnet-4"

