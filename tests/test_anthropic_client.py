"""Tests for the Anthropic client wrapper."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from scenegen.config import config
from scenegen.services import AnthropicClient, TextCapability
from scenegen.services.anthropic import JSON_SYSTEM_PROMPT


@pytest.fixture
def client():
    client = AnthropicClient(api_key="test-key", model="test-model", retry_delay=0)
    client._client = MagicMock()
    client._client.messages.create.return_value = SimpleNamespace(
        content=[SimpleNamespace(text='{"scenes": []}')]
    )
    return client


def test_is_a_text_capability(client):
    assert isinstance(client, TextCapability)


def test_json_mode_sets_system_prompt(client):
    assert client.generate("prompt", response_format="json") == '{"scenes": []}'

    kwargs = client._client.messages.create.call_args.kwargs
    assert kwargs["system"] == JSON_SYSTEM_PROMPT
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


def test_text_mode_has_no_system_prompt(client):
    client.generate("prompt")

    assert "system" not in client._client.messages.create.call_args.kwargs


def test_provider_errors_propagate(client):
    client._client.messages.create.side_effect = RuntimeError("provider down")

    with pytest.raises(RuntimeError):
        client.generate("prompt")


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(config, "anthropic_api_key", "")

    with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
        AnthropicClient()


def test_request_carries_only_generation_parameters(client):
    client.generate("prompt", response_format="json")

    kwargs = client._client.messages.create.call_args.kwargs
    assert set(kwargs) == {"model", "max_tokens", "messages", "system"}
