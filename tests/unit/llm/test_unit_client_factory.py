# tests/unit/llm/test_unit_client_factory.py - v1
"""Tests for llm/client_factory.py - provider registry and settings wiring."""

from __future__ import annotations

import pytest

from eventlocator.config.settings import Settings
from eventlocator.llm.adapters.anthropic_adapter import AnthropicAdapter
from eventlocator.llm.adapters.ollama_adapter import OllamaAdapter
from eventlocator.llm.adapters.openai_adapter import OpenAIAdapter
from eventlocator.llm.client_factory import (
    UnsupportedProviderError,
    available_providers,
    create_llm_client,
    register_provider,
)


class TestCreateLLMClient:
    def test_openai_with_settings(self):
        s = Settings(_env_file=None, openai_api_key="sk-test", llm_timeout_s=3.0)
        client = create_llm_client("openai", "gpt-4o", s)
        assert isinstance(client, OpenAIAdapter)
        assert client.model_name == "gpt-4o"
        assert client.provider_name == "openai"
        assert client._api_key == "sk-test"
        assert client._timeout_s == 3.0

    def test_anthropic(self):
        client = create_llm_client("anthropic", "claude-x", Settings(_env_file=None))
        assert isinstance(client, AnthropicAdapter)
        assert client.provider_name == "anthropic"

    def test_ollama_uses_base_url(self):
        s = Settings(_env_file=None, ollama_base_url="http://gpu-box:11434")
        client = create_llm_client("ollama", "llama3", s)
        assert isinstance(client, OllamaAdapter)
        assert client._host == "http://gpu-box:11434"

    def test_explicit_kwargs_win(self):
        s = Settings(_env_file=None, openai_api_key="from-settings")
        client = create_llm_client("openai", "gpt-4o", s, api_key="explicit")
        assert client._api_key == "explicit"

    def test_unsupported(self):
        with pytest.raises(UnsupportedProviderError, match="Unsupported LLM provider"):
            create_llm_client("mistral", "large")

    def test_unsupported_is_value_error(self):
        assert issubclass(UnsupportedProviderError, ValueError)


class TestRegistry:
    def test_available(self):
        assert {"anthropic", "google", "ollama", "openai"} <= set(available_providers())

    def test_register_custom(self):
        register_provider(
            "local_openai", "eventlocator.llm.adapters.openai_adapter.OpenAIAdapter"
        )
        client = create_llm_client("local_openai", "my-model")
        assert isinstance(client, OpenAIAdapter)
        assert client.model_name == "my-model"
