# tests/unit/llm/test_unit_config.py - v2
"""Tests for llm/config.py - address extractor LLM routing cascade."""

from __future__ import annotations

from eventlocator.config.settings import Settings
from eventlocator.llm.config import LLMAssignment, resolve_llm


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestResolveLLM:
    def test_default(self):
        r = resolve_llm("address_extractor", _settings())
        assert r.key == "openai:gpt-4o"
        assert r.source == "default"

    def test_per_component_override(self):
        r = resolve_llm("address_extractor", _settings(llm_address_extractor="anthropic:claude-x"))
        assert r.provider == "anthropic"
        assert r.model == "claude-x"
        assert r.source == "component"

    def test_per_phase_override(self):
        r = resolve_llm("address_extractor", _settings(llm_phase_resolution="ollama:llama3"))
        assert r.key == "ollama:llama3"
        assert r.source == "phase"

    def test_component_overrides_phase(self):
        s = _settings(llm_phase_resolution="ollama:llama3", llm_address_extractor="google:gemini")
        assert resolve_llm("address_extractor", s).source == "component"

    def test_malformed_override_ignored(self):
        r = resolve_llm("address_extractor", _settings(llm_address_extractor="anthropic"))
        assert r.source == "default"

    def test_model_may_contain_colon(self):
        r = resolve_llm("address_extractor", _settings(llm_address_extractor="ollama:llama3:8b"))
        assert r.model == "llama3:8b"

    def test_fallback_when_default_blank(self):
        r = resolve_llm("address_extractor", _settings(llm_default_provider="", llm_default_model=""))
        assert r.key == "openai:gpt-4o"
        assert r.source == "fallback"

    def test_key_format(self):
        assert LLMAssignment(provider="a", model="b", source="default").key == "a:b"
