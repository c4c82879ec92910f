# tests/unit/llm/test_unit_llm_models.py - v2
"""Tests for llm/models.py and the BaseLLMClient ABC."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eventlocator.llm.base_client import BaseLLMClient
from eventlocator.llm.models import LLMResponse, Message


class TestMessage:
    def test_valid_roles(self):
        for role in ("user", "assistant", "system"):
            assert Message(role=role, content="hi").role == role

    def test_invalid_role(self):
        with pytest.raises(ValidationError):
            Message(role="tool", content="hi")


class TestLLMResponse:
    def test_total_tokens(self):
        r = LLMResponse(content="{}", input_tokens=10, output_tokens=5, model="m", provider="p")
        assert r.total_tokens == 15

    def test_defaults(self):
        r = LLMResponse(content="", model="m", provider="p")
        assert r.latency_ms == 0
        assert r.raw_response is None


class TestBaseLLMClient:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLLMClient()  # type: ignore[abstract]
