# src/llm/adapters/ollama_adapter.py - v2
"""Ollama local LLM adapter implementing BaseLLMClient.

Uses the ollama Python SDK. Structured output requests use format="json".
"""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel

from eventlocator.llm.base_client import BaseLLMClient
from eventlocator.llm.models import LLMResponse, Message


class OllamaAdapter(BaseLLMClient):
    """Ollama local inference adapter."""

    def __init__(
        self,
        model: str = "llama3",
        base_url: str = "http://localhost:11434",
        timeout_s: float = 10.0,
        **kwargs: Any,
    ):
        self._model = model
        self._host = base_url
        self._timeout_s = timeout_s

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.1,
        response_format: type[BaseModel] | None = None,
    ) -> LLMResponse:
        import ollama

        client = ollama.AsyncClient(host=self._host, timeout=self._timeout_s)
        msgs: list[dict[str, str]] = []
        if system:
            msgs.append({"role": "system", "content": system})
        for m in messages:
            msgs.append({"role": m.role, "content": m.content})

        options: dict[str, Any] = {
            "num_predict": max_tokens,
            "temperature": temperature,
        }
        kwargs: dict[str, Any] = {"model": self._model, "messages": msgs, "options": options}
        if response_format is not None:
            kwargs["format"] = "json"

        t0 = time.monotonic()
        resp = await client.chat(**kwargs)
        latency = int((time.monotonic() - t0) * 1000)

        return LLMResponse(
            content=resp["message"]["content"],
            input_tokens=resp.get("prompt_eval_count", 0) or 0,
            output_tokens=resp.get("eval_count", 0) or 0,
            model=self._model,
            provider="ollama",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model
