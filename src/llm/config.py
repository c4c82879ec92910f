# src/llm/config.py - v2
"""Per-component LLM routing with cascade resolution.

Resolution order:
  1. Per-component env var (LLM_ADDRESS_EXTRACTOR=anthropic:claude-sonnet-4-20250514)
  2. Per-phase env var (LLM_PHASE_RESOLUTION=ollama:llama3)
  3. Default provider + model (LLM_DEFAULT_PROVIDER + LLM_DEFAULT_MODEL)
  4. Hardcoded fallback (openai:gpt-4o)
"""

from __future__ import annotations

from dataclasses import dataclass

from eventlocator.config.components import PHASE_COMPONENT_MAP
from eventlocator.config.settings import Settings

_FALLBACK_PROVIDER = "openai"
_FALLBACK_MODEL = "gpt-4o"


@dataclass(frozen=True)
class LLMAssignment:
    """Resolved LLM provider:model for a component."""

    provider: str
    model: str
    source: str  # "component", "phase", "default", or "fallback"

    @property
    def key(self) -> str:
        """Return 'provider:model' string."""
        return f"{self.provider}:{self.model}"


def _find_phase(component: str) -> str | None:
    for phase, components in PHASE_COMPONENT_MAP.items():
        if component in components:
            return phase
    return None


def _parse_assignment(value: str) -> tuple[str, str] | None:
    """Parse 'provider:model' string. Returns None if empty or malformed."""
    if not value or ":" not in value:
        return None
    provider, model = value.split(":", 1)
    provider, model = provider.strip(), model.strip()
    if not provider or not model:
        return None
    return (provider, model)


def resolve_llm(component: str, settings: Settings) -> LLMAssignment:
    """Resolve LLM assignment for a component using the cascade above."""
    per_component = getattr(settings, f"llm_{component}", "")
    parsed = _parse_assignment(per_component)
    if parsed:
        return LLMAssignment(provider=parsed[0], model=parsed[1], source="component")

    phase = _find_phase(component)
    if phase:
        per_phase = getattr(settings, f"llm_phase_{phase}", "")
        parsed = _parse_assignment(per_phase)
        if parsed:
            return LLMAssignment(provider=parsed[0], model=parsed[1], source="phase")

    if settings.llm_default_provider and settings.llm_default_model:
        return LLMAssignment(
            provider=settings.llm_default_provider,
            model=settings.llm_default_model,
            source="default",
        )

    return LLMAssignment(
        provider=_FALLBACK_PROVIDER,
        model=_FALLBACK_MODEL,
        source="fallback",
    )
