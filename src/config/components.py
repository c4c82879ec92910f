# src/config/components.py - v1
"""LLM-backed components and the phase each one belongs to.

Used by llm/config.py to resolve per-phase provider:model overrides.
"""

from __future__ import annotations

# Phase-to-component mapping for LLM routing.
PHASE_COMPONENT_MAP: dict[str, list[str]] = {
    "resolution": ["address_extractor"],
}
