# src/llm/__init__.py - v1
"""Provider-agnostic LLM client layer."""
