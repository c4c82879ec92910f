# src/extraction/__init__.py - v1
"""LLM address extraction from free-text clues."""
