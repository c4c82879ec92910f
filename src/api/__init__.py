# src/api/__init__.py - v1
"""Public entry points: facade functions and request/result models."""
