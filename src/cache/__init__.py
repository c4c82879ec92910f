# src/cache/__init__.py - v1
"""Clue fingerprinting and TTL-bounded location cache stores."""
