# src/core/__init__.py - v1
"""Shared models, errors, retry policy and small utilities."""
