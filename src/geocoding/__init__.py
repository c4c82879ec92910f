# src/geocoding/__init__.py - v1
"""Forward/reverse geocoding, verification and timezone lookup."""
