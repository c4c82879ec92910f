# src/__init__.py - v1
"""eventlocator: resolve noisy event location clues into geocoded locations."""

from eventlocator.version import __version__

__all__ = ["__version__"]
