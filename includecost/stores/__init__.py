"""Persistent stores used between includecost runs."""

from .parse_cache import ParseCache

__all__ = ["ParseCache"]
