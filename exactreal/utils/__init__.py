"""Utilities for constructive reals: numeral parsing and rendering."""

from .formatting import from_string, to_string

__all__ = ["from_string", "to_string"]
