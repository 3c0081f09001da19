"""Shared helpers."""

from .text import collapse_whitespace, lower_tr

__all__ = ["lower_tr", "collapse_whitespace"]
