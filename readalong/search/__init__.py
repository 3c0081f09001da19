"""Accent-insensitive sentence search across the whole document."""

from .index import SearchIndex, SearchResult, SearchResults
from .normalize import fold_diacritics, normalize_for_search

__all__ = [
    "SearchIndex",
    "SearchResult",
    "SearchResults",
    "fold_diacritics",
    "normalize_for_search",
]
