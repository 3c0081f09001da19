"""
Full-document sentence search with cyclic result navigation.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from readalong.script.sentence_segmenter import split_sentences
from readalong.utils.text import lower_tr

from .normalize import normalize_for_search

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """A matching sentence and where it lives."""

    page: int  # 1-based
    sentence: str
    index_within_page: int


@dataclass(frozen=True)
class _IndexedSentence:
    page: int
    index_within_page: int
    sentence: str
    normalized: str
    lowered: str


class SearchIndex:
    """
    Sentence-level lookup over every page of a document.

    Usage::

        index = SearchIndex.build(pages)
        results = index.search("ogrenci")
    """

    def __init__(self, entries: Optional[List[_IndexedSentence]] = None):
        self._entries: List[_IndexedSentence] = entries or []

    @classmethod
    def build(cls, pages: Sequence[str]) -> "SearchIndex":
        """Segment every page and store each sentence with its keys."""
        entries: List[_IndexedSentence] = []
        for page_number, page_text in enumerate(pages, start=1):
            for i, sentence in enumerate(split_sentences(page_text)):
                entries.append(
                    _IndexedSentence(
                        page=page_number,
                        index_within_page=i,
                        sentence=sentence,
                        normalized=normalize_for_search(sentence),
                        lowered=lower_tr(sentence),
                    )
                )
        logger.debug("Search index: %d sentences over %d pages", len(entries), len(pages))
        return cls(entries)

    def search(self, query: str) -> List[SearchResult]:
        """
        Find all sentences containing *query*.

        A sentence matches if its normalized key contains the normalized
        query, or its lower-cased text contains the lower-cased query.
        A blank query matches nothing.

        Returns:
            Matches in page order, then in-page order.
        """
        if not query or not query.strip():
            return []

        key = normalize_for_search(query)
        raw = lower_tr(query.strip())

        return [
            SearchResult(e.page, e.sentence, e.index_within_page)
            for e in self._entries
            if (key and key in e.normalized) or raw in e.lowered
        ]

    def __len__(self) -> int:
        return len(self._entries)


class SearchResults:
    """
    The live result set of one query plus the active position.

    ``next()`` and ``previous()`` wrap around at either end.
    """

    def __init__(self, query: str = "", results: Optional[List[SearchResult]] = None):
        self.query = query
        self.results: List[SearchResult] = list(results or [])
        self.active_index: int = 0 if self.results else -1

    @property
    def active(self) -> Optional[SearchResult]:
        if self.active_index < 0:
            return None
        return self.results[self.active_index]

    def next(self) -> Optional[SearchResult]:
        if not self.results:
            return None
        self.active_index = (self.active_index + 1) % len(self.results)
        return self.active

    def previous(self) -> Optional[SearchResult]:
        if not self.results:
            return None
        self.active_index = (self.active_index - 1) % len(self.results)
        return self.active

    def __len__(self) -> int:
        return len(self.results)

    def __bool__(self) -> bool:
        return bool(self.results)

    def __repr__(self) -> str:
        return (
            f"SearchResults('{self.query}', {len(self.results)} matches, "
            f"active={self.active_index})"
        )
