"""
Document-level classification: genre and language.

Both classifiers are keyword heuristics over the full document text.
"""

import re
from typing import Iterable, List, Sequence, Tuple

from readalong.utils.text import lower_tr

from .models import DocumentType, Language

# Priority order matters: the first matching genre wins.
_TYPE_KEYWORDS: List[Tuple[DocumentType, Tuple[str, ...]]] = [
    (DocumentType.ACADEMIC_ARTICLE, ("makale", "article", "journal")),
    (DocumentType.BOOK, ("kitap", "book")),
    (DocumentType.REPORT, ("rapor", "report")),
    (DocumentType.THESIS, ("tez", "thesis")),
    (DocumentType.PRESENTATION, ("sunum", "presentation")),
]

TURKISH_STOP_WORDS = ("ve", "bir", "bu", "için", "ile", "olan", "olarak", "da", "de")
ENGLISH_STOP_WORDS = ("the", "and", "of", "to", "in", "is", "that", "for", "with")


def full_text(pages: Sequence[str]) -> str:
    """Lower-cased concatenation of all page texts."""
    return lower_tr(" ".join(pages))


def detect_document_type(
    text: str,
    chapter_count: int = 0,
    book_chapter_count: int = 5,
) -> DocumentType:
    """
    Classify the document genre.

    Args:
        text:               Lower-cased full document text.
        chapter_count:      Number of detected chapters; more than
                            *book_chapter_count* implies a book.
        book_chapter_count: Chapter threshold for the book rule.
    """
    for doc_type, keywords in _TYPE_KEYWORDS:
        if any(k in text for k in keywords):
            return doc_type
        if doc_type is DocumentType.BOOK and chapter_count > book_chapter_count:
            return doc_type
    return DocumentType.DOCUMENT


def count_words(text: str, words: Iterable[str]) -> int:
    """Total whole-word occurrences of *words* in *text*."""
    return sum(len(re.findall(rf"\b{re.escape(w)}\b", text)) for w in words)


def detect_language(text: str) -> Language:
    """
    Two-bucket language guess from stop-word frequency.

    Turkish wins only with a strictly higher count; ties go to English.
    """
    turkish = count_words(text, TURKISH_STOP_WORDS)
    english = count_words(text, ENGLISH_STOP_WORDS)
    return Language.TURKISH if turkish > english else Language.ENGLISH
