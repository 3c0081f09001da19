"""
Resolves which page a narrated sentence belongs to.
"""

from typing import Optional, Sequence


def locate_sentence_page(
    pages: Sequence[str],
    sentence: str,
    hint: int = 1,
) -> Optional[int]:
    """
    Find the 1-based page whose text contains *sentence*.

    When several pages contain it (running headers, repeated captions),
    the page closest to *hint* wins and ties go to the lower page.

    Returns:
        The page number, or ``None`` if no page contains the sentence.
    """
    needle = sentence.strip()
    if not needle:
        return None

    matches = [i for i, text in enumerate(pages, start=1) if needle in text]
    if not matches:
        return None
    return min(matches, key=lambda page: (abs(page - hint), page))
