"""
Table of contents detection from page text.

A page is treated as a contents page when it mentions one of the
contents markers.  Its lines are then matched against leader patterns
(dots, dashes, or a wide gap before a trailing page number).
"""

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from readalong.utils.text import lower_tr

from .models import TOCEntry

logger = logging.getLogger(__name__)

TOC_MARKERS = ("içindekiler", "contents", "table of contents", "index")

# Tried in order; the first match wins.
_LEADER_PATTERNS = (
    re.compile(r"^(.+?)\s*[.·…\-]{3,}\s*(\d+)\s*$"),
    re.compile(r"^(\d+(?:\.\d+)*\.?\s+.+?)\s*[.·…\-]{2,}\s*(\d+)\s*$"),
    re.compile(r"^(.+?)\s{5,}(\d+)\s*$"),
)

_RE_LEVEL_3 = re.compile(r"^\d+\.\d+\.\d+")
_RE_LEVEL_2 = re.compile(r"^\d+\.\d+")
_RE_LEVEL_1 = re.compile(r"^\d+\.")


def is_toc_page(page_text: str) -> bool:
    """True if the page mentions a table-of-contents marker."""
    lowered = lower_tr(page_text)
    return any(marker in lowered for marker in TOC_MARKERS)


def toc_level(title: str) -> int:
    """Heading level implied by the numeric prefix of a TOC title."""
    if _RE_LEVEL_3.match(title):
        return 3
    if _RE_LEVEL_2.match(title):
        return 2
    if _RE_LEVEL_1.match(title):
        return 1
    return 0


def parse_toc_line(line: str) -> Optional[Tuple[str, int]]:
    """
    Match one line against the leader patterns.

    Returns:
        ``(title, page_number)`` for the first matching pattern, or
        ``None`` if no pattern matches or the title is too short.
    """
    stripped = line.strip()
    for pattern in _LEADER_PATTERNS:
        m = pattern.match(stripped)
        if m is None:
            continue
        title = m.group(1).strip()
        if len(title) <= 2:
            continue
        return title, int(m.group(2))
    return None


def detect_table_of_contents(pages: Sequence[str]) -> Tuple[bool, List[TOCEntry]]:
    """
    Scan every page for a table of contents.

    Args:
        pages: Page texts in page order.

    Returns:
        ``(has_table_of_contents, entries)``.  Entries are unique by
        title (first occurrence wins) and sorted by page number.  A
        contents marker without any leader lines does not count as a
        table of contents.
    """
    seen: Dict[str, TOCEntry] = {}

    for page_number, page_text in enumerate(pages, start=1):
        if not is_toc_page(page_text):
            continue

        found = 0
        for line in page_text.split("\n"):
            parsed = parse_toc_line(line)
            if parsed is None:
                continue
            title, target = parsed
            if title in seen:
                continue
            seen[title] = TOCEntry(title=title, page=target, level=toc_level(title))
            found += 1

        logger.debug("Contents marker on page %d: %d entries", page_number, found)

    entries = sorted(seen.values(), key=lambda e: e.page)
    return bool(entries), entries
