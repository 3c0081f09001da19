"""
High-level document analysis: lines → headings → chapters → structure.

This is the main entry point for structure analysis used by the session.
"""

import logging
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from core.page.models import PositionedFragment

from .heading_classifier import classify_line
from .line_grouper import group_into_lines
from .models import Chapter, DocumentMetadata, DocumentStructure, StructureConfig
from .profile import detect_document_type, detect_language, full_text
from .toc_detector import detect_table_of_contents

logger = logging.getLogger(__name__)


def analyze_page(
    fragments: Sequence[PositionedFragment],
    page_number: int,
    config: Optional[StructureConfig] = None,
) -> List[Chapter]:
    """
    Detect headings on a single page.

    Args:
        fragments:   Positioned fragments for the page.
        page_number: 1-based page number.
        config:      Heuristic thresholds.

    Returns:
        Chapter stubs (empty content) in top-to-bottom order.
    """
    config = config or StructureConfig()
    chapters: List[Chapter] = []

    for line in group_into_lines(fragments, tolerance=config.line_tolerance):
        level = classify_line(line, config)
        if level is None:
            continue
        chapters.append(Chapter(title=line.text, page=page_number, level=level))
        logger.debug("Page %d: L%d heading '%s'", page_number, level, line.text[:60])

    return chapters


def assign_chapter_content(
    chapters: List[Chapter],
    pages: Sequence[str],
    min_content: int = 100,
) -> List[Chapter]:
    """
    Sort chapters by page, attach their text, and drop noise headings.

    Chapter ``i`` receives the page texts from its own page up to the
    page before the next chapter's page (or the last page for the final
    chapter).  Headings on the same page as their successor therefore
    get no content.  Only level-1 chapters and chapters with more than
    *min_content* characters survive.

    Returns:
        The surviving chapters, sorted by page.
    """
    ordered = sorted(chapters, key=lambda c: c.page)

    for i, chapter in enumerate(ordered):
        start = chapter.page - 1
        if i < len(ordered) - 1:
            end = ordered[i + 1].page - 2
        else:
            end = len(pages) - 1
        chapter.content = " ".join(pages[start : end + 1]).strip()

    kept = [c for c in ordered if len(c.content) > min_content or c.level == 1]
    if len(kept) < len(ordered):
        logger.debug("Dropped %d short chapters", len(ordered) - len(kept))
    return kept


def analyze_document(
    pages: Sequence[str],
    fragments_by_page: Optional[Sequence[Sequence[PositionedFragment]]] = None,
    metadata: Optional[Dict[str, str]] = None,
    config: Optional[StructureConfig] = None,
    disable_tqdm: bool = True,
) -> DocumentStructure:
    """
    Build the structural model of a document.

    Args:
        pages:             Page texts in page order.
        fragments_by_page: Positioned fragments per page (same order as
                           *pages*).  Without them no headings are found,
                           but TOC and profile detection still run.
        metadata:          Optional ``{"title", "author", "subject"}``.
        config:            Heuristic thresholds.
        disable_tqdm:      Suppress the per-page progress bar.

    Returns:
        A fresh :class:`DocumentStructure`.
    """
    config = config or StructureConfig()
    metadata = metadata or {}

    structure = DocumentStructure(
        title=metadata.get("title") or "",
        author=metadata.get("author") or "",
        subject=metadata.get("subject") or "",
        metadata=DocumentMetadata(total_pages=len(pages)),
    )

    stubs: List[Chapter] = []
    if fragments_by_page:
        for page_number, fragments in enumerate(
            tqdm(fragments_by_page, desc="Analyzing", unit="page", disable=disable_tqdm),
            start=1,
        ):
            stubs.extend(analyze_page(fragments, page_number, config))

    text = full_text(pages)
    structure.metadata.document_type = detect_document_type(
        text,
        chapter_count=len(stubs),
        book_chapter_count=config.book_chapter_count,
    )
    structure.metadata.language = detect_language(text)

    has_toc, entries = detect_table_of_contents(pages)
    structure.metadata.has_table_of_contents = has_toc
    structure.table_of_contents = entries

    structure.chapters = assign_chapter_content(
        stubs, pages, min_content=config.min_chapter_content
    )

    logger.info(
        "Structure: %d pages, %d chapters (%d candidates), %d TOC entries, "
        "type=%s, lang=%s",
        len(pages),
        len(structure.chapters),
        len(stubs),
        len(entries),
        structure.metadata.document_type.value,
        structure.metadata.language.value,
    )
    return structure
