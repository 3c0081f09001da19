"""
Data models for document structure analysis.

A DocumentStructure is produced once per document load by the analyzer
and replaced wholesale on the next load.  Lines are transient: they only
exist while a page's fragments are being classified.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from core.page.models import PositionedFragment

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass
class StructureConfig:
    """
    Heuristic thresholds for heading and chapter detection.

    Attributes:
        line_tolerance:       Max vertical distance (layout units) between
                              fragments of the same line.
        large_font_size:      Average font size above which a centered or
                              upper-case line is a level-1 heading.
        numbered_font_size:   Average font size above which a numbered
                              line is a level-2 heading.
        page_center_x:        Estimated horizontal page center.
        center_tolerance:     Max distance from the page center for a line
                              to count as centered.
        min_line_length:      Lines shorter than this are never headings.
        min_chapter_content:  Chapters below level 1 need more content than
                              this to survive the noise filter.
        book_chapter_count:   More chapters than this classifies the
                              document as a book.
    """

    line_tolerance: float = 5.0
    large_font_size: float = 14.0
    numbered_font_size: float = 12.0
    page_center_x: float = 300.0
    center_tolerance: float = 100.0
    min_line_length: int = 3
    min_chapter_content: int = 100
    book_chapter_count: int = 5

    def __post_init__(self):
        if self.line_tolerance < 0:
            raise ValueError(f"line_tolerance must be >= 0, got {self.line_tolerance}")
        if self.center_tolerance < 0:
            raise ValueError(
                f"center_tolerance must be >= 0, got {self.center_tolerance}"
            )
        if self.min_line_length < 1:
            raise ValueError(
                f"min_line_length must be >= 1, got {self.min_line_length}"
            )


# ---------------------------------------------------------------------------
# Classification labels
# ---------------------------------------------------------------------------


class DocumentType(Enum):
    """Coarse document genre, detected from keywords."""

    ACADEMIC_ARTICLE = "academic_article"
    BOOK = "book"
    REPORT = "report"
    THESIS = "thesis"
    PRESENTATION = "presentation"
    DOCUMENT = "document"
    UNKNOWN = "unknown"


DOCUMENT_TYPE_NAMES = {
    DocumentType.ACADEMIC_ARTICLE: "Akademik Makale",
    DocumentType.BOOK: "Kitap",
    DocumentType.REPORT: "Rapor",
    DocumentType.THESIS: "Tez",
    DocumentType.PRESENTATION: "Sunum",
    DocumentType.DOCUMENT: "Doküman",
    DocumentType.UNKNOWN: "Doküman",
}


class Language(Enum):
    """Two-bucket document language."""

    TURKISH = "tr"
    ENGLISH = "en"


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


@dataclass
class Line:
    """Fragments sharing a baseline, ordered left to right."""

    fragments: List[PositionedFragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(f.text for f in self.fragments).strip()

    @property
    def avg_font_size(self) -> float:
        if not self.fragments:
            return 0.0
        return sum(f.font_size for f in self.fragments) / len(self.fragments)

    @property
    def left(self) -> float:
        return min(f.x for f in self.fragments) if self.fragments else 0.0

    @property
    def right(self) -> float:
        return max(f.right for f in self.fragments) if self.fragments else 0.0

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def y(self) -> float:
        return self.fragments[0].y if self.fragments else 0.0

    def __repr__(self) -> str:
        return f"Line(y={self.y:.0f}, size={self.avg_font_size:.1f}, '{self.text[:50]}')"


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------


@dataclass
class Chapter:
    """
    A detected heading and the text that follows it.

    Level 1 is a major heading, 2 a numbered sub-heading, 3 a
    deeply-numbered sub-heading.  ``content`` is filled in after all
    pages have been analyzed.
    """

    title: str
    page: int
    level: int
    content: str = ""

    def __repr__(self) -> str:
        return (
            f"Chapter(L{self.level}, p{self.page}, '{self.title[:40]}', "
            f"{len(self.content)} chars)"
        )


@dataclass
class TOCEntry:
    """One line of a table of contents."""

    title: str
    page: int
    level: int = 0


@dataclass
class DocumentMetadata:
    total_pages: int = 0
    has_table_of_contents: bool = False
    language: Language = Language.TURKISH
    document_type: DocumentType = DocumentType.UNKNOWN


@dataclass
class DocumentStructure:
    """Navigable structural model of one loaded document."""

    title: str = ""
    author: str = ""
    subject: str = ""
    chapters: List[Chapter] = field(default_factory=list)
    table_of_contents: List[TOCEntry] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def summary(self) -> str:
        """Format a short human-readable description of the document."""
        meta = self.metadata
        lines: List[str] = []
        if self.title:
            lines.append(f"  Title:     {self.title}")
        if self.author:
            lines.append(f"  Author:    {self.author}")
        lines.append(
            f"  Type:      {DOCUMENT_TYPE_NAMES.get(meta.document_type, 'Doküman')}"
        )
        lines.append(f"  Language:  {meta.language.value}")
        lines.append(f"  Pages:     {meta.total_pages}")
        lines.append(f"  Chapters:  {len(self.chapters)}")
        if meta.has_table_of_contents:
            lines.append(f"  Contents:  {len(self.table_of_contents)} entries")
        return "\n".join(lines)
