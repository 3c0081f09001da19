"""Document structure analysis: headings, chapters, contents, profile."""

from .analyzer import analyze_document, analyze_page, assign_chapter_content
from .heading_classifier import classify_line
from .line_grouper import group_into_lines
from .models import (
    Chapter,
    DocumentMetadata,
    DocumentStructure,
    DocumentType,
    Language,
    Line,
    StructureConfig,
    TOCEntry,
)
from .outline import BlockKind, ContentBlock, build_outline, render_outline
from .profile import detect_document_type, detect_language
from .toc_detector import detect_table_of_contents

__all__ = [
    "analyze_document",
    "analyze_page",
    "assign_chapter_content",
    "classify_line",
    "group_into_lines",
    "detect_document_type",
    "detect_language",
    "detect_table_of_contents",
    "build_outline",
    "render_outline",
    "BlockKind",
    "ContentBlock",
    "Chapter",
    "DocumentMetadata",
    "DocumentStructure",
    "DocumentType",
    "Language",
    "Line",
    "StructureConfig",
    "TOCEntry",
]
