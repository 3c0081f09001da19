"""
Span-level text extraction for PDF pages.
"""

import logging
import re
from typing import List

import fitz

from .models import PageContent, PositionedFragment

logger = logging.getLogger(__name__)

_RE_MULTI_WHITESPACE = re.compile(r"\s+")


class PageTextLayer:
    """
    Extracts positioned text fragments and plain text from a PDF page.

    Each non-blank span becomes one :class:`PositionedFragment`.  The
    vertical coordinate is taken from the span baseline and flipped so it
    grows upward, which is the orientation the line grouper expects.
    ``full_text`` keeps one output line per PDF line so that the table of
    contents detector can inspect leader lines.
    """

    def __init__(self, page: fitz.Page):
        self.page = page
        self.page_height: float = page.rect.height
        self.fragments: List[PositionedFragment] = []
        self.lines: List[str] = []

        self._extract_text_structure()

    def _extract_text_structure(self):
        """Walk the blocks/lines/spans dict and collect fragments."""
        try:
            text_dict = self.page.get_text("dict", flags=fitz.TEXT_PRESERVE_WHITESPACE)
        except Exception as e:
            logger.warning("Failed to extract text from page %d: %s", self.page.number, e)
            return

        for block_data in text_dict.get("blocks", []):
            # Skip image blocks
            if block_data.get("type") != 0:
                continue

            for line_data in block_data.get("lines", []):
                parts: List[str] = []

                for span_data in line_data.get("spans", []):
                    text = span_data.get("text", "")
                    parts.append(text)
                    if not text.strip():
                        continue

                    x0, y0, x1, y1 = span_data.get("bbox", (0, 0, 0, 0))
                    origin = span_data.get("origin", (x0, y1))
                    self.fragments.append(
                        PositionedFragment(
                            text=text,
                            x=float(x0),
                            y=self.page_height - float(origin[1]),
                            width=float(x1 - x0),
                            height=float(y1 - y0),
                            font_size=float(span_data.get("size", 12.0)),
                            font_name=span_data.get("font", ""),
                        )
                    )

                line_text = _RE_MULTI_WHITESPACE.sub(" ", "".join(parts)).strip()
                if line_text:
                    self.lines.append(line_text)

    @property
    def full_text(self) -> str:
        """Page text, one line per PDF text line."""
        return "\n".join(self.lines)

    def to_page_content(self, page_number: int) -> PageContent:
        """Package the layer as the page record consumed by the analyzer."""
        return PageContent(
            index=page_number,
            text=self.full_text,
            fragments=list(self.fragments),
        )

    def __len__(self) -> int:
        return len(self.fragments)
