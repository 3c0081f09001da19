"""
Positioned text data models for PDF pages.

These are the records handed from the extraction layer to the structure
analyzer: one fragment per text run, with its position and font size, and
one PageContent per page.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class PositionedFragment:
    """
    A run of text with its position on the page.

    Coordinates are in PDF user space with ``y`` growing upward, so
    fragments higher on the page have larger ``y`` values.
    """

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_size: float = 12.0
    font_name: str = ""

    @property
    def right(self) -> float:
        return self.x + self.width

    def __repr__(self) -> str:
        preview = self.text[:30].replace("\n", " ")
        return (
            f"PositionedFragment('{preview}', x={self.x:.0f}, y={self.y:.0f}, "
            f"size={self.font_size:.1f})"
        )


@dataclass
class PageContent:
    """Everything the extraction layer yields for a single page."""

    index: int  # 1-based
    text: str = ""
    fragments: List[PositionedFragment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
