"""
Classifies visual lines as headings using typographic and textual cues.

Rules are tried in priority order and the first match wins:

1. Large font that is centered or upper-case → level 1.
2. Single-part leading number (``3.``, ``4)``) in a slightly enlarged
   font → level 2.
3. Any heading pattern (chapter keyword, numbering, all-caps run,
   section keyword) → level 3 for two-part numbering (``1.2``),
   otherwise level 2.

This is a best-effort classifier; it has no notion of columns or
running headers.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .models import Line, StructureConfig

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# "3." or "4)" that is not the start of "1.2"-style numbering
_RE_LEADING_NUMBER = re.compile(r"^\d+[.)](?!\d)\s*")
_RE_TWO_PART_NUMBER = re.compile(r"^\d+\.\d+")

_HEADING_PATTERNS = (
    re.compile(r"^(BÖLÜM|CHAPTER|BAB|KONU|DERS|UNIT)\s*\d+", re.IGNORECASE),
    re.compile(r"^(\d+[.)]\s*)(.*)"),
    re.compile(r"^([A-ZÜĞŞÇÖİI\s]{5,})$"),
    re.compile(r"^(\d+\.\d+[.\s]*)(.*)"),
    re.compile(
        r"^(GİRİŞ|INTRODUCTION|ÖZET|ABSTRACT|SONUÇ|CONCLUSION|KAYNAKLAR|REFERENCES)",
        re.IGNORECASE,
    ),
)


# ---------------------------------------------------------------------------
# Line features
# ---------------------------------------------------------------------------


@dataclass
class LineFeatures:
    """Typographic features of one line."""

    text: str
    avg_font_size: float
    is_centered: bool
    is_upper_case: bool
    has_leading_number: bool

    @classmethod
    def from_line(cls, line: Line, config: StructureConfig) -> "LineFeatures":
        text = line.text
        return cls(
            text=text,
            avg_font_size=line.avg_font_size,
            is_centered=abs(line.center_x - config.page_center_x)
            < config.center_tolerance,
            is_upper_case=text == text.upper() and len(text) > 3,
            has_leading_number=bool(_RE_LEADING_NUMBER.match(text)),
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def matches_heading_pattern(text: str) -> bool:
    """True if *text* looks like a heading by wording alone."""
    return any(p.match(text) for p in _HEADING_PATTERNS)


def classify_line(line: Line, config: Optional[StructureConfig] = None) -> Optional[int]:
    """
    Return the heading level of *line*, or ``None`` for body text.

    Lines whose trimmed text is shorter than ``config.min_line_length``
    are never headings.
    """
    config = config or StructureConfig()
    if len(line.text) < config.min_line_length:
        return None

    features = LineFeatures.from_line(line, config)
    return classify_features(features, config)


def classify_features(features: LineFeatures, config: StructureConfig) -> Optional[int]:
    """Apply the heading rules to precomputed features."""
    text = features.text

    if features.avg_font_size > config.large_font_size and (
        features.is_centered or features.is_upper_case
    ):
        return 1

    if features.has_leading_number and features.avg_font_size > config.numbered_font_size:
        return 2

    if matches_heading_pattern(text):
        return 3 if _RE_TWO_PART_NUMBER.match(text) else 2

    return None
