"""
Page text extraction for PDF documents.
"""

from .models import PageContent, PositionedFragment
from .text_layer import PageTextLayer

__all__ = [
    "PageTextLayer",
    "PageContent",
    "PositionedFragment",
]
