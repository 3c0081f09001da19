"""
Extraction layer for the readalong engine.
Page text and positioned fragments from PDF files via PyMuPDF.
"""

from .document import PDFDocumentReader
from .page import PageContent, PageTextLayer, PositionedFragment

__all__ = [
    "PDFDocumentReader",
    "PageContent",
    "PageTextLayer",
    "PositionedFragment",
]
