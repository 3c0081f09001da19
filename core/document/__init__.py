"""PDF document loading."""

from .pdf_reader import PDFDocumentReader

__all__ = ["PDFDocumentReader"]
