"""
PDF document reading for the reading engine.

Opens a document with PyMuPDF and yields one PageContent per page,
plus the document's metadata record.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

import fitz  # PyMuPDF

from core.page.models import PageContent
from core.page.text_layer import PageTextLayer

logger = logging.getLogger(__name__)

METADATA_FIELDS = ("title", "author", "subject")


class PDFDocumentReader:
    """
    Keeps one PDF open and extracts its pages on demand.

    Usage::

        with PDFDocumentReader() as reader:
            ok, total = reader.load_pdf("book.pdf")
            for content in reader.iter_pages():
                ...
    """

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.path: Optional[str] = None

    def load_pdf(self, file_path: str) -> Tuple[bool, int]:
        """
        Open *file_path*, closing any document opened before.

        Returns:
            ``(True, page_count)`` on success, ``(False, 0)`` if PyMuPDF
            cannot open the file.
        """
        self.close()
        try:
            doc = fitz.open(file_path)
        except Exception as e:
            logger.error("Error loading PDF '%s': %s", file_path, e)
            return False, 0

        self.doc = doc
        self.total_pages = doc.page_count
        self.path = file_path
        logger.debug("Opened %s (%d pages)", file_path, self.total_pages)
        return True, self.total_pages

    def close(self) -> None:
        if self.doc is not None:
            self.doc.close()
        self.doc = None
        self.total_pages = 0
        self.path = None

    def is_loaded(self) -> bool:
        return self.doc is not None

    def extract_page(self, page_index: int) -> PageContent:
        """
        Text and positioned fragments of the 0-based page *page_index*.

        Out-of-range or unreadable pages give an empty PageContent, so a
        single damaged page does not abort the document.
        """
        number = page_index + 1
        if self.doc is None or not 0 <= page_index < self.total_pages:
            return PageContent(index=number)

        try:
            page = self.doc.load_page(page_index)
        except Exception as e:
            logger.warning("Could not load page %d: %s", number, e)
            return PageContent(index=number)
        return PageTextLayer(page).to_page_content(number)

    def iter_pages(self) -> Iterator[PageContent]:
        for idx in range(self.total_pages):
            yield self.extract_page(idx)

    def metadata(self) -> Dict[str, str]:
        """
        ``{"title", "author", "subject"}`` from the document info.

        Missing or unreadable fields come back as empty strings.
        """
        info = dict.fromkeys(METADATA_FIELDS, "")
        if self.doc is None:
            return info

        try:
            raw = self.doc.metadata or {}
        except Exception as e:
            logger.info("Metadata unavailable: %s", e)
            return info

        for key in METADATA_FIELDS:
            info[key] = (raw.get(key) or "").strip()
        return info

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"PDFDocumentReader(path={self.path!r}, pages={self.total_pages})"
