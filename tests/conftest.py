from pathlib import Path
from typing import List

import fitz
import pytest

from readalong.playback.narrator import QueuedNarrationService

SAMPLE_PAGES = [
    ["The future starts here.", "This is a test."],
    ["Another page follows.", "The future came again."],
    ["Last words."],
]


@pytest.fixture
def two_pages() -> List[str]:
    return ["Merhaba. Nasılsın?", "İyiyim, sağol."]


@pytest.fixture
def narrator() -> QueuedNarrationService:
    return QueuedNarrationService()


@pytest.fixture
def sample_pdf(tmp_path) -> Path:
    """Three-page text PDF built with PyMuPDF, one line per sentence."""
    path = tmp_path / "sample.pdf"
    doc = fitz.open()
    for lines in SAMPLE_PAGES:
        page = doc.new_page()
        for i, line in enumerate(lines):
            page.insert_text((72, 100 + 20 * i), line, fontsize=12)
    doc.set_metadata({"title": "Sample Book", "author": "A. Writer"})
    doc.save(str(path))
    doc.close()
    return path
