"""
readalong: document structure and read-along narration.

Heading, chapter and table-of-contents detection, sentence segmentation,
whole-document search, and a reading cursor that narrates sentence by
sentence across pages in step with a two-page display.
"""

from .session import ReaderConfig, ReaderSession

__all__ = [
    "ReaderConfig",
    "ReaderSession",
]
