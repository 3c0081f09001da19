"""
Reader session: one loaded document, its structure, search index,
reading cursor and display spread.

Coordinates the read-along workflow:

1. **Extraction**: page texts and positioned fragments, from a PDF via
   PyMuPDF or handed in directly.
2. **Analysis**: headings, chapters, table of contents, document type
   and language, built once per load.
3. **Search index**: every sentence of every page.
4. **Playback**: the reading cursor narrates sentence by sentence while
   the display spread follows the reading page.

Every transition ends with a :class:`ReaderSnapshot` sent to the
session's listener.

Usage::

    from readalong.session import ReaderSession, ReaderConfig

    narrator = QueuedNarrationService()
    session = ReaderSession(narrator, ReaderConfig())
    session.load_pdf("input.pdf")
    session.play()
    narrator.run_until_idle()
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from core.document.pdf_reader import PDFDocumentReader
from core.page.models import PositionedFragment
from readalong.playback.cursor import ReadingCursor
from readalong.playback.display import DisplaySynchronizer
from readalong.playback.models import NarrationSettings, PlaybackState, ReaderSnapshot
from readalong.playback.narrator import NarrationService, QueuedNarrationService
from readalong.search.index import SearchIndex, SearchResult, SearchResults
from readalong.structure.analyzer import analyze_document
from readalong.structure.models import DocumentStructure, StructureConfig

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[ReaderSnapshot], None]


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------


@dataclass
class ReaderConfig:
    """
    All tuneable parameters for a reader session.

    Attributes:
        structure:    Heading, chapter and document-type thresholds.
        narration:    Voice selection and prosody for every utterance.
        disable_tqdm: Suppress progress bars.
    """

    structure: StructureConfig = field(default_factory=StructureConfig)
    narration: NarrationSettings = field(default_factory=NarrationSettings)
    disable_tqdm: bool = True


# ------------------------------------------------------------------
# Session
# ------------------------------------------------------------------


class ReaderSession:
    """
    Owns the single document, structure, search index, cursor and
    display spread of a reader.

    Args:
        narrator: Narration service (an in-process queue by default).
        config:   Session configuration.
        listener: Receives a snapshot after every transition.
    """

    def __init__(
        self,
        narrator: Optional[NarrationService] = None,
        config: Optional[ReaderConfig] = None,
        listener: Optional[SnapshotListener] = None,
    ):
        self.config = config or ReaderConfig()
        self.narrator = narrator or QueuedNarrationService()
        self.listener = listener

        self._pages: Tuple[str, ...] = ()
        self._structure = DocumentStructure()
        self._index = SearchIndex()
        self._results = SearchResults()

        self.display = DisplaySynchronizer(on_manual_turn=self._on_manual_turn)
        self.cursor = ReadingCursor(
            self.narrator,
            settings=self.config.narration,
            on_page_change=self.display.follow,
            on_update=self._emit,
        )

    # ------------------------------------------------------------------
    # Document loading
    # ------------------------------------------------------------------

    def load_document(
        self,
        pages: Sequence[str],
        fragments_by_page: Optional[Sequence[Sequence[PositionedFragment]]] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> DocumentStructure:
        """
        Replace the loaded document.

        Args:
            pages:             Page texts in order.
            fragments_by_page: Positioned fragments per page, for heading
                               detection.
            metadata:          Optional ``{"title", "author", "subject"}``.

        Returns:
            The new :class:`DocumentStructure`.
        """
        self.cursor.stop()

        self._pages = tuple(pages)
        self._structure = analyze_document(
            self._pages,
            fragments_by_page=fragments_by_page,
            metadata=metadata,
            config=self.config.structure,
            disable_tqdm=self.config.disable_tqdm,
        )
        self._index = SearchIndex.build(self._pages)
        self._results = SearchResults()

        self.display.reset(len(self._pages))
        self.cursor.load(self._pages)

        logger.info("Document loaded:\n%s", self._structure.summary())
        self._emit()
        return self._structure

    def load_pdf(self, pdf_path: str) -> DocumentStructure:
        """
        Extract a PDF with PyMuPDF and load it.

        Raises:
            RuntimeError: If the file cannot be opened as a PDF.
        """
        pages: List[str] = []
        fragments: List[List[PositionedFragment]] = []

        with PDFDocumentReader() as reader:
            ok, total = reader.load_pdf(pdf_path)
            if not ok or total == 0:
                raise RuntimeError(f"Could not open PDF: {pdf_path}")

            logger.info("Extracting %d pages from %s", total, pdf_path)
            for content in tqdm(
                reader.iter_pages(),
                total=total,
                desc="Extracting",
                unit="page",
                disable=self.config.disable_tqdm,
            ):
                pages.append(content.text)
                fragments.append(content.fragments)
            metadata = reader.metadata()

        empty = sum(1 for text in pages if not text.strip())
        if empty:
            logger.warning("%d of %d pages have no extractable text", empty, len(pages))

        return self.load_document(pages, fragments, metadata)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def pages(self) -> Tuple[str, ...]:
        return self._pages

    @property
    def total_pages(self) -> int:
        return len(self._pages)

    @property
    def structure(self) -> DocumentStructure:
        return self._structure

    @property
    def results(self) -> SearchResults:
        return self._results

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def play(self) -> None:
        self.cursor.play()

    def pause(self) -> None:
        self.cursor.pause()

    def resume(self) -> None:
        self.cursor.resume()

    def stop(self) -> None:
        self.cursor.stop()

    def toggle(self) -> None:
        """Play/pause button: pause while playing, otherwise play."""
        if self.cursor.state is PlaybackState.PLAYING:
            self.cursor.pause()
        else:
            self.cursor.play()

    def click(self, page: int, sentence_index: int) -> bool:
        """Narrate from a clicked sentence through the end of the document."""
        return self.cursor.play_from_sentence(page, sentence_index)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_spread(self) -> None:
        if self.display.next_spread():
            self._emit()

    def previous_spread(self) -> None:
        if self.display.previous_spread():
            self._emit()

    def go_to_page(self, value: Union[int, str]) -> bool:
        moved = self.display.go_to_page(value)
        if moved:
            self._emit()
        return moved

    def queue_page(self, page: int) -> bool:
        """Show *page* and make it the start of the next :meth:`play`."""
        if not self.cursor.queue_page(page):
            return False
        self.display.follow(page)
        self._emit()
        return True

    def _on_manual_turn(self, left_page: int) -> None:
        self.cursor.queue_page(left_page)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str) -> SearchResults:
        """
        Search every page and show the first match.  Narration stops;
        the next :meth:`play` starts on the page of the active match.
        """
        self._results = SearchResults(query, self._index.search(query))
        logger.info("Search '%s': %d matches", query, len(self._results))
        if self._results.active is not None:
            self._show_result(self._results.active)
        else:
            self._emit()
        return self._results

    def next_result(self) -> Optional[SearchResult]:
        result = self._results.next()
        if result is not None:
            self._show_result(result)
        return result

    def previous_result(self) -> Optional[SearchResult]:
        result = self._results.previous()
        if result is not None:
            self._show_result(result)
        return result

    def _show_result(self, result: SearchResult) -> None:
        self.display.follow(result.page)
        self.cursor.highlight(result.page, result.sentence)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> ReaderSnapshot:
        spread = self.display.spread
        return ReaderSnapshot(
            current_page=spread.left_page,
            total_pages=self.total_pages,
            current_sentence=self.cursor.current_sentence,
            is_playing=self.cursor.is_playing,
            is_paused=self.cursor.is_paused,
            search_results=list(self._results.results),
            table_of_contents=list(self._structure.table_of_contents),
            document_structure=self._structure,
            reading_page=self.cursor.current_page,
            spread=spread,
            active_result=self._results.active,
        )

    def _emit(self) -> None:
        if self.listener is not None:
            self.listener(self.snapshot())

    def __repr__(self) -> str:
        return f"ReaderSession(pages={self.total_pages}, cursor={self.cursor!r})"
