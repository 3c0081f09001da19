"""
The reading cursor: sentence-by-sentence narration across pages.

The cursor is the only writer of the reading page and the sentence
position.  Every transition that replaces the current utterance first
cancels narration and invalidates the active utterance id, so an
``ended`` event that arrives late for a cancelled sentence is ignored
instead of advancing the new state.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from readalong.script.sentence_segmenter import clean_utterance, split_sentences

from .locator import locate_sentence_page
from .models import (
    NarrationEvent,
    NarrationEventKind,
    NarrationSettings,
    PlaybackState,
    UtteranceRequest,
)
from .narrator import NarrationService
from .voices import select_voice

logger = logging.getLogger(__name__)


class ReadingCursor:
    """
    Drives narration through a document one sentence at a time.

    Usage::

        cursor = ReadingCursor(narrator, on_page_change=display.follow)
        cursor.load(pages)
        cursor.play()

    Args:
        narrator:       Narration service; the cursor registers itself
                        as a listener.
        settings:       Voice and prosody for each utterance.
        on_page_change: Called with the new reading page whenever it
                        changes.
        on_update:      Called after every state transition.
    """

    def __init__(
        self,
        narrator: NarrationService,
        settings: Optional[NarrationSettings] = None,
        on_page_change: Optional[Callable[[int], None]] = None,
        on_update: Optional[Callable[[], None]] = None,
    ):
        self._narrator = narrator
        self.settings = settings or NarrationSettings()
        self.on_page_change = on_page_change
        self.on_update = on_update

        self._pages: Tuple[str, ...] = ()
        self._current_page = 1
        self._queued_page = 1
        self._sentences: List[str] = []
        self._sentence_index = 0
        self._state = PlaybackState.IDLE
        self._highlight: Optional[str] = None

        self._next_id = 0
        self._active_id: Optional[int] = None
        # Set while narrating a clicked block that already runs to the end
        self._through_end = False
        # An ``ended`` event arrived while paused
        self._pending_advance = False

        narrator.add_listener(self.handle_event)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def queued_page(self) -> int:
        return self._queued_page

    @property
    def total_pages(self) -> int:
        return len(self._pages)

    @property
    def sentences(self) -> List[str]:
        return list(self._sentences)

    @property
    def sentence_index(self) -> int:
        return self._sentence_index

    @property
    def current_sentence(self) -> Optional[str]:
        """The highlighted sentence, if any."""
        return self._highlight

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self._state is PlaybackState.PAUSED

    # ------------------------------------------------------------------
    # Document and queue
    # ------------------------------------------------------------------

    def load(self, pages: Sequence[str]) -> None:
        """Replace the document.  The cursor returns to page 1, idle."""
        self._cancel_narration()
        self._pages = tuple(pages)
        self._sentences = []
        self._sentence_index = 0
        self._highlight = None
        self._state = PlaybackState.IDLE
        self._through_end = False
        self._queued_page = 1
        self._set_page(1)
        self._notify()

    def queue_page(self, page: int) -> bool:
        """
        Choose the page a fresh :meth:`play` starts from.  An active
        cursor keeps narrating where it is.

        Returns:
            ``False`` if *page* is out of range.
        """
        if not self._valid_page(page):
            return False
        self._queued_page = page
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def play(self) -> None:
        """
        Resume in place when paused mid-utterance; otherwise start
        narrating the queued page from its first sentence.
        """
        if self._resume_in_place():
            return

        text = self._page_text(self._queued_page)
        if not text.strip():
            logger.debug("Page %d has no text, nothing to play", self._queued_page)
            return

        self._cancel_narration()
        self._through_end = False
        self._set_page(self._queued_page)
        self._sentences = split_sentences(text)
        self._sentence_index = 0
        self._state = PlaybackState.PLAYING
        logger.info(
            "Playing page %d (%d sentences)", self._current_page, len(self._sentences)
        )
        self._narrate_current()

    def advance(self) -> None:
        """
        Move to the next sentence, rolling over to the next page with
        text at the end of a page.  Only acts while playing.
        """
        if self._state is not PlaybackState.PLAYING:
            return

        if self._sentence_index < len(self._sentences) - 1:
            self._sentence_index += 1
            self._narrate_current()
            return

        self._sentence_index = len(self._sentences)
        if self._through_end:
            self._finish()
            return

        page = self._current_page
        while page < self.total_pages:
            page += 1
            sentences = split_sentences(self._page_text(page))
            if not sentences:
                logger.debug("Skipping page %d: no sentences", page)
                continue
            self._sentences = sentences
            self._sentence_index = 0
            self._set_page(page)
            logger.info("Rolled over to page %d (%d sentences)", page, len(sentences))
            self._narrate_current()
            return

        self._finish()

    def pause(self) -> None:
        if self._state is not PlaybackState.PLAYING:
            return
        self._narrator.pause()
        self._state = PlaybackState.PAUSED
        self._notify()

    def resume(self) -> None:
        if self._resume_in_place():
            return
        self.play()

    def stop(self) -> None:
        """Cancel narration and forget the sentence list."""
        self._cancel_narration()
        self._sentences = []
        self._sentence_index = 0
        self._highlight = None
        self._through_end = False
        self._state = PlaybackState.IDLE
        self._notify()

    def play_from_sentence(self, page: int, index: int) -> bool:
        """
        Narrate from the *index*-th sentence of *page* to the end of the
        document as one block.

        Returns:
            ``False`` (and nothing changes) if the page or sentence does
            not exist.
        """
        if not self._valid_page(page):
            return False
        text = self._page_text(page)
        page_sentences = split_sentences(text)
        if not 0 <= index < len(page_sentences):
            return False

        # Skip earlier sentences so a repeated sentence starts at the clicked copy
        pos = 0
        for sentence in page_sentences[:index]:
            pos = text.find(sentence, pos) + len(sentence)
        start = text.find(page_sentences[index], pos)
        parts = [text[start:]]
        parts.extend(self._pages[page:])
        sentences = split_sentences("\n".join(parts))

        self._cancel_narration()
        self._set_page(page)
        self._queued_page = page
        self._sentences = sentences
        self._sentence_index = 0
        self._through_end = True
        self._state = PlaybackState.PLAYING
        logger.info(
            "Playing from page %d sentence %d (%d sentences to the end)",
            page,
            index + 1,
            len(sentences),
        )
        self._narrate_current()
        return True

    def highlight(self, page: int, sentence: str) -> bool:
        """
        Stop narration and park the cursor on *page* with *sentence*
        highlighted.  The next :meth:`play` starts from *page*.
        """
        if not self._valid_page(page):
            return False
        self._cancel_narration()
        self._sentences = []
        self._sentence_index = 0
        self._through_end = False
        self._state = PlaybackState.IDLE
        self._queued_page = page
        self._highlight = sentence
        self._set_page(page)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Narration events
    # ------------------------------------------------------------------

    def handle_event(self, event: NarrationEvent) -> None:
        """Listener for the narration service."""
        if self._active_id is None or event.utterance_id != self._active_id:
            logger.debug(
                "Ignoring stale %s for utterance #%d", event.kind.name, event.utterance_id
            )
            return

        if event.kind is NarrationEventKind.ENDED:
            if self._state is PlaybackState.PLAYING:
                self.advance()
            elif self._state is PlaybackState.PAUSED:
                self._pending_advance = True
        else:
            self._notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resume_in_place(self) -> bool:
        if self._state is not PlaybackState.PAUSED:
            return False

        if self._pending_advance:
            self._pending_advance = False
            self._state = PlaybackState.PLAYING
            self.advance()
            return True

        if self._narrator.paused or self._narrator.speaking:
            if self._narrator.paused:
                self._narrator.resume()
            self._state = PlaybackState.PLAYING
            self._notify()
            return True

        return False

    def _narrate_current(self) -> None:
        sentence = self._sentences[self._sentence_index]

        page = locate_sentence_page(self._pages, sentence, self._current_page)
        if page is None:
            logger.debug("Sentence not located, staying on page %d", self._current_page)
        else:
            self._set_page(page)

        self._highlight = sentence
        self._next_id += 1
        self._active_id = self._next_id
        request = self._build_request(sentence, self._active_id)
        logger.debug(
            "Narrating #%d p%d [%d/%d] %s",
            request.utterance_id,
            self._current_page,
            self._sentence_index + 1,
            len(self._sentences),
            sentence[:60],
        )
        self._notify()
        self._narrator.speak(request)

    def _build_request(self, sentence: str, utterance_id: int) -> UtteranceRequest:
        s = self.settings
        voice = select_voice(
            self._narrator.voices(), s.selected_voice, s.default_language_prefix
        )
        return UtteranceRequest(
            text=clean_utterance(sentence),
            language_tag=voice.lang if voice else s.default_language_tag,
            voice_name=voice.name if voice else None,
            rate=s.rate,
            pitch=s.pitch,
            volume=s.volume,
            utterance_id=utterance_id,
        )

    def _finish(self) -> None:
        logger.info("Reached the end of the document")
        self._active_id = None
        self._highlight = None
        self._through_end = False
        self._state = PlaybackState.IDLE
        self._notify()

    def _cancel_narration(self) -> None:
        self._active_id = None
        self._pending_advance = False
        self._narrator.cancel()

    def _set_page(self, page: int) -> None:
        if page == self._current_page:
            return
        self._current_page = page
        if self.on_page_change is not None:
            self.on_page_change(page)

    def _page_text(self, page: int) -> str:
        if not self._valid_page(page):
            return ""
        return self._pages[page - 1]

    def _valid_page(self, page: int) -> bool:
        return 1 <= page <= len(self._pages)

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update()

    def __repr__(self) -> str:
        return (
            f"ReadingCursor({self._state.name}, page={self._current_page}/"
            f"{self.total_pages}, sentence={self._sentence_index}/{len(self._sentences)})"
        )
