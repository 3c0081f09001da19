"""
Data models for narration, the reading cursor and the display spread.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from readalong.search.index import SearchResult
from readalong.structure.models import DocumentStructure, TOCEntry


class PlaybackState(Enum):
    """Reading cursor state.  Stopping returns the cursor to ``IDLE``."""

    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()


class NarrationEventKind(Enum):
    STARTED = auto()
    ENDED = auto()
    PAUSED = auto()
    RESUMED = auto()


# ------------------------------------------------------------------
# Narration boundary
# ------------------------------------------------------------------


@dataclass(frozen=True)
class Voice:
    """A voice offered by a narration service."""

    name: str
    lang: str  # BCP-47 tag, e.g. "tr-TR"
    local_service: bool = True

    @property
    def language_code(self) -> str:
        """Primary language subtag, lower-cased (``"en-GB"`` → ``"en"``)."""
        return self.lang.split("-")[0].lower()


@dataclass(frozen=True)
class UtteranceRequest:
    """
    One sentence handed to a narration service.

    ``utterance_id`` is assigned by the reading cursor and increases
    monotonically; events carrying an older id are ignored.
    """

    text: str
    language_tag: str
    voice_name: Optional[str] = None
    rate: float = 0.8
    pitch: float = 1.0
    volume: float = 1.0
    utterance_id: int = 0

    def __repr__(self) -> str:
        return (
            f"UtteranceRequest(#{self.utterance_id}, {self.language_tag}, "
            f"voice={self.voice_name}, '{self.text[:40]}')"
        )


@dataclass(frozen=True)
class NarrationEvent:
    kind: NarrationEventKind
    utterance_id: int


@dataclass
class NarrationSettings:
    """
    Voice and prosody used for every utterance.

    Attributes:
        selected_voice:          Voice name chosen by the user (empty for
                                 automatic selection).
        default_language_prefix: Language prefix used to pick a voice when
                                 no voice is selected.
        default_language_tag:    Tag sent when no matching voice exists.
        rate:                    Speech rate (1.0 = normal).
        pitch:                   Voice pitch, 0..2.
        volume:                  Output volume, 0..1.
    """

    selected_voice: str = ""
    default_language_prefix: str = "tr"
    default_language_tag: str = "tr-TR"
    rate: float = 0.8
    pitch: float = 1.0
    volume: float = 1.0

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"rate must be > 0, got {self.rate}")
        if not 0.0 <= self.pitch <= 2.0:
            raise ValueError(f"pitch must be within [0, 2], got {self.pitch}")
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"volume must be within [0, 1], got {self.volume}")


# ------------------------------------------------------------------
# Display and UI
# ------------------------------------------------------------------


@dataclass(frozen=True)
class DisplaySpread:
    """
    Two facing pages.  ``left_page`` is odd whenever the document has
    pages; ``right_page`` is ``None`` past the last page.
    """

    left_page: int = 1
    right_page: Optional[int] = None

    def shows(self, page: int) -> bool:
        return page == self.left_page or page == self.right_page


@dataclass
class ReaderSnapshot:
    """Everything a UI needs to render the reader after a transition."""

    current_page: int = 1
    total_pages: int = 0
    current_sentence: Optional[str] = None
    is_playing: bool = False
    is_paused: bool = False
    search_results: List[SearchResult] = field(default_factory=list)
    table_of_contents: List[TOCEntry] = field(default_factory=list)
    document_structure: Optional[DocumentStructure] = None
    reading_page: int = 1
    spread: DisplaySpread = field(default_factory=DisplaySpread)
    active_result: Optional[SearchResult] = None
