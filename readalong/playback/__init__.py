"""Reading cursor, narration services and the display spread."""

from .cursor import ReadingCursor
from .display import DisplaySynchronizer, left_page_for
from .locator import locate_sentence_page
from .models import (
    DisplaySpread,
    NarrationEvent,
    NarrationEventKind,
    NarrationSettings,
    PlaybackState,
    ReaderSnapshot,
    UtteranceRequest,
    Voice,
)
from .narrator import NarrationService, QueuedNarrationService
from .voices import (
    LANGUAGE_NAMES,
    POPULAR_LANGUAGES,
    available_languages,
    displayed_languages,
    filter_voices,
    select_voice,
    voices_for_language,
)

__all__ = [
    "ReadingCursor",
    "DisplaySynchronizer",
    "left_page_for",
    "locate_sentence_page",
    "DisplaySpread",
    "NarrationEvent",
    "NarrationEventKind",
    "NarrationSettings",
    "PlaybackState",
    "ReaderSnapshot",
    "UtteranceRequest",
    "Voice",
    "NarrationService",
    "QueuedNarrationService",
    "LANGUAGE_NAMES",
    "POPULAR_LANGUAGES",
    "available_languages",
    "displayed_languages",
    "filter_voices",
    "select_voice",
    "voices_for_language",
]
