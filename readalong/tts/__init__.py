"""Offline speech rendering.  Kokoro and pydub are imported on first use."""

from .base_engine import SpeechEngine, wav_duration
from .render_service import (
    EngineNarrationService,
    KokoroNarrationService,
    RenderedSentence,
)

__all__ = [
    "SpeechEngine",
    "wav_duration",
    "EngineNarrationService",
    "KokoroNarrationService",
    "RenderedSentence",
]
