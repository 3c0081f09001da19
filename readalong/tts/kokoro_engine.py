"""
Kokoro speech engine.

Synthesises sentences with the Kokoro neural TTS model, locally on CPU
or GPU via PyTorch.  The model auto-downloads from HuggingFace on first
use and is cached locally.
"""

import logging
from typing import List

import numpy as np

from readalong.playback.models import Voice

from .base_engine import SpeechEngine

logger = logging.getLogger(__name__)

_KOKORO_SAMPLE_RATE = 24000

KOKORO_VOICES = {
    # American Female
    "af_heart": {"accent": "American", "gender": "Female", "name": "Heart"},
    "af_bella": {"accent": "American", "gender": "Female", "name": "Bella"},
    "af_nicole": {"accent": "American", "gender": "Female", "name": "Nicole"},
    "af_sarah": {"accent": "American", "gender": "Female", "name": "Sarah"},
    "af_sky": {"accent": "American", "gender": "Female", "name": "Sky"},
    # American Male
    "am_adam": {"accent": "American", "gender": "Male", "name": "Adam"},
    "am_michael": {"accent": "American", "gender": "Male", "name": "Michael"},
    # British Female
    "bf_emma": {"accent": "British", "gender": "Female", "name": "Emma"},
    "bf_isabella": {"accent": "British", "gender": "Female", "name": "Isabella"},
    # British Male
    "bm_george": {"accent": "British", "gender": "Male", "name": "George"},
    "bm_lewis": {"accent": "British", "gender": "Male", "name": "Lewis"},
}

DEFAULT_KOKORO_VOICE = "af_heart"

# Kokoro pipeline language code → BCP-47 tag
LANG_CODE_TAGS = {"a": "en-US", "b": "en-GB"}

_ACCENT_TAGS = {"American": "en-US", "British": "en-GB"}


def kokoro_voices() -> List[Voice]:
    """The Kokoro voices as narration voices, tagged by accent."""
    return [
        Voice(name=voice_id, lang=_ACCENT_TAGS[info["accent"]])
        for voice_id, info in KOKORO_VOICES.items()
    ]


class KokoroEngine(SpeechEngine):
    """
    Neural TTS via the Kokoro model.

    Usage::

        engine = KokoroEngine(voice="af_heart")
        wav_bytes = engine.synthesize("Hello world.", speed=0.8)

    The underlying pipeline is loaded lazily on the first call to
    :meth:`synthesize`.

    Raises:
        ImportError: If ``kokoro`` is not installed.
    """

    def __init__(self, voice: str = DEFAULT_KOKORO_VOICE, lang_code: str = "a"):
        if lang_code not in LANG_CODE_TAGS:
            raise ValueError(f"Unsupported Kokoro lang_code '{lang_code}'")
        self._voice = voice
        self._lang_code = lang_code
        self._pipeline = None

        try:
            import kokoro  # noqa: F401
        except ImportError:
            raise ImportError(
                "kokoro is required for audio narration. "
                "Install with: pip install 'readalong[tts]'"
            )

    def _ensure_pipeline(self):
        if self._pipeline is not None:
            return
        logger.info(
            "Loading Kokoro TTS pipeline (voice=%s, lang=%s)...",
            self._voice,
            self._lang_code,
        )
        from kokoro import KPipeline

        self._pipeline = KPipeline(lang_code=self._lang_code)
        logger.info("Kokoro pipeline ready")

    @property
    def sample_rate(self) -> int:
        return _KOKORO_SAMPLE_RATE

    @property
    def engine_name(self) -> str:
        return f"Kokoro ({self._voice})"

    @property
    def voice(self) -> str:
        return self._voice

    @property
    def language_tag(self) -> str:
        return LANG_CODE_TAGS[self._lang_code]

    def select_voice(self, voice_name: str) -> bool:
        if voice_name not in KOKORO_VOICES:
            return False
        self._voice = voice_name
        return True

    def synthesize(self, text: str, speed: float = 1.0) -> bytes:
        if not text or not text.strip():
            return self.silence(0.0)

        self._ensure_pipeline()

        # Kokoro yields one chunk per phrase for long input
        audio_chunks = []
        try:
            for _graphemes, _phonemes, chunk in self._pipeline(
                text, voice=self._voice, speed=max(0.1, speed)
            ):
                if chunk is not None:
                    audio_chunks.append(np.asarray(chunk, dtype=np.float32))
        except Exception as e:
            raise RuntimeError(f"Kokoro synthesis failed: {e}") from e

        if not audio_chunks:
            return self.silence(0.0)

        audio = np.clip(np.concatenate(audio_chunks), -1.0, 1.0)
        return self.wrap_pcm((audio * 32767).astype(np.int16).tobytes())

    def __repr__(self) -> str:
        return f"KokoroEngine(voice={self._voice}, lang={self.language_tag}, {self.sample_rate}Hz)"
