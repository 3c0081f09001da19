"""
Offline narration: renders every utterance the reading cursor speaks
with a speech engine and assembles the result into one audio file.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from readalong.playback.models import UtteranceRequest, Voice
from readalong.playback.narrator import QueuedNarrationService

from .base_engine import SpeechEngine, wav_duration

logger = logging.getLogger(__name__)


@dataclass
class RenderedSentence:
    """One synthesised utterance and the pause that follows it."""

    utterance_id: int
    wav: bytes
    volume: float = 1.0
    pause_after: float = 0.0

    @property
    def duration(self) -> float:
        return wav_duration(self.wav)


class EngineNarrationService(QueuedNarrationService):
    """
    Narration service backed by a :class:`SpeechEngine`.

    Each utterance is synthesised when :meth:`run_until_idle` reaches it.
    Failed sentences are logged and skipped rather than aborting the run.

    Args:
        engine:         Speech engine.
        voices:         Voices offered to voice selection.
        sentence_pause: Silence after every sentence, in seconds.
        progress:       Optional tqdm bar advanced once per sentence.
    """

    def __init__(
        self,
        engine: SpeechEngine,
        voices: Optional[List[Voice]] = None,
        sentence_pause: float = 0.35,
        progress=None,
    ):
        super().__init__(voices)
        self.engine = engine
        self.sentence_pause = sentence_pause
        self.progress = progress
        self.rendered: List[RenderedSentence] = []
        self.failed = 0

    def _render(self, request: UtteranceRequest) -> None:
        if request.voice_name and not self.engine.select_voice(request.voice_name):
            logger.debug("Voice '%s' unavailable, keeping current", request.voice_name)

        try:
            wav = self.engine.synthesize(request.text, speed=request.rate)
        except RuntimeError as e:
            logger.warning("TTS failed, skipping sentence #%d: %s", request.utterance_id, e)
            self.failed += 1
            return
        finally:
            if self.progress is not None:
                self.progress.update(1)

        sentence = RenderedSentence(
            utterance_id=request.utterance_id,
            wav=wav,
            volume=request.volume,
            pause_after=self.sentence_pause,
        )
        self.rendered.append(sentence)
        logger.debug(
            "[#%d %.2fx] %.1fs | %s",
            request.utterance_id,
            request.rate,
            sentence.duration,
            request.text[:65],
        )

    @property
    def total_duration(self) -> float:
        return sum(s.duration + s.pause_after for s in self.rendered)

    def export(
        self,
        output_path: str,
        bitrate: str = "192k",
        normalize_dBFS: float = -20.0,
        fade_ms: int = 30,
    ) -> Optional[Path]:
        """
        Assemble the rendered sentences and write them to *output_path*
        (WAV for a ``.wav`` suffix, MP3 otherwise).

        Returns:
            The written path, or ``None`` if nothing was rendered.
        """
        from .audio_builder import AudioBuilder

        if not self.rendered:
            logger.warning("No audio produced, nothing to export")
            return None

        builder = AudioBuilder(sample_rate=self.engine.sample_rate)
        for sentence in self.rendered:
            if sentence.volume <= 0:
                builder.add_silence(sentence.duration)
            else:
                builder.add_speech(sentence.wav, gain_db=20 * math.log10(sentence.volume))
            builder.add_silence(sentence.pause_after)

        builder.normalize(target_dBFS=normalize_dBFS)
        builder.fade_edges(ms=fade_ms)
        return builder.export(output_path, bitrate=bitrate)


class KokoroNarrationService(EngineNarrationService):
    """:class:`EngineNarrationService` over a :class:`KokoroEngine`."""

    def __init__(
        self,
        voice: str = "af_heart",
        lang_code: str = "a",
        sentence_pause: float = 0.35,
        progress=None,
    ):
        from .kokoro_engine import KokoroEngine, kokoro_voices

        super().__init__(
            KokoroEngine(voice=voice, lang_code=lang_code),
            voices=kokoro_voices(),
            sentence_pause=sentence_pause,
            progress=progress,
        )
