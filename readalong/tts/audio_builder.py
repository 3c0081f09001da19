"""
Audio builder: joins rendered sentences and the pauses between them
into one track and exports it as MP3 or WAV.
"""

import io
import logging
from pathlib import Path

from pydub import AudioSegment

logger = logging.getLogger(__name__)


class AudioBuilder:
    """
    Incrementally builds an audio track from WAV sentence chunks.

    Usage::

        builder = AudioBuilder(sample_rate=24000)
        builder.add_speech(wav_bytes)
        builder.add_silence(0.4)
        builder.normalize()
        builder.export("output.mp3")
    """

    def __init__(self, sample_rate: int = 24000):
        self._sample_rate = sample_rate
        self._audio = AudioSegment.empty()

    def add_silence(self, duration_seconds: float) -> None:
        if duration_seconds <= 0:
            return
        ms = int(duration_seconds * 1000)
        self._audio += AudioSegment.silent(duration=ms, frame_rate=self._sample_rate)

    def add_speech(self, wav_bytes: bytes, gain_db: float = 0.0) -> None:
        """Append a WAV chunk, adjusted by *gain_db*."""
        if not wav_bytes or len(wav_bytes) <= 44:  # header only
            return
        segment = AudioSegment.from_wav(io.BytesIO(wav_bytes))
        if gain_db:
            segment = segment.apply_gain(gain_db)
        self._audio += segment

    def normalize(self, target_dBFS: float = -20.0) -> None:
        if len(self._audio) == 0:
            return
        current = self._audio.dBFS
        if current == float("-inf"):
            return
        self._audio = self._audio.apply_gain(target_dBFS - current)

    def fade_edges(self, ms: int = 30) -> None:
        """Fade in and out to soften the start and end of the track."""
        if len(self._audio) == 0 or ms <= 0:
            return
        self._audio = self._audio.fade_in(ms).fade_out(ms)

    def export(self, output_path: str, bitrate: str = "192k") -> Path:
        """Export as WAV when *output_path* ends in ``.wav``, else MP3."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".wav":
            self._audio.export(str(path), format="wav")
        else:
            self._audio.export(str(path), format="mp3", bitrate=bitrate)

        dur = self.duration
        logger.info(
            "Exported %s: %.1fs (%.1f min), %.1f MB",
            path,
            dur,
            dur / 60,
            path.stat().st_size / (1024 * 1024),
        )
        return path

    @property
    def duration(self) -> float:
        return len(self._audio) / 1000.0

    @property
    def is_empty(self) -> bool:
        return len(self._audio) == 0

    def __repr__(self) -> str:
        return f"AudioBuilder(duration={self.duration:.1f}s)"
