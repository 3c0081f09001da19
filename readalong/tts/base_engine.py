"""
Abstract base class for speech engines used by the offline renderer.
"""

import io
import logging
import wave
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class SpeechEngine(ABC):
    """
    Common interface for engines that turn one sentence into WAV bytes.

    Output is 16-bit mono PCM at :attr:`sample_rate`.
    """

    sample_width = 2
    channels = 1

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """Audio sample rate in Hz."""

    @property
    @abstractmethod
    def engine_name(self) -> str:
        """Human-readable engine identifier."""

    @abstractmethod
    def synthesize(self, text: str, speed: float = 1.0) -> bytes:
        """
        Synthesise *text* to a complete WAV file.

        Args:
            text:  Sentence to speak.
            speed: Rate multiplier (1.0 = normal, <1 = slower).

        Returns:
            WAV bytes (16-bit mono PCM).
        """

    def select_voice(self, voice_name: str) -> bool:
        """
        Switch to *voice_name* if the engine has it.

        Returns:
            ``True`` if the voice is now active.
        """
        return False

    def silence(self, duration_seconds: float) -> bytes:
        """WAV bytes holding *duration_seconds* of silence."""
        num_samples = int(self.sample_rate * max(0.0, duration_seconds))
        return self.wrap_pcm(b"\x00" * self.sample_width * num_samples * self.channels)

    def wrap_pcm(self, pcm_data: bytes) -> bytes:
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wf:
            wf.setnchannels(self.channels)
            wf.setsampwidth(self.sample_width)
            wf.setframerate(self.sample_rate)
            wf.writeframes(pcm_data)
        return buf.getvalue()


def wav_duration(wav_bytes: bytes) -> float:
    """Duration in seconds of a WAV byte string (0.0 if unreadable)."""
    try:
        with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
            rate = wf.getframerate()
            return wf.getnframes() / rate if rate > 0 else 0.0
    except (wave.Error, EOFError) as e:
        logger.debug("Unreadable WAV chunk: %s", e)
        return 0.0
