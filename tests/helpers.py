from core.page.models import PositionedFragment
from readalong.tts.base_engine import SpeechEngine


def fragment(text: str, x: float = 72.0, y: float = 700.0, size: float = 11.0) -> PositionedFragment:
    # Rough Helvetica advance width, enough for centering checks
    return PositionedFragment(
        text=text, x=x, y=y, width=len(text) * size * 0.5, height=size, font_size=size
    )


def centered(text: str, y: float, size: float) -> PositionedFragment:
    f = fragment(text, y=y, size=size)
    f.x = 300.0 - f.width / 2
    return f


class FakeEngine(SpeechEngine):
    """Ten milliseconds of silence per character; fails on 'boom'."""

    def __init__(self):
        self.voice = "default"
        self.speeds = []

    @property
    def sample_rate(self) -> int:
        return 8000

    @property
    def engine_name(self) -> str:
        return "fake"

    def select_voice(self, voice_name: str) -> bool:
        if voice_name.startswith("fake_"):
            self.voice = voice_name
            return True
        return False

    def synthesize(self, text: str, speed: float = 1.0) -> bytes:
        if "boom" in text:
            raise RuntimeError("engine exploded")
        self.speeds.append(speed)
        return self.silence(len(text) * 0.01)
