import pytest

pytest.importorskip("pydub")

from readalong.tts.audio_builder import AudioBuilder  # noqa: E402
from readalong.tts.base_engine import wav_duration  # noqa: E402
from tests.helpers import FakeEngine  # noqa: E402


@pytest.fixture
def engine():
    return FakeEngine()


def test_speech_and_silence_accumulate(engine):
    builder = AudioBuilder(sample_rate=engine.sample_rate)
    assert builder.is_empty

    builder.add_speech(engine.silence(0.2))
    builder.add_silence(0.3)
    builder.add_silence(-1)
    builder.add_speech(b"")
    assert builder.duration == pytest.approx(0.5, abs=0.01)


def test_wav_export(engine, tmp_path):
    builder = AudioBuilder(sample_rate=engine.sample_rate)
    builder.add_speech(engine.silence(0.25), gain_db=-6.0)
    builder.add_silence(0.25)
    builder.normalize()
    builder.fade_edges(ms=10)

    path = builder.export(str(tmp_path / "nested" / "out.wav"))
    assert path.exists()
    assert wav_duration(path.read_bytes()) == pytest.approx(0.5, abs=0.01)


def test_render_service_exports_wav(engine, tmp_path):
    from readalong.playback.cursor import ReadingCursor
    from readalong.tts.render_service import EngineNarrationService

    service = EngineNarrationService(engine, sentence_pause=0.1)
    cursor = ReadingCursor(service)
    cursor.load(["Bir. İki."])
    cursor.play()
    service.run_until_idle()

    path = service.export(str(tmp_path / "narration.wav"))
    assert path is not None
    assert wav_duration(path.read_bytes()) == pytest.approx(service.total_duration, abs=0.02)
