import pytest

from readalong.playback.models import PlaybackState
from readalong.playback.narrator import QueuedNarrationService
from readalong.session import ReaderConfig, ReaderSession
from readalong.structure.models import StructureConfig

from tests.helpers import fragment

PAGES = [
    "İÇİNDEKİLER\nGiriş ........ 2\nSonuç ........ 4",
    "Gelecek burada başlıyor. Bu bir deneme.",
    "Ara sayfa. Yağmur yağıyor.",
    "Gelecek yine geldi. Son cümle.",
    "Ek sayfa.",
]


@pytest.fixture
def snapshots():
    return []


@pytest.fixture
def session(narrator, snapshots):
    s = ReaderSession(narrator, ReaderConfig(), listener=snapshots.append)
    s.load_document(PAGES)
    return s


def test_load_builds_structure_and_resets_view(session, snapshots):
    snap = session.snapshot()
    assert snap.total_pages == 5
    assert snap.current_page == 1
    assert snap.reading_page == 1
    assert snap.spread.left_page == 1
    assert snap.spread.right_page == 2
    assert [e.title for e in snap.table_of_contents] == ["Giriş", "Sonuç"]
    assert snap.document_structure.metadata.has_table_of_contents
    assert snapshots


def test_playback_moves_the_display(session, narrator):
    session.go_to_page(3)
    session.play()
    narrator.run_until_idle(limit=2)

    snap = session.snapshot()
    assert snap.reading_page == 4
    assert snap.is_playing
    assert snap.spread.left_page == 3
    assert snap.current_sentence == "Gelecek yine geldi."

    narrator.run_until_idle()
    snap = session.snapshot()
    assert not snap.is_playing
    assert snap.spread.left_page == 5


def test_search_highlights_and_navigates(session, narrator):
    session.play()
    narrator.pump()

    results = session.search("gelecek")
    assert [r.page for r in results.results] == [2, 4]
    assert not narrator.speaking

    snap = session.snapshot()
    assert snap.active_result.page == 2
    assert snap.current_sentence == "Gelecek burada başlıyor."
    assert snap.reading_page == 2
    assert not snap.is_playing

    session.next_result()
    snap = session.snapshot()
    assert snap.active_result.page == 4
    assert snap.spread.left_page == 3
    assert snap.current_sentence == "Gelecek yine geldi."

    session.next_result()
    assert session.snapshot().active_result.page == 2

    session.play()
    assert session.cursor.current_page == 2
    assert session.cursor.sentences[0] == "Gelecek burada başlıyor."


def test_empty_search(session):
    results = session.search("bulunamaz")
    assert len(results) == 0
    assert session.snapshot().active_result is None
    assert session.next_result() is None


def test_manual_turn_queues_page_but_leaves_active_cursor(session, narrator):
    session.play()
    narrator.pump()

    session.next_spread()
    snap = session.snapshot()
    assert snap.current_page == 3
    assert snap.reading_page == 1
    assert snap.is_playing
    assert session.cursor.queued_page == 3

    session.stop()
    session.play()
    assert session.cursor.current_page == 3


def test_invalid_go_to_page_changes_nothing(session, snapshots):
    before = len(snapshots)
    assert not session.go_to_page("xyz")
    assert not session.go_to_page(99)
    assert len(snapshots) == before
    assert session.snapshot().current_page == 1


def test_click_narrates_to_the_end(session, narrator):
    session.click(4, 1)
    assert session.cursor.sentences == ["Son cümle.", "Ek sayfa."]
    narrator.run_until_idle()
    assert [r.text for r in narrator.spoken] == ["Son cümle.", "Ek sayfa."]
    assert session.cursor.state is PlaybackState.IDLE


def test_toggle(session):
    session.toggle()
    assert session.cursor.state is PlaybackState.PLAYING
    session.toggle()
    assert session.cursor.state is PlaybackState.PAUSED
    session.toggle()
    assert session.cursor.state is PlaybackState.PLAYING


def test_queue_page(session):
    assert session.queue_page(4)
    assert session.snapshot().spread.left_page == 3
    assert not session.queue_page(0)


def test_new_document_replaces_everything(session, narrator):
    session.play()
    session.search("gelecek")
    session.load_document(["Yeni belge."])

    snap = session.snapshot()
    assert snap.total_pages == 1
    assert snap.search_results == []
    assert snap.table_of_contents == []
    assert snap.spread.right_page is None
    assert not narrator.speaking


def test_load_pdf_failure_raises(tmp_path, narrator):
    bogus = tmp_path / "bozuk.pdf"
    bogus.write_text("not a pdf")
    session = ReaderSession(narrator)
    with pytest.raises(RuntimeError):
        session.load_pdf(str(bogus))
    with pytest.raises(RuntimeError):
        session.load_pdf(str(tmp_path / "missing.pdf"))


def test_config_reaches_analyzer(narrator):
    pages = ["x" * 10, "y" * 10]
    fragments = [[fragment("1.1 Alt", size=11)], []]

    default = ReaderSession(QueuedNarrationService())
    assert default.load_document(pages, fragments).chapters == []

    config = ReaderConfig(structure=StructureConfig(min_chapter_content=0))
    session = ReaderSession(narrator, config)
    assert [c.title for c in session.load_document(pages, fragments).chapters] == ["1.1 Alt"]
