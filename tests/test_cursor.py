from readalong.playback.cursor import ReadingCursor
from readalong.playback.locator import locate_sentence_page
from readalong.playback.models import (
    NarrationEvent,
    NarrationEventKind,
    NarrationSettings,
    PlaybackState,
    Voice,
)
from readalong.playback.narrator import QueuedNarrationService


def _finish_current(narrator):
    narrator.finish()
    narrator.pump()


def _playing_cursor(narrator, pages):
    cursor = ReadingCursor(narrator)
    cursor.load(pages)
    cursor.play()
    narrator.pump()
    return cursor


# ---------------------------------------------------------------------------
# Narration across pages
# ---------------------------------------------------------------------------


def test_two_page_scenario(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)

    assert cursor.state is PlaybackState.PLAYING
    assert cursor.sentences == ["Merhaba.", "Nasılsın?"]
    assert cursor.current_sentence == "Merhaba."

    _finish_current(narrator)
    assert cursor.current_sentence == "Nasılsın?"
    assert cursor.current_page == 1

    _finish_current(narrator)
    assert cursor.current_page == 2
    assert cursor.sentences == ["İyiyim, sağol."]
    assert cursor.sentence_index == 0

    _finish_current(narrator)
    assert cursor.state is PlaybackState.IDLE
    assert cursor.current_sentence is None
    assert [r.text for r in narrator.spoken] == ["Merhaba.", "Nasılsın?", "İyiyim, sağol."]


def test_advance_k_times_rolls_to_next_page(narrator):
    pages = ["Bir. İki. Üç.", "Dört."]
    cursor = _playing_cursor(narrator, pages)
    k = len(cursor.sentences)

    for _ in range(k):
        cursor.advance()

    assert cursor.current_page == 2
    assert cursor.sentence_index == 0


def test_advance_past_last_page_goes_idle(narrator):
    cursor = _playing_cursor(narrator, ["Tek. Sayfa."])
    cursor.advance()
    cursor.advance()
    assert cursor.state is PlaybackState.IDLE
    assert cursor.sentence_index == len(cursor.sentences)


def test_pages_without_text_are_skipped(narrator):
    cursor = _playing_cursor(narrator, ["Bir.", "   ", "Üç."])
    _finish_current(narrator)
    assert cursor.current_page == 3
    assert cursor.current_sentence == "Üç."


def test_sentence_index_stays_in_bounds(narrator):
    cursor = _playing_cursor(narrator, ["A. B.", "C. D. E."])
    while cursor.state is PlaybackState.PLAYING:
        assert 0 <= cursor.sentence_index <= len(cursor.sentences)
        _finish_current(narrator)
    assert 0 <= cursor.sentence_index <= len(cursor.sentences)


def test_play_on_blank_page_is_a_noop(narrator):
    cursor = ReadingCursor(narrator)
    cursor.load(["  ", "Metin."])
    cursor.play()
    assert cursor.state is PlaybackState.IDLE
    assert narrator.spoken == []


def test_advance_only_acts_while_playing(narrator, two_pages):
    cursor = ReadingCursor(narrator)
    cursor.load(two_pages)
    cursor.advance()
    assert cursor.state is PlaybackState.IDLE
    assert narrator.spoken == []


def test_run_until_idle_reads_whole_document(narrator):
    cursor = ReadingCursor(narrator)
    cursor.load(["Bir. İki.", "Üç.", "Dört. Beş."])
    cursor.play()
    assert narrator.run_until_idle() == 5
    assert cursor.state is PlaybackState.IDLE


# ---------------------------------------------------------------------------
# Click, stop, highlight
# ---------------------------------------------------------------------------


def test_click_scenario(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    first_id = narrator.current.utterance_id

    assert cursor.play_from_sentence(1, 1)
    narrator.pump()

    assert cursor.sentences == ["Nasılsın?", "İyiyim, sağol."]
    assert cursor.current_sentence == "Nasılsın?"
    assert narrator.current.utterance_id > first_id

    _finish_current(narrator)
    assert cursor.current_page == 2
    assert cursor.current_sentence == "İyiyim, sağol."

    _finish_current(narrator)
    assert cursor.state is PlaybackState.IDLE


def test_click_on_missing_sentence_changes_nothing(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    assert not cursor.play_from_sentence(1, 5)
    assert not cursor.play_from_sentence(9, 0)
    assert cursor.current_sentence == "Merhaba."


def test_click_starts_at_the_clicked_copy_of_a_repeated_sentence(narrator):
    cursor = ReadingCursor(narrator)
    cursor.load(["Evet. Hayır. Evet. Son."])
    cursor.play_from_sentence(1, 2)
    assert cursor.sentences == ["Evet.", "Son."]


def test_stale_ended_event_is_ignored(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    stale_id = narrator.current.utterance_id

    cursor.play_from_sentence(1, 1)
    narrator.pump()
    cursor.handle_event(NarrationEvent(NarrationEventKind.ENDED, stale_id))

    assert cursor.current_sentence == "Nasılsın?"
    assert cursor.sentence_index == 0


def test_stop_clears_state(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    active_id = narrator.current.utterance_id

    cursor.stop()
    assert cursor.state is PlaybackState.IDLE
    assert cursor.sentences == []
    assert cursor.current_sentence is None
    assert not narrator.speaking

    cursor.handle_event(NarrationEvent(NarrationEventKind.ENDED, active_id))
    assert cursor.state is PlaybackState.IDLE


def test_highlight_parks_cursor_and_queues_page(narrator):
    pages = ["Bir.", "İki.", "Üç gelecek."]
    cursor = _playing_cursor(narrator, pages)

    assert cursor.highlight(3, "Üç gelecek.")
    assert cursor.state is PlaybackState.IDLE
    assert cursor.current_page == 3
    assert cursor.current_sentence == "Üç gelecek."
    assert not narrator.speaking

    cursor.play()
    assert cursor.sentences == ["Üç gelecek."]


def test_queue_page_does_not_touch_active_cursor(narrator):
    cursor = _playing_cursor(narrator, ["Bir. İki.", "Üç.", "Dört."])
    assert cursor.queue_page(3)
    assert not cursor.queue_page(0)
    assert cursor.current_page == 1
    assert cursor.current_sentence == "Bir."
    cursor.stop()
    cursor.play()
    assert cursor.current_page == 3


# ---------------------------------------------------------------------------
# Pause and resume
# ---------------------------------------------------------------------------


def test_pause_and_resume_in_place(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)

    cursor.pause()
    narrator.pump()
    assert cursor.state is PlaybackState.PAUSED
    assert narrator.paused

    cursor.resume()
    narrator.pump()
    assert cursor.state is PlaybackState.PLAYING
    assert cursor.current_sentence == "Merhaba."
    assert len(narrator.spoken) == 1


def test_play_while_paused_resumes(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    cursor.pause()
    cursor.play()
    assert cursor.state is PlaybackState.PLAYING
    assert cursor.sentence_index == 0
    assert len(narrator.spoken) == 1


def test_pause_only_from_playing(narrator, two_pages):
    cursor = ReadingCursor(narrator)
    cursor.load(two_pages)
    cursor.pause()
    assert cursor.state is PlaybackState.IDLE


def test_sentence_ending_during_pause_advances_on_resume(narrator, two_pages):
    cursor = _playing_cursor(narrator, two_pages)
    narrator.finish()
    cursor.pause()
    narrator.pump()

    assert cursor.state is PlaybackState.PAUSED
    assert cursor.current_sentence == "Merhaba."

    cursor.resume()
    assert cursor.state is PlaybackState.PLAYING
    assert cursor.current_sentence == "Nasılsın?"


def test_resume_without_paused_utterance_plays(narrator, two_pages):
    cursor = ReadingCursor(narrator)
    cursor.load(two_pages)
    cursor.resume()
    assert cursor.state is PlaybackState.PLAYING
    assert cursor.current_sentence == "Merhaba."


# ---------------------------------------------------------------------------
# Requests, callbacks, locating
# ---------------------------------------------------------------------------


def test_requests_use_selected_voice_and_prosody():
    voices = [Voice("Yelda", "tr-TR"), Voice("Samantha", "en-US")]
    narrator = QueuedNarrationService(voices)
    cursor = ReadingCursor(narrator, NarrationSettings(selected_voice="Samantha", rate=1.1))
    cursor.load(["Hello."])
    cursor.play()

    request = narrator.spoken[0]
    assert request.voice_name == "Samantha"
    assert request.language_tag == "en-US"
    assert request.rate == 1.1
    assert request.pitch == 1.0
    assert request.volume == 1.0


def test_requests_fall_back_to_default_tag(narrator, two_pages):
    cursor = ReadingCursor(narrator)
    cursor.load(two_pages)
    cursor.play()
    request = narrator.spoken[0]
    assert request.voice_name is None
    assert request.language_tag == "tr-TR"
    assert request.rate == 0.8


def test_page_change_callback_follows_reading_page(narrator, two_pages):
    seen = []
    cursor = ReadingCursor(narrator, on_page_change=seen.append)
    cursor.load(two_pages)
    cursor.play()
    narrator.run_until_idle()
    assert seen == [2]


def test_utterance_ids_increase(narrator):
    cursor = ReadingCursor(narrator)
    cursor.load(["A. B. C."])
    cursor.play()
    narrator.run_until_idle()
    ids = [r.utterance_id for r in narrator.spoken]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_locator_prefers_nearest_page():
    pages = ["Ortak cümle.", "Başka.", "Ortak cümle.", "Son."]
    assert locate_sentence_page(pages, "Ortak cümle.", hint=4) == 3
    assert locate_sentence_page(pages, "Ortak cümle.", hint=1) == 1
    assert locate_sentence_page(pages, "Ortak cümle.", hint=2) == 1
    assert locate_sentence_page(pages, "Yok.", hint=2) is None


def test_unlocatable_sentence_keeps_reading_page(narrator):
    # The tail of page 1 merges with page 2 in a clicked block
    cursor = ReadingCursor(narrator)
    cursor.load(["Bir. yarım", "cümle. Son."])
    cursor.play_from_sentence(1, 1)
    assert cursor.current_sentence == "yarım\ncümle."
    assert cursor.current_page == 1
