from readalong.script.sentence_segmenter import clean_utterance, split_sentences


def test_splits_on_terminal_punctuation():
    assert split_sentences("Merhaba. Nasılsın?") == ["Merhaba.", "Nasılsın?"]


def test_punctuation_runs_stay_together():
    assert split_sentences("Ne?! Gerçekten mi... Evet!") == [
        "Ne?!",
        "Gerçekten mi...",
        "Evet!",
    ]


def test_text_without_punctuation_is_one_sentence():
    assert split_sentences("  Başlık satırı  ") == ["Başlık satırı"]


def test_trailing_fragment_is_kept():
    assert split_sentences("Birinci cümle. ikinci yarım") == [
        "Birinci cümle.",
        "ikinci yarım",
    ]


def test_blank_input_yields_nothing():
    assert split_sentences("") == []
    assert split_sentences(" \n\t ") == []


def test_sentences_are_trimmed_and_non_empty():
    text = "Bir.\n\n  İki!   Üç?\n"
    sentences = split_sentences(text)
    assert sentences == ["Bir.", "İki!", "Üç?"]
    assert all(s == s.strip() and s for s in sentences)


def test_sentences_are_substrings_of_the_page():
    text = "Satır bir\ndevam eder. Yeni satır\nburada biter!"
    for sentence in split_sentences(text):
        assert sentence in text


def test_segmentation_is_deterministic():
    text = "A. B? C! D"
    assert split_sentences(text) == split_sentences(text)


def test_clean_utterance_rejoins_hyphenation_and_collapses_whitespace():
    assert clean_utterance("bil-\ngisayar  çok\n iyi.") == "bilgisayar çok iyi."
    assert clean_utterance("") == ""
