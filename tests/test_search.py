import pytest

from readalong.search.index import SearchIndex, SearchResult, SearchResults
from readalong.search.normalize import fold_diacritics, normalize_for_search


@pytest.mark.parametrize(
    "raw, key",
    [
        ("Öğrenci", "ogrenci"),
        ("ÖĞRENCİ", "ogrenci"),
        ("ışık, çiçek; şeker!", "isik cicek seker"),
        ("Über  café", "uber cafe"),
        ("  İstanbul'da  ", "istanbul da"),
        ("Straße", "strasse"),
    ],
)
def test_normalize_for_search(raw, key):
    assert normalize_for_search(raw) == key


def test_student_spellings_share_a_key():
    assert normalize_for_search("Öğrenci") == normalize_for_search("ogrenci")


def test_fold_diacritics_keeps_case():
    assert fold_diacritics("Çağ") == "Cag"


def test_query_without_accents_matches_accented_sentence():
    index = SearchIndex.build(["Her Öğrenci derse geldi. Hava güzeldi."])
    results = index.search("ogrenci")
    assert results == [SearchResult(1, "Her Öğrenci derse geldi.", 0)]


def test_raw_lowercase_match_also_counts():
    index = SearchIndex.build(["Fiyat: 10$ oldu."])
    # "$" has no search key of its own
    assert len(index.search("$")) == 1


def test_results_in_page_then_sentence_order():
    pages = [
        "Gelecek yıl. Başka bir şey. Gelecek hafta.",
        "Burada yok.",
        "Belki gelecek.",
    ]
    results = SearchIndex.build(pages).search("gelecek")
    assert [(r.page, r.index_within_page) for r in results] == [(1, 0), (1, 2), (3, 0)]


def test_blank_query_matches_nothing():
    index = SearchIndex.build(["Bir cümle."])
    assert index.search("") == []
    assert index.search("   ") == []


def test_wraparound_navigation():
    pages = ["Gelecek güzel olacak.", "Bugün yağmur var.", "Gelecek hafta görüşürüz."]
    results = SearchResults("gelecek", SearchIndex.build(pages).search("gelecek"))

    assert [r.page for r in results.results] == [1, 3]
    assert results.active_index == 0
    assert results.next().page == 3
    assert results.active_index == 1
    assert results.next().page == 1
    assert results.active_index == 0
    assert results.previous().page == 3


def test_empty_results_navigation():
    results = SearchResults("yok", [])
    assert results.active is None
    assert results.next() is None
    assert results.previous() is None
    assert not results
