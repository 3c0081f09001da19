"""
Comparison keys for accent- and case-insensitive search.
"""

import re
import unicodedata

from readalong.utils.text import lower_tr

# Letters with no Unicode decomposition to a base Latin letter
_FOLD_TABLE = str.maketrans(
    {
        "ı": "i",
        "ø": "o",
        "ł": "l",
        "đ": "d",
        "ß": "ss",
        "æ": "ae",
        "œ": "oe",
    }
)

_RE_PUNCTUATION = re.compile(r"[^\w\s]|_")
_RE_MULTI_WHITESPACE = re.compile(r"\s+")


def fold_diacritics(text: str) -> str:
    """Replace accented letters with their base Latin letter."""
    decomposed = unicodedata.normalize("NFKD", text.translate(_FOLD_TABLE))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_for_search(text: str) -> str:
    """
    Build the search key for *text*.

    Lower-cases (Turkish-aware), folds diacritics, turns punctuation into
    spaces and collapses whitespace, so ``"Öğrenci,"`` and ``"ogrenci"``
    produce the same key.
    """
    if not text:
        return ""
    t = fold_diacritics(lower_tr(text))
    t = _RE_PUNCTUATION.sub(" ", t)
    return _RE_MULTI_WHITESPACE.sub(" ", t).strip()
