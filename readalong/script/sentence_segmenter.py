"""
Sentence segmentation and utterance text cleanup.

Splitting is punctuation-based: ``.``, ``!`` and ``?`` end a
sentence and stay attached to it.  The same function is used to build
the narration queue, the search index and the click targets, so all
three agree on sentence boundaries.
"""

import re
from typing import List

# Hyphenation at line break: "bil-\ngisayar" → "bilgisayar"
_RE_HYPHEN_LINEBREAK = re.compile(r"(\w)-\s*\n\s*(\w)")

_RE_MULTI_WHITESPACE = re.compile(r"\s+")

# One sentence: non-terminal text followed by a run of terminal punctuation
_RE_SENTENCE = re.compile(r"[^.!?]+[.!?]+")


def split_sentences(text: str) -> List[str]:
    """
    Split *text* into sentences.

    Each sentence keeps its terminal punctuation and is trimmed of
    surrounding whitespace; internal whitespace is left untouched so
    that sentences remain substrings of the page text.  Text after the
    last terminal punctuation becomes a final sentence of its own, and
    text without any terminal punctuation is returned as a single
    sentence.

    Returns:
        List of non-empty sentences (empty for blank input).
    """
    if not text or not text.strip():
        return []

    sentences: List[str] = []
    last = 0

    for m in _RE_SENTENCE.finditer(text):
        sentence = m.group(0).strip()
        if sentence:
            sentences.append(sentence)
        last = m.end()

    tail = text[last:].strip()
    if tail:
        sentences.append(tail)

    return sentences


def clean_utterance(text: str) -> str:
    """
    Prepare a sentence for speech synthesis.

    Rejoins words hyphenated across line breaks and collapses newlines
    and runs of whitespace into single spaces.
    """
    if not text:
        return ""
    t = _RE_HYPHEN_LINEBREAK.sub(r"\1\2", text)
    return _RE_MULTI_WHITESPACE.sub(" ", t).strip()
