"""
Small text helpers shared by the structure and search modules.
"""

import re

_RE_MULTI_WHITESPACE = re.compile(r"\s+")


def lower_tr(text: str) -> str:
    """
    Lower-case *text*, folding the Turkish dotted capital ``İ`` to ``i``.

    ``str.lower()`` maps ``İ`` to ``i`` plus a combining dot, which breaks
    plain substring checks such as ``"içindekiler" in text``.
    """
    return text.replace("İ", "i").lower()


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return _RE_MULTI_WHITESPACE.sub(" ", text).strip()
