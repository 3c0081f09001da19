"""
Voice selection and the voice catalogue helpers used by voice pickers.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .models import Voice


@dataclass(frozen=True)
class LanguageOption:
    code: str
    name: str


LANGUAGE_NAMES: Dict[str, str] = {
    "tr": "Türkçe",
    "en": "English",
    "de": "Deutsch",
    "fr": "Français",
    "es": "Español",
    "it": "Italiano",
    "pt": "Português",
    "ru": "Русский",
    "ja": "日本語",
    "ko": "한국어",
    "zh": "中文",
    "ar": "العربية",
    "hi": "हिन्दी",
    "nl": "Nederlands",
    "sv": "Svenska",
    "no": "Norsk",
    "da": "Dansk",
    "fi": "Suomi",
    "pl": "Polski",
    "cs": "Čeština",
    "hu": "Magyar",
    "ro": "Română",
    "bg": "Български",
    "hr": "Hrvatski",
    "sk": "Slovenčina",
    "sl": "Slovenščina",
    "et": "Eesti",
    "lv": "Latviešu",
    "lt": "Lietuvių",
    "el": "Ελληνικά",
    "he": "עברית",
    "th": "ไทย",
    "vi": "Tiếng Việt",
    "id": "Bahasa Indonesia",
    "ms": "Bahasa Melayu",
    "uk": "Українська",
    "ca": "Català",
    "eu": "Euskera",
    "gl": "Galego",
}

# Shown when the user has not searched for a language
POPULAR_LANGUAGES = ("tr", "en", "de")


def select_voice(
    voices: Sequence[Voice],
    selected_name: str = "",
    default_prefix: str = "tr",
) -> Optional[Voice]:
    """
    Pick the voice for an utterance.

    The voice named *selected_name* wins; otherwise the first voice whose
    language tag starts with *default_prefix*.

    Returns:
        The chosen voice, or ``None`` when nothing matches (the caller
        then sends its default language tag without a voice).
    """
    if selected_name:
        for voice in voices:
            if voice.name == selected_name:
                return voice
    for voice in voices:
        if voice.lang.startswith(default_prefix):
            return voice
    return None


def language_option(code: str) -> LanguageOption:
    code = code.lower()
    return LanguageOption(code, LANGUAGE_NAMES.get(code, code.upper()))


def available_languages(voices: Sequence[Voice]) -> List[LanguageOption]:
    """Distinct languages of *voices*, sorted by display name."""
    codes = {v.language_code for v in voices}
    return sorted((language_option(c) for c in codes), key=lambda o: o.name)


def displayed_languages(voices: Sequence[Voice], query: str = "") -> List[LanguageOption]:
    """
    Languages to offer in a picker: every language whose name or code
    contains *query*, or only the popular ones when *query* is empty.
    """
    options = available_languages(voices)
    if not query:
        return [o for o in options if o.code in POPULAR_LANGUAGES]
    q = query.lower()
    return [o for o in options if q in o.name.lower() or q in o.code]


def voices_for_language(voices: Sequence[Voice], code: str) -> List[Voice]:
    if not code:
        return []
    code = code.lower()
    return [v for v in voices if v.language_code == code]


def filter_voices(voices: Sequence[Voice], query: str = "") -> List[Voice]:
    """Voices whose name or language tag contains *query* (case-insensitive)."""
    if not query:
        return list(voices)
    q = query.lower()
    return [v for v in voices if q in v.name.lower() or q in v.lang.lower()]
