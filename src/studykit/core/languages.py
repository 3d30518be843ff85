"""Language and voice definitions.

Language codes are used for prompts (full names read better to the model)
and for picking a local speech voice (BCP 47 locales).
"""

from __future__ import annotations

AUTO_DETECT = "auto"

# fmt: off
LANGUAGES: dict[str, str] = {
    "ar": "arabic",      "bg": "bulgarian",   "bn": "bengali",
    "ca": "catalan",     "cs": "czech",       "da": "danish",
    "de": "german",      "el": "greek",       "en": "english",
    "es": "spanish",     "et": "estonian",    "fa": "persian",
    "fi": "finnish",     "fil": "filipino",   "fr": "french",
    "he": "hebrew",      "hi": "hindi",       "hr": "croatian",
    "hu": "hungarian",   "id": "indonesian",  "it": "italian",
    "ja": "japanese",    "km": "khmer",       "ko": "korean",
    "lo": "lao",         "lt": "lithuanian",  "lv": "latvian",
    "ms": "malay",       "my": "myanmar",     "nl": "dutch",
    "no": "norwegian",   "pl": "polish",      "pt": "portuguese",
    "ro": "romanian",    "ru": "russian",     "sk": "slovak",
    "sl": "slovenian",   "sr": "serbian",     "sv": "swedish",
    "sw": "swahili",     "ta": "tamil",       "te": "telugu",
    "th": "thai",        "tr": "turkish",     "uk": "ukrainian",
    "ur": "urdu",        "vi": "vietnamese",  "zh": "chinese",
}
# fmt: on

# Default region for each language when asking the platform TTS for a voice.
_SPEECH_REGIONS: dict[str, str] = {
    "ar": "SA", "en": "US", "es": "ES", "fr": "FR", "de": "DE", "hi": "IN",
    "it": "IT", "ja": "JP", "ko": "KR", "pt": "BR", "ru": "RU", "vi": "VN",
    "zh": "CN", "nl": "NL", "pl": "PL", "sv": "SE", "tr": "TR", "uk": "UA",
    "th": "TH", "id": "ID", "ms": "MY", "fil": "PH",
}

# Prebuilt Gemini TTS voices
GEMINI_VOICES: dict[str, str] = {
    "Zephyr": "bright",
    "Puck": "upbeat",
    "Charon": "informative",
    "Kore": "firm",
    "Fenrir": "excitable",
    "Leda": "youthful",
    "Orus": "firm",
    "Aoede": "breezy",
    "Callirrhoe": "easy-going",
    "Autonoe": "bright",
    "Enceladus": "breathy",
    "Iapetus": "clear",
    "Umbriel": "easy-going",
    "Algieba": "smooth",
    "Despina": "smooth",
    "Erinome": "clear",
    "Algenib": "gravelly",
    "Rasalgethi": "informative",
    "Laomedeia": "upbeat",
    "Achernar": "soft",
    "Alnilam": "firm",
    "Schedar": "even",
    "Gacrux": "mature",
    "Pulcherrima": "forward",
    "Achird": "friendly",
    "Zubenelgenubi": "casual",
    "Vindemiatrix": "gentle",
    "Sadachbia": "lively",
    "Sadaltager": "knowledgeable",
    "Sulafat": "warm",
}


def is_valid_language(code: str) -> bool:
    """Check if a language code is known."""
    return code in LANGUAGES


def language_name(code: str) -> str:
    """Get the full language name for a code, or the code itself if unknown."""
    return LANGUAGES.get(code, code)


def validate_language(code: str, allow_auto: bool = False) -> str:
    """Validate a language code and return it, raising ValueError if invalid.

    Args:
        code: Language code (e.g. "en").
        allow_auto: Accept "auto" (source language auto-detection).
    """
    if allow_auto and code.lower() == AUTO_DETECT:
        return AUTO_DETECT
    if code not in LANGUAGES:
        raise ValueError(
            f"Unsupported language: '{code}'. "
            f"Run 'studykit languages' to see all {len(LANGUAGES)} supported languages."
        )
    return code


def speech_locale(code: str) -> str:
    """Return a BCP 47 locale for local speech, e.g. "vi" -> "vi-VN"."""
    if "-" in code:
        return code
    region = _SPEECH_REGIONS.get(code)
    return f"{code}-{region}" if region else code


def validate_voice(name: str) -> str:
    """Validate a Gemini voice name (case-insensitive) and return its canonical form."""
    for voice in GEMINI_VOICES:
        if voice.lower() == name.lower():
            return voice
    raise ValueError(
        f"Unknown voice: '{name}'. Run 'studykit voices' to see the available voices."
    )
