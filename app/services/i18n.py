from __future__ import annotations

from typing import Literal

SUPPORTED_LANGUAGES = ["pt", "en"]
DEFAULT_LANGUAGE = "pt"

LanguageCode = Literal["pt", "en"]

LABELS = {
    "pt": {
        "loading": "Carregando...",
        "edited": "* editado em {date}",
        "previous_post": "Post anterior",
        "next_post": "Próximo post",
        "at": "às",
        "exit_preview": "Sair do modo preview",
    },
    "en": {
        "loading": "Loading...",
        "edited": "* edited on {date}",
        "previous_post": "Previous post",
        "next_post": "Next post",
        "at": "at",
        "exit_preview": "Exit preview mode",
    },
}

MONTH_ABBREVIATIONS = {
    "pt": ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"],
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
}


def normalize_lang(lang: str | None) -> LanguageCode:
    """Normalize language code to supported value."""
    if not lang:
        return DEFAULT_LANGUAGE
    normalized = lang.lower().strip()[:2]
    if normalized in SUPPORTED_LANGUAGES:
        return normalized  # type: ignore
    return DEFAULT_LANGUAGE


def labels(lang: str | None) -> dict[str, str]:
    return LABELS[normalize_lang(lang)]

