from __future__ import annotations

import re

from contracts.errors import ConfigurationError

# Primary language subtag (or full tag where script matters) -> tesseract traineddata name.
_LOCALE_TO_TESSERACT: dict[str, str] = {
    "ar": "ara",
    "cs": "ces",
    "da": "dan",
    "de": "deu",
    "el": "ell",
    "en": "eng",
    "es": "spa",
    "fi": "fin",
    "fr": "fra",
    "he": "heb",
    "hi": "hin",
    "hu": "hun",
    "id": "ind",
    "it": "ita",
    "ja": "jpn",
    "ko": "kor",
    "nb": "nor",
    "nl": "nld",
    "no": "nor",
    "pl": "pol",
    "pt": "por",
    "ro": "ron",
    "ru": "rus",
    "sv": "swe",
    "th": "tha",
    "tr": "tur",
    "uk": "ukr",
    "vi": "vie",
    "zh": "chi_sim",
    "zh-hans": "chi_sim",
    "zh-cn": "chi_sim",
    "zh-sg": "chi_sim",
    "zh-hant": "chi_tra",
    "zh-tw": "chi_tra",
    "zh-hk": "chi_tra",
}

_TESSERACT_CODE = re.compile(r"^[a-z]{3}(_[a-z]+)?$")


def locale_to_tesseract(locale: str) -> str:
    """
    Map a locale identifier ("en-US", "ja_JP", "zh-Hans") onto a tesseract
    language code. Values that already are tesseract codes pass through.
    """

    tag = locale.strip().replace("_", "-").lower()
    if not tag:
        raise ConfigurationError("empty locale", code="CONFIG_BAD_LOCALE")

    if _TESSERACT_CODE.match(locale.strip()):
        return locale.strip()

    if tag in _LOCALE_TO_TESSERACT:
        return _LOCALE_TO_TESSERACT[tag]

    parts = tag.split("-")
    if len(parts) >= 2 and f"{parts[0]}-{parts[1]}" in _LOCALE_TO_TESSERACT:
        return _LOCALE_TO_TESSERACT[f"{parts[0]}-{parts[1]}"]
    if parts[0] in _LOCALE_TO_TESSERACT:
        return _LOCALE_TO_TESSERACT[parts[0]]

    raise ConfigurationError(
        f"Unsupported locale: {locale!r}",
        code="CONFIG_BAD_LOCALE",
        detail={"locale": locale},
    )


def tesseract_language_arg(locales: tuple[str, ...] | list[str]) -> str | None:
    """
    `-l` value for a locale list, or None to let the engine use its default.
    Order is kept; duplicates are dropped.
    """

    if not locales:
        return None
    langs: list[str] = []
    for loc in locales:
        code = locale_to_tesseract(loc)
        if code not in langs:
            langs.append(code)
    return "+".join(langs)
