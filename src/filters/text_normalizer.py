# src/filters/text_normalizer.py

"""Case- and accent-insensitive text keys for title matching."""

import unicodedata


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(
        ch for ch in decomposed if not unicodedata.combining(ch)
    )


def normalize(text: str | None) -> str:
    """Lowercase *text* and remove diacritics ("Café" -> "cafe").

    ``None`` normalises to the empty string. The result is stable under
    a second application: lowercasing can reintroduce decomposable
    characters, so marks are stripped again afterwards.
    """
    if not text:
        return ""
    return _strip_marks(_strip_marks(text).lower())
