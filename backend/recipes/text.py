from __future__ import annotations

_ACCENT_MAP = str.maketrans({
    "á": "a", "à": "a", "ã": "a", "â": "a", "ä": "a",
    "é": "e", "è": "e", "ê": "e", "ë": "e",
    "í": "i", "ì": "i", "î": "i", "ï": "i",
    "ó": "o", "ò": "o", "õ": "o", "ô": "o", "ö": "o",
    "ú": "u", "ù": "u", "û": "u", "ü": "u",
    "ý": "y", "ÿ": "y",
    "ñ": "n",
    "ç": "c",
})


def normalize_text(text: str | None) -> str:
    """Case-fold, strip the common Latin accents and trim surrounding whitespace."""
    if not text:
        return ""
    return text.casefold().translate(_ACCENT_MAP).strip()
