"""Search-key text normalization.

One function produces the NormalizedKey for both sides of a prefix search:
the write path (title_normalized / username_normalized stored on each
document) and the read path (the term typed by the user). Both must call
normalize_search_text; a second implementation drifting from this one
silently breaks matching.
"""

from typing import Any

# Dotted capital I and plain capital I must become "i" before str.lower():
# "İ".lower() yields "i" + U+0307 (combining dot), not "i".
_UPPER_I_FOLD = str.maketrans({"İ": "i", "I": "i"})

# Applied after lowercasing, so only lowercase variants are listed.
_LOCALE_LETTER_FOLD = str.maketrans(
    {
        "ı": "i",
        "ü": "u",
        "ö": "o",
        "ş": "s",
        "ç": "c",
        "ğ": "g",
    }
)


def normalize_search_text(value: Any) -> str:
    """Return the canonical lowercase search key for value.

    Folds Turkish letter variants (İ, I, ı, ü, ö, ş, ç, ğ and their capitals)
    to base Latin letters and lowercases everything else. Nothing else is
    stripped or collapsed: whitespace and punctuation are kept as typed.

    Non-string or empty input yields "" instead of raising, so a bad field
    never blocks indexing or a keystroke-driven search.

    Idempotent: normalize_search_text(normalize_search_text(s)) equals
    normalize_search_text(s).
    """
    if not value or not isinstance(value, str):
        return ""
    folded = value.translate(_UPPER_I_FOLD)
    folded = folded.lower()
    return folded.translate(_LOCALE_LETTER_FOLD)


def is_blank(value: Any) -> bool:
    """True for None, non-strings, and strings with only whitespace."""
    return not isinstance(value, str) or not value.strip()
