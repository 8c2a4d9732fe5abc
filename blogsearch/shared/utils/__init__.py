"""Shared utilities: datetime, text normalization, debounce."""

from blogsearch.shared.utils.datetime import utc_now
from blogsearch.shared.utils.debounce import Debouncer
from blogsearch.shared.utils.text import is_blank, normalize_search_text

__all__ = [
    "Debouncer",
    "is_blank",
    "normalize_search_text",
    "utc_now",
]
