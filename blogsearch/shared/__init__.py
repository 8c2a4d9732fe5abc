"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from blogsearch.shared.utils import Debouncer, is_blank, normalize_search_text, utc_now

__all__ = [
    "Debouncer",
    "is_blank",
    "normalize_search_text",
    "utc_now",
]
