"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and the search routes use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from blogsearch.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def search_limit() -> str:
    """Limit string for search reads, e.g. "120/minute" (SEARCH_RATE_LIMIT)."""
    return get_settings().search_rate_limit


limit_search = limiter.limit(search_limit)
