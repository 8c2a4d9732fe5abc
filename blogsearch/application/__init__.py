"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions. Infrastructure implements
the interfaces (search, post and profile repositories).
"""

from blogsearch.application.interfaces import (
    IPostRepository,
    ISearchRepository,
    IUserProfileRepository,
)
from blogsearch.application.use_cases import (
    LiveSearch,
    SearchPaginator,
    SearchService,
    SearchSession,
)

__all__ = [
    "IPostRepository",
    "ISearchRepository",
    "IUserProfileRepository",
    "LiveSearch",
    "SearchPaginator",
    "SearchService",
    "SearchSession",
]
