"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations.
No runtime imports from blogsearch.infrastructure.
"""

from blogsearch.application.interfaces.repositories import (
    IPostRepository,
    ISearchRepository,
    IUserProfileRepository,
)

__all__ = [
    "IPostRepository",
    "ISearchRepository",
    "IUserProfileRepository",
]
