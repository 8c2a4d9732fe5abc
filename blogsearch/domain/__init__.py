"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import (
    BlogSearchException,
    InvalidCursorException,
    ResourceNotFoundException,
    SearchBackendNotConfiguredException,
    SearchFailedException,
    ValidationException,
)

__all__ = [
    # Enums
    "EntityKind",
    # Exceptions
    "BlogSearchException",
    "InvalidCursorException",
    "ResourceNotFoundException",
    "SearchBackendNotConfiguredException",
    "SearchFailedException",
    "ValidationException",
]
