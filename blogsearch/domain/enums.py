"""Domain enumerations for blog search.

Enums represent fixed sets of domain values (e.g. searchable entity kinds).
"""

from enum import Enum


class EntityKind(str, Enum):
    """Kind of searchable entity.

    Each kind is an independent result stream with its own cursor and
    exhaustion flag. Declaration order is the display order of the merged
    result list (posts section first, then users).
    """

    POST = "post"
    USER = "user"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid kind values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [kind.value for kind in cls]
