"""Prefix-range query planning.

The backing store only supports ordered range scans over a field, so
"starts with term" becomes: key >= term AND key <= term + HIGH_SENTINEL,
ordered ascending by key, limited to one page, optionally resuming strictly
after a cursor.
"""

from __future__ import annotations

from dataclasses import dataclass

from blogsearch.application.dtos.search import PaginationCursor
from blogsearch.application.services.search_index import SEARCH_KEY_FIELDS
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import ValidationException

# Last code point of the BMP private-use area; sorts after every character a
# normalized key realistically contains.
HIGH_SENTINEL = "\uf8ff"


@dataclass(frozen=True)
class RangeQuerySpec:
    """Everything a store adapter needs to run one page of a prefix scan."""

    kind: EntityKind
    field: str
    lower_bound: str
    upper_bound: str
    limit: int
    start_after: PaginationCursor | None = None

    @property
    def order_by(self) -> str:
        return self.field

    def matches(self, key: str) -> bool:
        """True if key falls inside [lower_bound, upper_bound]."""
        return self.lower_bound <= key <= self.upper_bound


def build_range_query(
    kind: EntityKind,
    normalized_term: str,
    cursor: PaginationCursor | None,
    page_size: int,
) -> RangeQuerySpec | None:
    """Build the range scan for one kind, or None when there is nothing to search.

    An empty normalized term returns None: a scan from "" would match the
    whole collection.

    Raises:
        ValidationException: page_size is not positive.
    """
    if page_size < 1:
        raise ValidationException("page_size must be >= 1", field="page_size")
    if not normalized_term:
        return None
    return RangeQuerySpec(
        kind=kind,
        field=SEARCH_KEY_FIELDS[kind],
        lower_bound=normalized_term,
        upper_bound=normalized_term + HIGH_SENTINEL,
        limit=page_size,
        start_after=cursor,
    )


def page_is_exhausted(returned: int, page_size: int) -> bool:
    """A full page may have more behind it; a short or empty one is the end."""
    return returned < page_size
