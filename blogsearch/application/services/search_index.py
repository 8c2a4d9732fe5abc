"""Search-key fields stored alongside posts and users.

The write path (post create/update, profile create/update, backfill) and the
read path (query planner) both take field names and key derivation from here.
"""

from blogsearch.domain.enums import EntityKind
from blogsearch.shared.utils.text import normalize_search_text

TITLE_KEY_FIELD = "title_normalized"
USERNAME_KEY_FIELD = "username_normalized"

SEARCH_KEY_FIELDS: dict[EntityKind, str] = {
    EntityKind.POST: TITLE_KEY_FIELD,
    EntityKind.USER: USERNAME_KEY_FIELD,
}

# Source field each key is derived from.
SEARCH_SOURCE_FIELDS: dict[EntityKind, str] = {
    EntityKind.POST: "title",
    EntityKind.USER: "username",
}


def post_search_fields(title: str | None) -> dict[str, str]:
    """Fields to persist with a post whenever its title is written."""
    return {TITLE_KEY_FIELD: normalize_search_text(title)}


def user_search_fields(username: str | None) -> dict[str, str]:
    """Fields to persist with a user profile whenever its username is written."""
    return {USERNAME_KEY_FIELD: normalize_search_text(username)}


def search_fields_for(kind: EntityKind, data: dict) -> dict[str, str]:
    """Recompute the search key of an existing document of the given kind."""
    source = data.get(SEARCH_SOURCE_FIELDS[kind])
    if kind is EntityKind.USER and not source:
        # Profiles created before usernames existed only have displayName.
        source = data.get("displayName") or data.get("display_name")
    return {SEARCH_KEY_FIELDS[kind]: normalize_search_text(source)}
