"""Opaque cursor tokens for the stateless search API.

A token binds a PaginationCursor to the normalized term and kind it was
issued under, so a cursor replayed against a different search is rejected
instead of silently paging through the wrong range.
"""

import base64
import binascii
import json

from blogsearch.application.dtos.search import PaginationCursor
from blogsearch.domain.enums import EntityKind
from blogsearch.domain.exceptions import InvalidCursorException


def encode_cursor(kind: EntityKind, normalized_term: str, cursor: PaginationCursor) -> str:
    """Return a urlsafe token for cursor (padding stripped)."""
    payload = {
        "t": normalized_term,
        "k": kind.value,
        "key": cursor.key,
        "id": cursor.document_id,
    }
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(token: str, kind: EntityKind, normalized_term: str) -> PaginationCursor:
    """Decode token and check it belongs to (kind, normalized_term).

    Raises:
        InvalidCursorException: malformed token, or issued for another kind or term.
    """
    padded = token + "=" * (-len(token) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidCursorException("malformed token") from None
    if not isinstance(payload, dict):
        raise InvalidCursorException("malformed token")
    key = payload.get("key")
    doc_id = payload.get("id")
    if not isinstance(key, str) or not isinstance(doc_id, str) or not doc_id:
        raise InvalidCursorException("malformed token")
    if payload.get("k") != kind.value:
        raise InvalidCursorException("cursor was issued for another kind")
    if payload.get("t") != normalized_term:
        raise InvalidCursorException("cursor was issued for another search term")
    return PaginationCursor(key=key, document_id=doc_id)
