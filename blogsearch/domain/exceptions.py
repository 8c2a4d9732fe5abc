"""Errors raised by search, cursor handling and the write-side key helpers.

Each class fixes its machine-readable error_code; the API layer turns the
code into an HTTP status and to_dict() into the response body. Nothing here
knows about HTTP.
"""

from typing import Any


class BlogSearchException(Exception):
    """Base class for every error this package raises on purpose.

    Attributes:
        message: Human-readable description.
        error_code: Machine-readable code (class default, else the class name).
        details: Extra context such as the failing field or entity kind.
    """

    default_error_code: str | None = None

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code or type(self).__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BlogSearchException):
    """A parameter is out of range (page size, empty title or username)."""

    default_error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)


class InvalidCursorException(BlogSearchException):
    """A cursor token is malformed, or was issued for another term or kind."""

    default_error_code = "INVALID_CURSOR"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid pagination cursor: {reason}", details={"reason": reason})


class SearchFailedException(BlogSearchException):
    """A range scan against the backing store failed.

    The one error shape for failed searches, whichever kind's scan failed.
    Recoverable: the search or the load-more can simply be retried.
    """

    default_error_code = "SEARCH_FAILED"

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(
            f"Search failed for {kind} results",
            details={"kind": kind, "reason": reason},
        )

    @property
    def kind(self) -> str:
        return self.details["kind"]


class SearchBackendNotConfiguredException(BlogSearchException):
    """Search was requested but no Firestore credentials are configured."""

    default_error_code = "SERVICE_UNAVAILABLE"

    def __init__(self) -> None:
        super().__init__("Search backend is not configured.")


class ResourceNotFoundException(BlogSearchException):
    """Lookup of something addressable by id (e.g. a search section) found nothing."""

    default_error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
