"""Tests for domain exceptions (error_code, message, details)."""

from blogsearch.domain.exceptions import (
    BlogSearchException,
    InvalidCursorException,
    ResourceNotFoundException,
    SearchBackendNotConfiguredException,
    SearchFailedException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base BlogSearchException uses class name as error_code when not provided."""
    exc = BlogSearchException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "BlogSearchException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_to_dict_shape() -> None:
    exc = BlogSearchException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    exc = ValidationException("limit too large", field="limit")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "limit"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("bad").details == {}


def test_invalid_cursor_exception() -> None:
    exc = InvalidCursorException("malformed token")
    assert exc.error_code == "INVALID_CURSOR"
    assert exc.message == "Invalid pagination cursor: malformed token"


def test_search_failed_exception_carries_kind() -> None:
    """One error shape for a failed query of either kind."""
    exc = SearchFailedException("user", "ConnectTimeout")
    assert exc.error_code == "SEARCH_FAILED"
    assert exc.kind == "user"
    assert exc.details == {"kind": "user", "reason": "ConnectTimeout"}
    assert isinstance(exc, BlogSearchException)


def test_backend_not_configured() -> None:
    assert SearchBackendNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("search section", "comments")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "search section", "resource_id": "comments"}
