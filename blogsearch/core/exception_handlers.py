"""Exception handlers: every error leaves the API as the same JSON shape.

Body: {"error": CODE, "message": ..., "details": ..., "request_id": ...}.
Domain errors pick their status from _ERROR_CODE_STATUS; framework errors
(validation, rate limit, HTTPException) are reshaped to match.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogsearch.core.config import get_settings
from blogsearch.domain.exceptions import BlogSearchException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_CURSOR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "SEARCH_FAILED": 502,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=content)


def _domain_exception_handler(request: Request, exc: BlogSearchException) -> JSONResponse:
    status_code = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status_code >= 500:
        logger.warning("%s on %s: %s %s", exc.error_code, request.url.path, exc.message, exc.details)
    body = exc.to_dict()
    return _error_response(request, status_code, body["error"], body["message"], body["details"])


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        request, 422, "VALIDATION_ERROR", "Request validation failed", exc.errors()
    )


def _rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _error_response(request, 429, "RATE_LIMITED", f"Rate limit exceeded: {exc.detail}")


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(request, exc.status_code, "HTTP_ERROR", exc.detail)


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed in debug."""
    logger.exception("Unhandled exception on %s", request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(request, 500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app (once, at creation)."""
    app.add_exception_handler(BlogSearchException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
