"""Span helpers for search operations.

traced wraps paginator operations and store scans in a span. Arguments are
bound against the wrapped signature so positional and keyword arguments are
recorded alike, but only names on the allowlist below become attributes.
"""

import inspect
from collections.abc import Callable
from enum import Enum
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Search terms are user input and are never recorded.
_RECORDED_ARGS = frozenset({"kind", "page_size", "limit", "dry_run", "batch_size"})

AttributeValue = str | int | float | bool


def _attribute_value(value: Any) -> AttributeValue | None:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (str, int, float, bool)):
        return value
    return None


def _record_arguments(
    span: trace.Span,
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> None:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        # The call itself will fail with the real error.
        return
    for name, value in bound.arguments.items():
        if name not in _RECORDED_ARGS:
            continue
        attr = _attribute_value(value)
        if attr is not None:
            span.set_attribute(f"search.{name}", attr)


def _mark_failed(span: trace.Span, exc: BaseException) -> None:
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(
    operation_name: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> Callable:
    """Decorator that runs the function (sync or async) inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set on every span.

    Exceptions are recorded on the span and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"
        signature = inspect.signature(func)

        def start():
            return tracer.start_as_current_span(
                span_name,
                attributes=attributes,
                record_exception=False,
                set_status_on_exception=False,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with start() as span:
                    _record_arguments(span, signature, args, kwargs)
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _mark_failed(span, e)
                        raise
                    span.set_status(Status(StatusCode.OK))
                    return result

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with start() as span:
                _record_arguments(span, signature, args, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _mark_failed(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, attributes: dict[str, AttributeValue] | None = None) -> None:
    """Add an event (stale discard, failed scan) to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes or {})
