"""Span helpers for the authorizing service.

traced() opens one span per service call. Only identifiers go on the span:
the endpoint id and acting user id from the call's arguments, and the
request id from its RequestContext. Endpoints, filters, and updates can
hold secrets and are never recorded.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Parameters copied to the span as arg.<name>.
_RECORDED_ARGS = ("id", "user_id")


def _record_call(
    span: trace.Span,
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> None:
    bound = signature.bind_partial(*args, **kwargs).arguments
    request_id = getattr(bound.get("ctx"), "request_id", None)
    if request_id:
        span.set_attribute("request.id", request_id)
    for name in _RECORDED_ARGS:
        value = bound.get(name)
        if value is not None:
            span.set_attribute(f"arg.{name}", str(value))


def traced(operation_name: str) -> Callable:
    """Run an async function inside a span named operation_name.

    A failure sets ERROR status and is recorded on the span once, then
    re-raised. Cancellation closes the span without a status.

    Raises:
        TypeError: If applied to a non-async function.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() needs an async function: {func.__qualname__}")
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(
                operation_name,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                if span.is_recording():
                    _record_call(span, signature, args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span; no-op when nothing is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, **attributes: str | int | float | bool) -> None:
    """Add an event to the current span; no-op when nothing is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes)
