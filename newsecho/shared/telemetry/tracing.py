"""``traced``: wrap an async service method in an OpenTelemetry span.

Without a configured tracer provider the API hands out non-recording spans,
so decorated methods run unchanged when telemetry is off.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

T = TypeVar("T")

_tracer = trace.get_tracer("newsecho")

# Keyword arguments recorded as span attributes. Messages, passwords, tokens
# and e-mail addresses are never recorded.
_RECORDED_KWARGS = frozenset({
    "newsletter_id", "reply_id", "user_id", "status", "search",
    "read_filter", "enabled", "provider_id",
})


def traced(
    operation_name: str,
    attributes: dict[str, str] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with _tracer.start_as_current_span(operation_name) as span:
                for key, value in (attributes or {}).items():
                    span.set_attribute(key, value)
                for key, value in kwargs.items():
                    if key in _RECORDED_KWARGS and value is not None:
                        span.set_attribute(f"arg.{key}", str(value))
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
