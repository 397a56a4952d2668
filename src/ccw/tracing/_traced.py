import functools
import inspect
from typing import Any, Callable, Optional, TypeVar

from opentelemetry import trace

F = TypeVar("F", bound=Callable[..., Any])

tracer = trace.get_tracer("ccw")


def traced(
    name: Optional[str] = None,
    *,
    input_attributes: tuple[str, ...] = (),
) -> Callable[[F], F]:
    """Wrap a sync or async callable in an OpenTelemetry span.

    Only the keyword/positional arguments named in ``input_attributes`` are
    recorded on the span, as ``ccw.input.<name>``. Nothing else about the
    call's inputs or outputs is recorded.

    Exceptions are recorded on the span and mark it as failed.

    Without a configured OpenTelemetry SDK the span is a no-op.
    """

    def decorator(func: F) -> F:
        span_name = name or func.__name__
        signature = inspect.signature(func)

        def _attributes(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, str]:
            if not input_attributes:
                return {}
            bound = signature.bind_partial(*args, **kwargs)
            return {
                f"ccw.input.{key}": str(bound.arguments[key])
                for key in input_attributes
                if key in bound.arguments
            }

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tracer.start_as_current_span(
                    span_name, attributes=_attributes(args, kwargs)
                ):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, attributes=_attributes(args, kwargs)
            ):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
