"""Observability for the matchup engine.

Structured logging via structlog plus the ``debug_wrapper`` decorator, which
records arguments, results, duration and failures of adapter and service
calls. Correlation ids are carried in structlog contextvars so every log
line of one matchup request can be grouped.
"""

import functools
import inspect
import json
import logging
import re
import sys
import time
import traceback
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        *_SHARED_PROCESSORS,
        structlog.processors.format_exc_info,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),  # type: ignore[list-item]
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])

_SENSITIVE_KEY_RE = re.compile(r"(token|key|secret|password|authorization|auth)", re.IGNORECASE)


def configure_stdlib_json_logging(level: str = "INFO") -> None:
    """Route stdlib ``logging`` records through structlog's JSON renderer."""
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())


def set_correlation_id(correlation_id: str) -> None:
    bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


class FunctionTrace(BaseModel):
    """Model for function execution trace data."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None)
    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    result: Any | None = Field(default=None)
    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    is_async: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging, truncating long payloads."""
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)
    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def _serialize_kwargs(kwargs: dict[str, Any], max_length: int) -> dict[str, Any]:
    return {
        k: _mask_scalar(v) if _SENSITIVE_KEY_RE.search(k) else _serialize_value(v, max_length)
        for k, v in kwargs.items()
    }


def debug_wrapper(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 1000,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator for function tracing (sync and async).

    Logs entry with arguments, success with duration (and result), and
    failure with the error and traceback before re-raising.

    Example:
        >>> @debug_wrapper(capture_result=False)
        ... async def fetch_frame_data(character_id: str) -> dict:
        ...     return {"framesNormal": []}
    """
    level = log_level.lower()

    def decorator(func: F) -> F:
        name = f"{func.__module__}.{func.__qualname__}"

        def _start(args: tuple[Any, ...], kwargs: dict[str, Any], is_async: bool) -> FunctionTrace:
            trace = FunctionTrace(
                function_name=name,
                execution_id=f"{name}_{int(time.time() * 1_000_000)}",
                is_async=is_async,
                metadata=add_metadata or {},
            )
            if capture_args:
                trace.args = [_serialize_value(arg, max_arg_length) for arg in args]
                trace.kwargs = _serialize_kwargs(kwargs, max_arg_length)
            bind_contextvars(execution_id=trace.execution_id)
            logger.log(
                logging.getLevelName(level.upper()),
                f"Executing function: {name}",
                execution_id=trace.execution_id,
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            return trace

        def _succeeded(trace: FunctionTrace, started: float, result: Any) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            if capture_result:
                trace.result = _serialize_value(result, max_arg_length)
            logger.log(
                logging.getLevelName(level.upper()),
                f"Successfully executed: {name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )

        def _failed(trace: FunctionTrace, started: float, error: Exception) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            trace.is_success = False
            trace.error_type = type(error).__name__
            trace.error_message = str(error)
            logger.error(
                f"Error in function: {name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                error_type=trace.error_type,
                error_message=trace.error_message,
                traceback=traceback.format_exc(),
            )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs, is_async=True)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _failed(trace, started, e)
                raise
            finally:
                unbind_contextvars("execution_id")
            _succeeded(trace, started, result)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs, is_async=False)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(trace, started, e)
                raise
            finally:
                unbind_contextvars("execution_id")
            _succeeded(trace, started, result)
            return result

        if inspect.iscoroutinefunction(func):
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on performance monitoring."""
    return debug_wrapper(capture_result=False, capture_args=False, log_level="DEBUG")(func)


def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return debug_wrapper(
        capture_result=False,
        capture_args=True,
        log_level="INFO",
        add_metadata={"layer": "adapter"},
    )(func)
