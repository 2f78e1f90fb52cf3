"""Instrumentation for boundary calls (generative providers and similar tools)."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from aurafit_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_PREVIEW_KEYS = 6


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _argument_shape(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Describe arguments by size only; prompts and images never reach the log."""

    shape: Dict[str, Any] = {}
    for key in list(kwargs)[:MAX_PREVIEW_KEYS]:
        value = kwargs[key]
        shape[key] = len(value) if isinstance(value, (str, bytes, list, tuple, dict)) else type(value).__name__
    if len(kwargs) > MAX_PREVIEW_KEYS:
        shape["truncated"] = True
    return shape


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Validate keyword arguments against ``input_model`` and log the call outcome.

    Failures are logged with the exception's ``reason`` (provider errors) or its
    type name and then re-raised unchanged.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()

            if input_model is not None:
                try:
                    kwargs = input_model.model_validate(kwargs).model_dump()
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "tool_validation_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        errors=[{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()],
                    )
                    if on_validation_error is None:
                        raise
                    return on_validation_error(exc)

            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_started",
                tool=tool_name,
                correlation_id=correlation_id,
                arguments=_argument_shape(kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "tool_call_failed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    reason=getattr(exc, "reason", None) or type(exc).__name__,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_completed",
                tool=tool_name,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(start),
                response_chars=len(result) if isinstance(result, str) else None,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool"]
