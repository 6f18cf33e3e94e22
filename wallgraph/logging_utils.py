"""DEBUG tracing for the public entry points."""

from __future__ import annotations

import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Mapping, Sequence, TypeVar, cast

import numpy as np

from .geometry import Point, Segment

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxstring = 80


def safe_repr(value: Any, *, max_items: int = 5) -> str:
    """Short ``repr`` for log lines.

    Points and segments print as coordinates, numeric arrays as shape and
    range, and lists, tuples and mappings stop after ``max_items`` entries.
    """

    if isinstance(value, (Point, Segment)):
        return str(value)

    if isinstance(value, np.ndarray):
        if value.size == 0 or not np.issubdtype(value.dtype, np.number):
            return f"ndarray(shape={value.shape})"
        return f"ndarray(shape={value.shape}, min={float(value.min()):.6g}, max={float(value.max()):.6g})"

    if isinstance(value, Mapping):
        items = [f"{safe_repr(k)}: {safe_repr(v)}" for k, v in list(value.items())[:max_items]]
        if len(value) > max_items:
            items.append("...")
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (list, tuple)):
        items = [safe_repr(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"... ({len(value)} total)")
        return "[" + ", ".join(items) + "]"

    return _repr.repr(value)


def _format_call(args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    parts = [safe_repr(arg) for arg in args]
    parts.extend(f"{key}={safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(parts) or "no arguments"


def debug_log_call(logger: logging.Logger, *, log_result: bool = True) -> Callable[[F], F]:
    """Log entry, exit and failure of the wrapped function on ``logger``.

    Nothing is formatted unless DEBUG is enabled.  Pass ``log_result=False``
    for functions whose results are too large to be worth summarising.
    """

    def decorator(func: F) -> F:
        qualname = func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s(%s)", qualname, _format_call(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.debug("%s raised", qualname, exc_info=True)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        return cast(F, wrapper)

    return decorator


__all__ = ["debug_log_call", "safe_repr"]
