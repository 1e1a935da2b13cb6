"""
Context manager for parsing configuration (e.g., maximum nesting depth).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

DEFAULT_MAX_DEPTH = 50

_max_depth: ContextVar[int] = ContextVar("max_depth", default=DEFAULT_MAX_DEPTH)
_current_depth: ContextVar[int] = ContextVar("current_depth", default=0)


def max_depth() -> int:
    """Maximum number of nested arrays/records a parser will descend into."""
    return _max_depth.get()


def current_depth() -> int:
    """How many structural levels the active parse has descended."""
    return _current_depth.get()


@contextmanager
def parse_context(*, max_depth: Optional[int] = None):
    """
    Context manager for parsing configuration.

    Args:
        max_depth: Nesting depth after which array/record parsers fail with
                   a "too deeply nested" error instead of recursing further.
                   None keeps the active value.

    Example:
        from parsecheck import array_of, number, parse_context

        deep = [[[[1]]]]
        nested = array_of(array_of(array_of(array_of(number))))

        with parse_context(max_depth=2):
            nested(deep)  # Err: too deeply nested
    """
    if max_depth is not None and max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    token = _max_depth.set(max_depth if max_depth is not None else _max_depth.get())
    try:
        yield
    finally:
        _max_depth.reset(token)


@contextmanager
def nesting_level() -> Iterator[int]:
    """Enter one structural level for the duration of the block."""
    depth = _current_depth.get() + 1
    token = _current_depth.set(depth)
    try:
        yield depth
    finally:
        _current_depth.reset(token)
