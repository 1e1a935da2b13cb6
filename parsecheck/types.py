"""
Type definitions for parsecheck.

Provides the Result type (Ok/Err), the structured ParseError, and the
path-prefixing helpers used while unwinding out of nested structures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class _Undefined(Enum):
    """Sentinel for an absent value (a missing record field)."""

    UNDEFINED = auto()

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined.UNDEFINED


class PathSegmentType(Enum):
    KEY = auto()
    INDEX = auto()


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A single step into a nested value: a record field or an array index."""

    type: PathSegmentType
    value: str | int

    @classmethod
    def key(cls, name: str) -> PathSegment:
        return cls(PathSegmentType.KEY, name)

    @classmethod
    def index(cls, idx: int) -> PathSegment:
        return cls(PathSegmentType.INDEX, idx)

    def render(self) -> str:
        if self.type is PathSegmentType.KEY:
            return f".{self.value}"
        return f"[{self.value}]"


@dataclass(frozen=True, slots=True)
class ParseError:
    """
    Where and why a value was rejected.

    `segments` is ordered outermost first. The string `path` is only
    rendered on demand, e.g. ".items[2].name"; the root is "".
    """

    message: str
    segments: tuple[PathSegment, ...] = ()

    @property
    def path(self) -> str:
        return "".join(segment.render() for segment in self.segments)

    def prefixed(self, segment: PathSegment) -> ParseError:
        return ParseError(self.message, (segment, *self.segments))

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"


class ParseFailure(ValueError):
    """Raised when an Err result is unwrapped."""

    def __init__(self, error: ParseError):
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ParseFailure(self.error)


# Type aliases
Result = Union[Ok[T], Err[ParseError]]
ParseFn = Callable[[Any], Result]
ErrorFn = Callable[[ParseError], ParseError]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def err(error: ParseError | str) -> Err[ParseError]:
    """Build a failure; a bare message becomes a root-level ParseError."""
    if isinstance(error, str):
        error = ParseError(error)
    return Err(error)


def is_ok(result: Result[Any]) -> bool:
    return isinstance(result, Ok)


def is_err(result: Result[Any]) -> bool:
    return isinstance(result, Err)


def map_error(fn: ErrorFn) -> Callable[[Result[T]], Result[T]]:
    """Lift an error transformation over a Result. Ok passes through untouched."""

    def apply(result: Result[T]) -> Result[T]:
        if isinstance(result, Err):
            return Err(fn(result.error))
        return result

    return apply


def with_key_prefix(key: str) -> ErrorFn:
    """Prepend a `.key` segment to an error's path."""
    segment = PathSegment.key(str(key))
    return lambda error: error.prefixed(segment)


def with_index_prefix(index: int) -> ErrorFn:
    """Prepend an `[index]` segment to an error's path."""
    segment = PathSegment.index(index)
    return lambda error: error.prefixed(segment)
