"""
Core parser class for parsecheck.

Provides the Parser dataclass and the two logical combinators, and_ / or_,
that the `&` and `|` operators are built on.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar, Union

from .types import Err, ParseError, ParseFn, Result, map_error

T = TypeVar("T")


@dataclass(frozen=True, slots=True, eq=False)
class Parser(Generic[T]):
    """
    Immutable parser node.

    Wraps a parse function `value -> Ok(value) | Err(ParseError)` together
    with the static metadata used for composition and Pydantic generation.
    Parsers hold no state between calls and are safe to share.
    """

    fn: ParseFn
    type_hint: Any = Any
    required: bool = True
    fields: Mapping[str, Parser] | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError(f"Parse function must be callable, got {type(self.fn).__name__}")
        if self.fields is not None and not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __call__(self, value: Any) -> Result[T]:
        """
        Parse a value.

        Returns:
            Ok(value) if the value has the expected shape
            Err(ParseError) describing the first mismatch otherwise
        """
        return self.fn(value)

    def __repr__(self) -> str:
        if self.name:
            return f"Parser({self.name})"
        return f"Parser({getattr(self.fn, '__name__', self.fn)!r})"

    def __and__(self, other: Any) -> Parser:
        """
        Sequence with another parser: both must pass, left first.

        Usage:
            type_({"a": string}) & type_({"b": number})
        """
        return and_(self, other)

    def __rand__(self, other: Any) -> Parser:
        return and_(other, self)

    def __or__(self, other: Any) -> Parser:
        """
        Alternate with another parser: the first success wins.

        Usage:
            string | number
            str | nullable(number)
        """
        return or_(self, other)

    def __ror__(self, other: Any) -> Parser:
        return or_(other, self)

    def with_message(self, msg: str) -> Parser[T]:
        """Return new parser reporting `msg` on failure, keeping the error path."""
        relabel = map_error(lambda error: ParseError(msg, error.segments))
        inner = self.fn

        def parse(value: Any) -> Result[T]:
            return relabel(inner(value))

        return dataclasses.replace(self, fn=parse)

    def parse_or_raise(self, value: Any) -> T:
        """Parse a value, raising ParseFailure on mismatch."""
        return self(value).unwrap()


def and_(first: Any, second: Any) -> Parser:
    """
    Run `first`, then feed its validated output into `second`.

    The first failure is returned unchanged; `second` never sees the raw input.
    """
    first, second = coerce(first), coerce(second)

    def parse(value: Any) -> Result[Any]:
        result = first(value)
        if isinstance(result, Err):
            return result
        return second(result.value)

    fields = None
    if first.fields is not None and second.fields is not None:
        fields = {**first.fields, **second.fields}

    if fields is not None or second.type_hint is Any:
        type_hint = first.type_hint
    else:
        type_hint = second.type_hint

    return Parser(
        fn=parse,
        type_hint=type_hint,
        required=first.required or second.required,
        fields=fields,
        name=_join_names(first, second, "&"),
    )


def or_(first: Any, second: Any) -> Parser:
    """
    Try `first`; on failure run `second` on the original input.

    Only the last attempted parser's error is reported.
    """
    first, second = coerce(first), coerce(second)

    def parse(value: Any) -> Result[Any]:
        result = first(value)
        if isinstance(result, Err):
            return second(value)
        return result

    return Parser(
        fn=parse,
        type_hint=Union[first.type_hint, second.type_hint],
        required=first.required and second.required,
        name=_join_names(first, second, "|"),
    )


def _join_names(first: Parser, second: Parser, op: str) -> str | None:
    if first.name and second.name:
        return f"{first.name} {op} {second.name}"
    return None


def coerce(other: Any) -> Parser:
    from .schema import to_parser

    return to_parser(other)
