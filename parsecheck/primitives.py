"""
Primitive parsers for parsecheck.

Category checks (string, number, boolean, object_, any_) and value checks
(exact, one_of, key_of). All failures are reported at the root; enclosing
combinators prefix the path while unwinding.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable, Literal, Union

from .core import Parser
from .types import UNDEFINED, Err, Ok, ParseError, Result


def kind_of(value: Any) -> str:
    """
    Runtime category of a value.

    One of: undefined, null, boolean, number, string, array, object,
    function, unknown. bool is checked before numbers since it is an int.
    """
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if callable(value):
        return "function"
    return "unknown"


def strictly_equal(a: Any, b: Any) -> bool:
    """Equality without cross-category coercion (1 never equals True)."""
    return kind_of(a) == kind_of(b) and a == b


def render_value(value: Any) -> str:
    """Render a value for an error message."""
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _category(expected: str, type_hint: Any) -> Parser:
    def parse(value: Any) -> Result[Any]:
        actual = kind_of(value)
        if actual == expected:
            return Ok(value)
        return Err(ParseError(f"expected {expected}, got {actual}"))

    parse.__name__ = expected
    return Parser(fn=parse, type_hint=type_hint, name=expected)


string: Parser[str] = _category("string", str)
number: Parser[Union[int, float]] = _category("number", Union[int, float])
boolean: Parser[bool] = _category("boolean", bool)


def _parse_object(value: Any) -> Result[Any]:
    # arrays are objects too, only null is singled out
    actual = kind_of(value)
    if actual in ("object", "array"):
        return Ok(value)
    return Err(ParseError(f"expected object, got {actual}"))


object_: Parser[Any] = Parser(
    fn=_parse_object, type_hint=dict[str, Any], name="object"
)

# Escape hatch for untyped values
any_: Parser[Any] = Parser(fn=Ok, type_hint=Any, name="any")


def exact(expected: Any) -> Parser:
    """
    Accept only a value strictly equal to `expected`.

    Usage:
        exact("v1")
        exact(None)
    """

    def parse(value: Any) -> Result[Any]:
        if strictly_equal(expected, value):
            return Ok(expected)
        return Err(
            ParseError(f"expected '{render_value(expected)}', got '{render_value(value)}'")
        )

    return Parser(fn=parse, type_hint=_literal((expected,)), name=f"exact({expected!r})")


def one_of(allowed: Iterable[Any]) -> Parser:
    """
    Accept a value strictly equal to one of the allowed values.

    The matching member of `allowed` (first by order) is returned.

    Usage:
        one_of(["active", "inactive", "pending"])
    """
    members = tuple(allowed)

    def parse(value: Any) -> Result[Any]:
        for member in members:
            if strictly_equal(member, value):
                return Ok(member)
        return Err(ParseError(f"value {render_value(value)} is not in whitelist"))

    return Parser(fn=parse, type_hint=_literal(members), name="one_of")


def key_of(allowed: Iterable[str]) -> Parser[str]:
    """
    Accept a string that is a key of `allowed` (a mapping or any iterable of keys).

    Usage:
        key_of({"circle": ..., "square": ...})
    """
    ordered = tuple(allowed)
    keys = frozenset(ordered)

    def parse(value: Any) -> Result[str]:
        result = string(value)
        if isinstance(result, Err):
            return result
        if value in keys:
            return Ok(value)
        return Err(ParseError(f"value {render_value(value)} is not in whitelist"))

    return Parser(fn=parse, type_hint=_literal(ordered), name="key_of")


def _literal(values: tuple[Any, ...]) -> Any:
    """Literal[...] over the values when possible, else Any."""
    if values and all(
        v is None or isinstance(v, (str, int, bool)) for v in values
    ):
        return Literal[values]
    return Any
