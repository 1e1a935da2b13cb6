"""
Structural combinators for parsecheck.

optional / nullable short-circuit a sentinel, array_of and type_ descend into
arrays and records (tracking the error path and nesting depth), and
discriminated_union dispatches on a tag field.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from .context import max_depth, nesting_level
from .core import Parser, coerce
from .primitives import key_of, kind_of, object_
from .types import (
    UNDEFINED,
    Err,
    Ok,
    ParseError,
    Result,
    map_error,
    with_index_prefix,
    with_key_prefix,
)

logger = logging.getLogger(__name__)


def optional(body: Any) -> Parser:
    """
    Accept an absent value (UNDEFINED), otherwise delegate.

    Usage:
        type_({"nickname": optional(string)})
    """
    inner = coerce(body)

    def parse(value: Any) -> Result[Any]:
        if value is UNDEFINED:
            return Ok(UNDEFINED)
        return inner(value)

    return Parser(
        fn=parse,
        type_hint=Optional[inner.type_hint],
        required=False,
        fields=inner.fields,
        name=f"optional({inner.name})" if inner.name else None,
    )


def nullable(body: Any) -> Parser:
    """Accept None, otherwise delegate."""
    inner = coerce(body)

    def parse(value: Any) -> Result[Any]:
        if value is None:
            return Ok(None)
        return inner(value)

    return Parser(
        fn=parse,
        type_hint=Optional[inner.type_hint],
        required=inner.required,
        name=f"nullable({inner.name})" if inner.name else None,
    )


def array_of(body: Any) -> Parser[list]:
    """
    Accept a list whose items all pass `body`.

    Items are checked in index order and the first failing item is reported,
    e.g. path "[3]" or "[3].name". The result is a new list.

    Usage:
        array_of(string)
        array_of(type_({"id": number}))
    """
    item = coerce(body)

    def check_items(value: Any) -> Result[list]:
        items = []
        for index, element in enumerate(value):
            result = item(element)
            if isinstance(result, Err):
                return map_error(with_index_prefix(index))(result)
            items.append(result.value)
        return Ok(items)

    def parse(value: Any) -> Result[list]:
        actual = kind_of(value)
        if actual != "array":
            return Err(ParseError(f"expected array, got {actual}"))
        return _descend(check_items, value)

    return Parser(
        fn=parse,
        type_hint=list[item.type_hint],  # type: ignore[valid-type]
        name=f"array_of({item.name})" if item.name else None,
    )


def type_(fields: Mapping[str, Any]) -> Parser[dict]:
    """
    Accept a record whose declared fields pass their parsers.

    Fields are checked in declaration order; a missing field is read as
    UNDEFINED. The first failing field is reported with a ".field" prefix.
    Undeclared fields pass through unchanged, validated values win on
    collision. An array is read as a record keyed by "0", "1", ...

    Usage:
        type_({
            "name": string,
            "email": optional(string),
            "tags": array_of(string),
        })
    """
    declared = tuple((key, coerce(parser)) for key, parser in fields.items())

    def check_fields(record: Mapping[str, Any]) -> Result[dict]:
        validated: dict[str, Any] = {}
        for key, parser in declared:
            field = record[key] if key in record else UNDEFINED
            result = parser(field)
            if isinstance(result, Err):
                return map_error(with_key_prefix(key))(result)
            validated[key] = result.value

        merged = dict(record)
        for key, field in validated.items():
            if field is not UNDEFINED:
                merged[key] = field
        return Ok(merged)

    def parse(value: Any) -> Result[dict]:
        checked = object_(value)
        if isinstance(checked, Err):
            return checked
        return _descend(check_fields, _own_properties(checked.value))

    return Parser(
        fn=parse,
        type_hint=dict[str, Any],
        fields=dict(declared),
        name="type",
    )


def discriminated_union(
    variants: Mapping[str, Any], *, discriminator: str = "type"
) -> Parser[dict]:
    """
    Accept a record tagged by `discriminator`, dispatching on the tag.

    The tag must be one of the keys of `variants`; otherwise the error is
    reported at ".type" (or the configured discriminator). The variant's
    parser receives the record with its tag still present and its result
    is returned as-is.

    Usage:
        shape = discriminated_union({
            "circle": type_({"radius": number}),
            "square": type_({"side": number}),
        })
    """
    if not variants:
        raise ValueError("discriminated_union requires at least one variant")

    parsers = {tag: coerce(parser) for tag, parser in variants.items()}
    tag_parser = type_({discriminator: key_of(parsers)})

    def parse(value: Any) -> Result[dict]:
        tagged = tag_parser(value)
        if isinstance(tagged, Err):
            return tagged
        record = tagged.value
        return parsers[record[discriminator]](record)

    return Parser(fn=parse, type_hint=dict[str, Any], name="discriminated_union")


def _own_properties(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {str(index): element for index, element in enumerate(value)}


def _descend(check: Callable[[Any], Result[Any]], value: Any) -> Result[Any]:
    """
    Run `check` one structural level deeper.

    Fails past max_depth(). The outermost level also turns an interpreter
    RecursionError into the same failure, so wrapper-heavy parsers on deep
    or cyclic data still end in an Err.
    """
    with nesting_level() as depth:
        if depth > max_depth():
            return _too_deep(depth)
        try:
            return check(value)
        except RecursionError:
            if depth > 1:
                raise
            logger.debug("Recursion limit hit below nesting depth %d", max_depth())
            return Err(
                ParseError("too deeply nested: exceeded the interpreter recursion limit")
            )


def _too_deep(depth: int) -> Err[ParseError]:
    limit = max_depth()
    logger.debug("Nesting depth %d exceeds maximum of %d", depth, limit)
    return Err(ParseError(f"too deeply nested: exceeded maximum depth of {limit}"))
