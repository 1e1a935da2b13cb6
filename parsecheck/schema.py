"""
Schema operations for parsecheck.

Provides to_parser(), validate() and to_pydantic() functions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable
from typing import Optional as TypingOptional

from pydantic import BaseModel, create_model

from .combinators import array_of, type_
from .core import Parser, or_
from .primitives import any_, boolean, exact, number, object_, one_of, string
from .types import Err, Ok, Result

logger = logging.getLogger(__name__)


def to_parser(schema: Any) -> Parser:
    """
    Coerce a schema to a parser.

    Conversion rules:
        Parser -> pass through
        None / NoneType -> exact(None)
        typing.Any / object -> any_
        str -> string, int / float -> number, bool -> boolean
        dict -> object_, list / tuple -> array_of(any_)
        {"key": schema, ...} -> type_ with recursive conversion
        [schema] -> array_of; [a, b, ...] -> array_of(a | b | ...)
        tuple / set / frozenset literal -> one_of
        str / int / float / bool literal -> exact
        Callable -> Parser over the callable, which must return Ok / Err;
                    a bool predicate raises TypeError when called
    """
    if isinstance(schema, Parser):
        return schema

    if schema is None or schema is type(None):
        return exact(None)

    if schema is Any or schema is object:
        return any_

    if isinstance(schema, type):
        return _from_type(schema)

    if isinstance(schema, Mapping):
        return type_(schema)

    if isinstance(schema, list):
        if len(schema) == 0:
            raise ValueError("Empty list cannot be converted to parser")
        item = to_parser(schema[0])
        for other in schema[1:]:
            item = or_(item, other)
        return array_of(item)

    if isinstance(schema, (tuple, set, frozenset)):
        return one_of(schema)

    if isinstance(schema, (str, int, float, bool)):
        return exact(schema)

    if callable(schema):
        return Parser(fn=_returning_result(schema), name=getattr(schema, "__name__", None))

    raise TypeError(f"Cannot convert {type(schema).__name__} to parser")


def _returning_result(fn: Callable[[Any], Any]) -> Callable[[Any], Result[Any]]:
    def parse(value: Any) -> Result[Any]:
        result = fn(value)
        if not isinstance(result, (Ok, Err)):
            name = getattr(fn, "__name__", repr(fn))
            raise TypeError(
                f"Parse function {name} must return Ok or Err, got {type(result).__name__}"
            )
        return result

    return parse


def _from_type(t: type) -> Parser:
    # bool before int, it is a subclass
    if issubclass(t, bool):
        return boolean
    if t in (int, float):
        return number
    if issubclass(t, str):
        return string
    if issubclass(t, Mapping):
        return object_
    if t in (list, tuple):
        return array_of(any_)
    raise TypeError(f"Cannot convert type {t.__name__} to parser")


def validate(data: Any, schema: Any) -> Result[Any]:
    """
    Validate data against a schema.

    Args:
        data: The untrusted value, e.g. decoded JSON
        schema: A Parser or a schema accepted by to_parser()

    Returns:
        Ok(value) if validation passes
        Err(ParseError) for the first mismatch

    Usage:
        schema = {
            "name": str,
            "email": optional(str),
            "tags": [str],
        }
        result = validate({"name": "Alice", "tags": []}, schema)
    """
    return to_parser(schema)(data)


def to_pydantic(name: str, schema: Any) -> type[BaseModel]:
    """
    Compile a record schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: A type_() parser or a dict schema

    Returns:
        A Pydantic BaseModel subclass. Nested records become nested models;
        optional() fields default to None.

    Usage:
        User = to_pydantic("User", {
            "name": string,
            "email": optional(string),
        })
        user = User(name="Alice")
    """
    parser = to_parser(schema)
    if parser.fields is None:
        raise TypeError("Schema must be a record")

    fields: dict[str, Any] = {}
    for key, field_parser in parser.fields.items():
        fields[key] = _extract_pydantic_field(f"{name}_{key}", field_parser)

    logger.debug("Building model %s with fields %s", name, list(fields))
    return create_model(name, **fields)


def _extract_pydantic_field(name: str, parser: Parser) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a parser."""
    match parser:
        case Parser(fields=None, required=True, type_hint=t):
            return (t, ...)
        case Parser(fields=None, required=False, type_hint=t):
            return (t, None)
        case Parser(required=True):
            return (to_pydantic(name, parser), ...)

    return (TypingOptional[to_pydantic(name, parser)], None)

