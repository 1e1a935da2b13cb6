"""
parsecheck - composable runtime shape checks for untrusted data.

Usage:
    from parsecheck import array_of, number, optional, string, type_

    user = type_({
        "name": string,
        "email": optional(string),
        "scores": array_of(number),
    })

    result = user(json.loads(payload))
    if result.is_err():
        print(result.error.path, result.error.message)
"""

import logging

from .combinators import array_of, discriminated_union, nullable, optional, type_
from .context import DEFAULT_MAX_DEPTH, current_depth, max_depth, parse_context
from .core import Parser, and_, or_
from .primitives import (
    any_,
    boolean,
    exact,
    key_of,
    kind_of,
    number,
    object_,
    one_of,
    string,
)
from .schema import to_parser, to_pydantic, validate
from .types import (
    UNDEFINED,
    Err,
    Ok,
    ParseError,
    ParseFailure,
    PathSegment,
    PathSegmentType,
    Result,
    err,
    is_err,
    is_ok,
    map_error,
    ok,
    with_index_prefix,
    with_key_prefix,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    "ParseError",
    "ParseFailure",
    "PathSegment",
    "PathSegmentType",
    "UNDEFINED",
    "ok",
    "err",
    "is_ok",
    "is_err",
    "map_error",
    "with_key_prefix",
    "with_index_prefix",
    # Core
    "Parser",
    "and_",
    "or_",
    # Primitives
    "string",
    "number",
    "boolean",
    "object_",
    "any_",
    "exact",
    "one_of",
    "key_of",
    "kind_of",
    # Combinators
    "optional",
    "nullable",
    "array_of",
    "type_",
    "discriminated_union",
    # Configuration
    "parse_context",
    "max_depth",
    "current_depth",
    "DEFAULT_MAX_DEPTH",
    # Schema
    "to_parser",
    "validate",
    "to_pydantic",
]
