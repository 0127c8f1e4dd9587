"""
Order-preserving JSON parser.

Parses raw message bytes into the ordered value model. Key order is taken
from the source bytes; number literals are kept as text.
"""

import json
import logging
from typing import Any, List, Tuple, Union

from .errors import EmptyInputError, MalformedJSONError
from .values import Number, OrderedObject, OrderedValue

logger = logging.getLogger(__name__)

_JSON_WHITESPACE = b" \t\n\r"


def _object_hook(pairs: List[Tuple[str, Any]]) -> OrderedObject:
    return OrderedObject.from_pairs(pairs)


def _reject_constant(name: str) -> Any:
    raise MalformedJSONError(f"non-finite number literal {name!r} is not allowed")


_decoder = json.JSONDecoder(
    object_pairs_hook=_object_hook,
    parse_int=Number,
    parse_float=Number,
    parse_constant=_reject_constant,
)


def _byte_offset(text: str, pos: int) -> int:
    return len(text[:pos].encode("utf-8"))


def parse(data: Union[bytes, bytearray, memoryview]) -> OrderedValue:
    """
    Parse a single JSON value from bytes.

    Args:
        data: UTF-8 encoded JSON

    Returns:
        OrderedValue with object key order preserved

    Raises:
        EmptyInputError: If data is empty (or only whitespace)
        MalformedJSONError: If data is not exactly one valid JSON value
    """
    data = bytes(data)
    if not data.strip(_JSON_WHITESPACE):
        raise EmptyInputError("no JSON value in input", offset=0)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as ex:
        raise MalformedJSONError(f"invalid UTF-8: {ex.reason}", offset=ex.start) from ex

    try:
        value, end = _decoder.raw_decode(text, _skip_whitespace(text))
    except json.JSONDecodeError as ex:
        raise MalformedJSONError(ex.msg, offset=_byte_offset(text, ex.pos)) from ex
    except RecursionError as ex:
        raise MalformedJSONError("nesting too deep") from ex

    end = _skip_whitespace(text, end)
    if end != len(text):
        raise MalformedJSONError("extra data after JSON value", offset=_byte_offset(text, end))

    logger.debug("parsed %d bytes", len(data))
    return value


def _skip_whitespace(text: str, pos: int = 0) -> int:
    while pos < len(text) and text[pos] in " \t\n\r":
        pos += 1
    return pos
