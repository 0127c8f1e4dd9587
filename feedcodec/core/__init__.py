"""
Core canonical JSON primitives.

This module provides the building blocks of the message codec:
- Values: ordered object / number model
- Parser: bytes -> ordered value, key order preserved
- Canonical: ordered value -> reference-formatted bytes
- Errors: codec failure taxonomy
"""

from .values import Number, OrderedObject, OrderedValue, to_ordered, to_python
from .parser import parse
from .canonical import encode, encode_str, encoded_len, quote_string, render_number
from .errors import (
    CanonicalizationError,
    EmptyInputError,
    MalformedJSONError,
    SignatureFieldMissingError,
    SignatureFieldMalformedError,
    SignatureFormatError,
)

__all__ = [
    "Number",
    "OrderedObject",
    "OrderedValue",
    "to_ordered",
    "to_python",
    "parse",
    "encode",
    "encode_str",
    "encoded_len",
    "quote_string",
    "render_number",
    "CanonicalizationError",
    "EmptyInputError",
    "MalformedJSONError",
    "SignatureFieldMissingError",
    "SignatureFieldMalformedError",
    "SignatureFormatError",
]
