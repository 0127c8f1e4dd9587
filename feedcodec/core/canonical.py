"""
Canonical serialization for message signing.

This module is the heart of interoperability. Signing payloads must come out
byte for byte the way the network's reference stringifier prints them:

- 2-space indentation, one object entry / array element per line
- "key": value with a single space after the colon
- empty containers printed as {} and []
- only quote, backslash and control characters escaped; non-ASCII is raw UTF-8
- numbers printed the way the reference runtime prints them

Key order is never changed.
"""

import math
import re
from decimal import Decimal
from typing import Any, List

from .values import Number, OrderedObject

INDENT = 2
CONTROL_LIMIT = 0x20

# Widest rendering of a finite double, e.g. "-0.0000012345678901234567".
MAX_NUMBER_WIDTH = 25

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_ESCAPE_RE = re.compile('["\\\\\x00-\x1f\ud800-\udfff]')

# Integers the reference runtime prints unchanged (|n| < 2**53 is always true here).
_PLAIN_INT_RE = re.compile(r"-?(?:0|[1-9][0-9]{0,14})\Z")


def _escape_char(match: "re.Match") -> str:
    c = match.group(0)
    short = _SHORT_ESCAPES.get(c)
    if short is not None:
        return short
    return f"\\u{ord(c):04x}"


def quote_string(s: str) -> str:
    """Quote a string with the reference escaping rules."""
    return '"' + _ESCAPE_RE.sub(_escape_char, s) + '"'


def render_number(text: str) -> str:
    """
    Render a number literal the way the reference runtime prints it.

    Plain integers are returned unchanged. Anything else is converted to a
    double and printed with the shortest round-trip digits, switching to
    exponent form outside [1e-7, 1e21). Overflowing literals print as null.
    """
    if _PLAIN_INT_RE.match(text) and text != "-0":
        return text

    value = float(text)
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exp = Decimal(repr(abs(value))).as_tuple()
    raw = "".join(str(d) for d in digit_tuple)
    digits = raw.rstrip("0")
    exp += len(raw) - len(digits)

    k = len(digits)
    n = exp + k
    if k <= n <= 21:
        out = digits + "0" * (n - k)
    elif 0 < n <= 21:
        out = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        out = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        exp_str = ("+" if e >= 0 else "-") + str(abs(e))
        if k == 1:
            out = digits + "e" + exp_str
        else:
            out = digits[0] + "." + digits[1:] + "e" + exp_str
    return sign + out


def _as_number(value: Any) -> Number:
    if isinstance(value, Number):
        return value
    return Number.from_value(value)


def _write(value: Any, depth: int, out: List[str]) -> None:
    if value is None:
        out.append("null")
    elif value is True:
        out.append("true")
    elif value is False:
        out.append("false")
    elif isinstance(value, str):
        out.append(quote_string(value))
    elif isinstance(value, (Number, int, float)):
        out.append(render_number(_as_number(value).text))
    elif isinstance(value, OrderedObject):
        if not len(value):
            out.append("{}")
            return
        inner = " " * (INDENT * (depth + 1))
        out.append("{")
        for idx, (key, item) in enumerate(value.items()):
            out.append(",\n" if idx else "\n")
            out.append(inner)
            out.append(quote_string(key))
            out.append(": ")
            _write(item, depth + 1, out)
        out.append("\n" + " " * (INDENT * depth) + "}")
    elif isinstance(value, list):
        if not value:
            out.append("[]")
            return
        inner = " " * (INDENT * (depth + 1))
        out.append("[")
        for idx, item in enumerate(value):
            out.append(",\n" if idx else "\n")
            out.append(inner)
            _write(item, depth + 1, out)
        out.append("\n" + " " * (INDENT * depth) + "]")
    else:
        raise TypeError(f"cannot encode {type(value).__name__}")


def encode(value: Any) -> bytes:
    """
    Canonical bytes for an ordered value.

    Deterministic: the same value always yields the same bytes.

    Returns:
        UTF-8 encoded JSON
    """
    out: List[str] = []
    _write(value, 0, out)
    return "".join(out).encode("utf-8")


def encode_str(value: Any) -> str:
    """Canonical JSON as text (for display)."""
    return encode(value).decode("utf-8")


def _char_width(c: str) -> int:
    if c in _SHORT_ESCAPES:
        return len(_SHORT_ESCAPES[c])
    code = ord(c)
    if code < CONTROL_LIMIT or 0xD800 <= code <= 0xDFFF:
        return 6
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def _string_len(s: str) -> int:
    if s.isascii() and not _ESCAPE_RE.search(s):
        return len(s) + 2
    return 2 + sum(_char_width(c) for c in s)


def encoded_len(value: Any, depth: int = 0) -> int:
    """
    Upper bound for len(encode(value)), computed without building the bytes.

    Exact unless the value holds numbers that the reference runtime
    re-renders, which are counted at MAX_NUMBER_WIDTH.
    """
    if value is None or value is True:
        return 4
    if value is False:
        return 5
    if isinstance(value, str):
        return _string_len(value)
    if isinstance(value, (Number, int, float)):
        text = _as_number(value).text
        if _PLAIN_INT_RE.match(text) and text != "-0":
            return len(text)
        return max(len(text), MAX_NUMBER_WIDTH)
    if isinstance(value, (OrderedObject, list)):
        count = len(value)
        if not count:
            return 2
        # brackets, a newline before each entry and before the closer,
        # the separating commas, and the indentation of every line
        total = 2 + (count + 1) + (count - 1)
        total += count * INDENT * (depth + 1) + INDENT * depth
        if isinstance(value, OrderedObject):
            for key, item in value.items():
                total += _string_len(key) + 2 + encoded_len(item, depth + 1)
        else:
            for item in value:
                total += encoded_len(item, depth + 1)
        return total
    raise TypeError(f"cannot encode {type(value).__name__}")
