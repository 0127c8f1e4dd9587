"""
Legacy unicode escape normalization.

Historically stored messages carry unicode escapes baked in by producers with
a different escaping policy. This rewrites them as raw UTF-8:

    \\uXXXX      standard 4-digit escape
    \\UXXXXXXXX  8-digit escape for code points outside the BMP
    \\UXXXX      malformed legacy form, still decoded

Anything else, including truncated escapes, passes through unchanged.

An escaped backslash pair is kept as written. This departs from the older
single-regex scan, which did not pair backslashes and decoded "\\\\u0027" too.
"""

import logging
import re

logger = logging.getLogger(__name__)

MAX_CODE_POINT = 0x10FFFF
# longest escape: \UXXXXXXXX
MAX_ESCAPE_LEN = 10
_BACKSLASH = ord("\\")

# An escaped backslash is matched as a unit so "\\u0027" keeps its meaning.
_ESCAPE_RE = re.compile(
    rb"\\(?:\\|u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{4})([0-9A-Fa-f]{4})?)"
)


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF


def _replace(match: "re.Match") -> bytes:
    whole = match.group(0)
    short, upper, upper_tail = match.group(1), match.group(2), match.group(3)
    if short is None and upper is None:
        return whole

    tail = b""
    if short is not None:
        code = int(short, 16)
    elif upper_tail is not None and int(upper + upper_tail, 16) <= MAX_CODE_POINT:
        code = int(upper + upper_tail, 16)
    else:
        code = int(upper, 16)
        tail = upper_tail or b""

    if _is_surrogate(code):
        # TODO: decide surrogate pair handling once archived data with split pairs turns up
        logger.warning("leaving escape for lone surrogate U+%04X untouched", code)
        return whole
    return chr(code).encode("utf-8") + tail


def normalize(data: bytes) -> bytes:
    """
    Rewrite legacy unicode escapes as raw UTF-8.

    One left-to-right pass. A decoded character is read again together with
    the text after it, and with a still-open backslash up to nine bytes
    before it, so the result never holds an escape this function would
    rewrite and normalize(normalize(x)) equals normalize(x). Every rewrite
    shrinks the input by at least three bytes and re-reads at most a fixed
    number, which keeps the pass linear.

    Args:
        data: Bytes that may contain escapes

    Returns:
        New bytes with recognized escapes decoded
    """
    out = bytearray()
    # unread input, reversed so the next byte sits at the end
    pending = bytearray(data[::-1])
    # out[:locked] can no longer start or join an escape
    locked = 0
    rewrites = 0
    while pending:
        if pending[-1] != _BACKSLASH:
            out.append(pending.pop())
            continue
        match = _ESCAPE_RE.match(bytes(pending[-MAX_ESCAPE_LEN:][::-1]))
        if match is None:
            out.append(pending.pop())
            continue

        whole = match.group(0)
        del pending[-len(whole):]
        replacement = _replace(match)
        if replacement == whole:
            out += whole
            # a 4-digit \U match may still grow into the 8-digit form
            if match.group(2) is None or match.group(3) is not None:
                locked = len(out)
            continue

        start = max(locked, len(out) - (MAX_ESCAPE_LEN - 1))
        back = out.rfind(b"\\", start)
        if back >= 0:
            replacement = bytes(out[back:]) + replacement
            del out[back:]
        pending += replacement[::-1]
        rewrites += 1

    if rewrites:
        logger.debug("normalized %d unicode escape(s)", rewrites)
    return bytes(out)
