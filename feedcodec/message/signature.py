"""
Signature field extraction.

Works on canonically encoded bytes by pattern matching, never by re-parsing,
so the bytes left behind are exactly the bytes that were signed.

A top-level field is a line indented by exactly two spaces; nested fields are
indented further and string contents never hold a raw newline, so the
pattern below only ever sees the message's own signature field.
"""

import logging
import re
from typing import Tuple

from ..core.errors import SignatureFieldMalformedError, SignatureFieldMissingError

logger = logging.getLogger(__name__)

SIGNATURE_KEY = "signature"

_FIELD_LINE_RE = re.compile(rb'^  "signature": ([^\n]*)$', re.MULTILINE)
_VALUE_RE = re.compile(rb'"([A-Za-z0-9+/=.]+)"')


def extract_signature(data: bytes) -> Tuple[bytes, str]:
    """
    Detach the signature field from a canonically encoded message.

    Args:
        data: Canonical bytes of a message object holding a signature field

    Returns:
        (unsigned_bytes, signature) where unsigned_bytes is the encoding of
        the same object without the field and signature is the field's value
        without quotes

    Raises:
        SignatureFieldMissingError: If there is no top-level signature field
        SignatureFieldMalformedError: If the field's value is not a quoted
            signature string, or the field appears more than once
    """
    data = bytes(data)
    matches = list(_FIELD_LINE_RE.finditer(data))
    if not matches:
        raise SignatureFieldMissingError("message has no signature field")
    if len(matches) > 1:
        raise SignatureFieldMalformedError(
            f"expected one signature field, found {len(matches)}",
            offset=matches[1].start(),
        )

    m = matches[0]
    raw = m.group(1)
    has_next = raw.endswith(b",")
    if has_next:
        raw = raw[:-1]

    value = _VALUE_RE.fullmatch(raw)
    if value is None:
        raise SignatureFieldMalformedError(
            "signature value is not a quoted signature string",
            offset=m.start(1),
        )

    line_start, line_end = m.start(), m.end()
    if has_next:
        # "{" or "...,"  \n  "signature": "...",  \n  "next": ...
        start, end = line_start - 1, line_end
    elif data[line_start - 2:line_start] == b",\n":
        # last field: drop the comma that ended the previous one
        start, end = line_start - 2, line_end
    elif data[line_start - 2:line_start] == b"{\n" and data[line_end:line_end + 2] == b"\n}":
        # only field: the object collapses to {}
        start, end = line_start - 1, line_end + 1
    else:
        raise SignatureFieldMalformedError(
            "signature field is not laid out canonically",
            offset=line_start,
        )

    signature = value.group(1).decode("ascii")
    logger.debug("extracted signature field at byte %d", line_start)
    return data[:start] + data[end:], signature
