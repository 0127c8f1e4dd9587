"""
Canonical message codec.

Composes parse -> encode -> extract -> normalize into the operations used by
the append and verify paths. There is no partial result: any stage failure
propagates unchanged and the message must be rejected.
"""

import logging
from typing import Any, Tuple

from ..core.canonical import encode, encoded_len
from ..core.parser import parse
from ..core.values import OrderedObject, OrderedValue
from .signature import SIGNATURE_KEY, extract_signature
from .unicode import normalize

logger = logging.getLogger(__name__)


def canonicalize(raw: bytes) -> Tuple[bytes, str]:
    """
    Compute the signed payload and detached signature of a message.

    Args:
        raw: Message bytes as stored or received (any JSON formatting)

    Returns:
        (unsigned_bytes, signature): the bytes the signature covers and the
        signature string exactly as found in the message

    Raises:
        EmptyInputError, MalformedJSONError: from the parser
        SignatureFieldMissingError, SignatureFieldMalformedError: from extraction
    """
    value = parse(raw)
    signed = encode(value)
    unsigned, signature = extract_signature(signed)
    payload = normalize(unsigned)
    logger.debug("canonicalized message: %d bytes signed payload", len(payload))
    return payload, signature


def canonical_len(value: OrderedValue) -> int:
    """Size estimate for preallocation; never smaller than the encoding."""
    return encoded_len(value)


def unsigned_payload(value: OrderedValue) -> bytes:
    """
    Bytes a signer must sign for a message that has no signature yet.

    Equal to the first output of canonicalize() once the signature is attached.

    Raises:
        ValueError: If value already carries a signature field
    """
    if isinstance(value, OrderedObject) and SIGNATURE_KEY in value:
        raise ValueError("message is already signed")
    return normalize(encode(value))


def attach_signature(value: Any, signature: str) -> OrderedObject:
    """
    Copy of a message object with the signature appended as its last field.

    Raises:
        TypeError: If value is not an object
        ValueError: If value already carries a signature field
    """
    if not isinstance(value, OrderedObject):
        raise TypeError("only message objects can be signed")
    if SIGNATURE_KEY in value:
        raise ValueError("message is already signed")
    signed = value.copy()
    signed[SIGNATURE_KEY] = signature
    return signed
