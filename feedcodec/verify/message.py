"""
Message signing and verification.

Verification levels:
- codec: the message canonicalizes and carries a well-formed signature
- signature: the Ed25519 signature covers the canonical payload
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.canonical import encode
from ..core.errors import CanonicalizationError, SignatureFormatError
from ..core.parser import parse
from ..core.values import OrderedObject, to_ordered
from ..message.codec import attach_signature, canonicalize, unsigned_payload
from .refs import format_signature, parse_signature
from .signer import SigningKey, VerifyingKey

logger = logging.getLogger(__name__)

AUTHOR_KEY = "author"


@dataclass
class VerificationResult:
    """
    Result of message verification.

    Fields:
        valid: Overall validity (all checks passed)
        signature_valid: Ed25519 signature verification passed
        author: Feed ref the message was checked against
        signature: Signature string found in the message
        error: Error message if verification failed
    """
    valid: bool
    signature_valid: bool = False
    author: Optional[str] = None
    signature: Optional[str] = None
    error: Optional[str] = None


def sign_message(value: Any, signing_key: SigningKey) -> bytes:
    """
    Sign a message and return its canonical encoding with the signature field.

    Args:
        value: Message object without a signature (OrderedObject or dict)
        signing_key: Author's key

    Returns:
        Canonical bytes of the signed message
    """
    message = to_ordered(value)
    if not isinstance(message, OrderedObject):
        raise TypeError("only message objects can be signed")
    payload = unsigned_payload(message)
    signature = format_signature(signing_key.sign(payload))
    return encode(attach_signature(message, signature))


def _author_key(raw: bytes) -> VerifyingKey:
    value = parse(raw)
    author = value.get(AUTHOR_KEY) if isinstance(value, OrderedObject) else None
    if not isinstance(author, str):
        raise SignatureFormatError("message has no author feed ref")
    return VerifyingKey.from_feed_ref(author)


def verify_message(raw: bytes, verifying_key: Optional[VerifyingKey] = None) -> VerificationResult:
    """
    Verify a signed message.

    A message that fails to canonicalize is never reported as verified.

    Args:
        raw: Message bytes as stored or received
        verifying_key: Key to check against (default: the message's author field)

    Returns:
        VerificationResult
    """
    try:
        payload, signature = canonicalize(raw)
        key = verifying_key if verifying_key is not None else _author_key(raw)
        sig_bytes = parse_signature(signature)
    except (CanonicalizationError, SignatureFormatError, ValueError) as ex:
        logger.debug("message rejected: %s", ex)
        return VerificationResult(valid=False, error=str(ex))

    author = key.feed_ref()
    if not key.verify(payload, sig_bytes):
        return VerificationResult(
            valid=False,
            author=author,
            signature=signature,
            error="Invalid signature",
        )

    return VerificationResult(
        valid=True,
        signature_valid=True,
        author=author,
        signature=signature,
    )
