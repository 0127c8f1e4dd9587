"""
Feed references and signature strings.

    feed ref:   @<base64 public key>.ed25519
    signature:  <base64 signature>.sig.ed25519
"""

import base64
import binascii

from ..core.errors import SignatureFormatError

FEED_SUFFIX = ".ed25519"
SIGNATURE_SUFFIX = ".sig.ed25519"

PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def _b64decode(text: str, what: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as ex:
        raise SignatureFormatError(f"{what}: invalid base64") from ex


def parse_feed_ref(ref: str) -> bytes:
    """
    Decode a feed reference to raw public key bytes.

    Raises:
        SignatureFormatError: If ref is not @<base64>.ed25519 with a 32-byte key
    """
    if not ref.startswith("@") or not ref.endswith(FEED_SUFFIX):
        raise SignatureFormatError(f"not an ed25519 feed ref: {ref!r}")
    key = _b64decode(ref[1:-len(FEED_SUFFIX)], "feed ref")
    if len(key) != PUBLIC_KEY_SIZE:
        raise SignatureFormatError(f"feed ref key has {len(key)} bytes, want {PUBLIC_KEY_SIZE}")
    return key


def format_feed_ref(public_key: bytes) -> str:
    return "@" + base64.b64encode(public_key).decode("ascii") + FEED_SUFFIX


def parse_signature(signature: str) -> bytes:
    """
    Decode a signature string to raw signature bytes.

    Raises:
        SignatureFormatError: If signature is not <base64>.sig.ed25519 with 64 bytes
    """
    if not signature.endswith(SIGNATURE_SUFFIX):
        raise SignatureFormatError("signature is not tagged .sig.ed25519")
    sig = _b64decode(signature[:-len(SIGNATURE_SUFFIX)], "signature")
    if len(sig) != SIGNATURE_SIZE:
        raise SignatureFormatError(f"signature has {len(sig)} bytes, want {SIGNATURE_SIZE}")
    return sig


def format_signature(signature: bytes) -> str:
    return base64.b64encode(signature).decode("ascii") + SIGNATURE_SUFFIX
