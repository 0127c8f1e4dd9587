"""
Ed25519 signing and verification of feed messages.
"""

from .refs import format_feed_ref, format_signature, parse_feed_ref, parse_signature
from .signer import SigningKey, VerifyingKey, ensure_keypair, get_default_key_path
from .message import VerificationResult, sign_message, verify_message

__all__ = [
    "parse_feed_ref",
    "format_feed_ref",
    "parse_signature",
    "format_signature",
    "SigningKey",
    "VerifyingKey",
    "ensure_keypair",
    "get_default_key_path",
    "VerificationResult",
    "sign_message",
    "verify_message",
]
