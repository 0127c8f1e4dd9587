"""
Message-level codec operations.

This module provides:
- canonicalize: raw message bytes -> (signed payload, signature)
- extract_signature: detach the signature field from canonical bytes
- normalize: rewrite legacy unicode escapes as raw UTF-8
"""

from .codec import attach_signature, canonical_len, canonicalize, unsigned_payload
from .signature import SIGNATURE_KEY, extract_signature
from .unicode import normalize

__all__ = [
    "canonicalize",
    "canonical_len",
    "unsigned_payload",
    "attach_signature",
    "extract_signature",
    "SIGNATURE_KEY",
    "normalize",
]
