"""
feedcodec CLI - Canonical Message Codec tools

Commands:
- feedcodec canonicalize - Signed payload and signature of a message
- feedcodec normalize - Repair legacy unicode escapes
- feedcodec length - Preallocation estimate vs canonical length
- feedcodec keys keygen/sign/verify - Ed25519 message signatures
"""

__version__ = "0.1.0"
