"""
Canonical Message Codec

Byte-exact canonical encoding, signature extraction and legacy unicode
normalization for signed append-only feed messages.
"""

__version__ = "0.1.0"
