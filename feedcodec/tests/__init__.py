"""
Test suite for the canonical message codec.

Focus areas:
- Canonical serialization byte-exactness
- Order-preserving parsing
- Signature extraction
- Legacy unicode normalization
- Signing and verification round trips
"""
