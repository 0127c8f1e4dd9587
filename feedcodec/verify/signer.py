"""
Ed25519 keys for feed messages.

Key management:
- Default path: ~/.feedcodec/keys/secret_ed25519 (FEEDCODEC_KEY_PATH overrides)
- PEM files (PKCS8 private key, SubjectPublicKeyInfo public key)
"""

import os
from pathlib import Path
from typing import Optional, Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .refs import format_feed_ref, parse_feed_ref


def _raw_public_bytes(public_key: Ed25519PublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class SigningKey:
    """
    Ed25519 signing key wrapper.

    Provides:
    - Key generation
    - Key loading from and saving to PEM files
    - Signing of canonical payload bytes
    - Feed reference derivation
    """

    def __init__(self, private_key: Ed25519PrivateKey):
        self.private_key = private_key
        self.public_key = private_key.public_key()

    @classmethod
    def generate(cls) -> "SigningKey":
        """Generate new Ed25519 keypair."""
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def load_from_file(cls, path: str) -> "SigningKey":
        """
        Load private key from PEM file.

        Raises:
            FileNotFoundError: If key file doesn't exist
            ValueError: If key format is invalid
        """
        with open(path, "rb") as f:
            private_key = serialization.load_pem_private_key(f.read(), password=None)

        if not isinstance(private_key, Ed25519PrivateKey):
            raise ValueError("Key file is not Ed25519 private key")

        return cls(private_key)

    def save_to_file(self, path: str, public_path: Optional[str] = None) -> None:
        """
        Save private key to PEM file.

        Args:
            path: Path to save private key
            public_path: Optional path to save public key
        """
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        private_pem = self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        with open(path, "wb") as f:
            f.write(private_pem)
        os.chmod(path, 0o600)

        if public_path:
            with open(public_path, "wb") as f:
                f.write(self.get_public_key_pem())

    def sign(self, payload: bytes) -> bytes:
        """Sign canonical payload bytes; returns the 64-byte signature."""
        return self.private_key.sign(payload)

    def get_public_key_pem(self) -> bytes:
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def feed_ref(self) -> str:
        """Feed reference (@<base64>.ed25519) of this key's public half."""
        return format_feed_ref(_raw_public_bytes(self.public_key))


class VerifyingKey:
    """
    Ed25519 verifying key (public key only).

    Used for signature verification without private key access.
    """

    def __init__(self, public_key: Ed25519PublicKey):
        self.public_key = public_key

    @classmethod
    def load_from_file(cls, path: str) -> "VerifyingKey":
        """Load public key from PEM file."""
        with open(path, "rb") as f:
            public_key = serialization.load_pem_public_key(f.read())

        if not isinstance(public_key, Ed25519PublicKey):
            raise ValueError("Key file is not Ed25519 public key")

        return cls(public_key)

    @classmethod
    def from_signing_key(cls, signing_key: SigningKey) -> "VerifyingKey":
        """Extract verifying key from signing key."""
        return cls(signing_key.public_key)

    @classmethod
    def from_feed_ref(cls, ref: str) -> "VerifyingKey":
        """
        Build from a feed reference.

        Raises:
            SignatureFormatError: If ref is not a valid ed25519 feed ref
        """
        return cls(Ed25519PublicKey.from_public_bytes(parse_feed_ref(ref)))

    def verify(self, payload: bytes, signature: bytes) -> bool:
        """
        Verify signature on payload bytes.

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            self.public_key.verify(signature, payload)
            return True
        except InvalidSignature:
            return False

    def feed_ref(self) -> str:
        return format_feed_ref(_raw_public_bytes(self.public_key))


def get_default_key_path() -> Path:
    """
    Get default key path.

    FEEDCODEC_KEY_PATH wins over ~/.feedcodec/keys/secret_ed25519.
    """
    env_path = os.getenv("FEEDCODEC_KEY_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".feedcodec" / "keys" / "secret_ed25519"


def ensure_keypair(key_path: Optional[str] = None) -> Tuple[str, str]:
    """
    Ensure keypair exists (generate if missing).

    Returns:
        (private_key_path, public_key_path) tuple
    """
    if key_path is None:
        key_path = str(get_default_key_path())

    public_key_path = key_path + ".pub"

    if not os.path.exists(key_path):
        SigningKey.generate().save_to_file(key_path, public_key_path)

    return key_path, public_key_path
