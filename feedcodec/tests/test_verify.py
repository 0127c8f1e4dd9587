"""
Tests for message signing and verification.

Critical tests:
1. Sign then verify
2. Tamper detection (content)
3. Tamper detection (key order)
4. Wrong public key
5. Codec failures never verify
"""

import base64
import os
import tempfile

import pytest

from feedcodec.core.canonical import encode
from feedcodec.core.errors import SignatureFormatError
from feedcodec.core.parser import parse
from feedcodec.message.codec import canonicalize
from feedcodec.verify import (
    SigningKey,
    VerifyingKey,
    ensure_keypair,
    format_feed_ref,
    format_signature,
    parse_feed_ref,
    parse_signature,
    sign_message,
    verify_message,
)


def _draft(key: SigningKey, text: str = "hello") -> dict:
    return {
        "previous": None,
        "author": key.feed_ref(),
        "sequence": 1,
        "timestamp": 1514517067954,
        "hash": "sha256",
        "content": {"type": "post", "text": text},
    }


def test_sign_then_verify():
    key = SigningKey.generate()

    signed = sign_message(_draft(key), key)
    result = verify_message(signed)

    assert result.valid, result.error
    assert result.signature_valid
    assert result.author == key.feed_ref()
    assert result.signature.endswith(".sig.ed25519")


def test_signature_field_is_last():
    key = SigningKey.generate()

    signed = sign_message(_draft(key), key)

    assert parse(signed).keys()[-1] == "signature"


def test_verify_with_explicit_key():
    key = SigningKey.generate()
    signed = sign_message(_draft(key), key)

    result = verify_message(signed, VerifyingKey.from_signing_key(key))

    assert result.valid


def test_verify_compact_reformatted_message():
    """Peers may store messages in any JSON formatting; verification still holds."""
    key = SigningKey.generate()
    signed = sign_message(_draft(key, text="Ⓐ⚑ wasn't"), key)

    compact = signed.replace(b"\n", b"").replace(b'": ', b'":')

    assert verify_message(compact).valid


def test_tampered_content_fails():
    key = SigningKey.generate()
    signed = sign_message(_draft(key), key)

    tampered = signed.replace(b'"hello"', b'"hellO"')
    result = verify_message(tampered)

    assert not result.valid
    assert not result.signature_valid
    assert result.error == "Invalid signature"


def test_reordered_keys_fail():
    """Key order is part of the signed bytes."""
    key = SigningKey.generate()
    signed = parse(sign_message(_draft(key), key))

    reordered = parse(encode(signed))
    seq = reordered["sequence"]
    del reordered["sequence"]
    items = reordered.items()
    items.insert(0, ("sequence", seq))
    raw = encode(type(reordered)(items))

    assert not verify_message(raw).valid


def test_wrong_key_fails():
    key = SigningKey.generate()
    other = SigningKey.generate()
    signed = sign_message(_draft(key), key)

    result = verify_message(signed, VerifyingKey.from_signing_key(other))

    assert not result.valid
    assert result.author == other.feed_ref()


def test_codec_errors_never_verify():
    for raw in [b"", b"{", b'{"author":"@x.ed25519"}', b'{"signature":"abc"}']:
        result = verify_message(raw)
        assert not result.valid
        assert result.error


def test_missing_author_fails():
    key = SigningKey.generate()
    draft = _draft(key)
    del draft["author"]
    signed = sign_message(draft, key)

    result = verify_message(signed)

    assert not result.valid
    assert "author" in result.error


def test_sign_rejects_signed_message():
    key = SigningKey.generate()
    signed = parse(sign_message(_draft(key), key))

    with pytest.raises(ValueError):
        sign_message(signed, key)


def test_signed_payload_is_canonical_payload():
    key = SigningKey.generate()
    signed = sign_message(_draft(key), key)

    payload, signature = canonicalize(signed)

    VerifyingKey.from_signing_key(key).public_key.verify(parse_signature(signature), payload)


def test_feed_ref_round_trip():
    raw = bytes(range(32))

    ref = format_feed_ref(raw)

    assert ref.startswith("@") and ref.endswith(".ed25519")
    assert parse_feed_ref(ref) == raw


@pytest.mark.parametrize(
    "ref",
    [
        "FCX.ed25519",
        "@abc.ed25519",
        "@" + base64.b64encode(bytes(32)).decode() + ".sha256",
        "@!!!!.ed25519",
    ],
)
def test_bad_feed_refs(ref):
    with pytest.raises(SignatureFormatError):
        parse_feed_ref(ref)


def test_signature_format_round_trip():
    sig = bytes(range(64))

    assert parse_signature(format_signature(sig)) == sig


@pytest.mark.parametrize("sig", ["testSign", "abc.sig.ed25519", "aBIS==.sig.ed25519"])
def test_bad_signature_strings(sig):
    with pytest.raises(SignatureFormatError):
        parse_signature(sig)


def test_key_files_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        key_path = os.path.join(tmpdir, "keys", "secret")

        private_path, public_path = ensure_keypair(key_path)
        key = SigningKey.load_from_file(private_path)
        pub = VerifyingKey.load_from_file(public_path)

        assert pub.feed_ref() == key.feed_ref()

        # existing keys are kept
        ensure_keypair(key_path)
        assert SigningKey.load_from_file(private_path).feed_ref() == key.feed_ref()
