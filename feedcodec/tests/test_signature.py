"""
Tests for signature field extraction.

Critical: the bytes left behind must be exactly the bytes that were signed.
"""

import pytest

from feedcodec.core.canonical import encode
from feedcodec.core.errors import SignatureFieldMalformedError, SignatureFieldMissingError
from feedcodec.core.parser import parse
from feedcodec.message.signature import extract_signature


def test_strip_signature_last_field():
    data = b'{\n  "foo": "hello",\n  "signature": "aBISzGroszUndKlein01234567890/+="\n}'

    unsigned, signature = extract_signature(data)

    assert unsigned == b'{\n  "foo": "hello"\n}'
    assert signature == "aBISzGroszUndKlein01234567890/+="


def test_strip_signature_with_algorithm_tag():
    sig = "x" * 86 + "==.sig.ed25519"
    data = ('{\n  "foo": 1,\n  "signature": "%s"\n}' % sig).encode("ascii")

    unsigned, signature = extract_signature(data)

    assert signature == sig
    assert unsigned == b'{\n  "foo": 1\n}'


@pytest.mark.parametrize(
    "raw, without",
    [
        (b'{"signature":"c2ln","a":1,"b":2}', b'{"a":1,"b":2}'),
        (b'{"a":1,"signature":"c2ln","b":2}', b'{"a":1,"b":2}'),
        (b'{"a":1,"b":2,"signature":"c2ln"}', b'{"a":1,"b":2}'),
        (b'{"signature":"c2ln"}', b"{}"),
    ],
)
def test_strip_equals_encoding_without_field(raw, without):
    """Wherever the field sits, stripping it must match encoding the object without it."""
    unsigned, signature = extract_signature(encode(parse(raw)))

    assert signature == "c2ln"
    assert unsigned == encode(parse(without))


def test_nested_signature_key_is_ignored():
    """Only the top-level field counts; nested ones are content."""
    data = encode(parse(b'{"content":{"signature":"inner"},"signature":"outer"}'))

    unsigned, signature = extract_signature(data)

    assert signature == "outer"
    assert unsigned == encode(parse(b'{"content":{"signature":"inner"}}'))


def test_signature_text_inside_string_is_ignored():
    data = encode(parse(b'{"text":"\\n  \\"signature\\": \\"fake\\"","signature":"real"}'))

    unsigned, signature = extract_signature(data)

    assert signature == "real"
    assert b"fake" in unsigned


def test_missing_signature():
    with pytest.raises(SignatureFieldMissingError) as exc:
        extract_signature(encode(parse(b'{"foo":"bar"}')))

    assert exc.value.stage == "extract"


def test_missing_signature_on_non_object():
    with pytest.raises(SignatureFieldMissingError):
        extract_signature(encode(parse(b'["signature"]')))


@pytest.mark.parametrize(
    "raw",
    [
        b'{"a":1,"signature":42}',
        b'{"a":1,"signature":null}',
        b'{"a":1,"signature":{"x":"y"}}',
        b'{"a":1,"signature":"has space"}',
        b'{"a":1,"signature":""}',
    ],
)
def test_malformed_signature_value(raw):
    with pytest.raises(SignatureFieldMalformedError) as exc:
        extract_signature(encode(parse(raw)))

    assert exc.value.stage == "extract"
    assert exc.value.offset is not None


def test_duplicate_signature_lines_rejected():
    data = b'{\n  "signature": "a",\n  "signature": "b"\n}'

    with pytest.raises(SignatureFieldMalformedError):
        extract_signature(data)


def test_extraction_does_not_touch_input():
    data = b'{\n  "foo": "hello",\n  "signature": "abc"\n}'
    before = bytes(data)

    extract_signature(data)

    assert data == before
