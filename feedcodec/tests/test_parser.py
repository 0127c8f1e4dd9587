"""
Tests for the order-preserving parser.
"""

import pytest

from feedcodec.core.errors import EmptyInputError, MalformedJSONError
from feedcodec.core.parser import parse
from feedcodec.core.values import Number, OrderedObject, to_python


def test_parse_preserves_key_order():
    """Keys must come back in source order, not sorted."""
    value = parse(b'{"foo":"test","bar":1,"signature":"testSign"}')

    assert value.keys() == ["foo", "bar", "signature"]


def test_parse_nested_values():
    value = parse(b'{"a":[1,"x",null,true,false,{"z":{},"y":[]}]}')

    assert isinstance(value, OrderedObject)
    inner = value["a"]
    assert inner[0] == Number("1")
    assert inner[1:5] == ["x", None, True, False]
    assert inner[5].keys() == ["z", "y"]
    assert to_python(value) == {"a": [1, "x", None, True, False, {"z": {}, "y": []}]}


def test_parse_top_level_scalars():
    assert parse(b"null") is None
    assert parse(b"  true ") is True
    assert parse(b'"s"') == "s"
    assert parse(b"[]") == []


def test_parse_keeps_number_text():
    """Number literals keep their text; no float reformatting at parse time."""
    value = parse(b'{"i":10,"f":1.50,"e":2E+3}')

    assert value["i"].text == "10"
    assert value["f"].text == "1.50"
    assert value["e"].text == "2E+3"


def test_duplicate_keys_last_value_first_position():
    """Duplicate key keeps its first position but the last value."""
    value = parse(b'{"a":1,"b":2,"a":3}')

    assert value.items() == [("a", Number("3")), ("b", Number("2"))]


def test_parse_unicode_content():
    value = parse('{"t":"Ⓐ\\u2691"}'.encode("utf-8"))

    assert value["t"] == "Ⓐ⚑"


def test_parse_accepts_bytearray():
    assert parse(bytearray(b'{"a":"b"}'))["a"] == "b"


@pytest.mark.parametrize("data", [b"", b"   \n\t"])
def test_parse_empty_input(data):
    with pytest.raises(EmptyInputError) as exc:
        parse(data)

    assert exc.value.stage == "parse"


@pytest.mark.parametrize(
    "data",
    [
        b'{"a":"unterminated}',
        b'{"a":1,}',
        b'{"a" 1}',
        b'{"a":1',
        b"[1,2",
        b"{'a':1}",
        b'{"a":1} {"b":2}',
        b'{"a":NaN}',
        b'{"a":-Infinity}',
        b'{"a":"\xff"}',
        b'{"a":"tab\there"}',
    ],
)
def test_parse_malformed(data):
    with pytest.raises(MalformedJSONError) as exc:
        parse(data)

    assert exc.value.stage == "parse"


def test_malformed_error_reports_byte_offset():
    """Offsets count bytes, so multi-byte characters shift them."""
    data = '{"é": ?}'.encode("utf-8")

    with pytest.raises(MalformedJSONError) as exc:
        parse(data)

    assert exc.value.offset == data.index(b"?")
    assert "at byte" in str(exc.value)


def test_trailing_data_offset():
    data = b'{"a":1}  x'

    with pytest.raises(MalformedJSONError) as exc:
        parse(data)

    assert exc.value.offset == 9


def test_invalid_utf8_offset():
    with pytest.raises(MalformedJSONError) as exc:
        parse(b'{"a":"ok\xc3"}')

    assert exc.value.offset == 8
