"""Tests for the attribute-list grammar and value rendering."""

import pytest

from hlsplaylist.core.attributes import (
    AttributeList,
    encode_attributes,
    parse_attribute_list,
    render_value,
)
from hlsplaylist.core.errors import (
    AttributeEncodeError,
    BadAttrNameError,
    BadAttrSyntaxError,
    MissingRequiredAttributeError,
    TypeMismatchError,
)
from hlsplaylist.models.attributes import (
    DecimalInteger,
    DecimalResolution,
    EnumeratedString,
    HexadecimalSequence,
    QuotedString,
    SignedFloat,
    UnsignedFloat,
)
from hlsplaylist.models.enums import AttributeKind


# ── Value recognition ────────────────────────────────────────────────
class TestValueKinds:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", DecimalInteger(value=42)),
            ("0", DecimalInteger(value=0)),
            ("0x1A", HexadecimalSequence(value=b"\x1a")),
            ("0XABCD", HexadecimalSequence(value=b"\xab\xcd")),
            ("1.5", UnsignedFloat(value=1.5)),
            ("-3.5", SignedFloat(value=-3.5)),
            ("-3", SignedFloat(value=-3.0)),
            ('"hello, world"', QuotedString(value="hello, world")),
            ('""', QuotedString(value="")),
            ("720x480", DecimalResolution(width=720, height=480)),
            ("AES-128", EnumeratedString(value="AES-128")),
            ("YES", EnumeratedString(value="YES")),
        ],
    )
    def test_recognized_kind(self, text, expected):
        attrs = parse_attribute_list(f"A={text}")
        assert attrs["A"] == expected
        assert attrs["A"].kind == expected.kind

    def test_resolution_is_not_enumerated(self):
        attrs = parse_attribute_list("RESOLUTION=1920x1080")
        assert attrs["RESOLUTION"].kind == AttributeKind.DECIMAL_RESOLUTION

    def test_digit_run_is_integer_not_float(self):
        attrs = parse_attribute_list("BANDWIDTH=1280000")
        assert attrs["BANDWIDTH"].kind == AttributeKind.DECIMAL_INTEGER

    def test_twenty_one_digits_is_float(self):
        attrs = parse_attribute_list("N=123456789012345678901")
        assert attrs["N"].kind == AttributeKind.DECIMAL_FLOATING_POINT

    def test_odd_hex_digits_are_left_padded(self):
        attrs = parse_attribute_list("IV=0xABC")
        assert attrs.bytes("IV") == b"\x0a\xbc"

    def test_hex_without_digits_is_enumerated(self):
        attrs = parse_attribute_list("X=0x")
        assert attrs["X"].kind == AttributeKind.ENUMERATED_STRING

    def test_empty_value_is_enumerated(self):
        attrs = parse_attribute_list("A=,B=1")
        assert attrs["A"] == EnumeratedString(value="")
        assert attrs.integer("B") == 1
        assert encode_attributes(attrs) == "A=,B=1"


# ── Parsing ──────────────────────────────────────────────────────────
class TestParseAttributeList:
    def test_multiple_attributes(self):
        attrs = parse_attribute_list(
            'BANDWIDTH=1280000,CODECS="avc1.4d401f,mp4a.40.2",RESOLUTION=640x360,FRAME-RATE=29.97'
        )
        assert len(attrs) == 4
        assert attrs.integer("BANDWIDTH") == 1280000
        assert attrs.string("CODECS") == "avc1.4d401f,mp4a.40.2"
        assert attrs.resolution("RESOLUTION") == (640, 360)
        assert attrs.float("FRAME-RATE") == 29.97

    def test_preserves_order(self):
        attrs = parse_attribute_list("B=1,A=2,C=3")
        assert list(attrs) == ["B", "A", "C"]

    def test_empty_body(self):
        assert len(parse_attribute_list("")) == 0

    def test_repeated_name_keeps_last(self):
        attrs = parse_attribute_list('URI="a",URI="b"')
        assert len(attrs) == 1
        assert attrs.string("URI") == "b"

    @pytest.mark.parametrize("body", ["lower=1", "=1", "NAME", "NAME 1", ",A=1"])
    def test_bad_name(self, body):
        with pytest.raises(BadAttrNameError):
            parse_attribute_list(body)

    @pytest.mark.parametrize("body", ['A="unterminated', "A=has space", 'A="x"y'])
    def test_bad_value(self, body):
        with pytest.raises(BadAttrSyntaxError):
            parse_attribute_list(body)


# ── Accessors ────────────────────────────────────────────────────────
class TestAccessors:
    def test_missing_required(self):
        attrs = parse_attribute_list("A=1")
        with pytest.raises(MissingRequiredAttributeError, match='"B"') as exc_info:
            attrs.integer("B")
        assert exc_info.value.attribute == "B"

    def test_missing_optional_returns_none(self):
        attrs = parse_attribute_list("A=1")
        assert attrs.integer("B", required=False) is None
        assert attrs.string("B", required=False) is None
        assert attrs.resolution("B", required=False) is None

    def test_type_mismatch(self):
        attrs = parse_attribute_list("OFFSET=-3.5")
        with pytest.raises(TypeMismatchError) as exc_info:
            attrs.float("OFFSET")
        err = exc_info.value
        assert err.expected == AttributeKind.DECIMAL_FLOATING_POINT
        assert err.actual == AttributeKind.SIGNED_DECIMAL_FLOATING_POINT

    def test_optional_still_checks_kind(self):
        attrs = parse_attribute_list("URI=plain")
        with pytest.raises(TypeMismatchError):
            attrs.string("URI", required=False)

    def test_signed_float_accepts_unsigned(self):
        attrs = parse_attribute_list("A=2.5,B=-2.5")
        assert attrs.signed_float("A") == 2.5
        assert attrs.signed_float("B") == -2.5

    def test_signed_float_rejects_integer(self):
        attrs = parse_attribute_list("A=2")
        with pytest.raises(TypeMismatchError):
            attrs.signed_float("A")

    def test_enum_rejects_quoted(self):
        attrs = parse_attribute_list('METHOD="AES-128"')
        with pytest.raises(TypeMismatchError, match="expected enumerated-string"):
            attrs.enum("METHOD")

    def test_contains_and_get(self):
        attrs = parse_attribute_list("A=1")
        assert "A" in attrs
        assert "B" not in attrs
        assert attrs.get("B") is None


# ── Rendering ────────────────────────────────────────────────────────
class TestRenderValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (DecimalInteger(value=7), "7"),
            (HexadecimalSequence(value=b"\x0a\xbc"), "0x0ABC"),
            (UnsignedFloat(value=29.97), "29.97"),
            (UnsignedFloat(value=25.0), "25.0"),
            (SignedFloat(value=-10.0), "-10.0"),
            (SignedFloat(value=1e-7), "0.0000001"),
            (QuotedString(value="en"), '"en"'),
            (EnumeratedString(value="YES"), "YES"),
            (DecimalResolution(width=1280, height=720), "1280x720"),
        ],
    )
    def test_render(self, value, expected):
        assert render_value(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            QuotedString(value='say "hi"'),
            QuotedString(value="line\nbreak"),
            QuotedString(value="carriage\rreturn"),
            EnumeratedString(value="has space"),
            EnumeratedString(value="a,b"),
            HexadecimalSequence(value=b""),
            UnsignedFloat(value=-1.0),
            UnsignedFloat(value=float("inf")),
            SignedFloat(value=float("nan")),
            DecimalResolution(width=0, height=480),
        ],
    )
    def test_illegal_values(self, value):
        with pytest.raises(AttributeEncodeError):
            render_value(value)


class TestEncodeAttributes:
    def test_insertion_order_and_none_skipped(self):
        body = encode_attributes(
            {
                "METHOD": EnumeratedString(value="AES-128"),
                "URI": QuotedString(value="key.bin"),
                "IV": None,
            }
        )
        assert body == 'METHOD=AES-128,URI="key.bin"'

    def test_bad_name(self):
        with pytest.raises(AttributeEncodeError, match="illegal attribute name"):
            encode_attributes({"lower": DecimalInteger(value=1)})

    def test_empty(self):
        assert encode_attributes({}) == ""

    @pytest.mark.parametrize(
        "body",
        [
            'BANDWIDTH=1280000,CODECS="avc1.4d401f,mp4a.40.2",RESOLUTION=640x360',
            "IV=0x0123456789ABCDEF0123456789ABCDEF,METHOD=AES-128",
            "TIME-OFFSET=-12.5,PRECISE=YES,RATE=25.0",
        ],
    )
    def test_reparse_yields_same_values(self, body):
        attrs = parse_attribute_list(body)
        assert parse_attribute_list(encode_attributes(attrs)) == attrs

    def test_accepts_attribute_list(self):
        attrs = AttributeList({"A": DecimalInteger(value=1)})
        assert encode_attributes(attrs) == "A=1"
