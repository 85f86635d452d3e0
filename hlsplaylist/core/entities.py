"""
Codecs for the entities carried by segment and header tags: byte ranges,
start points, keys, media initialization maps and date ranges.

Each ``parse_*`` function turns a tag body into a model; each
``*_attributes`` function builds the attribute mapping that
``encode_attributes`` renders back into a tag body.
"""

import re

from ..models.attributes import (
    AttributeValue,
    EnumeratedString,
    HexadecimalSequence,
    QuotedString,
    SignedFloat,
    UnsignedFloat,
)
from ..models.enums import AttributeKind, EncryptionMethod
from ..models.playlist import ByteRange, DateRange, Key, Map, Start
from ..utils.helpers import int_or_none, is_iso8601
from .attributes import AttributeList, parse_attribute_list
from .constants import (
    ATTR_BYTERANGE,
    ATTR_CLASS,
    ATTR_DURATION,
    ATTR_END_DATE,
    ATTR_END_ON_NEXT,
    ATTR_ID,
    ATTR_IV,
    ATTR_KEYFORMAT,
    ATTR_KEYFORMATVERSIONS,
    ATTR_METHOD,
    ATTR_PLANNED_DURATION,
    ATTR_PRECISE,
    ATTR_SCTE35_CMD,
    ATTR_SCTE35_IN,
    ATTR_SCTE35_OUT,
    ATTR_START_DATE,
    ATTR_TIME_OFFSET,
    ATTR_URI,
    CLIENT_ATTRIBUTE_PREFIX,
)
from .errors import (
    AttributeEncodeError,
    BadSyntaxError,
    CompatibilityVersionError,
    InvalidAttributeValueError,
    MissingRequiredAttributeError,
)

_BYTE_RANGE_RE = re.compile(r"^(\d+)(?:@(\d+))?$")

# Minimum protocol version for KEYFORMAT and KEYFORMATVERSIONS
KEY_FORMAT_MIN_VERSION = 5

_IV_LENGTH = 16


def parse_yes_no(attrs: AttributeList, name: str) -> bool:
    """Read an optional YES/NO enumerated attribute; absent means NO."""
    value = attrs.enum(name, required=False)
    if value is None or value == "NO":
        return False
    if value == "YES":
        return True
    raise InvalidAttributeValueError(name)


def validate_date(text: str) -> str:
    if not is_iso8601(text):
        raise BadSyntaxError("invalid date format")
    return text


# ── Byte range ───────────────────────────────────────────────────────
def parse_byte_range(text: str) -> ByteRange:
    """Parse ``<length>[@<start>]``; start is None when omitted."""
    match = _BYTE_RANGE_RE.match(text)
    if match is None:
        raise BadSyntaxError("failed to parse byte range")
    start = match.group(2)
    return ByteRange(length=int(match.group(1)), start=int(start) if start is not None else None)


def format_byte_range(byte_range: ByteRange) -> str:
    if byte_range.start is None:
        return str(byte_range.length)
    return f"{byte_range.length}@{byte_range.start}"


# ── Start ────────────────────────────────────────────────────────────
def parse_start(body: str) -> Start:
    attrs = parse_attribute_list(body)
    return Start(
        time_offset=attrs.signed_float(ATTR_TIME_OFFSET),
        precise=parse_yes_no(attrs, ATTR_PRECISE),
    )


def start_attributes(start: Start) -> dict[str, AttributeValue | None]:
    return {
        ATTR_TIME_OFFSET: SignedFloat(value=start.time_offset),
        ATTR_PRECISE: EnumeratedString(value="YES") if start.precise else None,
    }


# ── Key ──────────────────────────────────────────────────────────────
def parse_key(version: int, body: str) -> Key:
    """
    Parse an EXT-X-KEY or EXT-X-SESSION-KEY body.

    Raises:
        InvalidAttributeValueError: unknown METHOD, malformed IV or key format versions
        CompatibilityVersionError: key format fields under protocol version < 5
    """
    attrs = parse_attribute_list(body)

    method_str = attrs.enum(ATTR_METHOD)
    try:
        method = EncryptionMethod(method_str)
    except ValueError:
        raise InvalidAttributeValueError(ATTR_METHOD, "invalid encryption method") from None

    uri = attrs.string(ATTR_URI, required=method != EncryptionMethod.NONE)

    iv = attrs.bytes(ATTR_IV, required=False)
    if iv is not None:
        if len(iv) > _IV_LENGTH:
            raise InvalidAttributeValueError(ATTR_IV)
        iv = iv.rjust(_IV_LENGTH, b"\x00")

    key_format = attrs.string(ATTR_KEYFORMAT, required=False)
    if key_format is not None and version < KEY_FORMAT_MIN_VERSION:
        raise CompatibilityVersionError(KEY_FORMAT_MIN_VERSION)

    key_format_versions = []
    versions_str = attrs.string(ATTR_KEYFORMATVERSIONS, required=False)
    if versions_str is not None:
        if version < KEY_FORMAT_MIN_VERSION:
            raise CompatibilityVersionError(KEY_FORMAT_MIN_VERSION)
        for part in versions_str.split("/"):
            ver = int_or_none(part) if part.isdigit() else None
            if ver is None:
                raise InvalidAttributeValueError(ATTR_KEYFORMATVERSIONS)
            key_format_versions.append(ver)

    return Key(
        method=method,
        uri=uri,
        iv=iv,
        key_format=key_format,
        key_format_versions=key_format_versions,
    )


def key_attributes(key: Key, version: int) -> dict[str, AttributeValue | None]:
    if key.method != EncryptionMethod.NONE and not key.uri:
        raise MissingRequiredAttributeError(ATTR_URI)

    if (key.key_format or key.key_format_versions) and version < KEY_FORMAT_MIN_VERSION:
        raise CompatibilityVersionError(KEY_FORMAT_MIN_VERSION)

    versions = None
    if key.key_format_versions:
        versions = QuotedString(value="/".join(str(v) for v in key.key_format_versions))

    return {
        ATTR_METHOD: EnumeratedString(value=key.method.value),
        ATTR_URI: QuotedString(value=key.uri) if key.uri else None,
        ATTR_IV: HexadecimalSequence(value=key.iv) if key.iv else None,
        ATTR_KEYFORMAT: QuotedString(value=key.key_format) if key.key_format else None,
        ATTR_KEYFORMATVERSIONS: versions,
    }


# ── Map ──────────────────────────────────────────────────────────────
def parse_map(body: str) -> Map:
    attrs = parse_attribute_list(body)
    uri = attrs.string(ATTR_URI)
    byte_range = attrs.string(ATTR_BYTERANGE, required=False)
    return Map(
        uri=uri,
        byte_range=parse_byte_range(byte_range) if byte_range is not None else None,
    )


def map_attributes(media_map: Map) -> dict[str, AttributeValue | None]:
    byte_range = None
    if media_map.byte_range is not None:
        byte_range = QuotedString(value=format_byte_range(media_map.byte_range))
    return {
        ATTR_URI: QuotedString(value=media_map.uri),
        ATTR_BYTERANGE: byte_range,
    }


# ── Date range ───────────────────────────────────────────────────────
def _client_attribute(name: str, value: AttributeValue) -> str | bytes | float:
    if value.kind == AttributeKind.QUOTED_STRING:
        return value.value
    if value.kind == AttributeKind.HEXADECIMAL_SEQUENCE:
        return value.value
    if value.kind in (
        AttributeKind.DECIMAL_INTEGER,
        AttributeKind.DECIMAL_FLOATING_POINT,
        AttributeKind.SIGNED_DECIMAL_FLOATING_POINT,
    ):
        return float(value.value)
    raise InvalidAttributeValueError(name, f'illegal client attribute value for "{name}"')


def parse_date_range(body: str) -> DateRange:
    """
    Parse an EXT-X-DATERANGE body.

    END-ON-NEXT may only be YES, requires CLASS and excludes both DURATION
    and END-DATE.
    """
    attrs = parse_attribute_list(body)

    end_date = attrs.string(ATTR_END_DATE, required=False)
    date_range = DateRange(
        id=attrs.string(ATTR_ID),
        class_name=attrs.string(ATTR_CLASS, required=False),
        start_date=validate_date(attrs.string(ATTR_START_DATE)),
        end_date=validate_date(end_date) if end_date is not None else None,
        duration=attrs.float(ATTR_DURATION, required=False),
        planned_duration=attrs.float(ATTR_PLANNED_DURATION, required=False),
        client_attributes={
            name: _client_attribute(name, value)
            for name, value in attrs.items()
            if name.startswith(CLIENT_ATTRIBUTE_PREFIX)
        },
        scte35_cmd=attrs.bytes(ATTR_SCTE35_CMD, required=False),
        scte35_out=attrs.bytes(ATTR_SCTE35_OUT, required=False),
        scte35_in=attrs.bytes(ATTR_SCTE35_IN, required=False),
    )

    end_on_next = attrs.enum(ATTR_END_ON_NEXT, required=False)
    if end_on_next is not None:
        if end_on_next != "YES":
            raise InvalidAttributeValueError(ATTR_END_ON_NEXT)
        _check_end_on_next(date_range)
        date_range.end_on_next = True

    return date_range


def _check_end_on_next(date_range: DateRange) -> None:
    if not date_range.class_name:
        raise InvalidAttributeValueError(
            ATTR_END_ON_NEXT,
            f'this tag must have attribute, "{ATTR_CLASS}", with attribute, "{ATTR_END_ON_NEXT}",',
        )
    if date_range.duration is not None:
        raise InvalidAttributeValueError(
            ATTR_END_ON_NEXT,
            f'this tag may not have attribute, "{ATTR_DURATION}", '
            f'with attribute, "{ATTR_END_ON_NEXT}",',
        )
    if date_range.end_date is not None:
        raise InvalidAttributeValueError(
            ATTR_END_ON_NEXT,
            f'this tag may not have attribute, "{ATTR_END_DATE}", '
            f'with attribute, "{ATTR_END_ON_NEXT}",',
        )


def _client_value(name: str, value: str | bytes | float) -> AttributeValue:
    if isinstance(value, str):
        return QuotedString(value=value)
    if isinstance(value, bytes):
        return HexadecimalSequence(value=value)
    if isinstance(value, (int, float)):
        if value < 0:
            return SignedFloat(value=value)
        return UnsignedFloat(value=value)
    raise AttributeEncodeError(f'illegal client attribute value for "{name}"')


def date_range_attributes(date_range: DateRange) -> dict[str, AttributeValue | None]:
    if date_range.end_on_next:
        _check_end_on_next(date_range)

    attrs: dict[str, AttributeValue | None] = {
        ATTR_ID: QuotedString(value=date_range.id),
        ATTR_CLASS: QuotedString(value=date_range.class_name) if date_range.class_name else None,
        ATTR_START_DATE: QuotedString(value=validate_date(date_range.start_date)),
    }

    if date_range.end_date is not None:
        attrs[ATTR_END_DATE] = QuotedString(value=validate_date(date_range.end_date))
    if date_range.duration is not None:
        attrs[ATTR_DURATION] = UnsignedFloat(value=date_range.duration)
    if date_range.planned_duration is not None:
        attrs[ATTR_PLANNED_DURATION] = UnsignedFloat(value=date_range.planned_duration)

    for name, value in date_range.client_attributes.items():
        name = name.upper()
        if not name.startswith(CLIENT_ATTRIBUTE_PREFIX):
            raise AttributeEncodeError(
                f'client attribute "{name}" must start with "{CLIENT_ATTRIBUTE_PREFIX}"'
            )
        attrs[name] = _client_value(name, value)

    if date_range.scte35_cmd:
        attrs[ATTR_SCTE35_CMD] = HexadecimalSequence(value=date_range.scte35_cmd)
    if date_range.scte35_out:
        attrs[ATTR_SCTE35_OUT] = HexadecimalSequence(value=date_range.scte35_out)
    if date_range.scte35_in:
        attrs[ATTR_SCTE35_IN] = HexadecimalSequence(value=date_range.scte35_in)
    if date_range.end_on_next:
        attrs[ATTR_END_ON_NEXT] = EnumeratedString(value="YES")

    return attrs
