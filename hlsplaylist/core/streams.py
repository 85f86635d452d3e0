"""
EXT-X-STREAM-INF and EXT-X-I-FRAME-STREAM-INF codecs.
"""

from ..models.attributes import (
    AttributeValue,
    DecimalInteger,
    DecimalResolution,
    EnumeratedString,
    QuotedString,
    UnsignedFloat,
)
from ..models.enums import AttributeKind, HDCPLevel
from ..models.playlist import IFrameStream, Stream, VariantStream
from .attributes import AttributeList, parse_attribute_list
from .constants import (
    ATTR_AUDIO,
    ATTR_AVERAGE_BANDWIDTH,
    ATTR_BANDWIDTH,
    ATTR_CLOSED_CAPTIONS,
    ATTR_CODECS,
    ATTR_FRAME_RATE,
    ATTR_HDCP_LEVEL,
    ATTR_PROGRAM_ID,
    ATTR_RESOLUTION,
    ATTR_SUBTITLES,
    ATTR_URI,
    ATTR_VIDEO,
)
from .errors import InvalidAttributeValueError

NO_CLOSED_CAPTIONS = "NONE"


def _stream_fields(attrs: AttributeList) -> dict:
    codecs = attrs.string(ATTR_CODECS, required=False)
    resolution = attrs.resolution(ATTR_RESOLUTION, required=False)

    hdcp_level = attrs.enum(ATTR_HDCP_LEVEL, required=False)
    if hdcp_level is not None:
        try:
            hdcp_level = HDCPLevel(hdcp_level)
        except ValueError:
            raise InvalidAttributeValueError(ATTR_HDCP_LEVEL) from None

    return {
        "bandwidth": attrs.integer(ATTR_BANDWIDTH),
        "average_bandwidth": attrs.integer(ATTR_AVERAGE_BANDWIDTH, required=False),
        "codecs": codecs.split(",") if codecs else [],
        "width": resolution[0] if resolution is not None else None,
        "height": resolution[1] if resolution is not None else None,
        "hdcp_level": hdcp_level,
        "program_id": attrs.integer(ATTR_PROGRAM_ID, required=False),
        "video": attrs.string(ATTR_VIDEO, required=False),
    }


def _closed_captions_group(attrs: AttributeList) -> str | None:
    value = attrs.get(ATTR_CLOSED_CAPTIONS)
    if value is None:
        return None
    if value.kind == AttributeKind.ENUMERATED_STRING:
        if value.value != NO_CLOSED_CAPTIONS:
            raise InvalidAttributeValueError(ATTR_CLOSED_CAPTIONS)
        return NO_CLOSED_CAPTIONS
    return attrs.string(ATTR_CLOSED_CAPTIONS)


def parse_variant_stream(body: str, uri: str) -> VariantStream:
    """Parse an EXT-X-STREAM-INF body; uri comes from the following line."""
    attrs = parse_attribute_list(body)
    return VariantStream(
        uri=uri,
        frame_rate=attrs.float(ATTR_FRAME_RATE, required=False),
        audio=attrs.string(ATTR_AUDIO, required=False),
        subtitles=attrs.string(ATTR_SUBTITLES, required=False),
        closed_captions=_closed_captions_group(attrs),
        **_stream_fields(attrs),
    )


def parse_i_frame_stream(body: str) -> IFrameStream:
    """Parse an EXT-X-I-FRAME-STREAM-INF body; URI is a required attribute."""
    attrs = parse_attribute_list(body)
    return IFrameStream(uri=attrs.string(ATTR_URI), **_stream_fields(attrs))


def _stream_attributes(stream: Stream) -> dict[str, AttributeValue | None]:
    resolution = None
    if stream.width is not None and stream.height is not None:
        resolution = DecimalResolution(width=stream.width, height=stream.height)

    return {
        ATTR_BANDWIDTH: DecimalInteger(value=stream.bandwidth),
        ATTR_AVERAGE_BANDWIDTH: (
            DecimalInteger(value=stream.average_bandwidth)
            if stream.average_bandwidth is not None
            else None
        ),
        ATTR_CODECS: QuotedString(value=",".join(stream.codecs)) if stream.codecs else None,
        ATTR_RESOLUTION: resolution,
        ATTR_HDCP_LEVEL: (
            EnumeratedString(value=stream.hdcp_level.value) if stream.hdcp_level else None
        ),
        ATTR_PROGRAM_ID: (
            DecimalInteger(value=stream.program_id) if stream.program_id is not None else None
        ),
        ATTR_VIDEO: QuotedString(value=stream.video) if stream.video else None,
    }


def variant_stream_attributes(stream: VariantStream) -> dict[str, AttributeValue | None]:
    attrs = _stream_attributes(stream)
    if stream.frame_rate is not None:
        attrs[ATTR_FRAME_RATE] = UnsignedFloat(value=stream.frame_rate)
    if stream.audio:
        attrs[ATTR_AUDIO] = QuotedString(value=stream.audio)
    if stream.subtitles:
        attrs[ATTR_SUBTITLES] = QuotedString(value=stream.subtitles)
    if stream.closed_captions == NO_CLOSED_CAPTIONS:
        attrs[ATTR_CLOSED_CAPTIONS] = EnumeratedString(value=NO_CLOSED_CAPTIONS)
    elif stream.closed_captions:
        attrs[ATTR_CLOSED_CAPTIONS] = QuotedString(value=stream.closed_captions)
    return attrs


def i_frame_stream_attributes(stream: IFrameStream) -> dict[str, AttributeValue | None]:
    return {ATTR_URI: QuotedString(value=stream.uri), **_stream_attributes(stream)}
