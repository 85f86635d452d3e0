"""
Playlist encoder.

All lines are rendered and validated before anything is returned, so a
failing playlist never yields partial output.
"""

import logging

from ..models.enums import EncryptionMethod
from ..models.playlist import Key, MasterPlaylist, MediaPlaylist, MediaSegment, Playlist
from ..utils.helpers import format_decimal
from .attributes import encode_attributes
from .constants import (
    ATTR_METHOD,
    BYTERANGE_TAG,
    COMMENT_PREFIX,
    DATERANGE_TAG,
    DISCONTINUITY_SEQUENCE_TAG,
    DISCONTINUITY_TAG,
    ENDLIST_TAG,
    HEADER_TAG,
    I_FRAME_STREAM_INF_TAG,
    I_FRAMES_ONLY_TAG,
    INDEPENDENT_SEGMENTS_TAG,
    INF_TAG,
    KEY_TAG,
    MAP_TAG,
    MEDIA_SEQUENCE_TAG,
    MEDIA_TAG,
    PLAYLIST_TYPE_TAG,
    PROGRAM_DATE_TIME_TAG,
    SESSION_DATA_TAG,
    SESSION_KEY_TAG,
    START_TAG,
    STREAM_INF_TAG,
    TARGETDURATION_TAG,
    VERSION_TAG,
)
from .entities import (
    date_range_attributes,
    format_byte_range,
    key_attributes,
    map_attributes,
    start_attributes,
    validate_date,
)
from .errors import (
    CompatibilityVersionError,
    InvalidAttributeValueError,
    InvalidValueError,
    NoRangeStartError,
)
from .media import BYTE_RANGE_MIN_VERSION, FRACTIONAL_DURATION_MIN_VERSION
from .renditions import rendition_attributes, validate_rendition_groups
from .session import session_data_attributes
from .streams import i_frame_stream_attributes, variant_stream_attributes

logger = logging.getLogger(__name__)


def _tag(tag: str, body: str | None = None) -> str:
    return tag if body is None else f"{tag}:{body}"


def _check_line(text: str, what: str) -> str:
    """URIs and titles must fit on one line and not read back as tags."""
    if "\n" in text or "\r" in text:
        raise InvalidValueError(f"{what} may not contain a line break")
    if what == "uri" and (not text or text.startswith(COMMENT_PREFIX)):
        raise InvalidValueError(f"illegal uri: {text!r}")
    return text


def _encryption_key(segment: MediaSegment | None) -> Key | None:
    if segment is None or segment.key is None or segment.key.method == EncryptionMethod.NONE:
        return None
    return segment.key


def _carried(value, previous, what: str) -> bool:
    """Whether a carried-over value has to be written for this segment."""
    if value is None:
        if previous is not None:
            raise InvalidValueError(f"{what} may not be removed once declared")
        return False
    return value != previous


class Encoder:
    """Renders MediaPlaylist and MasterPlaylist values as playlist text."""

    def encode(self, playlist: Playlist) -> bytes:
        return ("\n".join(self.encode_lines(playlist)) + "\n").encode("utf-8")

    def encode_lines(self, playlist: Playlist) -> list[str]:
        lines = [HEADER_TAG, _tag(VERSION_TAG, str(playlist.version))]
        if playlist.independent_segments:
            lines.append(INDEPENDENT_SEGMENTS_TAG)
        if playlist.start is not None:
            lines.append(_tag(START_TAG, encode_attributes(start_attributes(playlist.start))))

        if isinstance(playlist, MediaPlaylist):
            lines.extend(self._media_lines(playlist))
            logger.debug(f"Encoded media playlist with {len(playlist.segments)} segment(s)")
        elif isinstance(playlist, MasterPlaylist):
            lines.extend(self._master_lines(playlist))
            logger.debug(
                f"Encoded master playlist with {len(playlist.variant_streams)} variant stream(s)"
            )
        else:
            raise TypeError(f"cannot encode {type(playlist).__name__}")

        return lines

    # ── Media ────────────────────────────────────────────────────────
    def _media_lines(self, playlist: MediaPlaylist) -> list[str]:
        lines = [_tag(TARGETDURATION_TAG, str(playlist.target_duration))]
        if playlist.media_sequence > 0:
            lines.append(_tag(MEDIA_SEQUENCE_TAG, str(playlist.media_sequence)))
        if playlist.discontinuity_sequence > 0:
            lines.append(_tag(DISCONTINUITY_SEQUENCE_TAG, str(playlist.discontinuity_sequence)))
        if playlist.playlist_type is not None:
            lines.append(_tag(PLAYLIST_TYPE_TAG, playlist.playlist_type.value))
        if playlist.i_frames_only:
            lines.append(I_FRAMES_ONLY_TAG)

        previous = None
        for segment in playlist.segments:
            lines.extend(self._segment_lines(segment, previous, playlist.version))
            previous = segment

        if playlist.ended:
            lines.append(ENDLIST_TAG)
        return lines

    def _segment_lines(
        self, segment: MediaSegment, previous: MediaSegment | None, version: int
    ) -> list[str]:
        """Segment tags; carried-over entities are written only when they change."""
        lines = []
        if segment.discontinuity:
            lines.append(DISCONTINUITY_TAG)

        key = _encryption_key(segment)
        prev_key = _encryption_key(previous)
        if key != prev_key:
            if key is None:
                lines.append(_tag(KEY_TAG, f"{ATTR_METHOD}={EncryptionMethod.NONE.value}"))
            else:
                lines.append(_tag(KEY_TAG, encode_attributes(key_attributes(key, version))))

        # No tag clears these once declared, so they may change but not disappear
        if _carried(segment.map, previous.map if previous else None, "map"):
            lines.append(_tag(MAP_TAG, encode_attributes(map_attributes(segment.map))))

        pdt = segment.program_date_time
        if _carried(pdt, previous.program_date_time if previous else None, "program date time"):
            lines.append(_tag(PROGRAM_DATE_TIME_TAG, validate_date(pdt)))

        date_range = segment.date_range
        if _carried(date_range, previous.date_range if previous else None, "date range"):
            lines.append(_tag(DATERANGE_TAG, encode_attributes(date_range_attributes(date_range))))

        if segment.byte_range is not None:
            if version < BYTE_RANGE_MIN_VERSION:
                raise CompatibilityVersionError(BYTE_RANGE_MIN_VERSION)
            if segment.byte_range.start is None:
                prev_range = previous.byte_range if previous else None
                if prev_range is None or not prev_range.closed:
                    raise NoRangeStartError()
            lines.append(_tag(BYTERANGE_TAG, format_byte_range(segment.byte_range)))

        if version < FRACTIONAL_DURATION_MIN_VERSION and not float(segment.duration).is_integer():
            raise CompatibilityVersionError(FRACTIONAL_DURATION_MIN_VERSION)
        title = _check_line(segment.title, "title") if segment.title else ""
        lines.append(_tag(INF_TAG, f"{format_decimal(segment.duration)},{title}"))
        lines.append(_check_line(segment.uri, "uri"))
        return lines

    # ── Master ───────────────────────────────────────────────────────
    def _master_lines(self, playlist: MasterPlaylist) -> list[str]:
        validate_rendition_groups(playlist.renditions)

        lines = []
        for entry in playlist.session_data.entries:
            lines.append(_tag(SESSION_DATA_TAG, encode_attributes(session_data_attributes(entry))))

        for key in playlist.session_keys:
            if key.method == EncryptionMethod.NONE:
                raise InvalidAttributeValueError(ATTR_METHOD, "session key method may not be NONE")
            lines.append(
                _tag(SESSION_KEY_TAG, encode_attributes(key_attributes(key, playlist.version)))
            )

        for rendition in playlist.renditions:
            lines.append(_tag(MEDIA_TAG, encode_attributes(rendition_attributes(rendition))))

        for stream in playlist.variant_streams:
            lines.append(_tag(STREAM_INF_TAG, encode_attributes(variant_stream_attributes(stream))))
            lines.append(_check_line(stream.uri, "uri"))

        for stream in playlist.i_frame_streams:
            lines.append(
                _tag(I_FRAME_STREAM_INF_TAG, encode_attributes(i_frame_stream_attributes(stream)))
            )
        return lines


def encode(playlist: Playlist) -> bytes:
    """Encode a playlist as UTF-8 text with one line per tag or URI."""
    return Encoder().encode(playlist)


def encode_lines(playlist: Playlist) -> list[str]:
    return Encoder().encode_lines(playlist)
