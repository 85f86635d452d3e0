"""
Media playlist assembly.

Segments are built by folding over the classified lines. Tags that describe
a single segment accumulate until the next URI line seals it. Key, map,
program date time and date range carry over: once declared they apply to
every later segment until replaced.
"""

import logging
import re

from ..models.enums import EncryptionMethod, PlaylistType
from ..models.playlist import MediaPlaylist, MediaSegment
from ..utils.helpers import seconds_or_none
from .constants import (
    BYTERANGE_TAG,
    DATERANGE_TAG,
    DISCONTINUITY_SEQUENCE_TAG,
    DISCONTINUITY_TAG,
    ENDLIST_TAG,
    I_FRAMES_ONLY_TAG,
    INF_TAG,
    KEY_TAG,
    MAP_TAG,
    MEDIA_SEQUENCE_TAG,
    PLAYLIST_TYPE_TAG,
    PROGRAM_DATE_TIME_TAG,
    TARGETDURATION_TAG,
)
from .decoder import Line, URILine
from .entities import parse_byte_range, parse_date_range, parse_key, parse_map, validate_date
from .errors import (
    BadSyntaxError,
    CompatibilityVersionError,
    InvalidValueError,
    NoRangeStartError,
    OutOfOrderTagError,
    PlaylistError,
    UnexpectedMediaSegmentError,
    UnexpectedURIError,
)

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"^\d{1,20}$")

# Minimum protocol versions for segment features
FRACTIONAL_DURATION_MIN_VERSION = 3
BYTE_RANGE_MIN_VERSION = 4


def _parse_integer(body: str, what: str) -> int:
    if not _INTEGER_RE.match(body):
        raise BadSyntaxError(f"failed to parse {what}")
    return int(body)


def _copy(entity):
    return entity.model_copy(deep=True) if entity is not None else None


class _MediaAssembler:
    def __init__(self, header: dict):
        self.playlist = MediaPlaylist(**header, ended=False)
        self.version = self.playlist.version

        # Carried over to every later segment until replaced
        self.key = None
        self.map = None
        self.program_date_time = None
        self.date_range = None

        self._handlers = {
            INF_TAG: self._inf,
            BYTERANGE_TAG: self._byte_range,
            DISCONTINUITY_TAG: self._discontinuity,
            KEY_TAG: self._key,
            MAP_TAG: self._map,
            PROGRAM_DATE_TIME_TAG: self._program_date_time,
            DATERANGE_TAG: self._date_range,
            TARGETDURATION_TAG: self._target_duration,
            MEDIA_SEQUENCE_TAG: self._media_sequence,
            DISCONTINUITY_SEQUENCE_TAG: self._discontinuity_sequence,
            ENDLIST_TAG: self._endlist,
            PLAYLIST_TYPE_TAG: self._playlist_type,
            I_FRAMES_ONLY_TAG: self._i_frames_only,
        }
        self._reset_segment()

    def _reset_segment(self) -> None:
        self.duration = None
        self.title = None
        self.byte_range = None
        self.discontinuity = False
        self.pending = False

    def feed(self, line: Line) -> None:
        if isinstance(line, URILine):
            self._seal(line.uri)
            return
        self._handlers[line.tag](line.body)

    def finish(self) -> MediaPlaylist:
        if self.pending:
            logger.debug("Ignoring segment tags not followed by a uri")
        return self.playlist

    def _seal(self, uri: str) -> None:
        if self.playlist.ended:
            raise UnexpectedMediaSegmentError()
        if not self.pending:
            raise UnexpectedURIError()

        self.playlist.segments.append(
            MediaSegment(
                uri=uri,
                duration=self.duration if self.duration is not None else 0.0,
                title=self.title,
                byte_range=self.byte_range,
                discontinuity=self.discontinuity,
                key=_copy(self.key),
                map=_copy(self.map),
                program_date_time=self.program_date_time,
                date_range=_copy(self.date_range),
            )
        )
        self._reset_segment()

    # ── Segment tags ─────────────────────────────────────────────────
    def _inf(self, body: str) -> None:
        duration_str, sep, title = body.partition(",")
        if not sep:
            raise BadSyntaxError("missing comma")
        if self.version < FRACTIONAL_DURATION_MIN_VERSION and "." in duration_str:
            raise CompatibilityVersionError(FRACTIONAL_DURATION_MIN_VERSION)

        duration = seconds_or_none(duration_str)
        if duration is None:
            raise BadSyntaxError("failed to parse duration")

        self.duration = duration
        self.title = title or None
        self.pending = True

    def _byte_range(self, body: str) -> None:
        if self.version < BYTE_RANGE_MIN_VERSION:
            raise CompatibilityVersionError(BYTE_RANGE_MIN_VERSION)

        byte_range = parse_byte_range(body)
        if byte_range.start is None:
            # Continues from the end of the previous segment's range
            previous = self.playlist.segments[-1].byte_range if self.playlist.segments else None
            if previous is None or not previous.closed:
                raise NoRangeStartError()
            byte_range.start = previous.end

        self.byte_range = byte_range
        self.pending = True

    def _discontinuity(self, body: str) -> None:
        self.discontinuity = True
        self.pending = True

    def _key(self, body: str) -> None:
        key = parse_key(self.version, body)
        # METHOD=NONE ends encryption; unencrypted segments have no key
        self.key = None if key.method == EncryptionMethod.NONE else key
        self.pending = True

    def _map(self, body: str) -> None:
        self.map = parse_map(body)
        self.pending = True

    def _program_date_time(self, body: str) -> None:
        self.program_date_time = validate_date(body)
        self.pending = True

    def _date_range(self, body: str) -> None:
        self.date_range = parse_date_range(body)
        self.pending = True

    # ── Playlist tags ────────────────────────────────────────────────
    def _target_duration(self, body: str) -> None:
        self.playlist.target_duration = _parse_integer(body, "target duration")

    def _media_sequence(self, body: str) -> None:
        if self.playlist.segments:
            raise OutOfOrderTagError()
        self.playlist.media_sequence = _parse_integer(body, "media sequence number")

    def _discontinuity_sequence(self, body: str) -> None:
        if self.playlist.segments:
            raise OutOfOrderTagError()
        self.playlist.discontinuity_sequence = _parse_integer(
            body, "discontinuity sequence number"
        )

    def _endlist(self, body: str) -> None:
        self.playlist.ended = True

    def _playlist_type(self, body: str) -> None:
        try:
            self.playlist.playlist_type = PlaylistType(body)
        except ValueError:
            raise InvalidValueError("invalid playlist type") from None

    def _i_frames_only(self, body: str) -> None:
        self.playlist.i_frames_only = True


def assemble_media(header: dict, lines: list[Line]) -> MediaPlaylist:
    """
    Build a MediaPlaylist from the lines kept by the first decode pass.

    Errors are raised with the offending line attached.
    """
    assembler = _MediaAssembler(header)
    for line in lines:
        try:
            assembler.feed(line)
        except PlaylistError as err:
            err.locate(line.number, line.text)
            raise
    return assembler.finish()
