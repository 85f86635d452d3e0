"""
Master playlist assembly.

Every EXT-X-STREAM-INF line must be followed by the URI line naming its
variant stream; a URI line anywhere else is an error.
"""

from ..models.enums import EncryptionMethod
from ..models.playlist import MasterPlaylist
from .constants import (
    ATTR_METHOD,
    I_FRAME_STREAM_INF_TAG,
    MEDIA_TAG,
    SESSION_DATA_TAG,
    SESSION_KEY_TAG,
    STREAM_INF_TAG,
)
from .decoder import Line, TagLine, URILine
from .entities import parse_key
from .errors import InvalidAttributeValueError, MissingURIError, PlaylistError, UnexpectedURIError
from .renditions import parse_rendition
from .session import parse_session_data_entry
from .streams import parse_i_frame_stream, parse_variant_stream


def _apply_tag(playlist: MasterPlaylist, line: TagLine, uri_line: Line | None) -> bool:
    """Apply one tag line; returns True when the following URI line was consumed."""
    if line.tag == STREAM_INF_TAG:
        if not isinstance(uri_line, URILine):
            raise MissingURIError()
        playlist.variant_streams.append(parse_variant_stream(line.body, uri_line.uri))
        return True

    if line.tag == MEDIA_TAG:
        playlist.renditions.append(parse_rendition(line.body))
    elif line.tag == I_FRAME_STREAM_INF_TAG:
        playlist.i_frame_streams.append(parse_i_frame_stream(line.body))
    elif line.tag == SESSION_DATA_TAG:
        playlist.session_data.put(parse_session_data_entry(line.body))
    elif line.tag == SESSION_KEY_TAG:
        key = parse_key(playlist.version, line.body)
        if key.method == EncryptionMethod.NONE:
            raise InvalidAttributeValueError(ATTR_METHOD, "session key method may not be NONE")
        playlist.session_keys.append(key)
    return False


def assemble_master(header: dict, lines: list[Line]) -> MasterPlaylist:
    """
    Build a MasterPlaylist from the lines kept by the first decode pass.

    Raises:
        MissingURIError: EXT-X-STREAM-INF not followed by a URI line
        UnexpectedURIError: URI line not preceded by EXT-X-STREAM-INF
    """
    playlist = MasterPlaylist(**header)

    i = 0
    while i < len(lines):
        line = lines[i]
        next_line = lines[i + 1] if i + 1 < len(lines) else None
        try:
            if isinstance(line, URILine):
                raise UnexpectedURIError()
            if _apply_tag(playlist, line, next_line):
                i += 1
        except PlaylistError as err:
            err.locate(line.number, line.text)
            raise
        i += 1

    return playlist
