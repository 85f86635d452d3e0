"""
Playlist decoder.

Decoding runs in two passes. The first pass validates the header, classifies
every line, consumes the header-level tags and settles the dialect: the
first media-only or master-only tag fixes it, and a tag of the other dialect
afterwards aborts the decode. The surviving tag and URI lines are buffered
with their line numbers, and the second pass hands them to the media or
master assembler.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from ..config import get_settings
from ..models.enums import Dialect, TagScope
from ..models.playlist import MasterPlaylist, MediaPlaylist
from .constants import (
    COMMENT_PREFIX,
    HEADER_TAG,
    INDEPENDENT_SEGMENTS_TAG,
    START_TAG,
    TAG_PREFIX,
    TAG_SCOPES,
    VERSION_TAG,
)
from .entities import parse_start
from .errors import (
    BadSyntaxError,
    MixedTagsError,
    NoHeaderError,
    PlaylistError,
    UnexpectedEOFError,
    UnexpectedTagError,
    UnknownPlaylistTypeError,
)

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^\d+$")


class TagLine(NamedTuple):
    number: int
    tag: str
    body: str
    text: str


class URILine(NamedTuple):
    number: int
    uri: str

    @property
    def text(self) -> str:
        return self.uri


Line = TagLine | URILine


class ScanResult(NamedTuple):
    dialect: Dialect
    header: dict
    lines: list[Line]


def _split_tag(number: int, text: str) -> TagLine:
    tag, sep, body = text.partition(":")
    return TagLine(number, tag, body if sep else "", text)


def _parse_version(body: str) -> int:
    if not _VERSION_RE.match(body) or int(body) < 1:
        raise BadSyntaxError("invalid version number")
    return int(body)


def scan_lines(
    numbered_lines: Iterator[tuple[int, str]], strict: bool, default_version: int
) -> ScanResult:
    """
    First pass over everything after the header line.

    Raises:
        MixedTagsError: media-only and master-only tags in one document
        UnknownPlaylistTypeError: no dialect-specific tag at all
        UnexpectedTagError: unrecognized tag in strict mode
    """
    dialect: Dialect | None = None
    header: dict = {"version": default_version, "independent_segments": False, "start": None}
    lines: list[Line] = []

    for number, raw in numbered_lines:
        text = raw.rstrip("\r\n")
        if not text:
            continue

        if not text.startswith(COMMENT_PREFIX):
            lines.append(URILine(number, text))
            continue

        if not text.startswith(TAG_PREFIX):
            continue

        line = _split_tag(number, text)
        try:
            if line.tag == VERSION_TAG:
                header["version"] = _parse_version(line.body)
                continue

            scope = TAG_SCOPES.get(line.tag)
            if scope is None:
                if strict:
                    raise UnexpectedTagError(line.tag)
                logger.warning(f"Skipping unrecognized tag {line.tag} on line {number}")
                continue

            if scope == TagScope.SHARED:
                if line.tag == INDEPENDENT_SEGMENTS_TAG:
                    header["independent_segments"] = True
                elif line.tag == START_TAG:
                    header["start"] = parse_start(line.body)
                continue

            tag_dialect = Dialect.MEDIA if scope == TagScope.MEDIA else Dialect.MASTER
            if dialect is None:
                dialect = tag_dialect
                logger.debug(f"Resolved {dialect.value} playlist from {line.tag} on line {number}")
            elif dialect != tag_dialect:
                raise MixedTagsError()
        except PlaylistError as err:
            err.locate(number, text)
            raise

        lines.append(line)

    if dialect is None:
        raise UnknownPlaylistTypeError()

    return ScanResult(dialect, header, lines)


class Decoder:
    """
    Decodes playlist documents.

    ``strict`` controls unrecognized tags: rejected when True, skipped when
    False. Defaults to the configured setting.
    """

    def __init__(self, strict: bool | None = None):
        settings = get_settings()
        self.strict = settings.strict if strict is None else strict
        self.default_version = settings.default_version

    def decode(self, data: bytes | str) -> MediaPlaylist | MasterPlaylist:
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise BadSyntaxError(f"playlist is not valid UTF-8: {e}") from e

        if not data:
            raise UnexpectedEOFError()

        return self.decode_lines(data.split("\n"))

    def decode_lines(self, lines: Iterable[str]) -> MediaPlaylist | MasterPlaylist:
        """Decode a document given as an iterable of lines (terminators optional)."""
        # Imported here: the assemblers import this module's line types.
        from .master import assemble_master
        from .media import assemble_media

        numbered = enumerate(lines, start=1)
        first = next(numbered, None)
        if first is None:
            raise UnexpectedEOFError()

        header_line = first[1].rstrip("\r\n")
        if header_line != HEADER_TAG:
            raise NoHeaderError().locate(1, header_line)

        scan = scan_lines(numbered, self.strict, self.default_version)
        if scan.dialect == Dialect.MEDIA:
            playlist = assemble_media(scan.header, scan.lines)
            logger.debug(f"Decoded media playlist with {len(playlist.segments)} segment(s)")
        else:
            playlist = assemble_master(scan.header, scan.lines)
            logger.debug(
                f"Decoded master playlist with {len(playlist.variant_streams)} variant stream(s)"
            )
        return playlist


def decode(data: bytes | str, strict: bool | None = None) -> MediaPlaylist | MasterPlaylist:
    """Decode a playlist document into a MediaPlaylist or MasterPlaylist."""
    return Decoder(strict=strict).decode(data)


def decode_lines(
    lines: Iterable[str], strict: bool | None = None
) -> MediaPlaylist | MasterPlaylist:
    return Decoder(strict=strict).decode_lines(lines)


__all__ = [
    "Decoder",
    "Line",
    "ScanResult",
    "TagLine",
    "URILine",
    "decode",
    "decode_lines",
    "scan_lines",
]
