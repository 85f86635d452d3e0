"""Tests for line classification, dialect resolution and decode errors."""

import logging

import pytest

from hlsplaylist import decode, decode_lines
from hlsplaylist.core.decoder import Decoder, TagLine, URILine, scan_lines
from hlsplaylist.core.errors import (
    BadSyntaxError,
    MissingRequiredAttributeError,
    MixedTagsError,
    NoHeaderError,
    PlaylistError,
    StructuralError,
    UnexpectedEOFError,
    UnexpectedTagError,
    UnknownPlaylistTypeError,
)
from hlsplaylist.models.enums import Dialect
from hlsplaylist.models.playlist import MasterPlaylist, MediaPlaylist, Start


# ── Errors ───────────────────────────────────────────────────────────
class TestPlaylistError:
    def test_unlocated_message(self):
        err = PlaylistError("something broke")
        assert str(err) == "m3u8: something broke"
        assert err.error_code == "playlist.error"
        assert err.line_number is None

    def test_custom_code(self):
        err = PlaylistError("nope", error_code="playlist.custom")
        assert err.error_code == "playlist.custom"

    def test_locate(self):
        err = NoHeaderError().locate(1, "#EXT-X-VERSION:3")
        assert str(err) == "m3u8: missing header tag on line 1 (#EXT-X-VERSION:3)"

    def test_first_location_wins(self):
        err = PlaylistError("x").locate(3, "a").locate(7, "b")
        assert err.line_number == 3
        assert err.line == "a"

    def test_category(self):
        assert isinstance(MixedTagsError(), StructuralError)
        assert MixedTagsError().error_code == "playlist.mixed_tags"


# ── Input handling ───────────────────────────────────────────────────
class TestInput:
    @pytest.mark.parametrize("data", [b"", ""])
    def test_empty(self, data):
        with pytest.raises(UnexpectedEOFError):
            decode(data)

    def test_empty_lines(self):
        with pytest.raises(UnexpectedEOFError):
            decode_lines([])

    @pytest.mark.parametrize(
        "data", ["#EXT-X-VERSION:3\n", "#EXTM3U8\n", " #EXTM3U\n", "\n#EXTM3U\n"]
    )
    def test_missing_header(self, data):
        with pytest.raises(NoHeaderError) as exc_info:
            decode(data)
        assert exc_info.value.line_number == 1

    def test_bytes_with_bom(self):
        playlist = decode(b"\xef\xbb\xbf#EXTM3U\n#EXT-X-TARGETDURATION:10\n")
        assert isinstance(playlist, MediaPlaylist)

    def test_crlf_line_endings(self):
        playlist = decode("#EXTM3U\r\n#EXT-X-TARGETDURATION:10\r\n#EXTINF:10,\r\na.ts\r\n")
        assert playlist.segments[0].uri == "a.ts"

    def test_invalid_utf8(self):
        with pytest.raises(BadSyntaxError, match="UTF-8"):
            decode(b"#EXTM3U\n\xff\xfe\n")

    def test_lines_with_terminators(self):
        playlist = decode_lines(
            ["#EXTM3U\n", "#EXT-X-TARGETDURATION:10\n", "#EXTINF:10,\n", "a.ts\n"]
        )
        assert playlist.target_duration == 10
        assert playlist.segments[0].uri == "a.ts"

    def test_comments_and_blank_lines_skipped(self):
        playlist = decode(
            "#EXTM3U\n# a comment\n\n#EXT-X-TARGETDURATION:10\n#EXTINF:10,\n# between\n\na.ts\n"
        )
        assert len(playlist.segments) == 1


# ── Classification ───────────────────────────────────────────────────
class TestScanLines:
    def test_classifies_lines(self):
        lines = ["#EXT-X-TARGETDURATION:10", "# comment", "#EXTINF:9.5,", "a.ts", ""]
        scan = scan_lines(enumerate(lines, start=2), strict=True, default_version=1)
        assert scan.dialect == Dialect.MEDIA
        assert scan.lines == [
            TagLine(2, "#EXT-X-TARGETDURATION", "10", "#EXT-X-TARGETDURATION:10"),
            TagLine(4, "#EXTINF", "9.5,", "#EXTINF:9.5,"),
            URILine(5, "a.ts"),
        ]

    def test_tag_without_colon_has_empty_body(self):
        scan = scan_lines(enumerate(["#EXT-X-ENDLIST"], start=2), strict=True, default_version=1)
        assert scan.lines[0].body == ""

    def test_body_split_at_first_colon(self):
        scan = scan_lines(
            enumerate(["#EXT-X-PROGRAM-DATE-TIME:2010-02-19T14:54:23Z"], start=2),
            strict=True,
            default_version=1,
        )
        assert scan.lines[0].body == "2010-02-19T14:54:23Z"

    def test_header_tags_consumed(self):
        lines = [
            "#EXT-X-VERSION:6",
            "#EXT-X-INDEPENDENT-SEGMENTS",
            "#EXT-X-START:TIME-OFFSET=-5.0",
            "#EXT-X-STREAM-INF:BANDWIDTH=1",
            "a.m3u8",
        ]
        scan = scan_lines(enumerate(lines, start=2), strict=True, default_version=1)
        assert scan.dialect == Dialect.MASTER
        assert scan.header == {
            "version": 6,
            "independent_segments": True,
            "start": Start(time_offset=-5.0),
        }
        assert len(scan.lines) == 2

    def test_default_version(self):
        scan = scan_lines(enumerate(["#EXT-X-ENDLIST"]), strict=True, default_version=3)
        assert scan.header["version"] == 3


# ── Dialect resolution ───────────────────────────────────────────────
class TestDialect:
    def test_media(self):
        assert isinstance(decode("#EXTM3U\n#EXT-X-TARGETDURATION:10\n"), MediaPlaylist)

    def test_master(self):
        playlist = decode("#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1\na.m3u8\n")
        assert isinstance(playlist, MasterPlaylist)

    def test_mixed_tags(self):
        data = (
            "#EXTM3U\n"
            "#EXT-X-TARGETDURATION:10\n"
            "#EXT-X-INDEPENDENT-SEGMENTS\n"
            "#EXT-X-VERSION:3\n"
            "#EXT-X-START:TIME-OFFSET=0.0\n"
            "#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID=\"a\",NAME=\"n\"\n"
        )
        with pytest.raises(MixedTagsError) as exc_info:
            decode(data)
        assert exc_info.value.line_number == 6

    def test_master_then_media(self):
        with pytest.raises(MixedTagsError):
            decode("#EXTM3U\n#EXT-X-SESSION-DATA:DATA-ID=\"a\",VALUE=\"b\"\n#EXTINF:10,\n")

    @pytest.mark.parametrize(
        "data",
        ["#EXTM3U\n", "#EXTM3U\n#EXT-X-VERSION:3\n", "#EXTM3U\n#EXT-X-INDEPENDENT-SEGMENTS\n"],
    )
    def test_unknown_playlist_type(self, data):
        with pytest.raises(UnknownPlaylistTypeError):
            decode(data)

    def test_stray_uri_does_not_resolve(self):
        with pytest.raises(UnknownPlaylistTypeError):
            decode("#EXTM3U\na.ts\n")


# ── Header tags ──────────────────────────────────────────────────────
class TestHeaderTags:
    def test_version(self):
        assert decode("#EXTM3U\n#EXT-X-VERSION:7\n#EXT-X-TARGETDURATION:10\n").version == 7

    def test_version_defaults_to_one(self):
        assert decode("#EXTM3U\n#EXT-X-TARGETDURATION:10\n").version == 1

    @pytest.mark.parametrize("body", ["0", "three", "", "-1"])
    def test_invalid_version(self, body):
        with pytest.raises(BadSyntaxError, match="invalid version number") as exc_info:
            decode(f"#EXTM3U\n#EXT-X-VERSION:{body}\n#EXT-X-TARGETDURATION:10\n")
        assert exc_info.value.line_number == 2

    def test_start(self):
        playlist = decode("#EXTM3U\n#EXT-X-START:TIME-OFFSET=12.5,PRECISE=YES\n#EXT-X-ENDLIST\n")
        assert playlist.start == Start(time_offset=12.5, precise=True)

    def test_independent_segments(self):
        playlist = decode("#EXTM3U\n#EXT-X-INDEPENDENT-SEGMENTS\n#EXT-X-ENDLIST\n")
        assert playlist.independent_segments is True


# ── Unknown tags ─────────────────────────────────────────────────────
class TestUnknownTags:
    DATA = "#EXTM3U\n#EXT-X-TARGETDURATION:10\n#EXT-X-FUTURE-TAG:42\n#EXTINF:10,\na.ts\n"

    def test_strict_rejects(self):
        with pytest.raises(UnexpectedTagError, match="#EXT-X-FUTURE-TAG") as exc_info:
            decode(self.DATA, strict=True)
        assert exc_info.value.tag == "#EXT-X-FUTURE-TAG"
        assert exc_info.value.line_number == 3

    def test_lenient_skips(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hlsplaylist.core.decoder"):
            playlist = decode(self.DATA, strict=False)
        assert len(playlist.segments) == 1
        assert "#EXT-X-FUTURE-TAG" in caplog.text

    def test_decoder_instance(self):
        decoder = Decoder(strict=False)
        assert decoder.strict is False
        assert len(decoder.decode(self.DATA.encode()).segments) == 1


# ── Error location ───────────────────────────────────────────────────
class TestErrorLocation:
    def test_codec_errors_keep_their_class(self):
        data = "#EXTM3U\n#EXT-X-TARGETDURATION:10\n#EXT-X-KEY:METHOD=AES-128\n#EXTINF:10,\na.ts\n"
        with pytest.raises(MissingRequiredAttributeError) as exc_info:
            decode(data)
        err = exc_info.value
        assert err.attribute == "URI"
        assert err.line_number == 3
        assert err.line == "#EXT-X-KEY:METHOD=AES-128"
        assert str(err) == (
            'm3u8: missing required attribute, "URI", on line 3 (#EXT-X-KEY:METHOD=AES-128)'
        )

    def test_start_errors_located(self):
        with pytest.raises(MissingRequiredAttributeError) as exc_info:
            decode("#EXTM3U\n#EXT-X-START:PRECISE=YES\n#EXT-X-ENDLIST\n")
        assert exc_info.value.line_number == 2
