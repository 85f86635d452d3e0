from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, Field

from .enums import Dialect, EncryptionMethod, HDCPLevel, MediaType, PlaylistType


class ByteRange(BaseModel):
    """A sub-range of a resource: ``length`` bytes starting at ``start``."""

    length: int = Field(..., ge=0)
    start: int | None = Field(None, ge=0, description="Offset; None when implied")

    @property
    def closed(self) -> bool:
        """Whether both ends are known, so a following range may continue it."""
        return self.length > 0 and self.start is not None

    @property
    def end(self) -> int | None:
        if self.start is None:
            return None
        return self.start + self.length


class Start(BaseModel):
    """Preferred point at which to start playing the playlist."""

    time_offset: float = Field(..., description="Seconds; negative counts from the end")
    precise: bool = False


class Key(BaseModel):
    """How to decrypt the media segments it applies to."""

    method: EncryptionMethod
    uri: str | None = Field(None, description="Required unless method is NONE")
    iv: bytes | None = Field(None, description="128-bit initialization vector")
    key_format: str | None = None
    key_format_versions: list[int] = Field(default_factory=list)


class Map(BaseModel):
    """Media initialization section for the segments it applies to."""

    uri: str
    byte_range: ByteRange | None = None


class DateRange(BaseModel):
    """A range of time with an attached set of attributes."""

    id: str
    class_name: str | None = None
    start_date: str
    end_date: str | None = None
    duration: float | None = Field(None, ge=0)
    planned_duration: float | None = Field(None, ge=0)
    client_attributes: dict[str, str | bytes | float] = Field(default_factory=dict)
    scte35_cmd: bytes | None = None
    scte35_out: bytes | None = None
    scte35_in: bytes | None = None
    end_on_next: bool = False


class MediaSegment(BaseModel):
    """
    A single media segment.

    key, map, program_date_time and date_range hold the value in effect for
    this segment, which may have been declared on an earlier segment. An
    unencrypted segment has no key; a key with method NONE means the same.
    """

    uri: str
    duration: float = Field(0.0, ge=0, description="Seconds")
    title: str | None = None
    byte_range: ByteRange | None = None
    discontinuity: bool = False
    key: Key | None = None
    map: Map | None = None
    program_date_time: str | None = None
    date_range: DateRange | None = None


# ── Renditions ───────────────────────────────────────────────────────
class Rendition(BaseModel):
    """Fields common to every EXT-X-MEDIA rendition."""

    group_id: str
    name: str
    language: str | None = None
    assoc_language: str | None = None
    default: bool = False
    autoselect: bool = False
    characteristics: list[str] = Field(default_factory=list)


class AudioRendition(Rendition):
    type: Literal[MediaType.AUDIO] = MediaType.AUDIO

    uri: str | None = None
    channels: int | None = Field(None, ge=0)
    channel_parameters: list[str] = Field(
        default_factory=list, description="Parameters after the channel count, e.g. ['JOC']"
    )


class VideoRendition(Rendition):
    type: Literal[MediaType.VIDEO] = MediaType.VIDEO

    uri: str | None = None


class SubtitlesRendition(Rendition):
    type: Literal[MediaType.SUBTITLES] = MediaType.SUBTITLES

    uri: str | None = None
    forced: bool = False


class ClosedCaptionsRendition(Rendition):
    type: Literal[MediaType.CLOSED_CAPTIONS] = MediaType.CLOSED_CAPTIONS

    instream_id: str = Field(..., description="CC1-CC4 or SERVICE1-SERVICE63")


AnyRendition = Annotated[
    Union[AudioRendition, VideoRendition, SubtitlesRendition, ClosedCaptionsRendition],
    Field(discriminator="type"),
]


# ── Streams ──────────────────────────────────────────────────────────
class Stream(BaseModel):
    """Attributes shared by variant streams and i-frame streams."""

    uri: str
    bandwidth: int = Field(..., ge=0, description="Peak segment bit rate")
    average_bandwidth: int | None = Field(None, ge=0)
    codecs: list[str] = Field(default_factory=list)
    width: int | None = Field(None, ge=0)
    height: int | None = Field(None, ge=0)
    hdcp_level: HDCPLevel | None = None
    program_id: int | None = Field(None, ge=0, description="Removed in protocol version 6")
    video: str | None = Field(None, description="VIDEO rendition group id")


class VariantStream(Stream):
    frame_rate: float | None = Field(None, ge=0)
    audio: str | None = Field(None, description="AUDIO rendition group id")
    subtitles: str | None = Field(None, description="SUBTITLES rendition group id")
    closed_captions: str | None = Field(
        None, description="CLOSED-CAPTIONS group id, or 'NONE' when explicitly absent"
    )


class IFrameStream(Stream):
    pass


# ── Session data ─────────────────────────────────────────────────────
class SessionDataEntry(BaseModel):
    """One EXT-X-SESSION-DATA entry; carries either a value or a uri."""

    id: str
    language: str | None = None
    value: str | None = None
    uri: str | None = None


class SessionData(BaseModel):
    """Session data entries, addressed by (id, language)."""

    entries: list[SessionDataEntry] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def entry(self, id: str, language: str | None = None) -> SessionDataEntry | None:
        for sde in self.entries:
            if sde.id == id and sde.language == language:
                return sde
        return None

    def put(self, entry: SessionDataEntry) -> None:
        """Add an entry, replacing any entry with the same id and language."""
        self.entries = [
            e for e in self.entries if not (e.id == entry.id and e.language == entry.language)
        ]
        self.entries.append(entry)

    def _get_or_create(self, id: str, language: str | None) -> SessionDataEntry:
        sde = self.entry(id, language)
        if sde is None:
            sde = SessionDataEntry(id=id, language=language)
            self.entries.append(sde)
        return sde

    def set_value(self, id: str, language: str | None, value: str) -> None:
        sde = self._get_or_create(id, language)
        sde.value = value
        sde.uri = None

    def set_uri(self, id: str, language: str | None, uri: str) -> None:
        sde = self._get_or_create(id, language)
        sde.value = None
        sde.uri = uri

    def value(self, id: str, language: str | None = None) -> str | None:
        sde = self.entry(id, language)
        return sde.value if sde else None

    def uri(self, id: str, language: str | None = None) -> str | None:
        sde = self.entry(id, language)
        return sde.uri if sde else None


# ── Playlists ────────────────────────────────────────────────────────
class Playlist(BaseModel):
    """Header fields shared by media and master playlists."""

    dialect: ClassVar[Dialect]

    version: int = Field(1, ge=1, description="Protocol compatibility version")
    independent_segments: bool = False
    start: Start | None = None


class MediaPlaylist(Playlist):
    dialect: ClassVar[Dialect] = Dialect.MEDIA

    target_duration: int = Field(0, ge=0)
    media_sequence: int = Field(0, ge=0)
    discontinuity_sequence: int = Field(0, ge=0)
    playlist_type: PlaylistType | None = None
    i_frames_only: bool = False
    ended: bool = Field(True, description="Whether the playlist carries #EXT-X-ENDLIST")
    segments: list[MediaSegment] = Field(default_factory=list)


class MasterPlaylist(Playlist):
    dialect: ClassVar[Dialect] = Dialect.MASTER

    renditions: list[AnyRendition] = Field(default_factory=list)
    variant_streams: list[VariantStream] = Field(default_factory=list)
    i_frame_streams: list[IFrameStream] = Field(default_factory=list)
    session_data: SessionData = Field(default_factory=SessionData)
    session_keys: list[Key] = Field(default_factory=list)
