from .attributes import (
    AttributeValue,
    DecimalInteger,
    DecimalResolution,
    EnumeratedString,
    HexadecimalSequence,
    QuotedString,
    SignedFloat,
    UnsignedFloat,
)
from .enums import (
    AttributeKind,
    Dialect,
    EncryptionMethod,
    HDCPLevel,
    MediaType,
    PlaylistType,
    TagScope,
)
from .playlist import (
    AnyRendition,
    AudioRendition,
    ByteRange,
    ClosedCaptionsRendition,
    DateRange,
    IFrameStream,
    Key,
    Map,
    MasterPlaylist,
    MediaPlaylist,
    MediaSegment,
    Playlist,
    Rendition,
    SessionData,
    SessionDataEntry,
    Start,
    Stream,
    SubtitlesRendition,
    VariantStream,
    VideoRendition,
)

__all__ = [
    "AnyRendition",
    "AttributeKind",
    "AttributeValue",
    "AudioRendition",
    "ByteRange",
    "ClosedCaptionsRendition",
    "DateRange",
    "DecimalInteger",
    "DecimalResolution",
    "Dialect",
    "EncryptionMethod",
    "EnumeratedString",
    "HDCPLevel",
    "HexadecimalSequence",
    "IFrameStream",
    "Key",
    "Map",
    "MasterPlaylist",
    "MediaPlaylist",
    "MediaSegment",
    "MediaType",
    "Playlist",
    "PlaylistType",
    "QuotedString",
    "Rendition",
    "SessionData",
    "SessionDataEntry",
    "SignedFloat",
    "Start",
    "Stream",
    "SubtitlesRendition",
    "TagScope",
    "UnsignedFloat",
    "VariantStream",
    "VideoRendition",
]
