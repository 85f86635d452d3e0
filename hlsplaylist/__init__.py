"""HLS playlist codec: decode and encode M3U8 media and master playlists."""

from .config import Settings, get_settings
from .core import (
    AttributeList,
    Decoder,
    Encoder,
    decode,
    decode_lines,
    encode,
    encode_attributes,
    encode_lines,
    parse_attribute_list,
)
from .core.errors import (
    AttributeEncodeError,
    BadAttrNameError,
    BadAttrSyntaxError,
    BadSyntaxError,
    CompatibilityVersionError,
    GrammarError,
    InvalidAttributeValueError,
    InvalidValueError,
    MissingRequiredAttributeError,
    MissingURIError,
    MixedTagsError,
    NoHeaderError,
    NoRangeStartError,
    OutOfOrderTagError,
    PlaylistError,
    RenditionGroupError,
    SegmentStateError,
    SemanticError,
    StructuralError,
    TypeMismatchError,
    UnexpectedEOFError,
    UnexpectedMediaSegmentError,
    UnexpectedTagError,
    UnexpectedURIError,
    UnknownPlaylistTypeError,
)
from .models import (
    AnyRendition,
    AttributeKind,
    AttributeValue,
    AudioRendition,
    ByteRange,
    ClosedCaptionsRendition,
    DateRange,
    DecimalInteger,
    DecimalResolution,
    Dialect,
    EncryptionMethod,
    EnumeratedString,
    HDCPLevel,
    HexadecimalSequence,
    IFrameStream,
    Key,
    Map,
    MasterPlaylist,
    MediaPlaylist,
    MediaSegment,
    MediaType,
    Playlist,
    PlaylistType,
    QuotedString,
    Rendition,
    SessionData,
    SessionDataEntry,
    SignedFloat,
    Start,
    Stream,
    SubtitlesRendition,
    TagScope,
    UnsignedFloat,
    VariantStream,
    VideoRendition,
)

__all__ = [
    "AttributeEncodeError",
    "AttributeList",
    "BadAttrNameError",
    "BadAttrSyntaxError",
    "BadSyntaxError",
    "CompatibilityVersionError",
    "Decoder",
    "Encoder",
    "GrammarError",
    "InvalidAttributeValueError",
    "InvalidValueError",
    "MissingRequiredAttributeError",
    "MissingURIError",
    "MixedTagsError",
    "NoHeaderError",
    "NoRangeStartError",
    "OutOfOrderTagError",
    "PlaylistError",
    "RenditionGroupError",
    "SegmentStateError",
    "SemanticError",
    "Settings",
    "StructuralError",
    "TypeMismatchError",
    "UnexpectedEOFError",
    "UnexpectedMediaSegmentError",
    "UnexpectedTagError",
    "UnexpectedURIError",
    "UnknownPlaylistTypeError",
    "decode",
    "decode_lines",
    "encode",
    "encode_attributes",
    "encode_lines",
    "get_settings",
    "parse_attribute_list",
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
