"""Tag and attribute names used by the playlist codec."""

from ..models.enums import TagScope

TAG_PREFIX = "#EXT"
COMMENT_PREFIX = "#"

# basic tags
HEADER_TAG = TAG_PREFIX + "M3U"
VERSION_TAG = TAG_PREFIX + "-X-VERSION"

# media segment tags
INF_TAG = TAG_PREFIX + "INF"
BYTERANGE_TAG = TAG_PREFIX + "-X-BYTERANGE"
DISCONTINUITY_TAG = TAG_PREFIX + "-X-DISCONTINUITY"
KEY_TAG = TAG_PREFIX + "-X-KEY"
MAP_TAG = TAG_PREFIX + "-X-MAP"
PROGRAM_DATE_TIME_TAG = TAG_PREFIX + "-X-PROGRAM-DATE-TIME"
DATERANGE_TAG = TAG_PREFIX + "-X-DATERANGE"

# media playlist tags
TARGETDURATION_TAG = TAG_PREFIX + "-X-TARGETDURATION"
MEDIA_SEQUENCE_TAG = TAG_PREFIX + "-X-MEDIA-SEQUENCE"
DISCONTINUITY_SEQUENCE_TAG = TAG_PREFIX + "-X-DISCONTINUITY-SEQUENCE"
ENDLIST_TAG = TAG_PREFIX + "-X-ENDLIST"
PLAYLIST_TYPE_TAG = TAG_PREFIX + "-X-PLAYLIST-TYPE"
I_FRAMES_ONLY_TAG = TAG_PREFIX + "-X-I-FRAMES-ONLY"

# master playlist tags
MEDIA_TAG = TAG_PREFIX + "-X-MEDIA"
STREAM_INF_TAG = TAG_PREFIX + "-X-STREAM-INF"
I_FRAME_STREAM_INF_TAG = TAG_PREFIX + "-X-I-FRAME-STREAM-INF"
SESSION_DATA_TAG = TAG_PREFIX + "-X-SESSION-DATA"
SESSION_KEY_TAG = TAG_PREFIX + "-X-SESSION-KEY"

# media or master playlist tags
INDEPENDENT_SEGMENTS_TAG = TAG_PREFIX + "-X-INDEPENDENT-SEGMENTS"
START_TAG = TAG_PREFIX + "-X-START"

SEGMENT_TAGS = frozenset(
    {
        INF_TAG,
        BYTERANGE_TAG,
        DISCONTINUITY_TAG,
        KEY_TAG,
        MAP_TAG,
        PROGRAM_DATE_TIME_TAG,
        DATERANGE_TAG,
    }
)

MEDIA_PLAYLIST_TAGS = frozenset(
    {
        TARGETDURATION_TAG,
        MEDIA_SEQUENCE_TAG,
        DISCONTINUITY_SEQUENCE_TAG,
        ENDLIST_TAG,
        PLAYLIST_TYPE_TAG,
        I_FRAMES_ONLY_TAG,
    }
)

MASTER_PLAYLIST_TAGS = frozenset(
    {
        MEDIA_TAG,
        STREAM_INF_TAG,
        I_FRAME_STREAM_INF_TAG,
        SESSION_DATA_TAG,
        SESSION_KEY_TAG,
    }
)

SHARED_TAGS = frozenset({INDEPENDENT_SEGMENTS_TAG, START_TAG})

TAG_SCOPES: dict[str, TagScope] = {
    **{tag: TagScope.MEDIA for tag in SEGMENT_TAGS | MEDIA_PLAYLIST_TAGS},
    **{tag: TagScope.MASTER for tag in MASTER_PLAYLIST_TAGS},
    **{tag: TagScope.SHARED for tag in SHARED_TAGS},
}

# attribute names
ATTR_ASSOC_LANGUAGE = "ASSOC-LANGUAGE"
ATTR_AUDIO = "AUDIO"
ATTR_AUTOSELECT = "AUTOSELECT"
ATTR_AVERAGE_BANDWIDTH = "AVERAGE-BANDWIDTH"
ATTR_BANDWIDTH = "BANDWIDTH"
ATTR_BYTERANGE = "BYTERANGE"
ATTR_CHANNELS = "CHANNELS"
ATTR_CHARACTERISTICS = "CHARACTERISTICS"
ATTR_CLASS = "CLASS"
ATTR_CLOSED_CAPTIONS = "CLOSED-CAPTIONS"
ATTR_CODECS = "CODECS"
ATTR_DATA_ID = "DATA-ID"
ATTR_DEFAULT = "DEFAULT"
ATTR_DURATION = "DURATION"
ATTR_END_DATE = "END-DATE"
ATTR_END_ON_NEXT = "END-ON-NEXT"
ATTR_FORCED = "FORCED"
ATTR_FRAME_RATE = "FRAME-RATE"
ATTR_GROUP_ID = "GROUP-ID"
ATTR_HDCP_LEVEL = "HDCP-LEVEL"
ATTR_ID = "ID"
ATTR_INSTREAM_ID = "INSTREAM-ID"
ATTR_IV = "IV"
ATTR_KEYFORMAT = "KEYFORMAT"
ATTR_KEYFORMATVERSIONS = "KEYFORMATVERSIONS"
ATTR_LANGUAGE = "LANGUAGE"
ATTR_METHOD = "METHOD"
ATTR_NAME = "NAME"
ATTR_PLANNED_DURATION = "PLANNED-DURATION"
ATTR_PRECISE = "PRECISE"
ATTR_PROGRAM_ID = "PROGRAM-ID"
ATTR_RESOLUTION = "RESOLUTION"
ATTR_SCTE35_CMD = "SCTE35-CMD"
ATTR_SCTE35_IN = "SCTE35-IN"
ATTR_SCTE35_OUT = "SCTE35-OUT"
ATTR_START_DATE = "START-DATE"
ATTR_SUBTITLES = "SUBTITLES"
ATTR_TIME_OFFSET = "TIME-OFFSET"
ATTR_TYPE = "TYPE"
ATTR_URI = "URI"
ATTR_VALUE = "VALUE"
ATTR_VIDEO = "VIDEO"

CLIENT_ATTRIBUTE_PREFIX = "X-"
