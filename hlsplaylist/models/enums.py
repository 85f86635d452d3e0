from enum import Enum


class Dialect(str, Enum):
    MEDIA = "media"
    MASTER = "master"


class TagScope(str, Enum):
    MEDIA = "media"
    MASTER = "master"
    SHARED = "shared"


class AttributeKind(str, Enum):
    DECIMAL_INTEGER = "decimal-integer"
    HEXADECIMAL_SEQUENCE = "hexadecimal-sequence"
    DECIMAL_FLOATING_POINT = "decimal-floating-point"
    SIGNED_DECIMAL_FLOATING_POINT = "signed-decimal-floating-point"
    QUOTED_STRING = "quoted-string"
    ENUMERATED_STRING = "enumerated-string"
    DECIMAL_RESOLUTION = "decimal-resolution"


class MediaType(str, Enum):
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    SUBTITLES = "SUBTITLES"
    CLOSED_CAPTIONS = "CLOSED-CAPTIONS"


class EncryptionMethod(str, Enum):
    NONE = "NONE"
    AES_128 = "AES-128"
    SAMPLE_AES = "SAMPLE-AES"


class PlaylistType(str, Enum):
    EVENT = "EVENT"
    VOD = "VOD"


class HDCPLevel(str, Enum):
    TYPE_0 = "TYPE-0"
    TYPE_1 = "TYPE-1"
    NONE = "NONE"
