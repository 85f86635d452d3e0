"""
EXT-X-MEDIA rendition codec and rendition-group validation.

The TYPE attribute selects the rendition model at decode time; the model's
``type`` field selects the attribute set at encode time.
"""

import logging
import re
from collections.abc import Iterable

from ..models.attributes import AttributeValue, EnumeratedString, QuotedString
from ..models.enums import MediaType
from ..models.playlist import (
    AudioRendition,
    ClosedCaptionsRendition,
    Rendition,
    SubtitlesRendition,
    VideoRendition,
)
from ..utils.helpers import int_or_none
from .attributes import AttributeList, parse_attribute_list
from .constants import (
    ATTR_ASSOC_LANGUAGE,
    ATTR_AUTOSELECT,
    ATTR_CHANNELS,
    ATTR_CHARACTERISTICS,
    ATTR_DEFAULT,
    ATTR_FORCED,
    ATTR_GROUP_ID,
    ATTR_INSTREAM_ID,
    ATTR_LANGUAGE,
    ATTR_NAME,
    ATTR_TYPE,
    ATTR_URI,
)
from .entities import parse_yes_no
from .errors import (
    AttributeEncodeError,
    InvalidAttributeValueError,
    MissingRequiredAttributeError,
    RenditionGroupError,
)

logger = logging.getLogger(__name__)

_INSTREAM_ID_RE = re.compile(r"^(CC|SERVICE)(\d+)$")

_RENDITION_CLASSES: dict[MediaType, type[Rendition]] = {
    MediaType.AUDIO: AudioRendition,
    MediaType.VIDEO: VideoRendition,
    MediaType.SUBTITLES: SubtitlesRendition,
    MediaType.CLOSED_CAPTIONS: ClosedCaptionsRendition,
}


def is_valid_instream_id(value: str) -> bool:
    """CC1-CC4 or SERVICE1-SERVICE63."""
    match = _INSTREAM_ID_RE.match(value)
    if match is None:
        return False
    n = int_or_none(match.group(2))
    if match.group(1) == "CC":
        return 1 <= n <= 4
    return 1 <= n <= 63


def _common_fields(attrs: AttributeList) -> dict:
    characteristics = attrs.string(ATTR_CHARACTERISTICS, required=False)
    return {
        "group_id": attrs.string(ATTR_GROUP_ID),
        "name": attrs.string(ATTR_NAME),
        "language": attrs.string(ATTR_LANGUAGE, required=False),
        "assoc_language": attrs.string(ATTR_ASSOC_LANGUAGE, required=False),
        "default": parse_yes_no(attrs, ATTR_DEFAULT),
        "autoselect": parse_yes_no(attrs, ATTR_AUTOSELECT),
        "characteristics": characteristics.split(",") if characteristics else [],
    }


def _audio_fields(attrs: AttributeList) -> dict:
    fields = {"uri": attrs.string(ATTR_URI, required=False)}
    channels_str = attrs.string(ATTR_CHANNELS, required=False)
    if channels_str is not None:
        # CHANNELS may carry extra '/'-separated parameters after the count
        count, *parameters = channels_str.split("/")
        channels = int_or_none(count) if count.isdigit() else None
        if channels is None:
            raise InvalidAttributeValueError(ATTR_CHANNELS)
        fields["channels"] = channels
        fields["channel_parameters"] = parameters
    return fields


def _closed_captions_fields(attrs: AttributeList) -> dict:
    instream_id = attrs.enum(ATTR_INSTREAM_ID)
    if not is_valid_instream_id(instream_id):
        raise InvalidAttributeValueError(ATTR_INSTREAM_ID)
    return {"instream_id": instream_id}


def parse_rendition(body: str) -> Rendition:
    """
    Parse an EXT-X-MEDIA body into the rendition model selected by TYPE.

    Raises:
        InvalidAttributeValueError: unknown TYPE, bad YES/NO flag, CHANNELS or INSTREAM-ID
    """
    attrs = parse_attribute_list(body)

    try:
        media_type = MediaType(attrs.enum(ATTR_TYPE))
    except ValueError:
        raise InvalidAttributeValueError(ATTR_TYPE) from None

    fields = _common_fields(attrs)
    if media_type == MediaType.AUDIO:
        fields.update(_audio_fields(attrs))
    elif media_type == MediaType.VIDEO:
        fields["uri"] = attrs.string(ATTR_URI, required=False)
    elif media_type == MediaType.SUBTITLES:
        fields["uri"] = attrs.string(ATTR_URI, required=False)
        fields["forced"] = parse_yes_no(attrs, ATTR_FORCED)
    else:
        fields.update(_closed_captions_fields(attrs))

    return _RENDITION_CLASSES[media_type](**fields)


def rendition_attributes(rendition: Rendition) -> dict[str, AttributeValue | None]:
    if not rendition.group_id:
        raise MissingRequiredAttributeError(ATTR_GROUP_ID)
    if not rendition.name:
        raise MissingRequiredAttributeError(ATTR_NAME)

    for characteristic in rendition.characteristics:
        if "," in characteristic:
            raise AttributeEncodeError("characteristic may not contain a comma")

    attrs: dict[str, AttributeValue | None] = {
        ATTR_TYPE: EnumeratedString(value=rendition.type.value),
        ATTR_GROUP_ID: QuotedString(value=rendition.group_id),
        ATTR_NAME: QuotedString(value=rendition.name),
        ATTR_LANGUAGE: QuotedString(value=rendition.language) if rendition.language else None,
        ATTR_ASSOC_LANGUAGE: (
            QuotedString(value=rendition.assoc_language) if rendition.assoc_language else None
        ),
        ATTR_DEFAULT: EnumeratedString(value="YES") if rendition.default else None,
        ATTR_AUTOSELECT: EnumeratedString(value="YES") if rendition.autoselect else None,
        ATTR_CHARACTERISTICS: (
            QuotedString(value=",".join(rendition.characteristics))
            if rendition.characteristics
            else None
        ),
    }

    if isinstance(rendition, ClosedCaptionsRendition):
        if not is_valid_instream_id(rendition.instream_id):
            raise InvalidAttributeValueError(ATTR_INSTREAM_ID)
        attrs[ATTR_INSTREAM_ID] = EnumeratedString(value=rendition.instream_id)
        return attrs

    if rendition.uri:
        attrs[ATTR_URI] = QuotedString(value=rendition.uri)
    if isinstance(rendition, AudioRendition) and rendition.channels is not None:
        channels = "/".join([str(rendition.channels), *rendition.channel_parameters])
        attrs[ATTR_CHANNELS] = QuotedString(value=channels)
    if isinstance(rendition, SubtitlesRendition) and rendition.forced:
        attrs[ATTR_FORCED] = EnumeratedString(value="YES")

    return attrs


def validate_rendition_groups(renditions: Iterable[Rendition]) -> None:
    """
    Check every (type, group id) group: names are unique and at most one
    rendition is marked default.

    Raises:
        RenditionGroupError: on the first violating rendition
    """
    names: dict[tuple[MediaType, str], set[str]] = {}
    defaults: set[tuple[MediaType, str]] = set()

    for rendition in renditions:
        group = (rendition.type, rendition.group_id)
        group_names = names.setdefault(group, set())

        if rendition.name in group_names:
            raise RenditionGroupError(
                "all renditions in the same group must have different names: "
                f'{rendition.type.value} group "{rendition.group_id}" repeats "{rendition.name}"'
            )
        group_names.add(rendition.name)

        if rendition.default:
            if group in defaults:
                raise RenditionGroupError(
                    "a rendition group must not have more than one default: "
                    f'{rendition.type.value} group "{rendition.group_id}"'
                )
            defaults.add(group)

    logger.debug(f"Validated {len(names)} rendition group(s)")
