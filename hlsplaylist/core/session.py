"""EXT-X-SESSION-DATA codec."""

from ..models.attributes import AttributeValue, QuotedString
from ..models.playlist import SessionDataEntry
from .attributes import parse_attribute_list
from .constants import ATTR_DATA_ID, ATTR_LANGUAGE, ATTR_URI, ATTR_VALUE
from .errors import InvalidAttributeValueError, MissingRequiredAttributeError


def parse_session_data_entry(body: str) -> SessionDataEntry:
    """
    Parse an EXT-X-SESSION-DATA body.

    The entry must carry exactly one of VALUE and URI.
    """
    attrs = parse_attribute_list(body)

    data_id = attrs.string(ATTR_DATA_ID)
    language = attrs.string(ATTR_LANGUAGE, required=False)
    value = attrs.string(ATTR_VALUE, required=False)
    uri = attrs.string(ATTR_URI, required=False)

    if value is None and uri is None:
        raise MissingRequiredAttributeError(f"{ATTR_VALUE}|{ATTR_URI}")
    if value is not None and uri is not None:
        raise InvalidAttributeValueError(
            ATTR_URI, f'attributes "{ATTR_VALUE}" and "{ATTR_URI}" are mutually exclusive'
        )

    return SessionDataEntry(id=data_id, language=language, value=value, uri=uri)


def session_data_attributes(entry: SessionDataEntry) -> dict[str, AttributeValue | None]:
    if entry.value is None and entry.uri is None:
        raise MissingRequiredAttributeError(f"{ATTR_VALUE}|{ATTR_URI}")
    if entry.value is not None and entry.uri is not None:
        raise InvalidAttributeValueError(
            ATTR_URI, f'attributes "{ATTR_VALUE}" and "{ATTR_URI}" are mutually exclusive'
        )

    return {
        ATTR_DATA_ID: QuotedString(value=entry.id),
        ATTR_LANGUAGE: QuotedString(value=entry.language) if entry.language else None,
        ATTR_VALUE: QuotedString(value=entry.value) if entry.value is not None else None,
        ATTR_URI: QuotedString(value=entry.uri) if entry.uri is not None else None,
    }
