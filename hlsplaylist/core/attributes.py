"""
Attribute-list grammar.

An attribute list is the comma-separated ``NAME=value`` body of a tag such
as ``#EXT-X-STREAM-INF``. Every value is recognized as exactly one of seven
kinds by trying the patterns below in a fixed order; the first pattern that
matches up to the next comma (or end of input) wins. The order matters:
``720`` is an integer before it is a float, ``720x480`` is a resolution
before it is an enumerated string.
"""

import builtins
import logging
import re
from collections.abc import Callable, Iterator, Mapping

from ..models.attributes import (
    AttributeValue,
    DecimalInteger,
    DecimalResolution,
    EnumeratedString,
    HexadecimalSequence,
    QuotedString,
    SignedFloat,
    UnsignedFloat,
)
from ..models.enums import AttributeKind
from ..utils.helpers import format_decimal, is_finite
from .errors import (
    AttributeEncodeError,
    BadAttrNameError,
    BadAttrSyntaxError,
    MissingRequiredAttributeError,
    TypeMismatchError,
)

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"([A-Z0-9-]+)=")
_VALID_NAME_RE = re.compile(r"^[A-Z0-9-]+$")

_DECIMAL_INTEGER_RE = re.compile(r"(\d{1,20})(?:,|\Z)")
_HEXADECIMAL_SEQUENCE_RE = re.compile(r"0[xX]([0-9A-Fa-f]+)(?:,|\Z)")
_DECIMAL_FLOAT_RE = re.compile(r"(\d+(?:\.\d+)?)(?:,|\Z)")
_SIGNED_DECIMAL_FLOAT_RE = re.compile(r"(-?\d+(?:\.\d+)?)(?:,|\Z)")
_QUOTED_STRING_RE = re.compile(r'"([^\n\r"]*)"(?:,|\Z)')
_DECIMAL_RESOLUTION_RE = re.compile(r"(\d+)x(\d+)(?:,|\Z)")
_ENUMERATED_STRING_RE = re.compile(r'([^\s",]*)(?:,|\Z)')

_BAD_QUOTED_CHARS = re.compile(r'["\r\n]')
_BAD_ENUMERATED_CHARS = re.compile(r'[\s",]')


def _hex_bytes(match: re.Match) -> HexadecimalSequence:
    digits = match.group(1)
    if len(digits) % 2 == 1:
        digits = "0" + digits
    return HexadecimalSequence(value=bytes.fromhex(digits))


# Recognition order is significant; see module docstring.
_VALUE_PATTERNS: list[tuple[re.Pattern, Callable[[re.Match], AttributeValue]]] = [
    (_DECIMAL_INTEGER_RE, lambda m: DecimalInteger(value=int(m.group(1)))),
    (_HEXADECIMAL_SEQUENCE_RE, _hex_bytes),
    (_DECIMAL_FLOAT_RE, lambda m: UnsignedFloat(value=float(m.group(1)))),
    (_SIGNED_DECIMAL_FLOAT_RE, lambda m: SignedFloat(value=float(m.group(1)))),
    (_QUOTED_STRING_RE, lambda m: QuotedString(value=m.group(1))),
    (
        _DECIMAL_RESOLUTION_RE,
        lambda m: DecimalResolution(width=int(m.group(1)), height=int(m.group(2))),
    ),
    (_ENUMERATED_STRING_RE, lambda m: EnumeratedString(value=m.group(1))),
]

_FLOAT_KINDS = frozenset(
    {AttributeKind.DECIMAL_FLOATING_POINT, AttributeKind.SIGNED_DECIMAL_FLOATING_POINT}
)


class AttributeList:
    """
    Parsed attribute list with typed accessors.

    Every accessor raises MissingRequiredAttributeError when the name is
    absent (unless called with ``required=False``, which returns None) and
    TypeMismatchError when the value is of another kind.
    """

    def __init__(self, values: Mapping[str, AttributeValue] | None = None):
        self._values: dict[str, AttributeValue] = dict(values or {})

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> AttributeValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeList):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeList({self._values!r})"

    def items(self):
        return self._values.items()

    def get(self, name: str) -> AttributeValue | None:
        return self._values.get(name)

    def _lookup(
        self,
        name: str,
        expected: AttributeKind,
        required: bool,
        accepted: frozenset[AttributeKind] | None = None,
    ) -> AttributeValue | None:
        value = self._values.get(name)
        if value is None:
            if required:
                raise MissingRequiredAttributeError(name)
            return None
        if value.kind != expected and (accepted is None or value.kind not in accepted):
            raise TypeMismatchError(name, expected, value.kind)
        return value

    def integer(self, name: str, required: bool = True) -> int | None:
        value = self._lookup(name, AttributeKind.DECIMAL_INTEGER, required)
        return value.value if value is not None else None

    def bytes(self, name: str, required: bool = True) -> bytes | None:
        value = self._lookup(name, AttributeKind.HEXADECIMAL_SEQUENCE, required)
        return value.value if value is not None else None

    def float(self, name: str, required: bool = True) -> float | None:
        value = self._lookup(name, AttributeKind.DECIMAL_FLOATING_POINT, required)
        return value.value if value is not None else None

    def signed_float(self, name: str, required: bool = True) -> builtins.float | None:
        # An unsigned float is a refinement of a signed one.
        value = self._lookup(
            name, AttributeKind.SIGNED_DECIMAL_FLOATING_POINT, required, accepted=_FLOAT_KINDS
        )
        return value.value if value is not None else None

    def string(self, name: str, required: bool = True) -> str | None:
        value = self._lookup(name, AttributeKind.QUOTED_STRING, required)
        return value.value if value is not None else None

    def enum(self, name: str, required: bool = True) -> str | None:
        value = self._lookup(name, AttributeKind.ENUMERATED_STRING, required)
        return value.value if value is not None else None

    def resolution(self, name: str, required: bool = True) -> tuple[int, int] | None:
        value = self._lookup(name, AttributeKind.DECIMAL_RESOLUTION, required)
        return (value.width, value.height) if value is not None else None


def parse_attribute_list(body: str) -> AttributeList:
    """
    Parse an attribute-list body into an AttributeList.

    A repeated name silently keeps the last value.

    Raises:
        BadAttrNameError: a name is missing, malformed or not followed by '='
        BadAttrSyntaxError: a value matches none of the seven kinds
    """
    values: dict[str, AttributeValue] = {}
    pos = 0
    while pos < len(body):
        name_match = _NAME_RE.match(body, pos)
        if name_match is None:
            raise BadAttrNameError()
        name = name_match.group(1)
        pos = name_match.end()

        for pattern, build in _VALUE_PATTERNS:
            value_match = pattern.match(body, pos)
            if value_match is not None:
                break
        else:
            raise BadAttrSyntaxError()

        if name in values:
            logger.debug(f"Attribute {name} repeated; keeping last value")
        values[name] = build(value_match)
        pos = value_match.end()

    return AttributeList(values)


def render_value(value: AttributeValue) -> str:
    """Render a single attribute value in its wire form."""
    if isinstance(value, DecimalInteger):
        return str(value.value)

    if isinstance(value, HexadecimalSequence):
        if not value.value:
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: empty", "attribute.illegal_bytes"
            )
        return "0x" + value.value.hex().upper()

    if isinstance(value, UnsignedFloat):
        if value.value < 0 or not is_finite(value.value):
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: {value.value}", "attribute.illegal_float"
            )
        return format_decimal(value.value, keep_fraction=True)

    if isinstance(value, SignedFloat):
        if not is_finite(value.value):
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: {value.value}", "attribute.illegal_float"
            )
        return format_decimal(value.value, keep_fraction=True)

    if isinstance(value, QuotedString):
        if _BAD_QUOTED_CHARS.search(value.value):
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: {value.value!r}", "attribute.illegal_string"
            )
        return f'"{value.value}"'

    if isinstance(value, EnumeratedString):
        if _BAD_ENUMERATED_CHARS.search(value.value):
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: {value.value!r}", "attribute.illegal_enum"
            )
        return value.value

    if isinstance(value, DecimalResolution):
        # 0x... reads back as a hexadecimal sequence
        if value.width == 0:
            raise AttributeEncodeError(
                f"illegal {value.kind.value}: {value.width}x{value.height}",
                "attribute.illegal_resolution",
            )
        return f"{value.width}x{value.height}"

    raise AttributeEncodeError(f"unexpected attribute value type: {type(value).__name__}")


def encode_attributes(attrs: Mapping[str, AttributeValue | None] | AttributeList) -> str:
    """
    Render attributes as ``NAME=value`` pairs joined by commas.

    Pairs are written in the mapping's iteration order; None values are
    skipped.
    """
    pairs = []
    for name, value in attrs.items():
        if value is None:
            continue
        if not _VALID_NAME_RE.match(name):
            raise AttributeEncodeError(f"illegal attribute name: {name!r}", "attribute.bad_name")
        pairs.append(f"{name}={render_value(value)}")
    return ",".join(pairs)
