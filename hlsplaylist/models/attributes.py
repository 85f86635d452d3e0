from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .enums import AttributeKind


class AttributeValue(BaseModel):
    """A typed attribute value. Exactly one kind per value."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[AttributeKind]


class DecimalInteger(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.DECIMAL_INTEGER

    value: int = Field(..., ge=0)


class HexadecimalSequence(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.HEXADECIMAL_SEQUENCE

    value: bytes


class UnsignedFloat(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.DECIMAL_FLOATING_POINT

    value: float


class SignedFloat(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.SIGNED_DECIMAL_FLOATING_POINT

    value: float


class QuotedString(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.QUOTED_STRING

    value: str


class EnumeratedString(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.ENUMERATED_STRING

    value: str


class DecimalResolution(AttributeValue):
    kind: ClassVar[AttributeKind] = AttributeKind.DECIMAL_RESOLUTION

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
