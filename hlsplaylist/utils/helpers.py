"""
Small conversion helpers shared by the codec modules.
"""

import math
import re
from decimal import Decimal
from typing import Any

# ISO 8601 date/time as accepted by #EXT-X-PROGRAM-DATE-TIME and date ranges
_ISO8601_RE = re.compile(
    r"^[+-]?\d{4,}(?:-?(?:\d{2}(?:-?\d{2})?|W\d{2}(?:-?\d)?|\d{3}))?"
    r"(?:T\d{2}(?::?\d{2}(?::?\d{2}(?:\.\d+)?)?)?(?:Z|[+-]\d{2}(?::?\d{2})?)?)?$"
)

_DECIMAL_RE = re.compile(r"^\d+(?:\.\d+)?$")


def int_or_none(v: Any, scale: int = 1) -> int | None:
    """Convert value to int or return None."""
    if v is None:
        return None
    try:
        return int(v) // scale
    except (ValueError, TypeError):
        return None


def float_or_none(v: Any, scale: float = 1.0) -> float | None:
    """Convert value to float or return None."""
    if v is None:
        return None
    try:
        return float(v) / scale
    except (ValueError, TypeError):
        return None


def seconds_or_none(text: str) -> float | None:
    """Parse a non-negative decimal number of seconds, e.g. '9.009'."""
    if not _DECIMAL_RE.match(text):
        return None
    return float_or_none(text)


def is_iso8601(text: str) -> bool:
    return bool(_ISO8601_RE.match(text))


def format_decimal(value: float, keep_fraction: bool = False) -> str:
    """
    Render a float as the shortest decimal that reads back to the same value.

    Never uses exponent notation. With keep_fraction, integral values keep a
    trailing '.0' so they are still read back as floating point.
    """
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0") and not keep_fraction:
        text = text[:-2]
    elif keep_fraction and "." not in text:
        text += ".0"
    return text


def is_finite(value: float) -> bool:
    return not (math.isinf(value) or math.isnan(value))
