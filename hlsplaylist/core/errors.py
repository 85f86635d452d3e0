"""
Exception hierarchy for playlist decoding and encoding.

Every error raised by the codec derives from PlaylistError and carries a
machine-readable ``error_code``. The decoder attaches the offending source
line to the original exception instance instead of wrapping it, so callers
can match on the concrete class after the error has surfaced.
"""


class PlaylistError(Exception):
    """Base class for all codec errors."""

    error_code = "playlist.error"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.line_number: int | None = None
        self.line: str | None = None

    def locate(self, line_number: int, line: str) -> "PlaylistError":
        """Attach source position; the first position recorded wins."""
        if self.line_number is None:
            self.line_number = line_number
            self.line = line
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return f"m3u8: {self.message}"
        return f"m3u8: {self.message} on line {self.line_number} ({self.line})"


# ── Structural ───────────────────────────────────────────────────────
class StructuralError(PlaylistError):
    error_code = "playlist.structure"


class NoHeaderError(StructuralError):
    error_code = "playlist.no_header"

    def __init__(self, message: str = "missing header tag"):
        super().__init__(message)


class UnexpectedEOFError(StructuralError):
    error_code = "playlist.unexpected_eof"

    def __init__(self, message: str = "unexpected end of input"):
        super().__init__(message)


class MixedTagsError(StructuralError):
    error_code = "playlist.mixed_tags"

    def __init__(self, message: str = "playlist contains both master and media tags"):
        super().__init__(message)


class UnknownPlaylistTypeError(StructuralError):
    error_code = "playlist.unknown_type"

    def __init__(self, message: str = "failed to determine playlist type"):
        super().__init__(message)


# ── Grammar ──────────────────────────────────────────────────────────
class GrammarError(PlaylistError):
    error_code = "playlist.grammar"


class BadAttrNameError(GrammarError):
    error_code = "attribute.bad_name"

    def __init__(self, message: str = "invalid attribute name"):
        super().__init__(message)


class BadAttrSyntaxError(GrammarError):
    error_code = "attribute.bad_syntax"

    def __init__(self, message: str = "invalid attribute syntax"):
        super().__init__(message)


class BadSyntaxError(GrammarError):
    error_code = "playlist.bad_syntax"

    def __init__(self, message: str = "invalid syntax"):
        super().__init__(message)


# ── Semantic ─────────────────────────────────────────────────────────
class SemanticError(PlaylistError):
    error_code = "playlist.semantic"


class MissingRequiredAttributeError(SemanticError):
    error_code = "attribute.missing"

    def __init__(self, attribute: str):
        super().__init__(f'missing required attribute, "{attribute}",')
        self.attribute = attribute


class TypeMismatchError(SemanticError):
    error_code = "attribute.type_mismatch"

    def __init__(self, attribute: str, expected, actual):
        super().__init__(
            f'expected {expected.value} for attribute, "{attribute}", but got {actual.value}'
        )
        self.attribute = attribute
        self.expected = expected
        self.actual = actual


class InvalidValueError(SemanticError):
    error_code = "playlist.invalid_value"


class InvalidAttributeValueError(InvalidValueError):
    error_code = "attribute.invalid_value"

    def __init__(self, attribute: str, message: str | None = None):
        super().__init__(message or f'invalid value for attribute, "{attribute}",')
        self.attribute = attribute


class CompatibilityVersionError(SemanticError):
    error_code = "playlist.compatibility_version"

    def __init__(self, version: int):
        super().__init__(f"compatibility version number, {version}, required")
        self.version = version


class RenditionGroupError(SemanticError):
    error_code = "playlist.rendition_group"


class OutOfOrderTagError(SemanticError):
    error_code = "playlist.out_of_order"

    def __init__(self, message: str = "this tag must appear before the first media segment"):
        super().__init__(message)


class UnexpectedTagError(SemanticError):
    error_code = "playlist.unexpected_tag"

    def __init__(self, tag: str):
        super().__init__(f'unexpected tag, "{tag}"')
        self.tag = tag


class NoRangeStartError(SemanticError):
    error_code = "playlist.no_range_start"

    def __init__(self, message: str = "missing range start"):
        super().__init__(message)


class AttributeEncodeError(SemanticError):
    error_code = "attribute.encode"


# ── Segment state ────────────────────────────────────────────────────
class SegmentStateError(PlaylistError):
    error_code = "playlist.segment_state"


class UnexpectedMediaSegmentError(SegmentStateError):
    error_code = "playlist.segment_after_endlist"

    def __init__(self, message: str = "found media segment after a #EXT-X-ENDLIST tag"):
        super().__init__(message)


class UnexpectedURIError(SegmentStateError):
    error_code = "playlist.unexpected_uri"

    def __init__(self, message: str = "unexpected uri"):
        super().__init__(message)


class MissingURIError(SegmentStateError):
    error_code = "playlist.missing_uri"

    def __init__(self, message: str = "missing uri"):
        super().__init__(message)
