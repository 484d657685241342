"""Error taxonomy for Pitch Converter.

Errors are raised as exceptions inside the library and carried as values in
engine results. Every error keeps the offending input so that callers can
report what was rejected and why.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ParseErrorKind(Enum):
    """Reasons an input pitch string can be rejected."""
    UNRECOGNIZED_FORMAT = "UnrecognizedFormat"
    INVALID_LETTER = "InvalidLetter"
    INVALID_ACCIDENTAL = "InvalidAccidental"
    INVALID_OCTAVE = "InvalidOctave"
    INVALID_NUMERIC = "InvalidNumeric"
    OUT_OF_DOMAIN = "OutOfDomain"
    AMBIGUOUS_NUMERIC_LITERAL = "AmbiguousNumericLiteral"


class ConfigErrorKind(Enum):
    """Reasons a configuration value can be rejected."""
    REFERENCE_INVALID = "ReferenceInvalid"
    PRECISION_OUT_OF_RANGE = "PrecisionOutOfRange"
    UNKNOWN_NOTATION = "UnknownNotation"


class PitchConverterError(Exception):
    """Base class for all Pitch Converter errors."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {"error": type(self).__name__, "message": str(self)}


class ParseError(PitchConverterError):
    """An input string could not be turned into a pitch."""

    def __init__(self, kind: ParseErrorKind, span: str, message: Optional[str] = None):
        self.kind = kind
        self.span = span
        self.message = message or kind.value
        super().__init__(f"{self.kind.value}: {self.message} (at {span!r})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "ParseError",
            "kind": self.kind.value,
            "span": self.span,
            "message": self.message,
        }


class ConfigError(PitchConverterError):
    """A configuration value is outside its valid range."""

    def __init__(self, kind: ConfigErrorKind, value: Any, message: Optional[str] = None):
        self.kind = kind
        self.value = value
        self.message = message or kind.value
        super().__init__(f"{self.kind.value}: {self.message} (got {value!r})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "ConfigError",
            "kind": self.kind.value,
            "value": str(self.value),
            "message": self.message,
        }
