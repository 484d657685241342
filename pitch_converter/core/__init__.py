"""Core types and constants for Pitch Converter."""

from .config import OctaveNotation, PrecisionConfig, Spelling
from .constants import (
    A4_MIDI,
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_REFERENCE_HZ,
    FLAT_PITCH_NAMES,
    MAX_DECIMAL_PLACES,
    PITCH_NAMES,
)
from .errors import (
    ConfigError,
    ConfigErrorKind,
    ParseError,
    ParseErrorKind,
    PitchConverterError,
)
from .note import NoteName
from .pitch import CanonicalPitch, ExactOffset, MeasuredOffset, SemitoneOffset
from .tuning import TuningReference

__all__ = [
    "A4_MIDI",
    "CanonicalPitch",
    "ConfigError",
    "ConfigErrorKind",
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_REFERENCE_HZ",
    "ExactOffset",
    "FLAT_PITCH_NAMES",
    "MAX_DECIMAL_PLACES",
    "MeasuredOffset",
    "NoteName",
    "OctaveNotation",
    "PITCH_NAMES",
    "ParseError",
    "ParseErrorKind",
    "PitchConverterError",
    "PrecisionConfig",
    "SemitoneOffset",
    "Spelling",
    "TuningReference",
]
