"""Formatting configuration shared by the formatter and the engine."""

from dataclasses import dataclass
from enum import Enum

from .constants import DEFAULT_DECIMAL_PLACES, MAX_DECIMAL_PLACES
from .errors import ConfigError, ConfigErrorKind


class Spelling(Enum):
    """Accidental preference for pitches with two common names."""
    SHARP = "sharp"
    FLAT = "flat"


class OctaveNotation(Enum):
    """How the octave of a note name is rendered."""
    SCIENTIFIC = "scientific"
    HELMHOLTZ = "helmholtz"


@dataclass(frozen=True)
class PrecisionConfig:
    """Configuration for rendering one output notation.

    Attributes:
        decimal_places: Digits after the point for frequency and cents (default: 2)
        spelling: Sharp or flat spelling of black keys (default: Sharp)
        octave_notation: Scientific (C4) or Helmholtz (c') octaves (default: Scientific)
    """

    decimal_places: int = DEFAULT_DECIMAL_PLACES
    spelling: Spelling = Spelling.SHARP
    octave_notation: OctaveNotation = OctaveNotation.SCIENTIFIC

    def validate(self) -> "PrecisionConfig":
        """Return self, or raise ConfigError if decimal_places is unusable."""
        places = self.decimal_places
        if isinstance(places, bool) or not isinstance(places, int):
            raise ConfigError(
                ConfigErrorKind.PRECISION_OUT_OF_RANGE,
                places,
                "decimal places must be an integer",
            )
        if not 0 <= places <= MAX_DECIMAL_PLACES:
            raise ConfigError(
                ConfigErrorKind.PRECISION_OUT_OF_RANGE,
                places,
                f"decimal places must be between 0 and {MAX_DECIMAL_PLACES}",
            )
        return self
