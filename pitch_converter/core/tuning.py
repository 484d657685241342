"""Tuning reference - the frequency assigned to A4."""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from .constants import DEFAULT_REFERENCE_HZ, SEMITONES_PER_OCTAVE
from .errors import ConfigError, ConfigErrorKind

Offset = Union[Fraction, float, int]


def validate_reference(frequency_hz: float) -> float:
    """Return the reference as a float, or raise ConfigError if unusable."""
    try:
        value = float(frequency_hz)
    except (TypeError, ValueError):
        raise ConfigError(
            ConfigErrorKind.REFERENCE_INVALID,
            frequency_hz,
            "reference frequency must be a number",
        ) from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(
            ConfigErrorKind.REFERENCE_INVALID,
            frequency_hz,
            "reference frequency must be positive and finite",
        )
    return value


@dataclass(frozen=True)
class TuningReference:
    """Equal-temperament tuning anchored at A4.

    Attributes:
        reference_frequency_hz: Frequency of A4 in Hz (default: 440.0)
    """

    reference_frequency_hz: float = DEFAULT_REFERENCE_HZ

    def __post_init__(self):
        object.__setattr__(
            self, "reference_frequency_hz", validate_reference(self.reference_frequency_hz)
        )

    def frequency_for_offset(self, offset: Offset) -> float:
        """
        Frequency of a pitch given its semitone offset from A4.

        Args:
            offset: Semitones from A4 (exact or real)

        Returns:
            Frequency in Hz. May be 0.0 or inf when the offset leaves float range.
        """
        try:
            return self.reference_frequency_hz * 2.0 ** (float(offset) / SEMITONES_PER_OCTAVE)
        except OverflowError:
            return math.inf if offset > 0 else 0.0

    def offset_for_frequency(self, frequency_hz: float) -> float:
        """Semitone offset of a frequency from A4 (not necessarily integral).

        Finite for every positive finite frequency; the ratio itself may
        underflow or overflow, so the logs are taken separately.
        """
        return SEMITONES_PER_OCTAVE * (math.log2(frequency_hz) - math.log2(self.reference_frequency_hz))

    def scaled(self, factor: float) -> "TuningReference":
        """Return a new reference multiplied by a positive factor."""
        return TuningReference(self.reference_frequency_hz * factor)

    def __str__(self) -> str:
        return f"A4 = {self.reference_frequency_hz:g} Hz"
