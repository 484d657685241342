"""Canonical pitch - the single source of truth every notation converts through.

A pitch is anchored to its frequency in Hz. When the input was itself an
exact notation (MIDI number, note name, alternative notation or a
cents-qualified note) the exact rational semitone offset from A4 is kept
alongside, so that exact-to-exact conversions never pick up float error.
"""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

from .constants import CENTS_PER_SEMITONE
from .errors import ParseError, ParseErrorKind
from .tuning import TuningReference

HALF = Fraction(1, 2)


@dataclass(frozen=True)
class ExactOffset:
    """Semitones from A4 known exactly, as a rational number."""

    value: Fraction

    @property
    def is_exact(self) -> bool:
        return True

    def nearest_semitone(self) -> int:
        """Nearest integer semitone; a half-semitone tie rounds up."""
        return math.floor(self.value + HALF)

    def cents_deviation(self) -> float:
        """Cents from the nearest semitone, in [-50, 50)."""
        residual = self.value - self.nearest_semitone()
        return float(residual * CENTS_PER_SEMITONE)

    def __float__(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class MeasuredOffset:
    """Semitones from A4 derived from a measured frequency."""

    value: float

    @property
    def is_exact(self) -> bool:
        return False

    def nearest_semitone(self) -> int:
        """Nearest integer semitone; a half-semitone tie rounds up."""
        return math.floor(self.value + 0.5)

    def cents_deviation(self) -> float:
        """Cents from the nearest semitone, in [-50, 50)."""
        cents = (self.value - self.nearest_semitone()) * CENTS_PER_SEMITONE
        # Float residue can land a hair outside the half-open interval
        if cents >= 50.0:
            cents -= 100.0
        return max(cents, -50.0)

    def __float__(self) -> float:
        return self.value


SemitoneOffset = Union[ExactOffset, MeasuredOffset]


@dataclass(frozen=True)
class CanonicalPitch:
    """A musical pitch.

    Attributes:
        frequency_hz: Frequency in Hz, positive and finite
        exact_semitone_offset: Exact semitones from A4 when the input was exact
    """

    frequency_hz: float
    exact_semitone_offset: Optional[Fraction] = None

    def __post_init__(self):
        if not math.isfinite(self.frequency_hz) or self.frequency_hz <= 0:
            raise ParseError(
                ParseErrorKind.OUT_OF_DOMAIN,
                str(self.frequency_hz),
                "frequency must be positive and finite",
            )

    @property
    def is_exact(self) -> bool:
        return self.exact_semitone_offset is not None

    @classmethod
    def from_frequency(cls, frequency_hz: float) -> "CanonicalPitch":
        """Create a measured pitch from a frequency."""
        return cls(frequency_hz=float(frequency_hz))

    @classmethod
    def from_exact_offset(
        cls,
        offset: Union[Fraction, int],
        reference: TuningReference,
        span: Optional[str] = None,
    ) -> "CanonicalPitch":
        """
        Create an exact pitch from its semitone offset from A4.

        Args:
            offset: Exact semitones from A4
            reference: Tuning reference used to derive the frequency
            span: Input text reported if the frequency leaves float range

        Returns:
            CanonicalPitch carrying both frequency and exact offset
        """
        offset = Fraction(offset)
        frequency = reference.frequency_for_offset(offset)
        if not math.isfinite(frequency) or frequency <= 0:
            raise ParseError(
                ParseErrorKind.OUT_OF_DOMAIN,
                span if span is not None else str(offset),
                "pitch lies outside the representable frequency range",
            )
        return cls(frequency_hz=frequency, exact_semitone_offset=offset)

    def semitone_offset(self, reference: TuningReference) -> SemitoneOffset:
        """Offset from A4: exact when known, otherwise measured against reference."""
        if self.exact_semitone_offset is not None:
            return ExactOffset(self.exact_semitone_offset)
        return MeasuredOffset(reference.offset_for_frequency(self.frequency_hz))

    def frequency(self, reference: TuningReference) -> float:
        """Frequency under the given reference.

        Exact pitches are re-derived from their offset, so a reference
        override moves them; measured pitches keep their frequency.
        """
        if self.exact_semitone_offset is not None:
            return reference.frequency_for_offset(self.exact_semitone_offset)
        return self.frequency_hz
