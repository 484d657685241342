"""Notation formatter - render formatted values as text."""

from typing import Optional

from ..core.config import OctaveNotation, PrecisionConfig
from ..core.constants import CENTS_PER_SEMITONE
from ..core.note import NoteName
from .alternative import format_alternative
from .helmholtz import format_helmholtz
from .values import (
    AlternativeValue,
    CentsValue,
    FormattedValue,
    FrequencyValue,
    MidiValue,
    NoteValue,
)

HALF_SEMITONE_CENTS = CENTS_PER_SEMITONE / 2


class NotationFormatter:
    """Render FormattedValues with a PrecisionConfig.

    Output strings are valid parser input, so a formatted value can be fed
    back into the converter.
    """

    def __init__(self, precision: Optional[PrecisionConfig] = None):
        self.precision = (precision or PrecisionConfig()).validate()

    def format(self, value: FormattedValue, precision: Optional[PrecisionConfig] = None) -> str:
        """
        Format a value.

        Args:
            value: Value produced by the conversion engine
            precision: Overrides the formatter's default configuration

        Returns:
            Text such as '440.00 Hz', '69', 'C#4', 'A4+15.00c' or 'hiA'

        Raises:
            ConfigError: If the precision configuration is invalid
        """
        precision = precision.validate() if precision is not None else self.precision

        if isinstance(value, FrequencyValue):
            return self.format_frequency(value.frequency_hz, precision)
        if isinstance(value, MidiValue):
            return str(value.number)
        if isinstance(value, NoteValue):
            return self.format_note(value.midi, precision)
        if isinstance(value, CentsValue):
            return self.format_cents(value.midi, value.cents, precision)
        if isinstance(value, AlternativeValue):
            return format_alternative(NoteName.from_midi(value.midi, precision.spelling))
        raise TypeError(f"Cannot format {type(value).__name__}")

    @staticmethod
    def format_frequency(frequency_hz: float, precision: PrecisionConfig) -> str:
        return f"{frequency_hz:.{precision.decimal_places}f} Hz"

    @staticmethod
    def format_note(midi: int, precision: PrecisionConfig) -> str:
        note = NoteName.from_midi(midi, precision.spelling)
        if precision.octave_notation is OctaveNotation.HELMHOLTZ:
            return format_helmholtz(note)
        return str(note)

    @classmethod
    def format_cents(cls, midi: int, cents: float, precision: PrecisionConfig) -> str:
        places = precision.decimal_places
        magnitude = f"{abs(cents):.{places}f}"

        # Rounding for display can reach +50; show it as -50 of the pitch above
        if cents >= 0 and float(magnitude) >= HALF_SEMITONE_CENTS:
            midi += 1
            cents -= CENTS_PER_SEMITONE
            magnitude = f"{abs(cents):.{places}f}"

        sign = "-" if cents < 0 and float(magnitude) != 0 else "+"
        return f"{cls.format_note(midi, precision)}{sign}{magnitude}c"
