"""Tabulate every semitone in a range with its MIDI number and frequency."""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.config import PrecisionConfig
from ..core.note import NoteName
from ..core.tuning import TuningReference
from ..engine.batch import midi_to_frequencies
from ..notation.alternative import format_alternative
from ..notation.formatter import NotationFormatter


@dataclass
class TableRow:
    """One semitone of a pitch table."""

    note: str
    midi: int
    frequency: str
    alternative: str


class PitchTable:
    """Build pitch tables for a tuning reference."""

    def __init__(
        self,
        reference: Optional[TuningReference] = None,
        precision: Optional[PrecisionConfig] = None,
    ):
        self.reference = reference or TuningReference()
        self.precision = (precision or PrecisionConfig()).validate()

    def rows(self, start_midi: int, end_midi: int) -> List[TableRow]:
        """
        Rows for every MIDI number from start to end inclusive.

        The range is walked downwards when end is below start.
        """
        step = 1 if end_midi >= start_midi else -1
        midi = np.arange(start_midi, end_midi + step, step)
        frequencies = midi_to_frequencies(midi, self.reference)

        rows = []
        for number, frequency in zip(midi.tolist(), frequencies.tolist()):
            note = NoteName.from_midi(number, self.precision.spelling)
            rows.append(
                TableRow(
                    note=NotationFormatter.format_note(number, self.precision),
                    midi=number,
                    frequency=NotationFormatter.format_frequency(frequency, self.precision),
                    alternative=format_alternative(note),
                )
            )
        return rows
