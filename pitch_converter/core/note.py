"""Note name data class - letter, accidental and octave."""

from dataclasses import dataclass

from .config import Spelling
from .constants import (
    A4_MIDI,
    FLAT_PITCH_NAMES,
    LETTER_SEMITONES,
    MAX_ACCIDENTALS,
    MIDI_MAX,
    MIDI_MIN,
    PITCH_NAMES,
    SEMITONES_PER_OCTAVE,
)
from .errors import ParseError, ParseErrorKind


@dataclass(frozen=True)
class NoteName:
    """Represents a note in scientific pitch notation (C4 = MIDI 60)."""

    letter: str  # One of C, D, E, F, G, A, B
    accidental: int = 0  # -2 (double flat) .. +2 (double sharp)
    octave: int = 4

    def __post_init__(self):
        letter = self.letter.upper() if isinstance(self.letter, str) else self.letter
        if letter not in LETTER_SEMITONES:
            raise ParseError(ParseErrorKind.INVALID_LETTER, str(self.letter),
                             "note letter must be one of A-G")
        if abs(self.accidental) > MAX_ACCIDENTALS:
            raise ParseError(ParseErrorKind.INVALID_ACCIDENTAL, str(self.accidental),
                             f"at most {MAX_ACCIDENTALS} accidentals may be stacked")
        object.__setattr__(self, "letter", letter)

    @property
    def midi_number(self) -> int:
        """MIDI number of this note; may fall outside 0-127."""
        pitch_class = LETTER_SEMITONES[self.letter] + self.accidental
        return (self.octave + 1) * SEMITONES_PER_OCTAVE + pitch_class

    @property
    def semitones_from_a4(self) -> int:
        """Exact semitone offset from A4."""
        return self.midi_number - A4_MIDI

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.midi_number % SEMITONES_PER_OCTAVE

    @property
    def accidental_symbol(self) -> str:
        """Accidental as ASCII text, e.g. '#', 'bb' or ''."""
        if self.accidental > 0:
            return "#" * self.accidental
        return "b" * -self.accidental

    @property
    def is_standard_midi(self) -> bool:
        return MIDI_MIN <= self.midi_number <= MIDI_MAX

    @classmethod
    def from_midi(cls, midi: int, spelling: Spelling = Spelling.SHARP) -> "NoteName":
        """Spell a MIDI number, preferring sharps unless flats are requested."""
        names = FLAT_PITCH_NAMES if spelling is Spelling.FLAT else PITCH_NAMES
        name = names[midi % SEMITONES_PER_OCTAVE]
        accidental = 0
        if len(name) > 1:
            accidental = 1 if name[1] == "#" else -1
        octave = (midi // SEMITONES_PER_OCTAVE) - 1
        return cls(letter=name[0], accidental=accidental, octave=octave)

    @classmethod
    def from_semitones_from_a4(cls, offset: int, spelling: Spelling = Spelling.SHARP) -> "NoteName":
        return cls.from_midi(A4_MIDI + offset, spelling)

    def __str__(self) -> str:
        """Get note name (e.g., 'C4', 'A#3', 'Ebb-1')."""
        return f"{self.letter}{self.accidental_symbol}{self.octave}"
