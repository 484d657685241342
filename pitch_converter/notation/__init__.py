"""Notation layer - parse and format pitch notations.

This layer knows the text forms of a pitch:
- Frequencies (440.00 Hz)
- MIDI numbers (69)
- Note names in scientific or Helmholtz octaves (A4, a')
- Cents-qualified notes (A4+15.00c)
- Alternative octave words (hiA)
"""

from .alternative import format_alternative, parse_alternative
from .formatter import NotationFormatter
from .helmholtz import format_helmholtz
from .kinds import DEFAULT_OUTPUTS, NotationKind
from .parser import NotationParser, ParsedPitch
from .values import (
    AlternativeValue,
    CentsValue,
    FormattedValue,
    FrequencyValue,
    MidiValue,
    NoteValue,
)

__all__ = [
    "AlternativeValue",
    "CentsValue",
    "DEFAULT_OUTPUTS",
    "FormattedValue",
    "FrequencyValue",
    "MidiValue",
    "NotationFormatter",
    "NotationKind",
    "NotationParser",
    "NoteValue",
    "ParsedPitch",
    "format_alternative",
    "format_helmholtz",
    "parse_alternative",
]
