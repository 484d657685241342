"""Formatted values - the result of converting a pitch to one notation.

Values hold numbers, not text. Spelling and precision are applied later by
the formatter, so one value can be rendered several ways.
"""

from dataclasses import dataclass
from typing import Union

from ..core.constants import MIDI_MAX, MIDI_MIN
from ..core.pitch import SemitoneOffset
from .kinds import NotationKind


@dataclass(frozen=True)
class FrequencyValue:
    """Frequency in Hz."""

    frequency_hz: float
    exact: bool = False
    kind: NotationKind = NotationKind.FREQ


@dataclass(frozen=True)
class MidiValue:
    """Nearest MIDI number plus the unrounded offset it came from."""

    number: int
    offset: SemitoneOffset
    kind: NotationKind = NotationKind.MIDI

    @property
    def non_standard(self) -> bool:
        """True when the number falls outside 0-127."""
        return not MIDI_MIN <= self.number <= MIDI_MAX


@dataclass(frozen=True)
class NoteValue:
    """Nearest twelve-tone pitch, spelled at format time."""

    midi: int
    offset: SemitoneOffset
    kind: NotationKind = NotationKind.NOTE


@dataclass(frozen=True)
class CentsValue:
    """Nearest twelve-tone pitch and the deviation from it in cents."""

    midi: int
    cents: float  # [-50, 50)
    offset: SemitoneOffset
    kind: NotationKind = NotationKind.CENTS


@dataclass(frozen=True)
class AlternativeValue:
    """Nearest twelve-tone pitch in alternative octave notation."""

    midi: int
    offset: SemitoneOffset
    kind: NotationKind = NotationKind.ALT


FormattedValue = Union[FrequencyValue, MidiValue, NoteValue, CentsValue, AlternativeValue]
