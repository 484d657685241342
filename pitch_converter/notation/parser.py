"""Notation parser - recognize which notation a string is written in.

Grammars are tried in a fixed order when no hint is given:

1. ``midi:`` tagged MIDI numbers (``midi:60``)
2. Frequencies (``440``, ``261.63 Hz``, ``1e3hz``)
3. Alternative notation (``mid2C``, ``hiA``)
4. Note names with octave, optionally cents-qualified (``C#4``, ``A4+15c``)

A bare integer is always a frequency. MIDI input needs the ``midi:`` tag or
an explicit hint.
"""

import logging
import math
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple, Union

from ..core.constants import ACCIDENTALS, A4_MIDI, CENTS_PER_SEMITONE, MAX_ACCIDENTALS
from ..core.errors import ParseError, ParseErrorKind
from ..core.note import NoteName
from ..core.pitch import CanonicalPitch
from ..core.tuning import TuningReference
from .alternative import parse_alternative
from .kinds import NotationKind

logger = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)"

FREQUENCY_PATTERN = re.compile(rf"^(?P<number>{_NUMBER})\s*(?P<unit>hz)?$", re.IGNORECASE)
MIDI_TAG_PATTERN = re.compile(r"^midi\s*:\s*(?P<body>.*)$", re.IGNORECASE)
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
NUMERIC_PREFIX_PATTERN = re.compile(r"^[+-]?\.?\d")

# A letter followed by an accidental, octave digits, a sign or nothing
NOTE_SHAPE_PATTERN = re.compile(r"^[A-Za-z](?:$|[#♯b♭+\-.0-9])")
NOTE_PATTERN = re.compile(
    r"""
    ^(?P<letter>[A-Za-z])
    (?P<accidentals>[#♯b♭]*)
    (?P<octave>[+-]?[0-9.][0-9A-Za-z.]*)?
    (?P<rest>.*)$
    """,
    re.VERBOSE,
)
OCTAVE_PATTERN = re.compile(r"^[+-]?\d+$")
CENTS_PATTERN = re.compile(
    rf"^(?P<number>{_NUMBER})\s*(?:c|cents?|¢)?$",
    re.IGNORECASE,
)

# Cents literals with a longer exponent would need a huge exact denominator
MAX_EXPONENT_DIGITS = 3

# Hints accepted for the input notation; cents-qualified notes share the note grammar
_HINT_GRAMMARS = {
    NotationKind.FREQ: NotationKind.FREQ,
    NotationKind.MIDI: NotationKind.MIDI,
    NotationKind.NOTE: NotationKind.NOTE,
    NotationKind.CENTS: NotationKind.NOTE,
    NotationKind.ALT: NotationKind.ALT,
}


def _integer(text: str, what: str) -> int:
    """Convert a matched integer literal, rejecting ones too long to convert."""
    try:
        return int(text)
    except ValueError:
        raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, text, f"{what} has too many digits")


@dataclass(frozen=True)
class ParsedPitch:
    """A parsed pitch together with the notation it was written in."""

    pitch: CanonicalPitch
    notation: NotationKind
    note: Optional[NoteName] = None
    cents: Optional[Fraction] = None


class NotationParser:
    """Parse pitch strings into canonical pitches."""

    def __init__(
        self,
        reference: Optional[TuningReference] = None,
        strict_cents: bool = False,
    ):
        """
        Initialize NotationParser.

        Args:
            reference: Tuning reference used to place exact notations
            strict_cents: Reject cents qualifiers outside [-50, 50] instead of
                re-deriving the nearest pitch
        """
        self.reference = reference or TuningReference()
        self.strict_cents = strict_cents

    def parse(
        self,
        text: str,
        hint: Union[NotationKind, str, None] = None,
    ) -> CanonicalPitch:
        """Parse text into a CanonicalPitch; raises ParseError."""
        return self.parse_with_notation(text, hint).pitch

    def parse_with_notation(
        self,
        text: str,
        hint: Union[NotationKind, str, None] = None,
    ) -> ParsedPitch:
        """
        Parse text and report which notation it was recognized as.

        Args:
            text: Raw input; surrounding whitespace is ignored
            hint: Optional notation to force instead of auto-detection

        Returns:
            ParsedPitch with the canonical pitch and detected notation

        Raises:
            ParseError: If no grammar matches or the matching grammar rejects it
        """
        text = text.strip()
        if not text:
            raise ParseError(ParseErrorKind.UNRECOGNIZED_FORMAT, text, "empty input")

        if hint is not None:
            if isinstance(hint, str):
                hint = NotationKind.from_name(hint)
            parsed = self._parse_hinted(text, _HINT_GRAMMARS[hint])
        else:
            parsed = self._detect(text)

        logger.debug("Parsed %r as %s (exact=%s)", text, parsed.notation.value, parsed.pitch.is_exact)
        return parsed

    def _detect(self, text: str) -> ParsedPitch:
        tagged = MIDI_TAG_PATTERN.match(text)
        if tagged:
            return self._parse_midi_body(tagged.group("body").strip())

        if FREQUENCY_PATTERN.match(text):
            return self._parse_frequency(text)

        note = parse_alternative(text)
        if note is not None:
            return self._exact_note(note, text, NotationKind.ALT)

        if NOTE_SHAPE_PATTERN.match(text):
            return self._parse_note(text)

        if NUMERIC_PREFIX_PATTERN.match(text):
            raise ParseError(ParseErrorKind.INVALID_NUMERIC, text,
                             "not a valid number")
        raise ParseError(
            ParseErrorKind.UNRECOGNIZED_FORMAT,
            text,
            "expected a frequency, midi:<number>, a note such as C#4, or alternative notation",
        )

    def _parse_hinted(self, text: str, grammar: NotationKind) -> ParsedPitch:
        if grammar is NotationKind.FREQ:
            return self._parse_frequency(text)
        if grammar is NotationKind.MIDI:
            tagged = MIDI_TAG_PATTERN.match(text)
            return self._parse_midi_body(tagged.group("body").strip() if tagged else text)
        if grammar is NotationKind.ALT:
            note = parse_alternative(text)
            if note is None:
                raise ParseError(ParseErrorKind.UNRECOGNIZED_FORMAT, text,
                                 "expected alternative notation such as mid2C or hiA")
            return self._exact_note(note, text, NotationKind.ALT)
        return self._parse_note(text)

    # Frequency

    def _parse_frequency(self, text: str) -> ParsedPitch:
        match = FREQUENCY_PATTERN.match(text)
        if match is None:
            raise ParseError(ParseErrorKind.INVALID_NUMERIC, text,
                             "frequency must be a number optionally followed by Hz")
        number = match.group("number")
        value = float(number)
        if not math.isfinite(value) or value <= 0:
            raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, number,
                             "frequency must be positive and finite")
        return ParsedPitch(CanonicalPitch.from_frequency(value), NotationKind.FREQ)

    # MIDI

    def _parse_midi_body(self, body: str) -> ParsedPitch:
        if INTEGER_PATTERN.match(body):
            midi = _integer(body, "MIDI number")
            pitch = CanonicalPitch.from_exact_offset(midi - A4_MIDI, self.reference, span=body)
            return ParsedPitch(pitch, NotationKind.MIDI)
        if FREQUENCY_PATTERN.match(body):
            raise ParseError(
                ParseErrorKind.AMBIGUOUS_NUMERIC_LITERAL,
                body,
                "MIDI numbers are integers; use a frequency for fractional values",
            )
        raise ParseError(ParseErrorKind.INVALID_NUMERIC, body,
                         "MIDI number must be an integer")

    # Note names

    def _parse_note(self, text: str) -> ParsedPitch:
        match = NOTE_PATTERN.match(text)
        if match is None:
            raise ParseError(ParseErrorKind.INVALID_LETTER, text[:1],
                             "note must start with a letter A-G")

        letter = match.group("letter")
        if letter.upper() not in "ABCDEFG":
            raise ParseError(ParseErrorKind.INVALID_LETTER, letter,
                             "note letter must be one of A-G")

        accidentals = match.group("accidentals")
        if len(accidentals) > MAX_ACCIDENTALS:
            raise ParseError(
                ParseErrorKind.INVALID_ACCIDENTAL,
                accidentals,
                f"at most {MAX_ACCIDENTALS} accidentals may be stacked",
            )
        accidental = sum(ACCIDENTALS[ch] for ch in accidentals)

        octave_text = match.group("octave")
        rest = match.group("rest").strip()
        if octave_text is None:
            raise ParseError(ParseErrorKind.INVALID_OCTAVE, rest or text,
                             "note needs an integer octave, e.g. C4")
        if not OCTAVE_PATTERN.match(octave_text):
            raise ParseError(ParseErrorKind.INVALID_OCTAVE, octave_text,
                             "octave must be an integer")

        octave = _integer(octave_text, "octave")
        note = NoteName(letter=letter, accidental=accidental, octave=octave)
        if not rest:
            return self._exact_note(note, text, NotationKind.NOTE)

        cents = self._parse_cents(rest)
        offset = note.semitones_from_a4 + cents / CENTS_PER_SEMITONE
        pitch = CanonicalPitch.from_exact_offset(offset, self.reference, span=text)
        return ParsedPitch(pitch, NotationKind.CENTS, note=note, cents=cents)

    def _parse_cents(self, rest: str) -> Fraction:
        number_text, span = self._cents_literal(rest)
        match = CENTS_PATTERN.match(number_text)
        if match is None:
            raise ParseError(ParseErrorKind.INVALID_NUMERIC, span,
                             "cents must be a number, e.g. +15c")

        number = match.group("number")
        if not math.isfinite(float(number)):
            raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, span, "cents must be finite")
        _, _, exponent = number.lower().partition("e")
        if len(exponent.lstrip("+-0")) > MAX_EXPONENT_DIGITS:
            raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, span, "cents exponent is out of range")
        try:
            cents = Fraction(number)
        except ValueError:
            raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, span, "cents literal has too many digits")
        if self.strict_cents and abs(cents) > 50:
            raise ParseError(ParseErrorKind.OUT_OF_DOMAIN, span,
                             "cents must lie within [-50, 50]")
        return cents

    @staticmethod
    def _cents_literal(rest: str) -> Tuple[str, str]:
        """Split the cents qualifier after a note into (number text, span)."""
        if rest.startswith("(") and rest.endswith(")"):
            return rest[1:-1].strip(), rest
        if rest[0] in "+-":
            return rest[0] + rest[1:].strip(), rest
        raise ParseError(
            ParseErrorKind.UNRECOGNIZED_FORMAT,
            rest,
            "unexpected text after note; write cents as +15c or (15c)",
        )

    def _exact_note(self, note: NoteName, text: str, notation: NotationKind) -> ParsedPitch:
        pitch = CanonicalPitch.from_exact_offset(note.semitones_from_a4, self.reference, span=text)
        return ParsedPitch(pitch, notation, note=note)
