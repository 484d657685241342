"""Alternative pitch notation: octave words in front of the pitch class.

Octaves are named ``lowlowlow`` (0), ``lowlow`` (1), ``low`` (2), ``mid1``
(3), ``mid2`` (4) and ``hi`` repeated once per octave above that (``hi`` = 5,
``hihi`` = 6). Each alternative octave starts at A rather than C, so G4 is
``mid2G`` while A4 is ``hiA``. Octaves below 0 extend the ``low`` run.
"""

import re
from typing import Optional

from ..core.constants import ACCIDENTALS, LETTER_SEMITONES, MAX_ACCIDENTALS
from ..core.errors import ParseError, ParseErrorKind
from ..core.note import NoteName

ALTERNATIVE_PATTERN = re.compile(
    r"^(?P<octave>(?:low)+|mid[12]|(?:hi)+)(?P<letter>[A-Za-z])(?P<accidentals>[#♯b♭]*)$"
)

# Sounding position within the octave (A = 9) where the alternative octave turns over
OCTAVE_TURNOVER = LETTER_SEMITONES["A"]


def _turns_over(letter: str, accidental: int) -> bool:
    return LETTER_SEMITONES[letter] + accidental >= OCTAVE_TURNOVER


def alternative_octave(note: NoteName) -> int:
    """Alternative octave number of a note (A4 -> 5, G4 -> 4)."""
    return note.octave + (1 if _turns_over(note.letter, note.accidental) else 0)


def octave_word(octave: int) -> str:
    """Render an alternative octave number as its word."""
    if octave <= 2:
        return "low" * (3 - octave)
    if octave == 3:
        return "mid1"
    if octave == 4:
        return "mid2"
    return "hi" * (octave - 4)


def octave_from_word(word: str) -> int:
    """Inverse of octave_word."""
    if word == "mid1":
        return 3
    if word == "mid2":
        return 4
    if word.startswith("low"):
        return 3 - len(word) // len("low")
    return 4 + len(word) // len("hi")


def format_alternative(note: NoteName) -> str:
    """Get alternative name (e.g., 'mid2C', 'hiA', 'lowlowA#')."""
    return f"{octave_word(alternative_octave(note))}{note.letter}{note.accidental_symbol}"


def parse_alternative(text: str) -> Optional[NoteName]:
    """
    Parse an alternative-notation pitch.

    Args:
        text: Trimmed input such as 'mid2C' or 'hihiF#'

    Returns:
        NoteName in scientific octaves, or None if the text is not in this notation

    Raises:
        ParseError: If the text has the shape of this notation but invalid content
    """
    match = ALTERNATIVE_PATTERN.match(text)
    if match is None:
        return None

    accidentals = match.group("accidentals")
    if len(accidentals) > MAX_ACCIDENTALS:
        raise ParseError(
            ParseErrorKind.INVALID_ACCIDENTAL,
            accidentals,
            f"at most {MAX_ACCIDENTALS} accidentals may be stacked",
        )
    accidental = sum(ACCIDENTALS[ch] for ch in accidentals)

    letter = match.group("letter").upper()
    if letter not in LETTER_SEMITONES:
        raise ParseError(ParseErrorKind.INVALID_LETTER, match.group("letter"),
                         "note letter must be one of A-G")

    octave = octave_from_word(match.group("octave"))
    if _turns_over(letter, accidental):
        octave -= 1
    return NoteName(letter=letter, accidental=accidental, octave=octave)
