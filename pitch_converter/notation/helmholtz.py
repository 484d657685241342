"""Helmholtz octave marks: C2 -> 'C', C3 -> 'c', C4 -> "c'", C1 -> 'C,'."""

from ..core.note import NoteName

# Scientific octave rendered as a bare lowercase letter
SMALL_OCTAVE = 3


def format_helmholtz(note: NoteName) -> str:
    """Render a note with Helmholtz case and ASCII prime/comma marks."""
    if note.octave >= SMALL_OCTAVE:
        marks = "'" * (note.octave - SMALL_OCTAVE)
        return f"{note.letter.lower()}{note.accidental_symbol}{marks}"
    marks = "," * (SMALL_OCTAVE - 1 - note.octave)
    return f"{note.letter}{note.accidental_symbol}{marks}"
