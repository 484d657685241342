"""Output layer - present conversion results.

This layer turns engine results into:
- Text lines (one per requested output)
- Pitch tables over a range of semitones
"""

from .table import PitchTable, TableRow
from .text import TextRenderer, describe_error

__all__ = [
    "PitchTable",
    "TableRow",
    "TextRenderer",
    "describe_error",
]
