"""Engine layer - conversion between canonical pitches and notations.

- Scalar conversion with exact arithmetic for exact inputs
- Request/result orchestration with per-output errors
- Vectorised batch conversion (numpy)
"""

from .batch import (
    frequencies_to_offsets,
    midi_to_frequencies,
    nearest_midi_and_cents,
    offsets_to_frequencies,
)
from .conversion import (
    ConversionEngine,
    ConversionRequest,
    ConversionResult,
    OutputRequest,
    OutputResult,
    convert,
)

__all__ = [
    "ConversionEngine",
    "ConversionRequest",
    "ConversionResult",
    "OutputRequest",
    "OutputResult",
    "convert",
    "frequencies_to_offsets",
    "midi_to_frequencies",
    "nearest_midi_and_cents",
    "offsets_to_frequencies",
]
