"""Pitch Converter - convert between pitch notations.

Architecture Layers:
    1. core/      - Canonical pitch model, tuning reference, note names, errors
    2. notation/  - Parsing and formatting of each notation
    3. engine/    - Conversion orchestration and vectorised batch conversion
    4. output/    - Text and table presentation of results
"""

__version__ = "0.2.0"

# Core types
from .core import (
    CanonicalPitch,
    ConfigError,
    NoteName,
    OctaveNotation,
    ParseError,
    PitchConverterError,
    PrecisionConfig,
    Spelling,
    TuningReference,
)

# Notation layer
from .notation import NotationFormatter, NotationKind, NotationParser

# Engine layer
from .engine import (
    ConversionEngine,
    ConversionRequest,
    ConversionResult,
    OutputRequest,
    convert,
)

# Output layer
from .output import PitchTable, TextRenderer

__all__ = [
    # Core
    "CanonicalPitch",
    "ConfigError",
    "NoteName",
    "OctaveNotation",
    "ParseError",
    "PitchConverterError",
    "PrecisionConfig",
    "Spelling",
    "TuningReference",
    # Notation
    "NotationFormatter",
    "NotationKind",
    "NotationParser",
    # Engine
    "ConversionEngine",
    "ConversionRequest",
    "ConversionResult",
    "OutputRequest",
    "convert",
    # Output
    "PitchTable",
    "TextRenderer",
]
