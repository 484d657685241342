"""Closed set of pitch notations understood by the parser and formatter."""

from enum import Enum
from typing import List

from ..core.errors import ConfigError, ConfigErrorKind


class NotationKind(Enum):
    """Supported pitch notations."""
    FREQ = "freq"
    MIDI = "midi"
    NOTE = "note"
    CENTS = "cents"
    ALT = "alt"

    @classmethod
    def from_name(cls, name: str) -> "NotationKind":
        """Look up a notation by its short name (case-insensitive)."""
        key = name.strip().lower()
        for kind in cls:
            if kind.value == key:
                return kind
        raise ConfigError(
            ConfigErrorKind.UNKNOWN_NOTATION,
            name,
            f"notation must be one of {', '.join(cls.names())}",
        )

    @classmethod
    def names(cls) -> List[str]:
        return [kind.value for kind in cls]

    @property
    def is_exact(self) -> bool:
        """Whether inputs in this notation carry an exact semitone offset."""
        return self is not NotationKind.FREQ


DEFAULT_OUTPUTS = (NotationKind.FREQ, NotationKind.MIDI, NotationKind.NOTE, NotationKind.CENTS)
