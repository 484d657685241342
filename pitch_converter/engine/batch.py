"""Vectorised pitch conversions for many values at once."""

from typing import Tuple

import numpy as np

from ..core.constants import A4_MIDI, CENTS_PER_SEMITONE, SEMITONES_PER_OCTAVE
from ..core.tuning import TuningReference


def offsets_to_frequencies(offsets: np.ndarray, reference: TuningReference) -> np.ndarray:
    """Convert semitone offsets from A4 to frequencies in Hz."""
    offsets = np.asarray(offsets, dtype=float)
    return reference.reference_frequency_hz * np.power(2.0, offsets / SEMITONES_PER_OCTAVE)


def midi_to_frequencies(midi: np.ndarray, reference: TuningReference) -> np.ndarray:
    """Convert MIDI numbers to frequencies in Hz."""
    return offsets_to_frequencies(np.asarray(midi, dtype=float) - A4_MIDI, reference)


def frequencies_to_offsets(frequencies: np.ndarray, reference: TuningReference) -> np.ndarray:
    """Convert frequencies to semitone offsets from A4.

    Non-positive or non-finite frequencies map to NaN.
    """
    frequencies = np.asarray(frequencies, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        offsets = SEMITONES_PER_OCTAVE * (
            np.log2(frequencies) - np.log2(reference.reference_frequency_hz)
        )
    return np.where(np.isfinite(offsets), offsets, np.nan)


def nearest_midi_and_cents(
    frequencies: np.ndarray,
    reference: TuningReference,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Find the nearest MIDI number and cents deviation for each frequency.

    Args:
        frequencies: Frequencies in Hz
        reference: Tuning reference (A4)

    Returns:
        Tuple of (midi numbers as float, cents in [-50, 50)); NaN where the
        frequency is not a valid pitch
    """
    offsets = frequencies_to_offsets(frequencies, reference)
    nearest = np.floor(offsets + 0.5)
    cents = (offsets - nearest) * CENTS_PER_SEMITONE
    cents = np.where(cents >= 50.0, cents - CENTS_PER_SEMITONE, cents)
    return nearest + A4_MIDI, np.maximum(cents, -50.0)
