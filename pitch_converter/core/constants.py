"""Global constants for Pitch Converter."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_PITCH_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Semitone of each natural letter within the octave (C = 0)
LETTER_SEMITONES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

# Accidental markers and their semitone adjustment
ACCIDENTALS = {"#": 1, "♯": 1, "b": -1, "♭": -1}
MAX_ACCIDENTALS = 2

# Tuning defaults
DEFAULT_REFERENCE_HZ = 440.0
A4_MIDI = 69
SEMITONES_PER_OCTAVE = 12
CENTS_PER_SEMITONE = 100

# Formatting defaults
DEFAULT_DECIMAL_PLACES = 2
MAX_DECIMAL_PLACES = 15

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
