"""Core types and constants for Fourier Chords."""

from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_WINDOW_SIZE,
    DEFAULT_BLOCK_SIZE,
    EMPTY_SPECTRUM_MAGNITUDE,
)
from .errors import ConfigurationError
from .note_table import (
    NoteEntry,
    NoteTable,
    DEFAULT_NOTE_TABLE,
    freq_to_midi,
    midi_to_freq,
    midi_to_name,
)

__all__ = [
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_WINDOW_SIZE",
    "DEFAULT_BLOCK_SIZE",
    "EMPTY_SPECTRUM_MAGNITUDE",
    "ConfigurationError",
    "NoteEntry",
    "NoteTable",
    "DEFAULT_NOTE_TABLE",
    "freq_to_midi",
    "midi_to_freq",
    "midi_to_name",
]
