"""Static frequency to note-name lookup."""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Tuple, Union

import numpy as np

from .constants import (
    A4_FREQUENCY,
    A4_MIDI,
    NOTE_TABLE_MIDI_MAX,
    NOTE_TABLE_MIDI_MIN,
    PITCH_NAMES,
)
from .errors import ConfigurationError


def midi_to_freq(midi: int) -> float:
    """Convert MIDI pitch to frequency (Hz)."""
    return A4_FREQUENCY * (2 ** ((midi - A4_MIDI) / 12.0))


def freq_to_midi(freq: float) -> int:
    """Convert frequency (Hz) to the nearest MIDI pitch."""
    if freq <= 0:
        return 0
    return int(round(A4_MIDI + 12 * np.log2(freq / A4_FREQUENCY)))


def midi_to_name(midi: int) -> str:
    """Get note name (e.g., 'C4', 'A#3')."""
    octave = (midi // 12) - 1
    return f"{PITCH_NAMES[midi % 12]}{octave}"


@dataclass(frozen=True)
class NoteEntry:
    """One row of the note table."""

    frequency: float
    name: str


class NoteTable:
    """Immutable, frequency-sorted note table with nearest-key lookup.

    Lookup is a binary search over the sorted keys. When a frequency lies
    exactly halfway between two keys the lower key wins.
    """

    def __init__(self, entries: Union[Mapping[float, str], Iterable[Tuple[float, str]]]):
        """
        Build a table.

        Args:
            entries: Mapping or iterable of (frequency_hz, note_name) pairs

        Raises:
            ConfigurationError: If the table is empty, a frequency is not
                positive, or two entries share a frequency
        """
        if isinstance(entries, Mapping):
            entries = entries.items()

        rows = sorted(
            (NoteEntry(float(freq), str(name)) for freq, name in entries),
            key=lambda entry: entry.frequency,
        )
        if not rows:
            raise ConfigurationError("Note table must contain at least one entry")
        if rows[0].frequency <= 0:
            raise ConfigurationError(
                f"Note table frequencies must be positive, got {rows[0].frequency}"
            )

        keys = tuple(entry.frequency for entry in rows)
        for lower, upper in zip(keys, keys[1:]):
            if lower == upper:
                raise ConfigurationError(f"Duplicate note table frequency: {lower}")

        self._entries: Tuple[NoteEntry, ...] = tuple(rows)
        self._keys: Tuple[float, ...] = keys

    @classmethod
    def from_midi_range(
        cls,
        midi_min: int = NOTE_TABLE_MIDI_MIN,
        midi_max: int = NOTE_TABLE_MIDI_MAX,
        decimals: int = 2,
    ) -> "NoteTable":
        """Equal-tempered table (A4 = 440 Hz) for an inclusive MIDI range."""
        return cls(
            (round(midi_to_freq(midi), decimals), midi_to_name(midi))
            for midi in range(midi_min, midi_max + 1)
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[NoteEntry]:
        return iter(self._entries)

    @property
    def frequencies(self) -> Tuple[float, ...]:
        """Sorted frequency keys."""
        return self._keys

    def nearest(self, frequency: float) -> NoteEntry:
        """Entry whose frequency minimizes |key - frequency|."""
        pos = bisect_left(self._keys, frequency)
        if pos == 0:
            return self._entries[0]
        if pos == len(self._keys):
            return self._entries[-1]

        below = self._entries[pos - 1]
        above = self._entries[pos]
        if frequency - below.frequency <= above.frequency - frequency:
            return below
        return above

    def note_name(self, frequency: float) -> str:
        """Name of the nearest note."""
        return self.nearest(frequency).name


# C0 (16.35 Hz) through D#8 (4978.03 Hz)
DEFAULT_NOTE_TABLE = NoteTable.from_midi_range()
