"""Tests for the note table and note resolver."""

import numpy as np
import pytest

from fourier_chords.analysis.spectrum import PeakSet
from fourier_chords.core import (
    DEFAULT_NOTE_TABLE,
    ConfigurationError,
    NoteTable,
    freq_to_midi,
    midi_to_freq,
    midi_to_name,
)
from fourier_chords.detection.resolver import NoteResolver


class TestPitchHelpers:
    """Tests for MIDI/frequency/name conversion."""

    def test_midi_to_name(self):
        assert midi_to_name(60) == "C4"
        assert midi_to_name(69) == "A4"
        assert midi_to_name(61) == "C#4"
        assert midi_to_name(12) == "C0"

    def test_freq_to_midi(self):
        assert freq_to_midi(440.0) == 69  # A4
        assert freq_to_midi(261.63) == 60  # C4 (approx)
        assert freq_to_midi(880.0) == 81  # A5
        assert freq_to_midi(0.0) == 0

    def test_midi_to_freq(self):
        assert midi_to_freq(69) == 440.0
        assert abs(midi_to_freq(60) - 261.63) < 0.01


class TestDefaultTable:
    """Tests for the built-in equal-tempered table."""

    def test_range(self):
        entries = list(DEFAULT_NOTE_TABLE)
        assert len(DEFAULT_NOTE_TABLE) == 100
        assert (entries[0].name, entries[0].frequency) == ("C0", 16.35)
        assert (entries[-1].name, entries[-1].frequency) == ("D#8", 4978.03)

    def test_sorted_by_frequency(self):
        keys = DEFAULT_NOTE_TABLE.frequencies
        assert list(keys) == sorted(keys)

    @pytest.mark.parametrize(
        "name,frequency",
        [("A4", 440.0), ("C4", 261.63), ("A5", 880.0), ("G#6", 1661.22), ("C8", 4186.01)],
    )
    def test_standard_frequencies(self, name, frequency):
        assert DEFAULT_NOTE_TABLE.nearest(frequency).name == name


class TestNearest:
    """Tests for NoteTable.nearest."""

    def test_nearest_neighbour(self):
        assert DEFAULT_NOTE_TABLE.note_name(430.66) == "A4"
        assert DEFAULT_NOTE_TABLE.note_name(445.0) == "A4"
        assert DEFAULT_NOTE_TABLE.note_name(861.33) == "A5"
        assert DEFAULT_NOTE_TABLE.note_name(550.0) == "C#5"

    def test_tie_goes_to_lower_key(self):
        table = NoteTable({100.0: "low", 200.0: "high"})
        assert table.note_name(150.0) == "low"
        assert table.note_name(150.001) == "high"

    def test_out_of_range_clamps(self):
        assert DEFAULT_NOTE_TABLE.note_name(1.0) == "C0"
        assert DEFAULT_NOTE_TABLE.note_name(20000.0) == "D#8"

    def test_exact_key(self):
        table = NoteTable([(300.0, "c"), (100.0, "a"), (200.0, "b")])
        assert [entry.name for entry in table] == ["a", "b", "c"]
        assert table.note_name(200.0) == "b"

    def test_single_entry_always_matches(self):
        table = NoteTable({440.0: "A4"})
        assert table.note_name(20.0) == "A4"
        assert table.note_name(4000.0) == "A4"


class TestTableValidation:
    """Startup faults in table construction."""

    def test_empty_table(self):
        with pytest.raises(ConfigurationError, match="at least one entry"):
            NoteTable({})

    def test_duplicate_frequency(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            NoteTable([(440.0, "A4"), (440.0, "A4 again")])

    def test_non_positive_frequency(self):
        with pytest.raises(ConfigurationError, match="positive"):
            NoteTable([(0.0, "nothing"), (440.0, "A4")])


class TestNoteResolver:
    """Tests for NoteResolver."""

    @pytest.fixture
    def resolver(self):
        return NoteResolver()

    def test_deduplicates_within_pass(self, resolver):
        assert resolver.resolve([439.0, 441.0, 880.0, 440.0]) == ("A4", "A5")

    def test_keeps_first_seen_order(self, resolver):
        assert resolver.resolve([880.0, 440.0]) == ("A5", "A4")

    def test_empty(self, resolver):
        assert resolver.resolve([]) == ()
        assert resolver.resolve_peaks(PeakSet.empty()) == ()

    def test_frequency_range(self, resolver):
        peaks = PeakSet(
            indices=np.array([10, 20, 40]),
            frequency=np.array([110.0, 440.0, 1760.0]),
            magnitude=np.array([1.0, 1.0, 1.0]),
        )
        assert resolver.resolve_peaks(peaks) == ("A2", "A4", "A6")
        assert resolver.resolve_peaks(peaks, frequency_range=(200.0, 1000.0)) == ("A4",)

    def test_custom_table(self):
        resolver = NoteResolver(NoteTable({100.0: "x", 1000.0: "y"}))
        assert resolver.resolve([120.0, 900.0, 90.0]) == ("x", "y")
