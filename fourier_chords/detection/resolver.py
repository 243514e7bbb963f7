"""Map prominent peaks to note names."""

from typing import Iterable, List, Optional, Tuple

from ..analysis.spectrum import PeakSet
from ..core.note_table import DEFAULT_NOTE_TABLE, NoteTable


class NoteResolver:
    """Resolve peak frequencies to de-duplicated note names."""

    def __init__(self, note_table: NoteTable = DEFAULT_NOTE_TABLE):
        self.note_table = note_table

    def resolve(self, frequencies: Iterable[float]) -> Tuple[str, ...]:
        """
        Nearest note for each frequency, first occurrence only.

        Args:
            frequencies: Peak frequencies in Hz, in peak order

        Returns:
            Note names in the order they were first resolved
        """
        notes: List[str] = []
        for freq in frequencies:
            name = self.note_table.note_name(float(freq))
            if name not in notes:
                notes.append(name)
        return tuple(notes)

    def resolve_peaks(
        self,
        peaks: PeakSet,
        frequency_range: Optional[Tuple[float, float]] = None,
    ) -> Tuple[str, ...]:
        """
        Resolve a peak set, optionally ignoring peaks outside a band.

        Args:
            peaks: Prominent peaks for this pass
            frequency_range: Inclusive (min_hz, max_hz), or None

        Returns:
            Detected notes for this pass
        """
        frequencies = peaks.frequency
        if frequency_range is not None:
            fmin, fmax = frequency_range
            frequencies = frequencies[(frequencies >= fmin) & (frequencies <= fmax)]
        return self.resolve(frequencies)
