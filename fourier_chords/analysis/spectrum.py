"""Magnitude spectrum construction."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from ..core.constants import EMPTY_SPECTRUM_MAGNITUDE


@dataclass(frozen=True)
class SpectrumBin:
    """One discrete frequency slot of the spectrum."""

    frequency: float  # Hz
    magnitude: float
    index: int


@dataclass(frozen=True)
class SpectrumBins:
    """Nyquist-limited magnitude spectrum as parallel arrays.

    The arrays are views into buffers owned by a SpectrumBuilder and are
    overwritten by its next build() call.
    """

    frequency: np.ndarray
    magnitude: np.ndarray
    index: np.ndarray
    frequency_resolution: float
    nyquist_limit: int

    def __len__(self) -> int:
        return len(self.magnitude)

    def __iter__(self) -> Iterator[SpectrumBin]:
        for i in range(len(self)):
            yield SpectrumBin(
                frequency=float(self.frequency[i]),
                magnitude=float(self.magnitude[i]),
                index=int(self.index[i]),
            )

    def select(self, indices: np.ndarray) -> "PeakSet":
        """Copy the bins at ``indices`` into a PeakSet."""
        indices = np.asarray(indices, dtype=np.intp)
        return PeakSet(
            indices=indices,
            frequency=self.frequency[indices],
            magnitude=self.magnitude[indices],
        )


@dataclass(frozen=True)
class PeakSet:
    """A subset of spectrum bins, ascending by index."""

    indices: np.ndarray
    frequency: np.ndarray
    magnitude: np.ndarray

    @classmethod
    def empty(cls) -> "PeakSet":
        return cls(
            indices=np.zeros(0, dtype=np.intp),
            frequency=np.zeros(0),
            magnitude=np.zeros(0),
        )

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[SpectrumBin]:
        for i in range(len(self)):
            yield SpectrumBin(
                frequency=float(self.frequency[i]),
                magnitude=float(self.magnitude[i]),
                index=int(self.indices[i]),
            )


def max_magnitude(magnitudes: np.ndarray) -> float:
    """Largest magnitude, or EMPTY_SPECTRUM_MAGNITUDE (0.0) for no input."""
    if len(magnitudes) == 0:
        return EMPTY_SPECTRUM_MAGNITUDE
    return float(np.max(magnitudes))


def nyquist_limit(sample_count: int) -> int:
    """Number of physically meaningful bins for sample_count samples."""
    return sample_count // 2


def frequency_resolution(sample_rate: float, sample_count: int) -> float:
    """Bin spacing in Hz."""
    return sample_rate / sample_count


class SpectrumBuilder:
    """Turns complex transform output into (frequency, magnitude) bins.

    Buffers are allocated once for ``capacity`` bins and reused on every
    build() call.
    """

    def __init__(self, capacity: int):
        """
        Initialize SpectrumBuilder.

        Args:
            capacity: Largest number of bins a pass can produce
                (window_size // 2)
        """
        self.capacity = capacity
        self._frequency = np.zeros(capacity)
        self._magnitude = np.zeros(capacity)
        self._index = np.arange(capacity, dtype=np.intp)

    def build(
        self,
        spectrum: np.ndarray,
        sample_rate: float,
        sample_count: int,
    ) -> SpectrumBins:
        """
        Compute bins [0, sample_count // 2) for this pass.

        Args:
            spectrum: Complex transform output (full or half spectrum)
            sample_rate: Stream sample rate in Hz
            sample_count: Samples actually accumulated this pass

        Returns:
            SpectrumBins viewing this builder's buffers
        """
        limit = min(nyquist_limit(sample_count), self.capacity, len(spectrum))
        resolution = frequency_resolution(sample_rate, sample_count)

        frequency = self._frequency[:limit]
        magnitude = self._magnitude[:limit]
        index = self._index[:limit]

        np.multiply(index, resolution, out=frequency)
        np.abs(spectrum[:limit], out=magnitude)

        return SpectrumBins(
            frequency=frequency,
            magnitude=magnitude,
            index=index,
            frequency_resolution=resolution,
            nyquist_limit=limit,
        )

    def clear(self) -> None:
        """Zero the scratch buffers."""
        self._frequency.fill(0.0)
        self._magnitude.fill(0.0)
