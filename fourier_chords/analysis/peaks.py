"""Peak picking over a magnitude spectrum.

Two stages, both driven by thresholds derived from the current pass only:

1. Local maxima: interior bins strictly louder than both neighbours and at
   least a third of the spectrum maximum.
2. Topographic prominence: each candidate's height above the higher of the
   two valleys that separate it from a taller bin (or the spectrum edge).
   Candidates keep their place if that height is at least a quarter of the
   strongest candidate.
"""

from typing import Optional

import numpy as np
from scipy.signal import peak_prominences

from ..core.constants import MAGNITUDE_THRESHOLD_DIVISOR, PROMINENCE_THRESHOLD_DIVISOR
from .spectrum import PeakSet, SpectrumBins, max_magnitude


def magnitude_threshold(bins: SpectrumBins) -> float:
    """Minimum magnitude for a local-maximum candidate."""
    return max_magnitude(bins.magnitude) / MAGNITUDE_THRESHOLD_DIVISOR


def prominence_threshold(candidates: PeakSet) -> float:
    """Minimum prominence for a candidate to survive."""
    return max_magnitude(candidates.magnitude) / PROMINENCE_THRESHOLD_DIVISOR


def find_local_maxima(
    bins: SpectrumBins,
    threshold: Optional[float] = None,
) -> PeakSet:
    """
    Find strict local maxima among the interior bins.

    Bin i (1 <= i <= len - 2) is a candidate when
    magnitude[i] >= threshold and it is strictly greater than both
    neighbours. Plateaus never qualify, and the first and last bins are
    never candidates.

    Args:
        bins: Nyquist-limited magnitude spectrum
        threshold: Magnitude floor. None derives it from the spectrum
            maximum (see magnitude_threshold)

    Returns:
        Candidates in ascending bin order
    """
    mags = bins.magnitude
    if len(mags) < 3:
        return PeakSet.empty()

    if threshold is None:
        threshold = magnitude_threshold(bins)

    interior = mags[1:-1]
    is_peak = (interior >= threshold) & (interior > mags[:-2]) & (interior > mags[2:])
    return bins.select(np.flatnonzero(is_peak) + 1)


def compute_prominences(magnitudes: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """
    Topographic prominence of each peak index.

    From each peak the scan runs outward on both sides until it meets a bin
    strictly taller than the peak or the edge of the array. The minimum seen
    on each side bounds the peak's contour, and the prominence is the peak
    height minus the higher of the two minima.

    Args:
        magnitudes: Full magnitude spectrum
        indices: Peak bin indices

    Returns:
        Array of prominences, one per index
    """
    if len(indices) == 0:
        return np.zeros(0)
    prominences, _, _ = peak_prominences(magnitudes, indices)
    return prominences


def filter_prominent(
    bins: SpectrumBins,
    candidates: PeakSet,
    threshold: Optional[float] = None,
) -> PeakSet:
    """
    Keep the candidates whose prominence reaches the threshold.

    Args:
        bins: Magnitude spectrum the candidates came from
        candidates: Local maxima of ``bins``
        threshold: Minimum prominence. None derives it from the strongest
            candidate (see prominence_threshold)

    Returns:
        Prominent peaks in ascending bin order
    """
    if len(candidates) == 0:
        return PeakSet.empty()

    if threshold is None:
        threshold = prominence_threshold(candidates)

    prominences = compute_prominences(bins.magnitude, candidates.indices)
    keep = prominences >= threshold
    return PeakSet(
        indices=candidates.indices[keep],
        frequency=candidates.frequency[keep],
        magnitude=candidates.magnitude[keep],
    )
