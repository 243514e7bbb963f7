"""Analysis layer - Spectral analysis of one sample window.

Stages run in this order on every completed window:
- Windowing (Hann taper)
- Forward transform (fixed length)
- Magnitude spectrum (Nyquist-limited bins)
- Peak picking (local maxima, then prominence)
"""

from .window import hann_taper, apply_window
from .transform import SpectralTransform
from .spectrum import (
    SpectrumBin,
    SpectrumBins,
    PeakSet,
    SpectrumBuilder,
    max_magnitude,
)
from .peaks import (
    find_local_maxima,
    filter_prominent,
    compute_prominences,
    magnitude_threshold,
    prominence_threshold,
)

__all__ = [
    "hann_taper",
    "apply_window",
    "SpectralTransform",
    "SpectrumBin",
    "SpectrumBins",
    "PeakSet",
    "SpectrumBuilder",
    "max_magnitude",
    "find_local_maxima",
    "filter_prominent",
    "compute_prominences",
    "magnitude_threshold",
    "prominence_threshold",
]
