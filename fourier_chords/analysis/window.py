"""Hann windowing stage."""

from typing import Optional

import numpy as np
from scipy import signal as scipy_signal


def hann_taper(n: int) -> np.ndarray:
    """
    Symmetric Hann taper, w(i) = 0.5 - 0.5 * cos(2*pi*i / (n - 1)).

    Args:
        n: Number of coefficients

    Returns:
        Array of n coefficients with w(0) == w(n - 1) == 0

    Raises:
        ValueError: If n <= 1 (the taper is undefined)
    """
    if n <= 1:
        raise ValueError(f"Hann taper needs at least 2 points, got {n}")
    return scipy_signal.get_window("hann", n, fftbins=False)


def apply_window(
    samples: np.ndarray,
    out: np.ndarray,
    taper: Optional[np.ndarray] = None,
) -> bool:
    """
    Taper samples into a pre-allocated output buffer.

    The taper spans exactly len(samples) points. Pass the cached taper for
    full windows; a partial buffer gets a taper of its own length. Any part
    of ``out`` beyond len(samples) is zeroed.

    Args:
        samples: Raw samples for this pass
        out: Windowed buffer, at least len(samples) long
        taper: Precomputed taper of len(samples) points, or None

    Returns:
        False if there were too few samples to taper (the pass should be
        skipped), True once ``out`` has been written
    """
    count = len(samples)
    if count <= 1:
        return False

    if taper is None or len(taper) != count:
        taper = hann_taper(count)

    np.multiply(samples, taper, out=out[:count])
    out[count:] = 0.0
    return True
