"""Shared synthetic signals for the test suite."""

import numpy as np
import pytest


def generate_sines(freqs, n_samples: int, sr: int, amplitude: float = 0.8) -> np.ndarray:
    """Equal-amplitude mix of sine waves, exactly n_samples long."""
    t = np.arange(n_samples) / sr
    audio = np.zeros(n_samples)
    for freq in freqs:
        audio += np.sin(2 * np.pi * freq * t)
    return audio * (amplitude / max(len(freqs), 1))


@pytest.fixture
def sines():
    """Factory fixture: sines(freqs, n_samples, sr) -> np.ndarray."""
    return generate_sines
