"""Tests for the spectral transform and magnitude spectrum builder."""

import numpy as np
import pytest

from fourier_chords.analysis.spectrum import SpectrumBuilder, max_magnitude
from fourier_chords.analysis.transform import SpectralTransform
from fourier_chords.analysis.window import apply_window, hann_taper
from fourier_chords.core.constants import EMPTY_SPECTRUM_MAGNITUDE
from fourier_chords.core.errors import ConfigurationError


class TestSpectralTransform:
    """Tests for SpectralTransform."""

    @pytest.mark.parametrize("real_input", [True, False])
    def test_length_mismatch_fails_fast(self, real_input):
        transform = SpectralTransform(1024, real_input=real_input)
        with pytest.raises(ConfigurationError, match="planned for 1024"):
            transform.forward(np.zeros(512))

    def test_invalid_size(self):
        with pytest.raises(ConfigurationError):
            SpectralTransform(0)

    def test_output_sizes(self):
        assert SpectralTransform(1024).output_size == 513
        assert SpectralTransform(1024, real_input=False).output_size == 1024

    def test_complex_transform_matches_numpy(self):
        x = np.random.default_rng(1).normal(size=256)
        transform = SpectralTransform(256, real_input=False)

        assert np.allclose(transform.forward(x), np.fft.fft(x))

    def test_real_and_complex_agree_below_nyquist(self):
        x = np.random.default_rng(2).normal(size=512)

        half = SpectralTransform(512).forward(x).copy()
        full = SpectralTransform(512, real_input=False).forward(x)

        assert np.allclose(np.abs(half[:256]), np.abs(full[:256]))

    def test_output_buffer_is_reused(self):
        transform = SpectralTransform(128)
        first = transform.forward(np.ones(128))
        second = transform.forward(np.zeros(128))
        assert first is second


class TestMaxMagnitude:
    """Tests for the max_magnitude helper."""

    def test_empty_returns_sentinel(self):
        assert max_magnitude(np.zeros(0)) == EMPTY_SPECTRUM_MAGNITUDE
        assert max_magnitude(np.array([])) == 0.0

    def test_maximum(self):
        assert max_magnitude(np.array([0.5, 3.0, 1.0])) == 3.0


class TestSpectrumBuilder:
    """Tests for SpectrumBuilder."""

    def test_resolution_and_nyquist(self):
        sr, n = 8000, 64
        spectrum = np.fft.fft(np.random.default_rng(3).normal(size=n))

        bins = SpectrumBuilder(n // 2).build(spectrum, sr, n)

        assert bins.nyquist_limit == 32
        assert len(bins) == 32
        assert bins.frequency_resolution == pytest.approx(sr / n)
        assert np.allclose(bins.frequency, np.arange(32) * sr / n)
        assert np.allclose(bins.magnitude, np.abs(spectrum[:32]))
        assert list(bins.index) == list(range(32))

    def test_odd_sample_count_floors_nyquist(self):
        spectrum = np.fft.fft(np.ones(11))
        bins = SpectrumBuilder(5).build(spectrum, 1100, 11)
        assert bins.nyquist_limit == 5
        assert bins.frequency_resolution == pytest.approx(100.0)

    def test_bins_reuse_builder_buffers(self):
        builder = SpectrumBuilder(8)
        first = builder.build(np.ones(16, dtype=complex), 1600, 16)
        second = builder.build(np.zeros(16, dtype=complex), 1600, 16)
        assert np.shares_memory(first.magnitude, second.magnitude)
        assert np.all(first.magnitude == 0.0)

    def test_iterates_spectrum_bins(self):
        bins = SpectrumBuilder(4).build(np.array([1, 2j, -3, 4, 0, 0, 0, 0]), 800, 8)
        rows = list(bins)
        assert [row.index for row in rows] == [0, 1, 2, 3]
        assert [row.magnitude for row in rows] == [1.0, 2.0, 3.0, 4.0]
        assert rows[2].frequency == pytest.approx(200.0)

    def test_440hz_dominant_peak(self, sines):
        sr, n = 44100, 4096
        samples = sines([440.0], n, sr)
        windowed = np.zeros(n)
        apply_window(samples, windowed, hann_taper(n))

        spectrum = SpectralTransform(n).forward(windowed)
        bins = SpectrumBuilder(n // 2).build(spectrum, sr, n)

        peak_freq = bins.frequency[np.argmax(bins.magnitude)]
        assert abs(peak_freq - 440.0) <= bins.frequency_resolution
