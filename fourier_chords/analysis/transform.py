"""Forward spectral transform with a fixed, session-long size."""

import numpy as np
import scipy.fft

from ..core.errors import ConfigurationError


class SpectralTransform:
    """
    Forward DFT bound to one transform length.

    The length is fixed at construction and never re-planned. By default the
    real-input transform is used, which computes only the non-redundant
    ``size // 2 + 1`` bins. With ``real_input=False`` the windowed samples are
    copied into a complex buffer (imaginary parts zero) and the full
    ``size``-point complex transform is taken.
    """

    def __init__(self, size: int, real_input: bool = True):
        """
        Initialize the transform.

        Args:
            size: Transform length N (the analysis window size)
            real_input: Use the half-spectrum real-input transform

        Raises:
            ConfigurationError: If size < 1
        """
        if size < 1:
            raise ConfigurationError(f"Transform size must be positive, got {size}")

        self._size = int(size)
        self.real_input = real_input
        self._complex_input = np.zeros(self._size, dtype=np.complex128)
        n_out = self._size // 2 + 1 if real_input else self._size
        self._output = np.zeros(n_out, dtype=np.complex128)

    @property
    def size(self) -> int:
        """Transform length N."""
        return self._size

    @property
    def output_size(self) -> int:
        """Number of complex bins written per call."""
        return len(self._output)

    def forward(self, windowed: np.ndarray) -> np.ndarray:
        """
        Transform one windowed buffer.

        Args:
            windowed: Real-valued windowed samples, exactly ``size`` long

        Returns:
            The transform's own output buffer, overwritten on every call

        Raises:
            ConfigurationError: If len(windowed) != size
        """
        if len(windowed) != self._size:
            raise ConfigurationError(
                f"Windowed buffer has {len(windowed)} samples, "
                f"transform is planned for {self._size}"
            )

        if self.real_input:
            self._output[:] = scipy.fft.rfft(windowed)
        else:
            self._complex_input.real = windowed
            self._complex_input.imag = 0.0
            self._output[:] = scipy.fft.fft(self._complex_input)

        return self._output
