"""Engine configuration."""

import warnings
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

import scipy.fft

from ..core.constants import DEFAULT_WINDOW_SIZE
from ..core.errors import ConfigurationError


@dataclass
class EngineConfig:
    """Configuration for the note detection engine.

    Everything except window_size defaults to an inert value, so a default
    config runs plain back-to-back windows with no gating, clipping or
    smoothing.

    Attributes:
        window_size: Analysis window length N in samples (default: 1024)
        window_overlap: Fraction of each window carried into the next one,
            in [0, 1) (default: 0.0, no overlap)
        frequency_range: (min_hz, max_hz) of peaks that are resolved to
            notes, or None for no limit (default: None)
        smoothing_time: Time constant in seconds for exponential magnitude
            smoothing across passes, 0 disables it (default: 0.0)
        gate_threshold: Samples with |x| below this are dropped before
            buffering, 0 disables the gate (default: 0.0)
        real_input: Use the half-spectrum real-input transform
            (default: True)
    """

    window_size: int = DEFAULT_WINDOW_SIZE
    window_overlap: float = 0.0
    frequency_range: Optional[Tuple[float, float]] = None
    smoothing_time: float = 0.0
    gate_threshold: float = 0.0
    real_input: bool = True

    def __post_init__(self):
        if int(self.window_size) != self.window_size or self.window_size < 1:
            raise ConfigurationError(
                f"window_size must be a positive integer, got {self.window_size}"
            )
        self.window_size = int(self.window_size)

        if scipy.fft.next_fast_len(self.window_size, real=self.real_input) != self.window_size:
            warnings.warn(
                f"window_size {self.window_size} is not an efficient transform length; "
                f"consider {scipy.fft.next_fast_len(self.window_size, real=self.real_input)}",
                stacklevel=3,
            )

        if not 0.0 <= self.window_overlap < 1.0:
            raise ConfigurationError(
                f"window_overlap must be in [0, 1), got {self.window_overlap}"
            )

        if self.frequency_range is not None:
            fmin, fmax = self.frequency_range
            if fmin <= 0 or fmax <= fmin:
                raise ConfigurationError(
                    f"frequency_range must satisfy 0 < min < max, got {self.frequency_range}"
                )
            self.frequency_range = (float(fmin), float(fmax))

        if self.smoothing_time < 0:
            raise ConfigurationError(
                f"smoothing_time must be >= 0, got {self.smoothing_time}"
            )

        if self.gate_threshold < 0:
            raise ConfigurationError(
                f"gate_threshold must be >= 0, got {self.gate_threshold}"
            )

    @property
    def overlap_samples(self) -> int:
        """Samples kept at the start of the next window."""
        # at least one new sample per pass
        return min(int(round(self.window_size * self.window_overlap)), self.window_size - 1)

    @property
    def hop_size(self) -> int:
        """New samples needed per pass."""
        return self.window_size - self.overlap_samples

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "EngineConfig":
        """Build a config from parameter-layer values, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in params.items() if key in known}
        if values.get("frequency_range") is not None:
            values["frequency_range"] = tuple(values["frequency_range"])
        return cls(**values)
