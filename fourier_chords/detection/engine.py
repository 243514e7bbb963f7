"""Real-time note detection engine.

The engine buffers host blocks of any size until it holds a full analysis
window, then runs one synchronous pass::

    samples ──► Hann taper ──► transform ──► magnitude bins
                                                  │
        notes ◄── note table ◄── prominence ◄── local maxima

Every scratch buffer is allocated in initialize() and reused in place.
Thresholds live in a PassContext that is rebuilt for each pass, so nothing
but the published notes (and, when enabled, the smoothed magnitudes) outlives
a pass.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ..analysis.peaks import (
    filter_prominent,
    find_local_maxima,
    magnitude_threshold,
    prominence_threshold,
)
from ..analysis.spectrum import (
    SpectrumBins,
    SpectrumBuilder,
    frequency_resolution,
    nyquist_limit,
)
from ..analysis.transform import SpectralTransform
from ..analysis.window import apply_window, hann_taper
from ..core.errors import ConfigurationError
from ..core.note_table import DEFAULT_NOTE_TABLE, NoteTable
from .config import EngineConfig
from .mailbox import DiagnosticLog, NoteMailbox, NoteSnapshot
from .resolver import NoteResolver

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Per-stream state of the engine."""

    ACCUMULATING = "accumulating"
    ANALYZING = "analyzing"


@dataclass(frozen=True)
class PassContext:
    """Values derived for a single analysis pass."""

    sample_rate: float
    sample_count: int
    nyquist_limit: int
    frequency_resolution: float
    magnitude_threshold: float = 0.0
    prominence_threshold: float = 0.0

    @classmethod
    def for_pass(cls, sample_rate: float, sample_count: int) -> "PassContext":
        return cls(
            sample_rate=sample_rate,
            sample_count=sample_count,
            nyquist_limit=nyquist_limit(sample_count),
            frequency_resolution=frequency_resolution(sample_rate, sample_count),
        )


@dataclass(frozen=True)
class PassResult:
    """Output of one completed analysis pass."""

    pass_index: int
    time: float  # Gated samples consumed up to the end of the window, in seconds
    notes: Tuple[str, ...]
    peak_frequencies: Tuple[float, ...]
    context: PassContext


class NoteDetectionEngine:
    """
    Streaming spectral note detector.

    Call initialize() once the sample rate is known, then process_block()
    from the audio callback. The latest notes are available to other threads
    through latest_notes().
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        note_table: NoteTable = DEFAULT_NOTE_TABLE,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine settings (default: EngineConfig())
            note_table: Frequency to note-name table
        """
        self.config = config or EngineConfig()
        self.resolver = NoteResolver(note_table)
        self.mailbox = NoteMailbox()
        self.diagnostic_log = DiagnosticLog()

        self.sample_rate: Optional[float] = None
        self.state = EngineState.ACCUMULATING
        self._initialized = False
        self._last_block_size: Optional[int] = None

    @property
    def window_size(self) -> int:
        return self.config.window_size

    @property
    def buffered_samples(self) -> int:
        """Samples accumulated toward the next pass."""
        return self._count if self._initialized else 0

    def initialize(self, sample_rate: float, max_block_size: Optional[int] = None) -> None:
        """
        Allocate every buffer for a session at ``sample_rate``.

        Must be called again if the host changes the sample rate.

        Args:
            sample_rate: Stream sample rate in Hz
            max_block_size: Largest block the host will deliver, for the
                diagnostic log only

        Raises:
            ConfigurationError: If sample_rate is not positive
        """
        if sample_rate <= 0:
            raise ConfigurationError(f"sample_rate must be positive, got {sample_rate}")

        n = self.config.window_size
        self.sample_rate = float(sample_rate)

        self._samples = np.zeros(n)
        self._windowed = np.zeros(n)
        self._taper = hann_taper(n) if n > 1 else None
        self._transform = SpectralTransform(n, real_input=self.config.real_input)
        self._spectrum = SpectrumBuilder(nyquist_limit(n))
        self._smoothed = np.zeros(nyquist_limit(n)) if self.config.smoothing_time > 0 else None
        self._smoothing_primed = False

        self._count = 0
        self._pass_index = 0
        self._stream_samples = 0
        self.state = EngineState.ACCUMULATING
        self._initialized = True

        self.diagnostic_log.clear()
        self.diagnostic_log.write(f"Sample rate: {self.sample_rate:g} Hz")
        self.diagnostic_log.write(
            f"Window: {n} samples ({self.sample_rate / n:.2f} Hz/bin), "
            f"hop {self.config.hop_size}"
        )
        if max_block_size is not None:
            self._last_block_size = max_block_size
            self.diagnostic_log.write(f"Block size: {max_block_size}")
        else:
            self._last_block_size = None

    def reset(self) -> None:
        """Drop buffered samples and smoothing state, keeping all buffers."""
        if not self._initialized:
            return
        self._count = 0
        self._samples.fill(0.0)
        self._clear_scratch()
        if self._smoothed is not None:
            self._smoothed.fill(0.0)
            self._smoothing_primed = False
        self.state = EngineState.ACCUMULATING

    def process_block(self, block: np.ndarray) -> List[PassResult]:
        """
        Consume one host block, running a pass each time the window fills.

        Args:
            block: Samples as a 1-D array, or (frames, channels); only the
                first channel is analysed

        Returns:
            Results of the passes completed during this block, oldest first

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if not self._initialized:
            raise RuntimeError("NoteDetectionEngine.initialize() must be called first")

        block = np.asarray(block)
        if block.ndim > 1:
            block = block[:, 0]

        if len(block) != self._last_block_size:
            self._last_block_size = len(block)
            self.diagnostic_log.write(f"Block size: {len(block)}", level=logging.DEBUG)

        gate = self.config.gate_threshold
        if gate > 0:
            block = block[np.abs(block) >= gate]

        # Positions count samples that passed the gate
        block_start = self._stream_samples
        self._stream_samples += len(block)

        n = self.config.window_size
        results: List[PassResult] = []
        pos = 0
        while pos < len(block):
            take = min(len(block) - pos, n - self._count)
            self._samples[self._count:self._count + take] = block[pos:pos + take]
            self._count += take
            pos += take

            if self._count >= n:
                result = self._analyze(stream_position=block_start + pos)
                if result is not None:
                    results.append(result)

        if results:
            latest = results[-1]
            self.mailbox.publish(latest.notes, latest.pass_index)

        return results

    def latest_notes(self) -> NoteSnapshot:
        """Most recently published notes (safe from any thread)."""
        return self.mailbox.snapshot()

    def diagnostics(self) -> List[str]:
        """Diagnostic text lines for display."""
        return self.diagnostic_log.lines()

    def _analyze(self, stream_position: int) -> Optional[PassResult]:
        """Run one pass over the full window, then start accumulating again."""
        count = self._count
        if count < 2 or self._taper is None:
            logger.debug("Skipping pass with %d sample(s)", count)
            self._advance()
            return None

        self.state = EngineState.ANALYZING
        try:
            context = PassContext.for_pass(self.sample_rate, count)

            apply_window(self._samples[:count], self._windowed, self._taper)
            spectrum = self._transform.forward(self._windowed)
            bins = self._spectrum.build(spectrum, context.sample_rate, context.sample_count)
            self._smooth(bins)

            context = replace(context, magnitude_threshold=magnitude_threshold(bins))
            candidates = find_local_maxima(bins, context.magnitude_threshold)

            context = replace(context, prominence_threshold=prominence_threshold(candidates))
            peaks = filter_prominent(bins, candidates, context.prominence_threshold)

            notes = self.resolver.resolve_peaks(peaks, self.config.frequency_range)

            self._pass_index += 1
            result = PassResult(
                pass_index=self._pass_index,
                time=stream_position / self.sample_rate,
                notes=notes,
                peak_frequencies=tuple(float(f) for f in peaks.frequency),
                context=context,
            )
            logger.debug(
                "Pass %d: %d candidate(s), %d peak(s), notes=%s",
                result.pass_index, len(candidates), len(peaks), notes,
            )
            return result
        finally:
            self._advance()
            self._clear_scratch()
            self.state = EngineState.ACCUMULATING

    def _smooth(self, bins: SpectrumBins) -> None:
        """Blend this pass's magnitudes with the previous ones, in place."""
        if self._smoothed is None:
            return

        mags = bins.magnitude
        smoothed = self._smoothed[:len(mags)]
        if not self._smoothing_primed:
            smoothed[:] = mags
            self._smoothing_primed = True
            return

        hop_seconds = self.config.hop_size / self.sample_rate
        alpha = math.exp(-hop_seconds / self.config.smoothing_time)
        smoothed *= alpha
        mags *= 1.0 - alpha
        smoothed += mags
        mags[:] = smoothed

    def _advance(self) -> None:
        """Clear the sample buffer, keeping the overlap for the next window."""
        keep = self.config.overlap_samples if self._count >= self.config.window_size else 0
        if keep:
            self._samples[:keep] = self._samples[self._count - keep:self._count]
        self._samples[keep:].fill(0.0)
        self._count = keep

    def _clear_scratch(self) -> None:
        self._windowed.fill(0.0)
        self._spectrum.clear()
