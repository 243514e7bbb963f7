"""Fourier Chords - Real-time note detection from spectral peaks.

Architecture Layers:
    1. core/      - Note table, constants and error types
    2. input/     - Audio loading and host-style block delivery
    3. analysis/  - Windowing, transform, magnitude spectrum, peak picking
    4. detection/ - Streaming engine, note resolution, presentation hand-off
    5. output/    - Rendering detected notes (text, tables, JSON)
"""

__version__ = "0.1.0"

# Core types
from .core import NoteTable, DEFAULT_NOTE_TABLE, ConfigurationError

# Input layer
from .input import AudioLoader, iter_blocks

# Analysis layer
from .analysis import (
    SpectralTransform,
    SpectrumBuilder,
    find_local_maxima,
    filter_prominent,
)

# Detection layer
from .detection import (
    EngineConfig,
    NoteDetectionEngine,
    NoteResolver,
    PassResult,
)

# Output layer
from .output import render_notes

__all__ = [
    # Core
    "NoteTable",
    "DEFAULT_NOTE_TABLE",
    "ConfigurationError",
    # Input
    "AudioLoader",
    "iter_blocks",
    # Analysis
    "SpectralTransform",
    "SpectrumBuilder",
    "find_local_maxima",
    "filter_prominent",
    # Detection
    "EngineConfig",
    "NoteDetectionEngine",
    "NoteResolver",
    "PassResult",
    # Output
    "render_notes",
]
