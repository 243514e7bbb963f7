"""Audio loading and host-style block delivery."""

import numpy as np
import librosa
from pathlib import Path
from typing import Iterator, Optional, Tuple


class AudioLoader:
    """Loads audio files for streaming through the detection engine."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: Optional[int] = None,
        mono: bool = True,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling, None keeps the
                file's native rate
            mono: Convert to mono if True
            normalize: Peak-normalize audio amplitude if True
        """
        self.target_sr = target_sr
        self.mono = mono
        self.normalize = normalize

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file and preprocess.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(
            str(path),
            sr=self.target_sr,
            mono=self.mono,
        )

        if self.normalize:
            audio = self._normalize(audio)

        return audio, sr

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max()
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: int) -> float:
        """Get duration in seconds."""
        return audio.shape[-1] / sr


def iter_blocks(audio: np.ndarray, block_size: int) -> Iterator[np.ndarray]:
    """
    Slice a signal into consecutive blocks, as an audio host would deliver it.

    The last block may be shorter. Multi-channel audio in librosa's
    (channels, samples) layout is yielded as (frames, channels).

    Args:
        audio: 1-D mono signal or (channels, samples) array
        block_size: Samples per block

    Raises:
        ValueError: If block_size < 1
    """
    if block_size < 1:
        raise ValueError(f"block_size must be positive, got {block_size}")

    if audio.ndim > 1:
        audio = audio.T

    for start in range(0, len(audio), block_size):
        yield audio[start:start + block_size]
