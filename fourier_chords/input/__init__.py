"""Input layer - Audio loading and block delivery."""

from .loader import AudioLoader, iter_blocks

__all__ = ["AudioLoader", "iter_blocks"]
