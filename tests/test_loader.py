"""Tests for audio loading and block delivery."""

import numpy as np
import pytest
import soundfile as sf

from fourier_chords.input import AudioLoader, iter_blocks


class TestAudioLoader:
    """Tests for AudioLoader."""

    def test_normalize(self):
        loader = AudioLoader()
        audio = np.array([0.5, -0.5, 0.25, -0.25])
        normalized = loader._normalize(audio)

        assert np.abs(normalized).max() == 1.0

    def test_unsupported_format(self, tmp_path):
        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        loader = AudioLoader()
        with pytest.raises(ValueError, match="Unsupported format"):
            loader.load(str(dummy_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))

    def test_keeps_native_rate(self, tmp_path, sines):
        path = tmp_path / "a4.wav"
        sf.write(str(path), sines([440.0], 8000, 8000), 8000)

        loader = AudioLoader()
        audio, sr = loader.load(str(path))

        assert sr == 8000
        assert len(audio) == 8000
        assert loader.get_duration(audio, sr) == pytest.approx(1.0)


class TestIterBlocks:
    """Tests for iter_blocks."""

    def test_last_block_is_short(self):
        blocks = list(iter_blocks(np.arange(10.0), 4))
        assert [len(b) for b in blocks] == [4, 4, 2]
        assert np.array_equal(np.concatenate(blocks), np.arange(10.0))

    def test_multichannel_is_frames_first(self):
        stereo = np.zeros((2, 9))
        blocks = list(iter_blocks(stereo, 4))
        assert blocks[0].shape == (4, 2)
        assert blocks[-1].shape == (1, 2)

    def test_invalid_block_size(self):
        with pytest.raises(ValueError):
            list(iter_blocks(np.zeros(4), 0))
