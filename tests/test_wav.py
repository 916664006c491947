from __future__ import annotations

import struct
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from audulus_wt.wav import load_samples, read_wav


def _write_pcm(path: Path, raw: bytes, bits: int, n_channels: int = 1) -> None:
    sample_rate = 44100
    block_align = n_channels * bits // 8
    with open(path, "wb") as f:
        f.write(b"RIFF")
        f.write(struct.pack("<I", 36 + len(raw)))
        f.write(b"WAVE")
        f.write(b"fmt ")
        f.write(struct.pack("<I", 16))
        f.write(struct.pack("<H", 1))  # PCM
        f.write(struct.pack("<H", n_channels))
        f.write(struct.pack("<I", sample_rate))
        f.write(struct.pack("<I", sample_rate * block_align))
        f.write(struct.pack("<H", block_align))
        f.write(struct.pack("<H", bits))
        f.write(b"data")
        f.write(struct.pack("<I", len(raw)))
        f.write(raw)


class TestReadWav:
    def test_float32(self, tmp_path: Path, write_wav: Callable[..., None]) -> None:
        path = tmp_path / "f.wav"
        write_wav(path, [0.0, 0.5, -0.5, 1.0])
        channels, sr = read_wav(path)
        assert sr == 44100
        np.testing.assert_allclose(channels[0], [0.0, 0.5, -0.5, 1.0])

    def test_pcm16(self, tmp_path: Path) -> None:
        path = tmp_path / "p16.wav"
        _write_pcm(path, struct.pack("<3h", 0, 16384, -32768), 16)
        channels, _ = read_wav(path)
        np.testing.assert_allclose(channels[0], [0.0, 0.5, -1.0])

    def test_pcm24(self, tmp_path: Path) -> None:
        path = tmp_path / "p24.wav"
        # 0, +0.5 (0x400000), -1.0 (0x800000)
        raw = bytes([0, 0, 0, 0x00, 0x00, 0x40, 0x00, 0x00, 0x80])
        _write_pcm(path, raw, 24)
        channels, _ = read_wav(path)
        np.testing.assert_allclose(channels[0], [0.0, 0.5, -1.0])

    def test_first_channel_of_stereo(
        self, tmp_path: Path, write_wav: Callable[..., None]
    ) -> None:
        path = tmp_path / "st.wav"
        write_wav(path, [0.1, 0.9, 0.2, 0.8], n_channels=2)
        np.testing.assert_allclose(load_samples(path), [0.1, 0.2], rtol=1e-6)

    def test_not_a_wav(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.wav"
        path.write_bytes(b"not a wav file at all" * 4)
        with pytest.raises(ValueError, match="Not a valid WAV"):
            read_wav(path)

    def test_unsupported_bit_depth(self, tmp_path: Path) -> None:
        path = tmp_path / "p12.wav"
        _write_pcm(path, b"\x00\x00" * 4, 12)
        with pytest.raises(ValueError, match="bit depth"):
            read_wav(path)
