from __future__ import annotations

import struct
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from numpy.typing import NDArray

from audulus_wt import Document, build_wavetable_document


@pytest.fixture
def saw_cycle() -> NDArray[np.float64]:
    """Naive sawtooth ramp, 2048 samples, every harmonic present."""
    return np.linspace(-1.0, 1.0, 2048, endpoint=False)


@pytest.fixture
def sine_cycle() -> NDArray[np.float64]:
    """One cycle of a sine, 256 samples."""
    return np.sin(2.0 * np.pi * np.arange(256) / 256)


@pytest.fixture
def wavetable_doc(saw_cycle: NDArray[np.float64]) -> Document:
    return build_wavetable_document(saw_cycle, "Basic", "saw")


def _write_test_wav(
    path: Path, samples: list[float], sample_rate: int = 44100, n_channels: int = 1
) -> None:
    """Write an interleaved float32 WAV file for testing."""
    raw = np.array(samples, dtype=np.float32).tobytes()
    bits = 32
    byte_rate = sample_rate * n_channels * bits // 8
    block_align = n_channels * bits // 8
    data_size = len(raw)

    with open(path, "wb") as f:
        f.write(b"RIFF")
        f.write(struct.pack("<I", 36 + data_size))
        f.write(b"WAVE")
        f.write(b"fmt ")
        f.write(struct.pack("<I", 16))
        f.write(struct.pack("<H", 3))  # IEEE float
        f.write(struct.pack("<H", n_channels))
        f.write(struct.pack("<I", sample_rate))
        f.write(struct.pack("<I", byte_rate))
        f.write(struct.pack("<H", block_align))
        f.write(struct.pack("<H", bits))
        f.write(b"data")
        f.write(struct.pack("<I", data_size))
        f.write(raw)


@pytest.fixture
def write_wav() -> Callable[..., None]:
    return _write_test_wav
