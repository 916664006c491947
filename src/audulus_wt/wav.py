"""Single-cycle sample extraction from WAV files (RIFF, numpy only)."""

from __future__ import annotations

import struct
from pathlib import Path

import numpy as np
from numpy.typing import NDArray


def _decode_pcm24(raw: bytes) -> NDArray[np.float32]:
    frames = np.frombuffer(raw[: len(raw) - len(raw) % 3], dtype=np.uint8).reshape(-1, 3)
    ints = (
        frames[:, 0].astype(np.int32)
        | (frames[:, 1].astype(np.int32) << 8)
        | (frames[:, 2].astype(np.int32) << 16)
    )
    # Sign-extend from 24 bits
    ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
    return ints.astype(np.float32) / 8388608.0


def read_wav(path: str | Path) -> tuple[list[NDArray[np.float32]], int]:
    """Read a WAV file and return (channels, sample_rate).

    Supports PCM 8/16/24/32-bit (tag 1) and float32 (tag 3).
    """
    data = Path(path).read_bytes()

    if len(data) < 44 or data[:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise ValueError(f"Not a valid WAV file: {path}")

    # Parse chunks
    pos = 12
    fmt_tag = 0
    n_channels = 0
    sample_rate = 0
    bits_per_sample = 0
    audio_data = b""

    while pos < len(data) - 8:
        chunk_id = data[pos : pos + 4]
        chunk_size = struct.unpack_from("<I", data, pos + 4)[0]
        chunk_data = data[pos + 8 : pos + 8 + chunk_size]

        if chunk_id == b"fmt ":
            fmt_tag = struct.unpack_from("<H", chunk_data, 0)[0]
            n_channels = struct.unpack_from("<H", chunk_data, 2)[0]
            sample_rate = struct.unpack_from("<I", chunk_data, 4)[0]
            bits_per_sample = struct.unpack_from("<H", chunk_data, 14)[0]
        elif chunk_id == b"data":
            audio_data = chunk_data

        pos += 8 + chunk_size
        if chunk_size % 2 == 1:
            pos += 1  # pad byte

    if not audio_data or n_channels == 0:
        raise ValueError(f"No audio data in WAV file: {path}")

    # Decode samples
    if fmt_tag == 1:  # PCM
        if bits_per_sample == 8:
            samples = (np.frombuffer(audio_data, dtype=np.uint8).astype(np.float32) - 128.0) / 128.0
        elif bits_per_sample == 16:
            samples = np.frombuffer(audio_data, dtype="<i2").astype(np.float32) / 32768.0
        elif bits_per_sample == 24:
            samples = _decode_pcm24(audio_data)
        elif bits_per_sample == 32:
            samples = np.frombuffer(audio_data, dtype="<i4").astype(np.float32) / 2147483648.0
        else:
            raise ValueError(f"Unsupported PCM bit depth: {bits_per_sample}")
    elif fmt_tag == 3:  # IEEE float
        samples = np.frombuffer(audio_data, dtype="<f4").copy()
    else:
        raise ValueError(f"Unsupported WAV format tag: {fmt_tag}")

    # De-interleave channels
    n_frames = len(samples) // n_channels
    channels = [samples[ch::n_channels][:n_frames] for ch in range(n_channels)]
    return channels, sample_rate


def load_samples(path: str | Path) -> NDArray[np.float64]:
    """Return the first channel of a WAV file as float64 samples."""
    channels, _sample_rate = read_wav(path)
    return channels[0].astype(np.float64)
