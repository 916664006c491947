"""Band-limiting of single-cycle waveforms via the harmonic spectrum."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from audulus_wt.errors import InvalidWaveformError

Waveform = NDArray[np.float64]

# Magnitude below which a harmonic bin counts as removed
HARMONIC_TOLERANCE = 1e-9


def as_waveform(samples: Sequence[float] | NDArray[np.floating]) -> Waveform:
    """Return *samples* as a 1-D float64 array, rejecting empty or non-finite input."""
    waveform = np.asarray(samples, dtype=np.float64)
    if waveform.ndim != 1:
        raise InvalidWaveformError(f"expected a 1-D sample sequence, got shape {waveform.shape}")
    if waveform.size == 0:
        raise InvalidWaveformError("sample sequence is empty")
    if not np.all(np.isfinite(waveform)):
        raise InvalidWaveformError("sample sequence contains non-finite values")
    return waveform


def cutoff_harmonic(sample_rate: float, fundamental: float) -> int:
    """Return the highest harmonic index at or below Nyquist for *fundamental*.

    Returns 0 when even the first harmonic is above Nyquist.
    """
    if sample_rate <= 0.0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    if fundamental <= 0.0:
        raise ValueError(f"fundamental frequency must be positive, got {fundamental}")
    return math.floor((sample_rate / 2.0) / fundamental)


def antialias(
    sample_rate: float,
    fundamental: float,
    waveform: Sequence[float] | NDArray[np.floating],
) -> Waveform:
    """Remove every harmonic of *waveform* that would alias at *fundamental*.

    The cycle is taken as exactly one period of *fundamental*, so rfft bin k
    is the k-th harmonic at ``k * fundamental`` Hz. Bins above
    ``sample_rate / 2`` are zeroed (hard cutoff); DC is always kept. The
    inverse transform is taken at the input length, so the output has the
    same number of samples as the input and is real-valued.
    """
    signal = as_waveform(waveform)
    cutoff = cutoff_harmonic(sample_rate, fundamental)

    spectrum = np.fft.rfft(signal)
    # irfft mirrors these bins onto the negative frequencies
    spectrum[cutoff + 1 :] = 0.0
    return np.fft.irfft(spectrum, n=signal.size)


def harmonic_count(
    waveform: Sequence[float] | NDArray[np.floating],
    tolerance: float = HARMONIC_TOLERANCE,
) -> int:
    """Count non-zero harmonic bins (k >= 1), relative to the largest bin."""
    spectrum = np.abs(np.fft.rfft(as_waveform(waveform)))
    peak = float(spectrum.max())
    if peak == 0.0:
        return 0
    return int(np.count_nonzero(spectrum[1:] > tolerance * peak))


def highest_harmonic(
    waveform: Sequence[float] | NDArray[np.floating],
    tolerance: float = HARMONIC_TOLERANCE,
) -> int:
    """Return the index of the highest non-zero harmonic, or 0 if there is none."""
    spectrum = np.abs(np.fft.rfft(as_waveform(waveform)))
    peak = float(spectrum.max())
    if peak == 0.0:
        return 0
    present = np.nonzero(spectrum[1:] > tolerance * peak)[0]
    return int(present[-1]) + 1 if present.size else 0


def spectral_energy(waveform: Sequence[float] | NDArray[np.floating]) -> float:
    """Total energy of the full (two-sided) spectrum."""
    return float(np.sum(np.abs(np.fft.fft(as_waveform(waveform))) ** 2))
