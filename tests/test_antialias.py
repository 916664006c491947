"""Tests for the band decomposer."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from audulus_wt import (
    InvalidWaveformError,
    WavetableConfig,
    antialias,
    bandlimit,
    cutoff_harmonic,
    harmonic_count,
    highest_harmonic,
    spectral_energy,
)


class TestCutoffHarmonic:
    def test_lowest_band(self) -> None:
        assert cutoff_harmonic(44100, 55) == 400

    def test_highest_band(self) -> None:
        assert cutoff_harmonic(44100, 7040) == 3

    def test_above_nyquist(self) -> None:
        assert cutoff_harmonic(44100, 30000) == 0

    def test_exactly_nyquist_is_kept(self) -> None:
        assert cutoff_harmonic(44100, 22050) == 1

    def test_rejects_non_positive_rate(self) -> None:
        with pytest.raises(ValueError, match="sample rate"):
            cutoff_harmonic(0, 55)

    def test_rejects_non_positive_fundamental(self) -> None:
        with pytest.raises(ValueError, match="fundamental"):
            cutoff_harmonic(44100, -1.0)


class TestAntialias:
    def test_preserves_length(self, saw_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 55, saw_cycle)
        assert out.shape == saw_cycle.shape

    def test_preserves_odd_length(self) -> None:
        w = np.random.default_rng(1).uniform(-1, 1, 101)
        assert len(antialias(44100, 880, w)) == 101

    def test_output_is_real(self, saw_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 440, saw_cycle)
        assert np.isrealobj(out)

    def test_lowest_band_keeps_400_harmonics(self, saw_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 55, saw_cycle)
        assert harmonic_count(out) == 400
        assert highest_harmonic(out) == 400

    def test_highest_band_keeps_3_harmonics(self, saw_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 7040, saw_cycle)
        assert harmonic_count(out) == 3
        assert highest_harmonic(out) == 3

    def test_band_limited_sine_unchanged(self, sine_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 440, sine_cycle)
        np.testing.assert_allclose(out, sine_cycle, atol=1e-12)

    def test_full_band_is_identity(self, saw_cycle: NDArray[np.float64]) -> None:
        # At 1 Hz every harmonic of a 2048-sample cycle is below Nyquist
        out = antialias(44100, 1, saw_cycle)
        np.testing.assert_allclose(out, saw_cycle, atol=1e-12)

    def test_above_nyquist_flattens_to_dc(self, saw_cycle: NDArray[np.float64]) -> None:
        out = antialias(44100, 30000, saw_cycle)
        np.testing.assert_allclose(out, np.full_like(out, saw_cycle.mean()), atol=1e-12)
        assert spectral_energy(out) <= spectral_energy(saw_cycle)

    def test_deterministic(self, saw_cycle: NDArray[np.float64]) -> None:
        a = antialias(44100, 220, saw_cycle)
        b = antialias(44100, 220, saw_cycle)
        assert np.array_equal(a, b)

    def test_accepts_lists(self) -> None:
        out = antialias(44100, 55, [0.0, 1.0, 0.0, -1.0])
        assert len(out) == 4

    def test_single_sample(self) -> None:
        out = antialias(44100, 55, [0.5])
        np.testing.assert_allclose(out, [0.5])

    def test_input_not_mutated(self, saw_cycle: NDArray[np.float64]) -> None:
        before = saw_cycle.copy()
        antialias(44100, 7040, saw_cycle)
        assert np.array_equal(saw_cycle, before)


class TestInvalidWaveform:
    def test_empty(self) -> None:
        with pytest.raises(InvalidWaveformError, match="empty"):
            antialias(44100, 55, [])

    def test_nan(self) -> None:
        with pytest.raises(InvalidWaveformError, match="non-finite"):
            antialias(44100, 55, [0.0, float("nan")])

    def test_inf(self) -> None:
        with pytest.raises(InvalidWaveformError):
            antialias(44100, 55, [float("inf"), 0.0])

    def test_two_dimensional(self) -> None:
        with pytest.raises(InvalidWaveformError, match="1-D"):
            antialias(44100, 55, np.zeros((2, 4)))

    def test_is_value_error(self) -> None:
        assert issubclass(InvalidWaveformError, ValueError)


class TestBandHarmonics:
    def test_counts_strictly_decrease(self, saw_cycle: NDArray[np.float64]) -> None:
        counts = [harmonic_count(band) for band in bandlimit(saw_cycle)]
        assert counts == [400, 200, 100, 50, 25, 12, 6, 3]
        assert all(a > b for a, b in zip(counts, counts[1:]))

    def test_custom_sample_rate(self, saw_cycle: NDArray[np.float64]) -> None:
        config = WavetableConfig(band_count=2, sample_rate=48000)
        counts = [harmonic_count(band) for band in bandlimit(saw_cycle, config)]
        assert counts == [436, 218]

    def test_silent_has_no_harmonics(self) -> None:
        assert harmonic_count(np.zeros(64)) == 0
        assert highest_harmonic(np.zeros(64)) == 0
