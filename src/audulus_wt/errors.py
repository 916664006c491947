"""Exception types raised while building wavetable patches."""

from __future__ import annotations


class InvalidWaveformError(ValueError):
    """The sample sequence is empty or contains non-finite values."""


class UnsupportedBandCountError(ValueError):
    """Fewer than one frequency band was requested."""

    def __init__(self, band_count: int) -> None:
        super().__init__(f"band count must be at least 1, got {band_count}")
        self.band_count = band_count


class PatchSerializationError(RuntimeError):
    """An assembled document could not be encoded.

    Raised for internal invariant violations only; bad user input is
    rejected before a document is assembled.
    """
