"""Band layout and control-path settings for the wavetable assembler."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class WavetableConfig(BaseModel):
    # Band i covers fundamentals from base_frequency * 2**i upward.
    band_count: int = 8
    base_frequency: float = Field(default=55.0, gt=0.0)
    sample_rate: float = Field(default=44100.0, gt=0.0)
    # Clamp applied to the oscillator frequency before the phasor
    min_hz: float = Field(default=0.0001, gt=0.0)
    max_hz: float = Field(default=12000.0, gt=0.0)

    @model_validator(mode="after")
    def _check_hz_range(self) -> WavetableConfig:
        if self.min_hz >= self.max_hz:
            raise ValueError(f"min_hz ({self.min_hz}) must be below max_hz ({self.max_hz})")
        return self


DEFAULT_CONFIG = WavetableConfig()
