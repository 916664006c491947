"""Band-limited wavetable oscillator assembly.

A single-cycle waveform aliases once its upper harmonics pass Nyquist, so
the oscillator holds one copy of the cycle per octave band, each with the
harmonics that would alias at that band's lowest fundamental removed. The
patch picks the table for the current frequency:

    freq -> OctaveToHz -> clamp -> Phasor -> x/2/pi --+--> Spline[0] --+
                            |                         +--> Spline[1] --+--> XMux -> x*2-1 -> out
                            +--> clamp(log2(hz/55), 0, N-1) -----------+
"""

from __future__ import annotations

import hashlib
import uuid
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from audulus_wt.antialias import Waveform, antialias, as_waveform
from audulus_wt.builder import (
    add_node,
    add_nodes,
    block_node,
    connect,
    expose_node,
    expr_node,
    input_node,
    make_subpatch,
    move_node,
    mux_node,
    new_document,
    output_node,
    text_node,
)
from audulus_wt.config import DEFAULT_CONFIG, WavetableConfig
from audulus_wt.errors import UnsupportedBandCountError
from audulus_wt.models import Document, SplineNode
from audulus_wt.spline import build_spline_node

# Vertical spacing between band spline nodes
_BAND_SPACING = 200


@dataclass
class Normalization:
    bands: list[Waveform]
    factor: float
    degenerate: bool  # every band was silent; samples passed through unscaled


def _fmt(value: float) -> str:
    return f"{value:g}"


def _content_id(title: str, band_samples: Sequence[NDArray[np.floating]]) -> str:
    """Patch ID seeded by the title and the band samples, so equal builds share IDs."""
    digest = hashlib.sha256(title.encode())
    for samples in band_samples:
        digest.update(np.ascontiguousarray(samples, dtype=np.float64).tobytes())
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"audulus-wt/{digest.hexdigest()}"))


def band_frequencies(config: WavetableConfig = DEFAULT_CONFIG) -> list[float]:
    """Return the lower edge of each band: base_frequency * 2**i, ascending."""
    if config.band_count < 1:
        raise UnsupportedBandCountError(config.band_count)
    return [config.base_frequency * 2**i for i in range(config.band_count)]


def bandlimit(
    waveform: Sequence[float] | NDArray[np.floating],
    config: WavetableConfig = DEFAULT_CONFIG,
) -> list[Waveform]:
    """Return one band-limited copy of *waveform* per band."""
    samples = as_waveform(waveform)
    return [antialias(config.sample_rate, f, samples) for f in band_frequencies(config)]


def normalize_bands(bands: Sequence[Waveform]) -> Normalization:
    """Scale all bands by one shared factor so the loudest sample reaches 1.0.

    A shared factor keeps the relative level of the bands intact. When the
    peak is exactly zero the bands are returned unchanged.
    """
    if not bands:
        raise UnsupportedBandCountError(0)
    peak = max(float(np.max(np.abs(band))) for band in bands)
    if peak == 0.0:
        return Normalization(bands=list(bands), factor=1.0, degenerate=True)
    # 1/peak overflows for subnormal peaks
    scaled = [band / peak for band in bands]
    return Normalization(bands=scaled, factor=1.0 / peak, degenerate=False)


def to_unipolar(samples: NDArray[np.floating]) -> Waveform:
    """Map samples from [-1, 1] onto [0, 1], the range spline nodes expect."""
    return (np.asarray(samples, dtype=np.float64) + 1.0) / 2.0


def build_oscillator_patch(
    band_samples: Sequence[NDArray[np.floating]],
    title: str,
    subtitle: str,
    config: WavetableConfig = DEFAULT_CONFIG,
) -> Document:
    """Build the oscillator document around per-band unipolar sample sets."""
    band_count = len(band_samples)
    if band_count < 1:
        raise UnsupportedBandCountError(band_count)

    doc_title = f"{title} {subtitle}".strip()
    doc = new_document(doc_title, patch_id=_content_id(doc_title, band_samples))
    patch = doc.patch

    title_node = text_node(title)
    move_node(title_node, -700, 300)
    expose_node(title_node, "title", -10, -30)
    add_node(patch, title_node)

    subtitle_node = text_node(subtitle)
    move_node(subtitle_node, -700, 250)
    expose_node(subtitle_node, "subtitle", -10, -45)
    add_node(patch, subtitle_node)

    # Control path
    freq_in = input_node("freq")
    move_node(freq_in, -700, 0)
    expose_node(freq_in, "freq", 0, 0)
    add_node(patch, freq_in)

    o2hz = block_node("OctaveToHz")
    move_node(o2hz, -700, -100)
    add_node(patch, o2hz)
    connect(patch, freq_in, 0, o2hz, 0)

    hertz = expr_node(f"clamp(hz, {_fmt(config.min_hz)}, {_fmt(config.max_hz)})")
    move_node(hertz, -700, -200)
    add_node(patch, hertz)
    connect(patch, o2hz, 0, hertz, 0)

    phasor = block_node("Phasor")
    move_node(phasor, -500, 0)
    add_node(patch, phasor)
    connect(patch, hertz, 0, phasor, 0)

    phase = expr_node("x/2/pi")
    move_node(phase, -300, 0)
    add_node(patch, phase)
    connect(patch, phasor, 0, phase, 0)

    # One lookup per band, all driven by the same phase
    splines: list[SplineNode] = []
    for i, samples in enumerate(band_samples):
        spline = build_spline_node(samples)
        move_node(spline, -100, i * _BAND_SPACING)
        splines.append(spline)
    add_nodes(patch, splines)
    for spline in splines:
        connect(patch, phase, 0, spline, 0)

    # Band picker: continuous selector, interpolation is up to the host
    picker = expr_node(f"clamp(log2(hz/{_fmt(config.base_frequency)}), 0, {band_count - 1})")
    move_node(picker, -100, -100)
    add_node(patch, picker)
    connect(patch, hertz, 0, picker, 0)

    mux = mux_node(band_count)
    move_node(mux, 400, 0)
    add_node(patch, mux)
    connect(patch, picker, 0, mux, 0)
    for i, spline in enumerate(splines):
        connect(patch, spline, 0, mux, i + 1)

    bipolar = expr_node("x*2-1")
    move_node(bipolar, 600, 0)
    add_node(patch, bipolar)
    connect(patch, mux, 0, bipolar, 0)

    out = output_node("out")
    move_node(out, 1100, 0)
    expose_node(out, "out", 50, 0)
    add_node(patch, out)
    connect(patch, bipolar, 0, out, 0)

    return doc


def assemble_wavetable(
    normalized: Normalization,
    title: str,
    subtitle: str,
    config: WavetableConfig = DEFAULT_CONFIG,
) -> Document:
    """Build the oscillator from normalized bands and wrap it as a subpatch."""
    band_samples = [to_unipolar(band) for band in normalized.bands]
    doc = build_oscillator_patch(band_samples, title, subtitle, config)
    return make_subpatch(doc.patch, doc.title)


def build_wavetable_document(
    waveform: Sequence[float] | NDArray[np.floating],
    title: str,
    subtitle: str,
    config: WavetableConfig = DEFAULT_CONFIG,
) -> Document:
    """Build the band-limited wavetable oscillator for *waveform*, wrapped as a subpatch."""
    normalized = normalize_bands(bandlimit(waveform, config))
    return assemble_wavetable(normalized, title, subtitle, config)
