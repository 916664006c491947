"""Command-line interface for audulus-wt."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from pydantic import ValidationError

from audulus_wt.config import WavetableConfig
from audulus_wt.midi import build_midi_document, load_midi_curves
from audulus_wt.models import Document
from audulus_wt.serialize import document_path, write_document
from audulus_wt.spline_patch import build_spline_document
from audulus_wt.visualize import patch_to_dot_file
from audulus_wt.wav import read_wav
from audulus_wt.wavetable import assemble_wavetable, bandlimit, normalize_bands


def _default_titles(path: Path, title: str | None, subtitle: str | None) -> tuple[str, str]:
    """Fill missing titles from the parent directory and the base file name."""
    return (
        title if title is not None else path.resolve().parent.name,
        subtitle if subtitle is not None else path.stem,
    )


def _load_samples(path: Path) -> NDArray[np.float64]:
    """Read the first channel of a WAV file, noting any channels left out."""
    channels, _sample_rate = read_wav(path)
    n_channels, n_frames = len(channels), len(channels[0])
    if n_channels > 1:
        print(
            f"info: {path}: {n_channels} channels, using first channel ({n_frames} samples)",
            file=sys.stderr,
        )
    return channels[0].astype(np.float64)


def _build_wavetable(args: argparse.Namespace, path: Path) -> Document:
    config = WavetableConfig(band_count=args.bands)
    title, subtitle = _default_titles(path, args.title, args.subtitle)
    normalized = normalize_bands(bandlimit(_load_samples(path), config))
    if normalized.degenerate:
        print(f"warning: {path}: waveform is silent, skipping normalization", file=sys.stderr)
    return assemble_wavetable(normalized, title, subtitle, config)


def _build_spline(args: argparse.Namespace, path: Path) -> Document:
    title, subtitle = _default_titles(path, args.title, args.subtitle)
    return build_spline_document(_load_samples(path), f"{title} {subtitle}".strip())


def _build_midi(args: argparse.Namespace, path: Path) -> Document:
    title, subtitle = _default_titles(path, args.title, args.subtitle)
    pitch, gate = load_midi_curves(path, resolution=args.resolution)
    return build_midi_document(pitch, gate, f"{title} {subtitle}".strip())


def main(argv: list[str] | None = None) -> int:
    """Entry point for the audulus-wt CLI."""
    parser = argparse.ArgumentParser(
        prog="audulus-wt",
        description="Build a band-limited Audulus wavetable node from a single-cycle waveform.",
    )
    parser.add_argument("file", help="Single-cycle WAV file (MIDI file with --midi)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-s",
        "--spline",
        action="store_true",
        help="Generate a patch containing only a spline of the samples",
    )
    mode.add_argument(
        "-m",
        "--midi",
        action="store_true",
        help="Generate a patch containing pitch and gate splines from a MIDI file",
    )
    parser.add_argument("-t", "--title", help="Patch title (default: parent directory)")
    parser.add_argument("-u", "--subtitle", help="Patch subtitle (default: file name)")
    parser.add_argument("-o", "--output", help="Output directory (default: current dir)")
    parser.add_argument("--bands", type=int, default=8, help="Number of octave bands")
    parser.add_argument(
        "--resolution", type=int, default=256, help="Points per MIDI curve (with --midi)"
    )
    parser.add_argument("--dot", action="store_true", help="Also write a DOT visualization")

    args = parser.parse_args(argv)

    path = Path(args.file)
    if not path.exists():
        print(f"error: cannot find input file at {path}", file=sys.stderr)
        return 1

    out_path = document_path(path, args.output or ".")
    print(f"building {out_path.name}")

    try:
        if args.spline:
            doc = _build_spline(args, path)
        elif args.midi:
            doc = _build_midi(args, path)
        else:
            doc = _build_wavetable(args, path)
    except (OSError, EOFError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"error: invalid settings: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        write_document(doc, out_path)
        print(f"wrote {out_path}")
        if args.dot:
            dot_path = patch_to_dot_file(doc, out_path.with_suffix(".dot"))
            print(f"wrote {dot_path}")
    except OSError as e:
        print(f"error: cannot write output: {e}", file=sys.stderr)
        return 1
    except subprocess.CalledProcessError as e:
        print(f"error: graphviz rendering failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
