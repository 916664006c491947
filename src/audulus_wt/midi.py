"""Automation curves from MIDI files.

A MIDI file is read as a monophonic line and sampled into two curves, both
already in [0, 1]: pitch (note number / 127, held after release) and gate
(velocity / 127 while a note sounds, else 0).
"""

from __future__ import annotations

from pathlib import Path

import mido
import numpy as np
from numpy.typing import NDArray

from audulus_wt.builder import add_node, expose_node, move_node, new_document
from audulus_wt.errors import InvalidWaveformError
from audulus_wt.models import Document
from audulus_wt.spline import build_spline_node

DEFAULT_RESOLUTION = 256

# (time in seconds, note, velocity); velocity 0 releases the note
NoteEvent = tuple[float, int, int]


def _note_events(midi_file: mido.MidiFile) -> tuple[list[NoteEvent], float]:
    events: list[NoteEvent] = []
    now = 0.0
    for msg in midi_file:
        now += msg.time
        if msg.type == "note_on":
            events.append((now, msg.note, msg.velocity))
        elif msg.type == "note_off":
            events.append((now, msg.note, 0))
    return events, now


def note_curves(
    events: list[NoteEvent], duration: float, resolution: int = DEFAULT_RESOLUTION
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Sample a note timeline into (pitch, gate) curves of *resolution* points."""
    if resolution < 1:
        raise ValueError(f"resolution must be at least 1, got {resolution}")
    if not any(velocity > 0 for _, _, velocity in events):
        raise InvalidWaveformError("MIDI file contains no notes")

    pitch = np.zeros(resolution)
    gate = np.zeros(resolution)
    held: dict[int, int] = {}  # note -> velocity, in press order
    last_note = 0
    pos = 0
    for i, t in enumerate(np.linspace(0.0, duration, resolution, endpoint=False)):
        while pos < len(events) and events[pos][0] <= t:
            _, note, velocity = events[pos]
            held.pop(note, None)
            if velocity > 0:
                held[note] = velocity
                last_note = note
            pos += 1
        if held:
            # Most recently pressed note wins
            last_note = next(reversed(held))
            gate[i] = held[last_note] / 127.0
        pitch[i] = last_note / 127.0
    return pitch, gate


def load_midi_curves(
    path: str | Path, resolution: int = DEFAULT_RESOLUTION
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Read a MIDI file and return its (pitch, gate) curves."""
    events, duration = _note_events(mido.MidiFile(str(path)))
    return note_curves(events, duration, resolution)


def build_midi_document(
    pitch: NDArray[np.floating], gate: NDArray[np.floating], title: str = ""
) -> Document:
    """Return a document with one exposed spline node per curve."""
    doc = new_document(title)

    pitch_node = build_spline_node(pitch)
    expose_node(pitch_node, "pitch", 0, 0)
    add_node(doc.patch, pitch_node)

    gate_node = build_spline_node(gate)
    move_node(gate_node, 0, 200)
    expose_node(gate_node, "gate", 0, -20)
    add_node(doc.patch, gate_node)

    return doc
