"""Band-limited wavetable oscillator patches for Audulus."""

from audulus_wt.antialias import (
    antialias,
    as_waveform,
    cutoff_harmonic,
    harmonic_count,
    highest_harmonic,
    spectral_energy,
)
from audulus_wt.builder import (
    add_node,
    add_nodes,
    block_node,
    connect,
    expose_node,
    exposed_port_names,
    expr_node,
    expr_variables,
    forwarded_ports,
    input_node,
    make_subpatch,
    move_node,
    mux_node,
    new_document,
    output_node,
    text_node,
)
from audulus_wt.config import WavetableConfig
from audulus_wt.errors import (
    InvalidWaveformError,
    PatchSerializationError,
    UnsupportedBandCountError,
)
from audulus_wt.midi import build_midi_document, load_midi_curves, note_curves
from audulus_wt.models import (
    BlockNode,
    ControlPoint,
    Document,
    Exposure,
    ExprNode,
    InputNode,
    MuxNode,
    Node,
    OutputNode,
    Patch,
    PortBinding,
    Position,
    SplineNode,
    SubpatchNode,
    TextNode,
    Wire,
)
from audulus_wt.serialize import document_path, document_to_json, write_document
from audulus_wt.spline import build_spline_node
from audulus_wt.spline_patch import build_spline_document
from audulus_wt.visualize import patch_to_dot, patch_to_dot_file
from audulus_wt.wavetable import (
    Normalization,
    assemble_wavetable,
    band_frequencies,
    bandlimit,
    build_oscillator_patch,
    build_wavetable_document,
    normalize_bands,
    to_unipolar,
)

__all__ = [
    "BlockNode",
    "ControlPoint",
    "Document",
    "Exposure",
    "ExprNode",
    "InputNode",
    "InvalidWaveformError",
    "MuxNode",
    "Node",
    "Normalization",
    "OutputNode",
    "Patch",
    "PatchSerializationError",
    "PortBinding",
    "Position",
    "SplineNode",
    "SubpatchNode",
    "TextNode",
    "UnsupportedBandCountError",
    "WavetableConfig",
    "Wire",
    "add_node",
    "add_nodes",
    "antialias",
    "as_waveform",
    "assemble_wavetable",
    "band_frequencies",
    "bandlimit",
    "block_node",
    "build_midi_document",
    "build_oscillator_patch",
    "build_spline_document",
    "build_spline_node",
    "build_wavetable_document",
    "connect",
    "cutoff_harmonic",
    "document_path",
    "document_to_json",
    "expose_node",
    "exposed_port_names",
    "expr_node",
    "expr_variables",
    "forwarded_ports",
    "harmonic_count",
    "highest_harmonic",
    "input_node",
    "load_midi_curves",
    "make_subpatch",
    "move_node",
    "mux_node",
    "new_document",
    "normalize_bands",
    "note_curves",
    "output_node",
    "patch_to_dot",
    "patch_to_dot_file",
    "spectral_energy",
    "text_node",
    "to_unipolar",
    "write_document",
]
