"""Single-spline documents, intended for automation rather than playback."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from audulus_wt.antialias import as_waveform
from audulus_wt.builder import add_node, expose_node, new_document
from audulus_wt.models import Document
from audulus_wt.spline import build_spline_node
from audulus_wt.wavetable import to_unipolar


def build_spline_document(
    waveform: Sequence[float] | NDArray[np.floating],
    title: str = "",
) -> Document:
    """Return a document holding one spline node for *waveform*.

    Samples are rescaled from [-1, 1] to [0, 1]. There is no phasor, no
    band selection and no subpatch wrapping.
    """
    doc = new_document(title)
    spline = build_spline_node(to_unipolar(as_waveform(waveform)))
    expose_node(spline, "spline", 0, 0)
    add_node(doc.patch, spline)
    return doc
