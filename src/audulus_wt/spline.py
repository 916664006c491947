"""Lookup (spline) node construction from a sample array."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from audulus_wt.models import ControlPoint, SplineNode


def build_spline_node(samples: Sequence[float] | NDArray[np.floating]) -> SplineNode:
    """Return a spline node with one control point per sample.

    Points are spread evenly over x in [0, 1]; y is the sample value, which
    the host expects to lie in [0, 1].
    """
    values = np.asarray(samples, dtype=np.float64)
    if values.size == 1:
        xs = np.zeros(1)
    else:
        xs = np.linspace(0.0, 1.0, values.size)
    points = [ControlPoint(x=float(x), y=float(y)) for x, y in zip(xs, values)]
    return SplineNode(control_points=points)
