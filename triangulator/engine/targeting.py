"""Ring-intersection heatmap over a fine sample lattice.

Each placed structure is assumed to sit ``reference_distance`` cells from the
hidden target. A candidate point P scores well only if it is near that ring
distance from *every* structure at once:

  * For each structure, ``d`` is the distance from its centroid to P measured
    in cell units (x and y scaled separately, so non-square cells stretch the
    rings into ellipses in pixel space).
  * ``diff`` is the worst ``|d - reference_distance|`` across structures.
    Taking the max rather than a mean is what makes this a triangulation:
    sitting on one ring but far from another rejects the point.
  * Points with ``diff <= tolerance`` are emitted with
    ``score = peak_score - diff``.

The lattice is independent of the placement grid: step ``sample_step``
pixels over the whole canvas, each sample scored at its lattice-cell centre.
Output follows scan order (x outer, y inner) and is not sorted by score.

With fewer than ``MIN_STRUCTURES`` (two) structures the result is empty;
one ring alone cannot narrow a position down.

The whole heatmap is recomputed from scratch on every call. Cost is
O(samples x structures) with a fixed sample count, vectorized across the
lattice with numpy.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .geometry import GridGeometry
from .registry import centroid
from .types import HeatmapSample, Structure, TargetingParams

logger = logging.getLogger(__name__)

MIN_STRUCTURES = 2


def sample_lattice(
    geometry: GridGeometry, step: float
) -> tuple[np.ndarray, np.ndarray]:
    """Upper-left corners of every lattice cell, flattened in scan order.

    Args:
        geometry: Canvas whose full extent is covered.
        step: Lattice spacing in pixels.

    Returns:
        ``(xs, ys)`` arrays of equal length, x varying slowest.
    """
    xs = np.arange(0, geometry.width, step, dtype=np.float64)
    ys = np.arange(0, geometry.height, step, dtype=np.float64)
    grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")
    return grid_x.ravel(), grid_y.ravel()


def ring_deviation(
    structures: Sequence[Structure],
    geometry: GridGeometry,
    pts_x: np.ndarray,
    pts_y: np.ndarray,
    reference_distance: float,
) -> np.ndarray:
    """Worst ``|d - reference_distance|`` over all structures, per point."""
    diff = np.zeros(len(pts_x), dtype=np.float64)
    for structure in structures:
        cx, cy = centroid(structure)
        c = geometry.cell_units_to_pixel(cx, cy)
        dx = (c.x - pts_x) / geometry.cell_width
        dy = (c.y - pts_y) / geometry.cell_height
        dist = np.sqrt(dx * dx + dy * dy)
        diff = np.maximum(np.abs(dist - reference_distance), diff)
    return diff


def compute_heatmap(
    structures: Sequence[Structure],
    geometry: GridGeometry,
    params: TargetingParams | None = None,
) -> list[HeatmapSample]:
    """Score every lattice point against all structure rings.

    Args:
        structures: Current structure set, in any corner order.
        geometry: Grid used to place centroids in pixel space.
        params: Ring distance, tolerance, lattice step and peak score.

    Returns:
        Samples within tolerance in scan order; empty for fewer than
        ``MIN_STRUCTURES`` structures.
    """
    if params is None:
        params = TargetingParams()
    if len(structures) < MIN_STRUCTURES:
        return []

    step = params.sample_step
    corner_x, corner_y = sample_lattice(geometry, step)
    diff = ring_deviation(
        structures,
        geometry,
        corner_x + step / 2,
        corner_y + step / 2,
        params.reference_distance,
    )

    hits = np.nonzero(diff <= params.tolerance)[0]
    samples = [
        HeatmapSample(
            x=float(corner_x[i]),
            y=float(corner_y[i]),
            w=step,
            h=step,
            score=float(params.peak_score - diff[i]),
        )
        for i in hits
    ]
    logger.debug(
        "Heatmap: %d of %d samples within tolerance for %d structures",
        len(samples),
        len(corner_x),
        len(structures),
    )
    return samples
