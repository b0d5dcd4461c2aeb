"""Conversions between canvas pixel space and grid cell-index space.

All functions are total: indices outside ``[0, cells_x) x [0, cells_y)`` and
pixels outside the canvas convert without clamping or raising. Callers decide
whether an out-of-range result matters (the renderer simply clips it).
"""

from __future__ import annotations

import math

from .types import CellIndex, GridConfig, PixelPoint, PixelRect


def _floor_to_edge(p: float, size: float) -> int:
    """``floor(p / size)``, nudged so that ``i * size <= p < (i + 1) * size``."""
    i = math.floor(p / size)
    if (i + 1) * size <= p:
        i += 1
    elif i * size > p:
        i -= 1
    return i


class GridGeometry:
    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self.cell_width = config.cell_width
        self.cell_height = config.cell_height

    @property
    def width(self) -> int:
        return self.config.canvas_width

    @property
    def height(self) -> int:
        return self.config.canvas_height

    def pixel_to_cell(self, px: float, py: float) -> CellIndex:
        """Cell index containing a pixel, without clamping.

        Args:
            px: Canvas x in pixels; may lie off the canvas.
            py: Canvas y in pixels; may lie off the canvas.

        Returns:
            The index whose cell edges (as computed by ``cell_upper_left``)
            bracket the point, so a cell's own upper-left corner always maps
            back to that cell even for fractional cell sizes.
        """
        return CellIndex(
            _floor_to_edge(px, self.cell_width),
            _floor_to_edge(py, self.cell_height),
        )

    def cell_units_to_pixel(self, cx: float, cy: float) -> PixelPoint:
        """Scale a continuous cell-unit point (e.g. a centroid) to pixels."""
        return PixelPoint(cx * self.cell_width, cy * self.cell_height)

    # Corners are computed from (index + 1) * size rather than
    # upper_left + size so neighbouring cells share bit-identical edges.

    def cell_upper_left(self, index: CellIndex) -> PixelPoint:
        return PixelPoint(
            index.x_index * self.cell_width, index.y_index * self.cell_height
        )

    def cell_upper_right(self, index: CellIndex) -> PixelPoint:
        return PixelPoint(
            (index.x_index + 1) * self.cell_width,
            index.y_index * self.cell_height,
        )

    def cell_lower_left(self, index: CellIndex) -> PixelPoint:
        return PixelPoint(
            index.x_index * self.cell_width,
            (index.y_index + 1) * self.cell_height,
        )

    def cell_lower_right(self, index: CellIndex) -> PixelPoint:
        return PixelPoint(
            (index.x_index + 1) * self.cell_width,
            (index.y_index + 1) * self.cell_height,
        )

    def cell_to_pixel_rect(self, index: CellIndex) -> PixelRect:
        ul = self.cell_upper_left(index)
        return PixelRect(ul.x, ul.y, self.cell_width, self.cell_height)

    def contains_cell(self, index: CellIndex) -> bool:
        """True if the index lies on the drawn grid."""
        return (
            0 <= index.x_index < self.config.cells_x
            and 0 <= index.y_index < self.config.cells_y
        )
