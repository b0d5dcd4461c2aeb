"""Paints a ``SessionSnapshot`` onto a Pillow image.

Layers, bottom to top: background, hovered cell, drag preview, placed
structures (with centroid markers), heatmap samples, probe circle, grid.
Translucent fills are alpha-blended, so overlapping structures darken.
"""

from __future__ import annotations

from PIL import Image, ImageDraw

from ..engine.geometry import GridGeometry
from ..engine.registry import covered_cells, normalized_bounds
from ..engine.session import SessionSnapshot
from ..engine.types import CellIndex, Structure

BACKGROUND = (255, 255, 255)
GRID_LINE = (0, 0, 0)
HOVER_FILL = (255, 0, 0, 51)
PREVIEW_FILL = (255, 0, 0, 102)
STRUCTURE_FILL = (255, 0, 0, 153)
STRUCTURE_MARKER = (255, 0, 0, 255)
HEATMAP_RGB = (0, 0, 255)
PROBE_FILL = (0, 255, 0, 51)
PROBE_OUTLINE = (0, 255, 0, 102)
PROBE_MARKER = (0, 85, 46, 255)


def _alpha(opacity: float) -> int:
    return max(0, min(255, round(opacity * 255)))


def _fill_rect(draw, x, y, w, h, fill):
    """Fill the w x h pixel block whose upper-left pixel is (x, y)."""
    draw.rectangle([x, y, x + w - 1, y + h - 1], fill=fill)


class GridRenderer:
    """Renders overlay state to a canvas-sized Pillow image."""

    def __init__(self, geometry: GridGeometry, probe_radius_cells=4.0):
        self.geometry = geometry
        self.probe_radius_cells = probe_radius_cells

    def render(self, snapshot: SessionSnapshot) -> Image.Image:
        g = self.geometry
        img = Image.new("RGB", (g.width, g.height), BACKGROUND)
        draw = ImageDraw.Draw(img, "RGBA")

        # 1. Hovered cell (placement mode only, on-grid only)
        cell = snapshot.selected_cell
        if (
            cell is not None
            and not snapshot.probe_mode
            and g.contains_cell(cell)
        ):
            self._draw_cell(draw, cell, HOVER_FILL)

        # 2. Live drag preview
        if snapshot.preview is not None:
            for cell in covered_cells(snapshot.preview):
                self._draw_cell(draw, cell, PREVIEW_FILL)

        # 3. Placed structures
        for structure in snapshot.structures:
            self._draw_structure(draw, structure)

        # 4. Heatmap
        for sample in snapshot.heatmap:
            _fill_rect(
                draw,
                sample.x,
                sample.y,
                sample.w,
                sample.h,
                HEATMAP_RGB + (_alpha(sample.score),),
            )

        # 5. Probe marker
        if snapshot.probe_mode and snapshot.probe_point is not None:
            self._draw_probe(draw, snapshot.probe_point.x, snapshot.probe_point.y)

        # 6. Grid lines
        self._draw_grid(draw)
        return img

    def _draw_cell(self, draw, cell: CellIndex, fill):
        rect = self.geometry.cell_to_pixel_rect(cell)
        _fill_rect(draw, rect.x, rect.y, rect.w, rect.h, fill)

    def _draw_structure(self, draw, structure: Structure):
        for cell in covered_cells(structure):
            self._draw_cell(draw, cell, STRUCTURE_FILL)
        min_x, min_y, max_x, max_y = normalized_bounds(structure)
        ul = self.geometry.cell_upper_left(CellIndex(min_x, min_y))
        lr = self.geometry.cell_lower_right(CellIndex(max_x, max_y))
        cx = (ul.x + lr.x) / 2
        cy = (ul.y + lr.y) / 2
        _fill_rect(draw, cx - 1, cy - 1, 3, 3, STRUCTURE_MARKER)

    def _draw_probe(self, draw, px, py):
        r = self.geometry.cell_width * self.probe_radius_cells
        draw.ellipse(
            [px - r, py - r, px + r, py + r],
            fill=PROBE_FILL,
            outline=PROBE_OUTLINE,
            width=1,
        )
        _fill_rect(draw, px - 1, py - 1, 3, 3, PROBE_MARKER)

    def _draw_grid(self, draw):
        g = self.geometry
        cfg = g.config
        w, h = g.width, g.height
        # The closing right/bottom lines sit on the canvas edge; pull them
        # back one pixel so they stay visible.
        for ix in range(cfg.cells_x + 1):
            px = min(g.cell_upper_left(CellIndex(ix, 0)).x, w - 1)
            draw.line([(px, 0), (px, h - 1)], fill=GRID_LINE, width=1)
        for iy in range(cfg.cells_y + 1):
            py = min(g.cell_upper_left(CellIndex(0, iy)).y, h - 1)
            draw.line([(0, py), (w - 1, py)], fill=GRID_LINE, width=1)
