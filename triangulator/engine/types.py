"""Data types for the grid overlay: cells, structures, samples, config, events.

Config dataclasses round-trip through dicts whose keys carry explicit units
(``canvas_width_px``, ``reference_distance_cells``), matching the JSON files
read by ``config_io.py``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class CellIndex:
    x_index: int
    y_index: int


@dataclass(frozen=True)
class PixelPoint:
    x: float
    y: float


@dataclass(frozen=True)
class PixelRect:
    x: float
    y: float
    w: float
    h: float

    @property
    def upper_left(self) -> PixelPoint:
        return PixelPoint(self.x, self.y)

    @property
    def upper_right(self) -> PixelPoint:
        return PixelPoint(self.x + self.w, self.y)

    @property
    def lower_left(self) -> PixelPoint:
        return PixelPoint(self.x, self.y + self.h)

    @property
    def lower_right(self) -> PixelPoint:
        return PixelPoint(self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class Structure:
    """Opposite corners of a placed rectangle, in whatever order they were dragged."""

    start: CellIndex
    end: CellIndex


@dataclass(frozen=True)
class HeatmapSample:
    """One S x S lattice cell whose centre is consistent with every ring.

    ``x``/``y`` is the upper-left corner; the scored point is ``center``.
    """

    x: float
    y: float
    w: float
    h: float
    score: float

    @property
    def center(self) -> PixelPoint:
        return PixelPoint(self.x + self.w / 2, self.y + self.h / 2)


def _positive_int(d: dict, key: str, default: int) -> int:
    """Read a pixel size or cell count: a whole number above zero."""
    value = d.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value!r}")
    return value


def _number(d: dict, key: str, default: float, positive: bool = False) -> float:
    """Read a finite real; non-negative, or strictly positive if asked."""
    value = d.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{key} must be finite, got {value!r}")
    if positive and value <= 0:
        raise ValueError(f"{key} must be positive, got {value!r}")
    if value < 0:
        raise ValueError(f"{key} must not be negative, got {value!r}")
    return value


def _section(d: dict, key: str) -> dict | None:
    value = d.get(key)
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"{key} must be a JSON object, got {value!r}")
    return value


@dataclass(frozen=True)
class GridConfig:
    canvas_width: int = 720
    canvas_height: int = 720
    cells_x: int = 24
    cells_y: int = 24

    @property
    def cell_width(self) -> float:
        return self.canvas_width / self.cells_x

    @property
    def cell_height(self) -> float:
        return self.canvas_height / self.cells_y

    @staticmethod
    def from_dict(d: dict | None) -> GridConfig:
        """Build a validated grid config; missing keys take reference values.

        Raises:
            ValueError: if a size or count is not a positive integer.
        """
        if not d:
            return GridConfig()
        return GridConfig(
            canvas_width=_positive_int(d, "canvas_width_px", 720),
            canvas_height=_positive_int(d, "canvas_height_px", 720),
            cells_x=_positive_int(d, "cells_x", 24),
            cells_y=_positive_int(d, "cells_y", 24),
        )

    def to_dict(self) -> dict:
        return {
            "canvas_width_px": self.canvas_width,
            "canvas_height_px": self.canvas_height,
            "cells_x": self.cells_x,
            "cells_y": self.cells_y,
        }


@dataclass(frozen=True)
class TargetingParams:
    reference_distance: float = 4.5
    tolerance: float = 0.5
    sample_step: float = 2
    peak_score: float = 0.7

    @staticmethod
    def from_dict(d: dict | None) -> TargetingParams:
        """Build validated targeting parameters; missing keys take defaults.

        Raises:
            ValueError: if a value is not a finite number, is negative, or
                (for ``sample_step_px``) is zero.
        """
        if not d:
            return TargetingParams()
        return TargetingParams(
            reference_distance=_number(d, "reference_distance_cells", 4.5),
            tolerance=_number(d, "tolerance_cells", 0.5),
            sample_step=_number(d, "sample_step_px", 2, positive=True),
            peak_score=_number(d, "peak_score", 0.7),
        )

    def to_dict(self) -> dict:
        return {
            "reference_distance_cells": self.reference_distance,
            "tolerance_cells": self.tolerance,
            "sample_step_px": self.sample_step,
            "peak_score": self.peak_score,
        }


@dataclass(frozen=True)
class OverlayConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    targeting: TargetingParams = field(default_factory=TargetingParams)
    probe_radius_cells: float = 4.0

    @staticmethod
    def from_dict(d: dict) -> OverlayConfig:
        return OverlayConfig(
            grid=GridConfig.from_dict(_section(d, "grid")),
            targeting=TargetingParams.from_dict(_section(d, "targeting")),
            probe_radius_cells=_number(d, "probe_radius_cells", 4.0),
        )

    def to_dict(self) -> dict:
        return {
            "grid": self.grid.to_dict(),
            "targeting": self.targeting.to_dict(),
            "probe_radius_cells": self.probe_radius_cells,
        }


# -- interaction state --


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    anchor: CellIndex


InteractionState = Union[Idle, Dragging]


# -- input events --


@dataclass(frozen=True)
class PointerDown:
    pass


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class DoubleClick:
    pass


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class ModeToggle:
    probe: bool


@dataclass(frozen=True)
class ClearRequested:
    pass


Event = Union[
    PointerDown, PointerUp, DoubleClick, PointerMove, ModeToggle, ClearRequested
]
