"""Placed structures and their normalized footprints.

A ``Structure`` keeps its corners exactly as the user dragged them, so
``start`` may be right of or below ``end``. Every consumer (hit-testing,
centroid, rendering) goes through ``normalized_bounds`` so both corner
orderings describe the same footprint.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .types import CellIndex, Structure


def normalized_bounds(structure: Structure) -> tuple[int, int, int, int]:
    """Return ``(min_x, min_y, max_x, max_y)`` in cell indices, inclusive."""
    s, e = structure.start, structure.end
    return (
        min(s.x_index, e.x_index),
        min(s.y_index, e.y_index),
        max(s.x_index, e.x_index),
        max(s.y_index, e.y_index),
    )


def structure_contains(structure: Structure, point: CellIndex) -> bool:
    """Inclusive on all four edges."""
    min_x, min_y, max_x, max_y = normalized_bounds(structure)
    return (
        min_x <= point.x_index <= max_x and min_y <= point.y_index <= max_y
    )


def covered_cells(structure: Structure) -> list[CellIndex]:
    min_x, min_y, max_x, max_y = normalized_bounds(structure)
    return [
        CellIndex(x, y)
        for x in range(min_x, max_x + 1)
        for y in range(min_y, max_y + 1)
    ]


def centroid(structure: Structure) -> tuple[float, float]:
    """Footprint centre in cell units, using the +0.5 cell-centre convention.

    Args:
        structure: Structure with corners in either order.

    Returns:
        ``(cx, cy)`` in continuous cell units; a single cell ``(i, j)``
        gives ``(i + 0.5, j + 0.5)``.
    """
    min_x, min_y, max_x, max_y = normalized_bounds(structure)
    cx = (min_x + 0.5 + max_x + 0.5) / 2.0
    cy = (min_y + 0.5 + max_y + 0.5) / 2.0
    return cx, cy


def remove_containing(
    structures: Iterable[Structure], point: CellIndex
) -> list[Structure]:
    """Drop every structure whose footprint contains ``point``.

    All overlapping structures go at once, not just the most recent one.

    Args:
        structures: Structures in insertion order.
        point: Cell to hit-test, inclusive on every footprint edge.

    Returns:
        The survivors, in their original order.
    """
    return [s for s in structures if not structure_contains(s, point)]


class StructureRegistry:
    """Ordered, duplicate-tolerant collection of placed structures."""

    def __init__(self, structures: Iterable[Structure] = ()) -> None:
        self._structures: list[Structure] = list(structures)

    def __len__(self) -> int:
        return len(self._structures)

    def __iter__(self) -> Iterator[Structure]:
        return iter(self._structures)

    def add(self, structure: Structure) -> None:
        self._structures.append(structure)

    def remove_containing(self, point: CellIndex) -> tuple[Structure, ...]:
        """Remove every structure containing ``point``; return the new sequence."""
        self._structures = remove_containing(self._structures, point)
        return self.snapshot()

    def clear(self) -> None:
        self._structures = []

    def snapshot(self) -> tuple[Structure, ...]:
        return tuple(self._structures)
