"""Tests for structure footprints and the structure registry."""

import pytest

from .registry import (
    StructureRegistry,
    centroid,
    covered_cells,
    normalized_bounds,
    remove_containing,
    structure_contains,
)
from .types import CellIndex, Structure


def _s(x0, y0, x1, y1):
    return Structure(CellIndex(x0, y0), CellIndex(x1, y1))


class TestNormalizedFootprint:
    @pytest.mark.parametrize(
        "structure",
        [_s(2, 3, 5, 7), _s(5, 7, 2, 3), _s(2, 7, 5, 3), _s(5, 3, 2, 7)],
    )
    def test_bounds_independent_of_corner_order(self, structure):
        assert normalized_bounds(structure) == (2, 3, 5, 7)

    def test_covered_cells_identical_for_swapped_corners(self):
        a = covered_cells(_s(1, 4, 3, 2))
        b = covered_cells(_s(3, 2, 1, 4))
        assert sorted(a, key=lambda c: (c.x_index, c.y_index)) == sorted(
            b, key=lambda c: (c.x_index, c.y_index)
        )
        assert len(a) == 9

    def test_degenerate_structure_covers_one_cell(self):
        assert covered_cells(_s(4, 4, 4, 4)) == [CellIndex(4, 4)]

    def test_contains_is_inclusive_on_edges(self):
        s = _s(5, 5, 2, 2)
        for x, y in [(2, 2), (5, 5), (2, 5), (5, 2), (3, 4)]:
            assert structure_contains(s, CellIndex(x, y))
        for x, y in [(1, 3), (6, 3), (3, 1), (3, 6)]:
            assert not structure_contains(s, CellIndex(x, y))

    def test_out_of_range_indices(self):
        s = _s(-3, -3, -1, -1)
        assert structure_contains(s, CellIndex(-2, -2))
        assert not structure_contains(s, CellIndex(0, 0))


class TestCentroid:
    def test_single_cell(self):
        assert centroid(_s(0, 0, 0, 0)) == (0.5, 0.5)

    def test_rectangle(self):
        assert centroid(_s(2, 2, 5, 5)) == (4.0, 4.0)
        assert centroid(_s(8, 0, 8, 0)) == (8.5, 0.5)

    def test_swapped_corners(self):
        assert centroid(_s(6, 1, 2, 4)) == centroid(_s(2, 4, 6, 1))
        assert centroid(_s(6, 1, 2, 4)) == (4.5, 3.0)


class TestRemoveContaining:
    def test_noop_when_point_outside_every_structure(self):
        structures = [_s(0, 0, 1, 1), _s(5, 5, 6, 6)]
        assert remove_containing(structures, CellIndex(3, 3)) == structures

    def test_removes_all_overlapping(self):
        a = _s(0, 0, 4, 4)
        b = _s(6, 6, 2, 2)
        c = _s(10, 10, 12, 12)
        result = remove_containing([a, b, c], CellIndex(3, 3))
        assert result == [c]

    def test_duplicates_are_all_removed(self):
        a = _s(1, 1, 1, 1)
        assert remove_containing([a, a, a], CellIndex(1, 1)) == []

    def test_preserves_order_of_survivors(self):
        a, b, c, d = _s(0, 0, 0, 0), _s(9, 9, 9, 9), _s(1, 1, 1, 1), _s(0, 0, 2, 2)
        assert remove_containing([a, b, c, d], CellIndex(0, 0)) == [b, c]


class TestStructureRegistry:
    def test_add_preserves_insertion_order(self):
        reg = StructureRegistry()
        a, b = _s(0, 0, 1, 1), _s(0, 0, 1, 1)
        reg.add(a)
        reg.add(b)
        assert len(reg) == 2
        assert list(reg) == [a, b]

    def test_remove_containing_drops_two_overlapping(self):
        reg = StructureRegistry([_s(0, 0, 3, 3), _s(3, 3, 1, 1), _s(8, 8, 9, 9)])
        result = reg.remove_containing(CellIndex(2, 2))
        assert len(reg) == 1
        assert result == (_s(8, 8, 9, 9),)

    def test_remove_containing_noop(self):
        reg = StructureRegistry([_s(0, 0, 3, 3)])
        before = reg.snapshot()
        assert reg.remove_containing(CellIndex(10, 10)) == before
        assert len(reg) == 1

    def test_clear(self):
        reg = StructureRegistry([_s(0, 0, 3, 3), _s(1, 1, 2, 2)])
        reg.clear()
        assert len(reg) == 0
        assert reg.snapshot() == ()

    def test_snapshot_is_detached(self):
        reg = StructureRegistry()
        reg.add(_s(0, 0, 0, 0))
        snap = reg.snapshot()
        reg.add(_s(1, 1, 1, 1))
        assert len(snap) == 1
