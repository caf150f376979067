"""Tests for agesim.domain.grid."""

from __future__ import annotations

import math

from agesim.domain.grid import MOORE_OFFSETS, Location, distance, neighbors, within_bounds


class TestNeighbors:
    def test_interior_cell_has_eight_neighbors(self) -> None:
        result = neighbors(Location(5, 5))
        assert len(result) == 8
        assert len(set(result)) == 8

    def test_neighbors_differ_by_at_most_one_on_each_axis(self) -> None:
        origin = Location(3, 7)
        for loc in neighbors(origin):
            assert loc != origin
            assert abs(loc.x - origin.x) <= 1
            assert abs(loc.y - origin.y) <= 1
            assert abs(loc.x - origin.x) == 1 or abs(loc.y - origin.y) == 1

    def test_origin_corner_is_clipped(self) -> None:
        result = neighbors(Location(0, 0))
        assert set(result) == {Location(0, 1), Location(1, 0), Location(1, 1)}

    def test_edge_cell_has_no_negative_coordinates(self) -> None:
        for loc in neighbors(Location(0, 4)):
            assert loc.x >= 0 and loc.y >= 0
        assert len(neighbors(Location(0, 4))) == 5

    def test_upper_edge_is_not_clipped(self) -> None:
        """Upper-bound clipping is the caller's responsibility."""
        result = neighbors(Location(9, 9))
        assert Location(10, 10) in result

    def test_enumeration_order_follows_offsets(self) -> None:
        origin = Location(5, 5)
        expected = [Location(5 + dx, 5 + dy) for dx, dy in MOORE_OFFSETS]
        assert neighbors(origin) == expected

    def test_method_matches_function(self) -> None:
        loc = Location(2, 0)
        assert loc.neighbors() == neighbors(loc)


class TestLocation:
    def test_equality_by_coordinates(self) -> None:
        assert Location(1, 2) == Location(1, 2)
        assert Location(1, 2) != Location(2, 1)

    def test_hashable(self) -> None:
        assert len({Location(1, 2), Location(1, 2), Location(0, 0)}) == 2

    def test_within_bounds(self) -> None:
        assert within_bounds(Location(9, 9), 10)
        assert not within_bounds(Location(10, 3), 10)
        assert not within_bounds(Location(3, 10), 10)


class TestDistance:
    def test_zero_for_same_location(self) -> None:
        assert distance(Location(4, 4), Location(4, 4)) == 0.0

    def test_diagonal(self) -> None:
        assert math.isclose(distance(Location(0, 0), Location(1, 1)), math.sqrt(2))

    def test_pythagorean(self) -> None:
        assert distance(Location(0, 0), Location(3, 4)) == 5.0

    def test_symmetric(self) -> None:
        a, b = Location(2, 9), Location(7, 1)
        assert distance(a, b) == distance(b, a)
