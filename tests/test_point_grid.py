import math

import pytest

from cavern.dungeon.bounded_int import TooHigh
from cavern.dungeon.grid import Grid
from cavern.dungeon.point import MAX_FLOOR_SIZE, Point, distance, iter_points


def test_index_and_point_at_are_inverse():
    g = Grid(4, 3, "abcdefghijkl")
    assert g.index(Point(1, 2)) == 6
    assert g.at(Point(1, 2)) == "g"
    for i in range(len(g)):
        assert g.index(g.point_at(i)) == i


def test_grid_rejects_wrong_length():
    with pytest.raises(ValueError):
        Grid(4, 3, range(11))


def test_iter_points_is_column_major():
    pts = list(iter_points(3, 2))
    assert pts[:3] == [Point(0, 0), Point(1, 0), Point(0, 1)]
    assert len(pts) == 6


def test_copy_is_independent():
    g = Grid.filled(3, 3, 0)
    c = g.copy()
    c.set(Point(1, 1), 9)
    assert g.at(Point(1, 1)) == 0
    assert g != c


def test_point_ordering_and_distance():
    assert Point(1, 5) < Point(2, 0)
    assert distance(Point(0, 0), Point(3, 4)) == 5.0
    assert math.isclose(distance(Point(1, 1), Point(2, 2)), math.sqrt(2))


def test_checked_point_and_saturation():
    assert Point.checked(3, 4) == Point(3, 4)
    with pytest.raises(TooHigh):
        Point.checked(MAX_FLOOR_SIZE + 1, 0)
    assert Point(0, 0).saturating_sub_row(1) == Point(0, 0)
    assert Point(0, MAX_FLOOR_SIZE).saturating_add_column(5) == Point(0, MAX_FLOOR_SIZE)
