import random

from cavern.dungeon.borders import extract_borders
from cavern.dungeon.point import Point

from dungeon_test_utils import grid_from_ascii

TWO_POCKETS = """
##########
#...######
#...######
#...######
##########
######...#
######...#
######...#
##########
##########
"""


def test_two_pockets_give_two_borders():
    borders, region_map = extract_borders(grid_from_ascii(TWO_POCKETS), random.Random(0))
    assert len(borders) == 2
    assert len({b.id for b in borders}) == 2
    # every walkable tile is mapped to its pocket
    assert region_map[Point(1, 1)] == region_map[Point(3, 3)]
    assert region_map[Point(1, 1)] != region_map[Point(6, 7)]


def test_border_points_are_solid_and_touch_the_cave():
    g = grid_from_ascii(TWO_POCKETS)
    borders, _ = extract_borders(g, random.Random(0))
    for b in borders:
        for p in b.points:
            assert g.at(p).is_solid
            assert 0 < p.row < g.height - 1 and 0 < p.column < g.width - 1


def test_extraction_is_deterministic_modulo_ids():
    g = grid_from_ascii(TWO_POCKETS)
    a, _ = extract_borders(g, random.Random(1))
    b, _ = extract_borders(g, random.Random(99))
    assert {bd.points for bd in a} == {bd.points for bd in b}


def test_cave_touching_only_the_frame_is_dropped():
    g = grid_from_ascii(
        """
        ##########
        #........#
        #........#
        #........#
        #........#
        #........#
        #........#
        #........#
        #........#
        ##########
        """
    )
    borders, _ = extract_borders(g, random.Random(0))
    assert borders == []
