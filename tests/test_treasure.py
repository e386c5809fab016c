import random

from cavern.dungeon.geometry import all_neighbors_with_diagonals
from cavern.dungeon.tiles import EMPTY, TileKind
from cavern.dungeon.treasure import place_treasure_chests

from dungeon_test_utils import grid_from_ascii

OPEN_ROOM = """
##########
#........#
#........#
#........#
#........#
#........#
#........#
##########
"""


def test_chests_only_in_fully_open_spots():
    tiles = grid_from_ascii(OPEN_ROOM)
    placed = place_treasure_chests(tiles, random.Random(3), 2, 4)
    assert 2 <= len(placed) <= 4
    for point in placed:
        assert tiles.at(point).kind == TileKind.TREASURE_CHEST
        for n in all_neighbors_with_diagonals(point):
            # neighbours stay empty, so chests never touch walls or each other
            assert tiles.at(n) == EMPTY


def test_no_room_places_nothing():
    tiles = grid_from_ascii(
        """
        #####
        #...#
        #...#
        #####
        """
    )
    assert place_treasure_chests(tiles, random.Random(1), 5, 10) == []


def test_fewer_chests_when_space_runs_out():
    # a single fully open spot
    tiles = grid_from_ascii(
        """
        #####
        #...#
        #...#
        #...#
        #####
        """
    )
    placed = place_treasure_chests(tiles, random.Random(7), 5, 10)
    assert len(placed) == 1
    assert tuple(placed[0]) == (2, 2)


def test_on_place_called_per_chest():
    tiles = grid_from_ascii(OPEN_ROOM)
    calls = []
    placed = place_treasure_chests(tiles, random.Random(11), 3, 3, on_place=lambda: calls.append(1))
    assert len(calls) == len(placed) == 3
