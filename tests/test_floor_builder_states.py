import random

import pytest

from cavern.dungeon import BuilderConsumed, FloorBuilder, FloorId, FullyConnect, TooHigh, TooLow
from cavern.dungeon.states import Blank, Filled, HasBorders, HasSecretPassages, RandomFilled, Smoothed
from cavern.dungeon.tiles import EMPTY, TileKind

from dungeon_test_utils import bfs_reachable, floor_to_ascii, grid_from_ascii

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


def _no_new_walls(r):
    return False


def test_blank_validates_sizes():
    with pytest.raises(TooLow):
        FloorBuilder.blank(FloorId(0), 9, 20)
    with pytest.raises(TooHigh):
        FloorBuilder.blank(FloorId(0), 20, 201)
    assert isinstance(FloorBuilder.blank(FloorId(0), 10, 10), Blank)


def test_state_sequence_types():
    b = FloorBuilder.blank(FloorId(0), 30, 20, rng=random.Random(4))
    rf = b.random_fill()
    assert isinstance(rf, RandomFilled)
    filled = rf.trace_original_path()
    assert isinstance(filled, Filled)
    smoothed = filled.smoothen(1, _no_new_walls)
    assert isinstance(smoothed, Smoothed)
    assert isinstance(smoothed.get_cave_borders(), HasBorders)


def test_states_only_expose_legal_transitions():
    b = FloorBuilder.blank(FloorId(0), 10, 10)
    assert not hasattr(b, "smoothen")
    assert not hasattr(b, "finish")
    assert not hasattr(Smoothed, "finish")
    assert not hasattr(HasBorders, "draw")


def test_consumed_builder_raises():
    filled = Filled.from_grid(grid_from_ascii(TWO_POCKETS))
    filled.smoothen(0, _no_new_walls)
    assert filled.consumed
    with pytest.raises(BuilderConsumed):
        filled.smoothen(0, _no_new_walls)
    with pytest.raises(BuilderConsumed):
        filled.finish()


def test_two_pockets_join_after_one_connection():
    borders = (
        Filled.from_grid(grid_from_ascii(TWO_POCKETS))
        .smoothen(0, _no_new_walls)
        .get_cave_borders()
    )
    assert len(borders.borders) == 2
    with_connections = borders.build_connections(FullyConnect())
    assert len(with_connections.connections) == 1
    rejoined = (
        with_connections.trace_connection_paths(wide=False, use_noise_map=False)
        .draw(lambda is_first, is_last, point: EMPTY)
        .smoothen(0, _no_new_walls)
        .get_cave_borders()
    )
    assert len(rejoined.borders) == 1


def test_secret_passages_join_pockets():
    grid = grid_from_ascii(TWO_POCKETS)
    secret = Filled.from_grid(grid).smoothen(0, _no_new_walls).check_for_secret_passages()
    assert isinstance(secret, HasSecretPassages)
    floor = secret.place_treasure_chests().finish()
    assert floor.count(TileKind.SECRET_DOOR) == 2
    walkable = {p for p, t in floor.iter_points_and_tiles() if not t.is_solid}
    assert bfs_reachable(floor, next(iter(walkable))) == walkable, floor_to_ascii(floor)


def test_from_grid_copies_input():
    grid = grid_from_ascii(TWO_POCKETS)
    Filled.from_grid(grid).smoothen(0, _no_new_walls).check_for_secret_passages()
    assert floor_to_ascii(grid) == floor_to_ascii(grid_from_ascii(TWO_POCKETS))

