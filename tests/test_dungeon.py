import io
import random

import pytest
from PIL import Image

from cavern.dungeon import Dungeon, DungeonType, TileKind, TooHigh, TooLow
from cavern.dungeon.borders import extract_borders
from cavern.dungeon.grid import Grid

from dungeon_test_utils import bfs_reachable, floor_to_ascii, walkable_points

SEEDS = [1, 7, 42, 1234, 98765]


@pytest.mark.parametrize("seed", SEEDS)
def test_floor_invariants(seed):
    d = Dungeon(30, 40, 1, seed=seed)
    floor = d.floors[0]
    assert floor.width == 40 and floor.height == 30
    assert len(floor.data) == 40 * 30
    assert floor.count(TileKind.ENTRANCE) == 1
    assert floor.count(TileKind.EXIT) == 1
    reachable = bfs_reachable(floor, floor.entrance)
    missing = walkable_points(floor) - reachable
    assert not missing, f"unreachable tiles {sorted(missing)[:5]}\n{floor_to_ascii(floor)}"
    assert floor.exit in reachable


@pytest.mark.parametrize("seed", SEEDS[:3])
def test_finished_floor_is_one_cave(seed):
    floor = Dungeon(25, 25, seed=seed).floors[0]
    borders, _ = extract_borders(Grid(floor.width, floor.height, list(floor.data)), random.Random(0))
    assert len(borders) <= 1


def test_frame_is_wall():
    floor = Dungeon(20, 30, seed=5).floors[0]
    for point, tile in floor.iter_points_and_tiles():
        r, c = point
        if r in (0, floor.height - 1) or c in (0, floor.width - 1):
            assert tile.kind == TileKind.WALL, f"frame tile {point} is {tile.kind.name}"


def test_minimum_size_floor():
    d = Dungeon(10, 10, seed=3)
    assert len(d.floors[0].data) == 100


def test_non_square_floor_dimensions():
    floor = Dungeon(12, 60, seed=9).floors[0]
    assert (floor.width, floor.height) == (60, 12)


def test_same_seed_same_dungeon():
    a = Dungeon(30, 30, 2, seed=2024)
    b = Dungeon(30, 30, 2, seed=2024)
    assert a.to_json() == b.to_json()


def test_different_seeds_differ():
    assert Dungeon(30, 30, seed=1).to_json() != Dungeon(30, 30, seed=2).to_json()


def test_floors_of_one_dungeon_differ():
    d = Dungeon(30, 30, 3, seed=77)
    assert len(d.floors) == 3
    assert d.floors[0].data != d.floors[1].data


def test_json_round_trip():
    d = Dungeon(20, 25, 2, seed=11)
    back = Dungeon.from_json(d.to_json())
    assert back.dungeon_type == DungeonType.CAVE
    assert [f.data for f in back.floors] == [f.data for f in d.floors]
    assert back.to_json() == d.to_json()


def test_json_shape():
    payload = Dungeon(15, 15, seed=4).to_dict()
    assert payload["dungeon_type"] == "Cave"
    floor = payload["floors"][0]
    assert set(floor) == {"width", "height", "data"}
    assert "Wall" in floor["data"]


def test_dungeon_gif_one_frame_per_floor():
    d = Dungeon(20, 20, 3, seed=31)
    data = d.to_gif()
    assert data[:6] == b"GIF89a"
    img = Image.open(io.BytesIO(data))
    assert img.size == (20, 20)
    assert img.n_frames == 3


def test_ascii_export_lists_every_floor():
    d = Dungeon(12, 14, 2, seed=8)
    text = d.to_ascii()
    assert text.startswith("Floor 0\n")
    assert "\n\nFloor 1\n" in text
    single = d.to_ascii(1)
    lines = single.splitlines()
    assert len(lines) == 12
    assert all(len(line) == 28 for line in lines)


def test_metrics_collected():
    d = Dungeon(25, 25, 2, seed=13)
    m = d.metrics
    for key in ("attempts", "borders_initial", "connections_built", "secret_passage_rounds", "runtime_ms", "phase_ms"):
        assert key in m
    assert m["attempts"] >= 2
    assert len(m["floors"]) == 2
    assert "random_fill" in m["phase_ms"]


def test_forest_uses_cave_pipeline():
    cave = Dungeon(20, 20, seed=99)
    forest = Dungeon(20, 20, dungeon_type="forest", seed=99)
    assert forest.dungeon_type == DungeonType.FOREST
    assert [f.data for f in forest.floors] == [f.data for f in cave.floors]
    assert forest.to_dict()["dungeon_type"] == "Forest"


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        Dungeon(20, 20, dungeon_type="swamp", seed=1)


@pytest.mark.parametrize("height,width,exc", [(9, 20, TooLow), (20, 0, TooLow), (201, 20, TooHigh), (20, 500, TooHigh)])
def test_invalid_sizes(height, width, exc):
    with pytest.raises(exc):
        Dungeon(height, width, seed=1)


@pytest.mark.parametrize("floors", [0, -1, True])
def test_invalid_floor_count(floors):
    with pytest.raises(ValueError):
        Dungeon(20, 20, floors, seed=1)


def test_seed_zero_is_kept():
    assert Dungeon(10, 10, seed=0).seed == 0


def test_random_seed_when_missing():
    d = Dungeon(10, 10)
    assert 1 <= d.seed <= 1_000_000
