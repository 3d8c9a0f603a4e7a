import random

import pytest

from lichcrawl.levelgen.config import LevelGenConfig
from lichcrawl.levelgen.errors import PlacementError
from lichcrawl.levelgen.grid import Grid
from lichcrawl.levelgen.metrics import init_metrics
from lichcrawl.levelgen.placement import check_place_room, make_map, place_room
from lichcrawl.levelgen.rooms import add_walls
from lichcrawl.levelgen.style import LevelStyle, RoomShape
from lichcrawl.levelgen.tiles import VOID_TILE, FloorTile, WallTile
from lichcrawl.levelgen.transform import GridTransform

from level_test_utils import CASTLE_WALL, GRAY, SAND, make_meta


def _room(seed=0, floor=FloorTile.SAND, wall=WallTile.CASTLE):
    return make_meta(RoomShape.CONSTRUCTED, wall=wall, floor=floor).make_room(random.Random(seed))


def test_check_place_room_stamps_non_void_cells():
    level = Grid(30, 30, VOID_TILE)
    room = _room()
    t = GridTransform.new(3, 4, False)
    assert check_place_room(level, room, t)
    for c, tile in room.iter():
        if tile.is_void:
            assert level[t.map(c)].is_void
        else:
            assert level[t.map(c)] == tile


def test_identical_tiles_may_overlap():
    level = Grid(30, 30, VOID_TILE)
    room = _room()
    t = GridTransform.new(3, 4, False)
    assert check_place_room(level, room, t)
    assert check_place_room(level, room, t)


def test_conflict_leaves_level_untouched():
    level = Grid(30, 30, VOID_TILE)
    assert check_place_room(level, _room(), GridTransform.new(3, 4, False))
    snapshot = level.copy()
    other = _room(floor=FloorTile.GRAY_FLOOR, wall=WallTile.IRON)
    assert not check_place_room(level, other, GridTransform.new(5, 5, False))
    assert level == snapshot


def test_place_room_raises_after_attempt_budget():
    level = Grid(30, 30, GRAY)
    with pytest.raises(PlacementError):
        place_room(level, _room(), random.Random(1), attempts=5)


def test_make_map_registers_one_node_per_placed_room():
    config = LevelGenConfig(width=48, height=48, room_attempts=30)
    metrics = init_metrics()
    layout = make_map(LevelStyle.CASTLE, random.Random(5), config, metrics)
    assert len(layout.graph) == len(layout.rooms) > 0
    assert metrics['rooms_attempted'] == 30
    assert metrics['rooms_placed'] + metrics['rooms_dropped'] == 30
    for node, placed in zip(layout.graph.nodes, layout.rooms):
        assert node.coords == placed.anchor
        assert node.data == placed.meta
        assert layout.grid[node.coords].is_open


def test_make_map_is_deterministic():
    config = LevelGenConfig(width=48, height=48)
    a = make_map(LevelStyle.CAVES, random.Random(11), config)
    b = make_map(LevelStyle.CAVES, random.Random(11), config)
    assert a.grid == b.grid
    assert [n.coords for n in a.graph.nodes] == [n.coords for n in b.graph.nodes]


def test_single_cell_room_keeps_its_wall_ring_under_any_transform():
    room = Grid(3, 3, VOID_TILE)
    room[1, 1] = SAND
    add_walls(room, CASTLE_WALL)
    for seed in range(30):
        level = Grid(24, 24, VOID_TILE)
        t = place_room(level, room, random.Random(seed), attempts=1)
        floor = t.map((1, 1))
        assert level[floor] == SAND
        assert all(level[n] == CASTLE_WALL for n in floor.neighbors4())
        assert sum(1 for _, tile in level.iter() if not tile.is_void) == 5
