import random

import pytest

from lichcrawl.levelgen.config import LevelGenConfig
from lichcrawl.levelgen.coords import Coords
from lichcrawl.levelgen.errors import LevelGenerationError
from lichcrawl.levelgen.grid import Grid
from lichcrawl.levelgen.pathfinding import UNREACHED, find_path_to
from lichcrawl.levelgen.pipeline import generate_level_with_retries
from lichcrawl.levelgen.spawn import Phylactery, Portal
from lichcrawl.levelgen.style import ALT_LEVELS, BASE_LEVELS, LevelStyle
from lichcrawl.levelgen.tiles import tile_is_solid
from lichcrawl.levelgen.transitions import (
    add_level_transition_objects,
    choose_level_transition_items,
    distance_threshold,
    spawn_object_instances,
)

from level_test_utils import CASTLE_WALL, SAND


def _line(n):
    """1 x n distance map counting up from the origin."""
    g = Grid(n, 1, UNREACHED)
    for x in range(n):
        g[x, 0] = x
    return g


def test_distance_threshold_rounds_up():
    assert distance_threshold(10, 80) == 8
    assert distance_threshold(9, 80) == 8
    assert distance_threshold(0, 80) == 0
    assert distance_threshold(5, 100) == 5


def test_first_stage_gets_main_and_side_portal():
    for seed in range(30):
        items = choose_level_transition_items(random.Random(seed), 1)
        assert items[0] == Portal(LevelStyle.CAVES)
        assert len(items) == 2
        assert isinstance(items[1], Portal)
        assert items[1].style in set(BASE_LEVELS[:3]) | set(ALT_LEVELS)


def test_next_to_last_stage_gets_single_portal():
    items = choose_level_transition_items(random.Random(0), len(BASE_LEVELS) - 1)
    assert items == [Portal(BASE_LEVELS[-1])]


def test_final_stage_gets_phylactery():
    for level in (len(BASE_LEVELS), len(BASE_LEVELS) + 3):
        assert choose_level_transition_items(random.Random(0), level) == [Phylactery()]


def test_objects_land_on_far_distinct_cells():
    placed = spawn_object_instances(_line(10), random.Random(1), [Portal(LevelStyle.CAVES), Phylactery()], 80)
    cells = [c for c, _ in placed]
    assert sorted(cells) == [Coords(8, 0), Coords(9, 0)]
    assert [o for _, o in placed] == [Portal(LevelStyle.CAVES), Phylactery()]


def test_occupied_cells_are_skipped():
    placed = spawn_object_instances(_line(10), random.Random(1), [Phylactery()], 80, occupied={Coords(9, 0)})
    assert placed == [(Coords(8, 0), Phylactery())]


def test_exhausted_pool_raises():
    objects = [Portal(LevelStyle.CAVES), Portal(LevelStyle.SEWERS), Phylactery()]
    with pytest.raises(LevelGenerationError):
        spawn_object_instances(_line(10), random.Random(1), objects, 80)


def test_nothing_reachable_raises():
    with pytest.raises(LevelGenerationError):
        spawn_object_instances(Grid(4, 4, UNREACHED), random.Random(1), [Phylactery()], 80)


def test_add_level_transition_objects_on_final_stage():
    placed = add_level_transition_objects(_line(20), random.Random(3), len(BASE_LEVELS), 80)
    assert len(placed) == 1
    (c, obj), = placed
    assert isinstance(obj, Phylactery)
    assert c.x >= 16


def test_exit_never_lands_on_start_in_sealed_pocket():
    grid = Grid(30, 30, CASTLE_WALL)
    start = Coords(10, 10)
    grid[start] = SAND
    _, dist = find_path_to(grid, tile_is_solid, start)
    with pytest.raises(LevelGenerationError):
        add_level_transition_objects(dist, random.Random(0), len(BASE_LEVELS), 80, occupied={start})


def test_generated_exits_avoid_start():
    config = LevelGenConfig(width=48, height=48)
    for seed in (1, 2, 3):
        result = generate_level_with_retries(5, seed, config)
        assert result.start not in [c for c, _ in result.objects]
