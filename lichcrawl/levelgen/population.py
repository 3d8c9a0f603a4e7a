"""Doors and monsters.

Both are best effort: a spawn that cannot be placed is skipped and counted,
never fatal for the level.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Set, Tuple

from ..logging_utils import get_logger
from .config import LevelGenConfig
from .coords import Coords
from .corridors import DoorCandidate
from .errors import PlacementError
from .grid import Grid
from .pathfinding import UNREACHED
from .randitem import rand_front_loaded
from .spawn import Door, Monster
from .style import LevelStyle
from .tiles import Tile
from .transitions import Placement

log = get_logger("lichcrawl.levelgen.population")


def place_doors(
    grid: Grid[Tile],
    candidates: Iterable[DoorCandidate],
    level_style: LevelStyle,
    rng: random.Random,
    config: LevelGenConfig,
    occupied: Set[Coords],
) -> List[Placement]:
    """Put doors on corridor mouths that still have solid jambs in the final grid."""
    if not level_style.doors:
        return []
    placed: List[Placement] = []
    for cand in candidates:
        if cand.coords in occupied:
            continue
        if rng.random() >= config.door_chance:
            continue
        door = Door(rand_front_loaded(level_style.doors, rng), cand.is_vertical)
        if not door.validate_pos(cand.coords, grid):
            continue
        placed.append((cand.coords, door))
        occupied.add(cand.coords)
    return placed


def _find_monster_cell(
    grid: Grid[Tile],
    distances: Grid[int],
    rng: random.Random,
    config: LevelGenConfig,
    occupied: Set[Coords],
) -> Coords:
    area = grid.size().shrink(1)
    for _ in range(config.monster_spawn_attempts):
        c = area.rand(rng)
        if grid[c].is_solid() or c in occupied:
            continue
        d = distances[c]
        if d == UNREACHED or d < config.monster_min_distance:
            continue
        return c
    raise PlacementError(f"no monster cell after {config.monster_spawn_attempts} samples")


def place_monsters(
    grid: Grid[Tile],
    distances: Grid[int],
    level_style: LevelStyle,
    rng: random.Random,
    config: LevelGenConfig,
    occupied: Set[Coords],
) -> Tuple[List[Placement], int]:
    """Scatter ``monster_count`` monsters on reachable floor away from the start.

    Returns the placements and the number of skipped monsters.
    """
    placed: List[Placement] = []
    skipped = 0
    for i in range(config.monster_count):
        monster = Monster(rand_front_loaded(level_style.monsters, rng))
        try:
            c = _find_monster_cell(grid, distances, rng, config, occupied)
        except PlacementError as e:
            skipped += 1
            log.debug(event="monster_skipped", index=i, monster=monster.monster_type.value, reason=str(e))
            continue
        placed.append((c, monster))
        occupied.add(c)
    return placed, skipped


__all__ = ["place_doors", "place_monsters"]
