"""Stage exits: which special objects a level gets and where they go.

Special objects land only on reachable cells whose flood-fill distance from
the start is at least ``spawn_distance_percent`` of the farthest reachable
cell, so exits and the phylactery sit far from the entrance.
"""
from __future__ import annotations

import random
from typing import List, Tuple

from .coords import Coords
from .errors import LevelGenerationError
from .grid import Grid
from .pathfinding import UNREACHED
from .randitem import rand_front_loaded
from .spawn import Phylactery, Portal, SpawnObject
from .style import ALT_LEVELS, BASE_LEVELS

Placement = Tuple[Coords, SpawnObject]


def choose_level_transition_items(rng: random.Random, level: int) -> List[SpawnObject]:
    """Portals to the next stage, or the phylactery on the final stage.

    Every stage but the last two also offers a second portal, usually to a
    neighbouring stage in the progression; when that would duplicate the
    main exit a detour style is drawn instead.
    """
    next_index = level  # BASE_LEVELS is 0-based, levels are 1-based
    if next_index >= len(BASE_LEVELS):
        return [Phylactery()]
    base_style = BASE_LEVELS[next_index]
    items: List[SpawnObject] = [Portal(base_style)]
    if next_index < len(BASE_LEVELS) - 1:
        alt_index = min(max(level + rng.randint(-1, 1), 0), len(BASE_LEVELS) - 1)
        alt_style = BASE_LEVELS[alt_index]
        if alt_style == base_style:
            alt_style = rand_front_loaded(ALT_LEVELS, rng)
        items.append(Portal(alt_style))
    return items


def distance_threshold(max_distance: int, percent: int) -> int:
    # integer ceil keeps every pick >= percent% of max_distance
    return -(-max_distance * percent // 100)


def spawn_object_instances(
    dist_map: Grid[int],
    rng: random.Random,
    objects: List[SpawnObject],
    percent: int = 80,
    occupied=(),
) -> List[Placement]:
    """Assign each object a distinct far-away cell, sampling without replacement.

    Raises ``LevelGenerationError`` when nothing is reachable or the filtered
    pool runs out before every object is placed.
    """
    positions = [(c, d) for c, d in dist_map.iter() if d != UNREACHED]
    if not positions:
        raise LevelGenerationError("no reachable cells for special objects")
    max_dist = max(d for _, d in positions)
    required = distance_threshold(max_dist, percent)
    blocked = set(occupied)
    pool = [c for c, d in positions if d >= required and c not in blocked]
    placed: List[Placement] = []
    for obj in objects:
        if not pool:
            raise LevelGenerationError(
                f"candidate pool exhausted after {len(placed)} of {len(objects)} objects "
                f"(max_distance={max_dist}, required={required})"
            )
        index = rng.randrange(len(pool))
        placed.append((pool[index], obj))
        # swap-remove
        pool[index] = pool[-1]
        pool.pop()
    return placed


def add_level_transition_objects(
    dist_map: Grid[int],
    rng: random.Random,
    level: int,
    percent: int = 80,
    occupied=(),
) -> List[Placement]:
    """Place this stage's exits; cells in ``occupied`` (the start) are never used."""
    items = choose_level_transition_items(rng, level)
    return spawn_object_instances(dist_map, rng, items, percent, occupied)


__all__ = [
    "Placement",
    "choose_level_transition_items",
    "distance_threshold",
    "spawn_object_instances",
    "add_level_transition_objects",
]
