"""Corridor carving between connected room anchors.

Two strategies, picked from the corridor style's room shape:

* constructed: an L made of two straight runs
* organic: a random walk biased toward the remaining distance, then widened

Both only convert solid cells, so existing floor keeps its material, and both
finish by walling the cells they carved.
"""
from __future__ import annotations

import random
from typing import List, NamedTuple, Optional

from .config import LevelGenConfig
from .coords import Coords
from .graph import Edge
from .grid import Grid
from .randitem import rand_front_loaded
from .rooms import RoomMetaData
from .style import LevelStyle, RoomShape
from .tiles import VOID_TILE, Tile

WIDEN_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class DoorCandidate(NamedTuple):
    coords: Coords
    is_vertical: bool


class CorridorResult(NamedTuple):
    shape: RoomShape
    carved: List[Coords]
    door_candidates: List[DoorCandidate]


def connect_rooms(
    level: Grid[Tile],
    rng: random.Random,
    level_style: LevelStyle,
    edge: Edge,
    config: Optional[LevelGenConfig] = None,
) -> CorridorResult:
    config = config or LevelGenConfig()
    wall = rand_front_loaded(level_style.corridors, rng)
    meta = RoomMetaData.from_wall(wall, rng)
    if meta.shape is RoomShape.ORGANIC:
        carved = carve_organic(level, rng, meta, edge.c0, edge.c1, widen=config.widen_organic_corridors)
        add_walls(level, carved, meta.wall_tile)
        return CorridorResult(meta.shape, carved, [])
    carved = carve_constructed(level, meta, edge.c0, edge.c1)
    doors = add_walls(level, carved, meta.wall_tile, find_doors=True)
    return CorridorResult(meta.shape, carved, doors)


def carve_constructed(level: Grid[Tile], meta: RoomMetaData, c0: Coords, c1: Coords) -> List[Coords]:
    """Run along ``z = c1.z`` spanning both x values, then along ``x = c0.x``.

    Every solid cell on the path is carved, Wall included, so a corridor can
    cut through a room wall; open floor keeps its material.
    """
    tile = meta.open_tile
    carved: List[Coords] = []
    x0, x1 = sorted((c0[0], c1[0]))
    z0, z1 = sorted((c0[1], c1[1]))
    for x in range(x0, x1 + 1):
        c = Coords(x, c1[1])
        if level[c].is_solid():
            level[c] = tile
            carved.append(c)
    for z in range(z0, z1 + 1):
        c = Coords(c0[0], z)
        if level[c].is_solid():
            level[c] = tile
            carved.append(c)
    return carved


def carve_organic(
    level: Grid[Tile],
    rng: random.Random,
    meta: RoomMetaData,
    c0: Coords,
    c1: Coords,
    widen: bool = True,
) -> List[Coords]:
    """Random walk from ``c0`` to ``c1``.

    Each step moves along x with probability ``|dx| / (|dx| + |dz|)``, so the
    walk always terminates exactly on ``c1``. Identical endpoints carve
    nothing.
    """
    start = Coords(*c0)
    end = Coords(*c1)
    if start == end:
        return []
    tile = meta.open_tile
    carved: List[Coords] = []
    cur = start
    while True:
        if level[cur].is_solid():
            level[cur] = tile
            carved.append(cur)
        dx = end.x - cur.x
        dz = end.z - cur.z
        if dx == 0 and dz == 0:
            break
        if rng.randrange(abs(dx) + abs(dz)) < abs(dx):
            cur = Coords(cur.x + (1 if dx > 0 else -1), cur.z)
        else:
            cur = Coords(cur.x, cur.z + (1 if dz > 0 else -1))
    if widen:
        # keep the outer ring free so every floor cell can still be walled
        inner = level.size().shrink(1)
        for pos in list(carved):
            step = rng.choice(WIDEN_DIRECTIONS)
            n = pos + step
            if inner.contains(n) and level[n].is_solid():
                level[n] = tile
                carved.append(n)
    return carved


def add_walls(
    level: Grid[Tile],
    carved: List[Coords],
    wall: Tile,
    find_doors: bool = False,
) -> List[DoorCandidate]:
    """Wall the Void neighbours of freshly carved floor.

    With ``find_doors`` it also reports carved cells that sit in a one-cell
    gap between solid tiles and join two different kinds of floor, which is
    where a corridor enters a room.
    """
    doors: List[DoorCandidate] = []
    for pos in carved:
        if not level[pos].is_open:
            continue
        l, r, t, b = pos.neighbors4()
        for n in (l, r, t, b):
            if level.contains(n) and level[n].is_void:
                level[n] = wall
        if not find_doors:
            continue
        tl, tr, tt, tb = (level.get(n, VOID_TILE) for n in (l, r, t, b))
        if tl.is_solid() and tr.is_solid() and not tt.is_solid() and not tb.is_solid() and tt != tb:
            doors.append(DoorCandidate(pos, False))
        if tt.is_solid() and tb.is_solid() and not tl.is_solid() and not tr.is_solid() and tl != tr:
            doors.append(DoorCandidate(pos, True))
    return doors


__all__ = [
    "DoorCandidate",
    "CorridorResult",
    "connect_rooms",
    "carve_constructed",
    "carve_organic",
    "add_walls",
]
