"""Room footprint generators.

A footprint is a small ``Grid[Tile]`` in room-local coordinates. Every shape
keeps a one cell Void margin around its floor so ``add_walls`` can ring the
floor without leaving the footprint.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .coords import Coords, Rect
from .grid import Grid
from .style import RoomShape, choose_ceiling, choose_floor, choose_shape
from .tiles import VOID_TILE, CeilingTile, FloorTile, Tile, WallTile

ORGANIC_RANGE = (8, 16)
CONSTRUCTED_X_RANGE = (5, 14)
CONSTRUCTED_Z_RANGE = (4, 12)
MIRROR_RANGE = (10, 20)
DOUBLE_RECT_RANGE = (5, 14)
DOUBLE_RECT_MIN_BAND = 4


@dataclass(frozen=True)
class RoomMetaData:
    wall: WallTile
    shape: RoomShape
    floor: FloorTile
    ceiling: CeilingTile

    @classmethod
    def from_wall(cls, wall: WallTile, rng: random.Random) -> "RoomMetaData":
        shape = choose_shape(wall, rng)
        floor = choose_floor(wall, rng)
        ceiling = choose_ceiling(wall, rng)
        return cls(wall, shape, floor, ceiling)

    @property
    def open_tile(self) -> Tile:
        return Tile.make_open(self.floor, self.ceiling)

    @property
    def wall_tile(self) -> Tile:
        return Tile.make_wall(self.wall)

    def make_room(self, rng: random.Random) -> Grid[Tile]:
        if self.shape is RoomShape.ORGANIC:
            x_max = rng.randrange(*ORGANIC_RANGE)
            z_max = rng.randrange(*ORGANIC_RANGE)
            room = self.make_organic_floor(x_max, z_max, rng)
        elif self.shape is RoomShape.CONSTRUCTED:
            x_max = rng.randrange(*CONSTRUCTED_X_RANGE)
            z_max = rng.randrange(*CONSTRUCTED_Z_RANGE)
            room = self.make_constructed_floor(x_max, z_max, rng)
        elif self.shape is RoomShape.MIRROR:
            room = self.make_mirror_floor(rng)
        else:
            room = self.make_doublerect_floor(rng)
        self.add_walls(room)
        return room

    def make_organic_floor(self, x_max: int, z_max: int, rng: random.Random) -> Grid[Tile]:
        """Star shaped blob: floor where the scaled radius is under a lobed bound."""
        room: Grid[Tile] = Grid(x_max + 2, z_max + 2, VOID_TILE)
        cx, cz = (x_max + 1) / 2.0, (z_max + 1) / 2.0
        sx, sz = 2.0 / x_max, 2.0 / z_max
        lobes = rng.randint(3, 5)
        phase = rng.random() * math.tau
        tile = self.open_tile
        for c in room.size().shrink(1).cells():
            dx = (c.x - cx) * sx
            dz = (c.z - cz) * sz
            length = math.hypot(dx, dz)
            if length == 0.0:
                room[c] = tile
                continue
            angle = math.atan2(dx, dz)
            if length < math.sin(angle * lobes + phase) * 0.25 + 0.75:
                room[c] = tile
        return room

    def make_constructed_floor(self, x_max: int, z_max: int, rng: random.Random) -> Grid[Tile]:
        """Solid rectangle with optional colonnades near the top and bottom edges."""
        if x_max % 2 == 0:
            x_max += 1
        room: Grid[Tile] = Grid(x_max + 2, z_max + 2, VOID_TILE)
        tile = self.open_tile
        for c in room.size().shrink(1).cells():
            room[c] = tile
        column_pos = rng.randrange(0, 3)
        if column_pos > 0 and z_max > 2 + column_pos * 2:
            z0 = column_pos
            z1 = z_max + 1 - column_pos
            for x in range(2, x_max, 2):
                room[x, z0] = VOID_TILE
                room[x, z1] = VOID_TILE
        return room

    def make_mirror_floor(self, rng: random.Random) -> Grid[Tile]:
        x_max = rng.randrange(*MIRROR_RANGE) + 2
        z_max = rng.randrange(x_max * 3 // 8, x_max * 6 // 8) + 2
        room: Grid[Tile] = Grid(x_max, z_max, VOID_TILE)
        tile = self.open_tile
        for x in range(1, x_max - 1):
            dz = rng.randrange(1, z_max // 2)
            for z in range(dz, z_max - dz):
                room[x, z] = tile
        return room

    def make_doublerect_floor(self, rng: random.Random) -> Grid[Tile]:
        """Union of a full-height band and a full-width band (a cross or an L/T)."""
        x_max = rng.randrange(*DOUBLE_RECT_RANGE) + 2
        z_max = rng.randrange(*DOUBLE_RECT_RANGE) + 2
        room: Grid[Tile] = Grid(x_max, z_max, VOID_TILE)
        x_short = rng.randrange(DOUBLE_RECT_MIN_BAND, x_max)
        z_short = rng.randrange(DOUBLE_RECT_MIN_BAND, z_max)
        dx = rng.randrange(0, x_max - x_short)
        dz = rng.randrange(0, z_max - z_short)
        bands = (
            Rect(Coords(dx, 0), Coords(x_short + dx, z_max)),
            Rect(Coords(0, dz), Coords(x_max, z_short + dz)),
        )
        tile = self.open_tile
        for band in bands:
            for c in band.shrink(1).cells():
                room[c] = tile
        return room

    def add_walls(self, room: Grid[Tile]) -> None:
        add_walls(room, self.wall_tile)


def add_walls(room: Grid[Tile], wall: Tile) -> None:
    """Turn every Void cell 4-adjacent to open floor into ``wall``."""
    for c in room.size().cells():
        if not room[c].is_open:
            continue
        for n in c.neighbors4():
            if room.contains(n) and room[n].is_void:
                room[n] = wall


def anchor_point(room: Grid[Tile], rng: random.Random) -> Coords:
    """Center-biased anchor inside the footprint, snapped to the nearest floor cell.

    Irregular shapes do not always have floor at the sampled center, and
    corridors must start on walkable ground.
    """
    c = room.size().rand_center(rng)
    if room.contains(c) and room[c].is_open:
        return c
    best = None
    best_d = None
    for cell in room.size().cells():
        if not room[cell].is_open:
            continue
        d = cell.euclidean_dist_sq(c)
        if best_d is None or d < best_d:
            best, best_d = cell, d
    return best if best is not None else c


def make_room(wall: WallTile, rng: random.Random) -> tuple[RoomMetaData, Grid[Tile]]:
    meta = RoomMetaData.from_wall(wall, rng)
    return meta, meta.make_room(rng)


__all__ = ["RoomMetaData", "add_walls", "anchor_point", "make_room"]
