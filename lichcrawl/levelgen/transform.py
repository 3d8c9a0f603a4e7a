"""Affine placement transform used to stamp room footprints into a level.

Mapping order is fixed: swap axes, then negate flipped axes, then translate.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from .coords import Coords, Rect


@dataclass
class GridTransform:
    dx: int
    dz: int
    swap_xz: bool = False
    flip_x: bool = False
    flip_z: bool = False

    @classmethod
    def new(cls, dx: int, dz: int, swap_xz: bool) -> "GridTransform":
        return cls(dx=dx, dz=dz, swap_xz=swap_xz)

    @classmethod
    def make_rand(cls, map_size: Rect, room_size: Rect, rng: random.Random) -> "GridTransform":
        """Random transform that keeps ``room_size`` inside ``map_size``.

        Draw order (swap, dx, dz, flip x, flip z) is part of the contract:
        the same RNG state always yields the same transform.
        """
        swap_xz = bool(rng.getrandbits(1))
        if swap_xz:
            room_size = room_size.transpose()
        if room_size.p1.x >= map_size.p1.x or room_size.p1.z >= map_size.p1.z:
            raise ValueError(f"room {room_size} does not fit into {map_size}")
        t = cls.new(
            rng.randrange(map_size.p0.x, map_size.p1.x - room_size.p1.x),
            rng.randrange(map_size.p0.z, map_size.p1.z - room_size.p1.z),
            swap_xz,
        )
        if rng.getrandbits(1):
            t.do_flip_x(room_size)
        if rng.getrandbits(1):
            t.do_flip_z(room_size)
        return t

    def do_flip_x(self, room_size: Rect) -> None:
        # shift keeps the flipped footprint on the same cells
        delta = room_size.p1.x - 1
        self.flip_x = not self.flip_x
        self.dx += delta if self.flip_x else -delta

    def do_flip_z(self, room_size: Rect) -> None:
        delta = room_size.p1.z - 1
        self.flip_z = not self.flip_z
        self.dz += delta if self.flip_z else -delta

    def do_swap(self) -> None:
        self.swap_xz = not self.swap_xz

    def map(self, c) -> Coords:
        x, z = c
        if self.swap_xz:
            x, z = z, x
        if self.flip_x:
            x = -x
        if self.flip_z:
            z = -z
        return Coords(x + self.dx, z + self.dz)

    def map_xz(self, x: int, z: int) -> Coords:
        return self.map((x, z))


__all__ = ["GridTransform"]
