"""Integer grid coordinates and half-open rectangles.

Both types are NamedTuples so they hash, compare and unpack like the plain
``(x, z)`` tuples used throughout the level code. ``Coords`` overrides ``+``
and ``-`` to mean vector arithmetic rather than tuple concatenation.
"""
from __future__ import annotations

import random
from typing import Iterator, NamedTuple


class Coords(NamedTuple):
    x: int
    z: int

    def __add__(self, other) -> "Coords":  # type: ignore[override]
        return Coords(self.x + other[0], self.z + other[1])

    def __sub__(self, other) -> "Coords":
        return Coords(self.x - other[0], self.z - other[1])

    def __neg__(self) -> "Coords":
        return Coords(-self.x, -self.z)

    def left(self) -> "Coords":
        return Coords(self.x - 1, self.z)

    def right(self) -> "Coords":
        return Coords(self.x + 1, self.z)

    def top(self) -> "Coords":
        return Coords(self.x, self.z - 1)

    def bottom(self) -> "Coords":
        return Coords(self.x, self.z + 1)

    def neighbors4(self) -> tuple["Coords", "Coords", "Coords", "Coords"]:
        return (self.left(), self.right(), self.top(), self.bottom())

    def transpose(self) -> "Coords":
        return Coords(self.z, self.x)

    def euclidean_dist_sq(self, other) -> int:
        dx = self.x - other[0]
        dz = self.z - other[1]
        return dx * dx + dz * dz


ZERO = Coords(0, 0)


class Rect(NamedTuple):
    """Axis aligned rectangle covering ``[p0, p1)`` on both axes."""

    p0: Coords
    p1: Coords

    @classmethod
    def from_xz(cls, x: int, z: int) -> "Rect":
        return cls(ZERO, Coords(x, z))

    @property
    def x_extent(self) -> int:
        return self.p1.x - self.p0.x

    @property
    def z_extent(self) -> int:
        return self.p1.z - self.p0.z

    def is_empty(self) -> bool:
        return self.x_extent <= 0 or self.z_extent <= 0

    def shrink(self, margin: int) -> "Rect":
        p0 = Coords(self.p0.x + margin, self.p0.z + margin)
        p1 = Coords(self.p1.x - margin, self.p1.z - margin)
        if p0.x > p1.x or p0.z > p1.z:
            raise ValueError(f"cannot shrink {self} by {margin}")
        return Rect(p0, p1)

    def contains(self, c) -> bool:
        return self.p0.x <= c[0] < self.p1.x and self.p0.z <= c[1] < self.p1.z

    def transpose(self) -> "Rect":
        return Rect(self.p0.transpose(), self.p1.transpose())

    def rand(self, rng: random.Random) -> Coords:
        """Uniformly sample a coordinate inside the rectangle."""
        if self.is_empty():
            raise ValueError(f"cannot sample empty rect {self}")
        return Coords(rng.randrange(self.p0.x, self.p1.x), rng.randrange(self.p0.z, self.p1.z))

    def rand_center(self, rng: random.Random) -> Coords:
        """Center-biased sample: each axis is ``p0 + (extent + bit) // 2``.

        The random bit alternates the rounding so even extents do not always
        land on the same side of the true center.
        """
        if self.is_empty():
            raise ValueError(f"cannot sample empty rect {self}")
        bx = rng.getrandbits(1)
        bz = rng.getrandbits(1)
        return Coords(
            self.p0.x + (self.x_extent + bx) // 2,
            self.p0.z + (self.z_extent + bz) // 2,
        )

    def cells(self) -> Iterator[Coords]:
        # x outer, z inner; wall stamping relies on this order
        for x in range(self.p0.x, self.p1.x):
            for z in range(self.p0.z, self.p1.z):
                yield Coords(x, z)


__all__ = ["Coords", "Rect", "ZERO"]
