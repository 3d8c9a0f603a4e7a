"""Dense, bounds-checked 2D grid stored in a flat list."""
from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

from .coords import Coords, Rect

T = TypeVar("T")
U = TypeVar("U")


class Grid(Generic[T]):
    """Fixed size grid addressed by ``Coords`` or a raw ``(x, z)`` pair.

    Cell ``(x, z)`` lives at ``x + z * x_max`` in the backing list. Every
    access is validated; indexing outside ``[0, max)`` on either axis raises
    ``IndexError`` instead of wrapping around like a negative list index would.
    """

    __slots__ = ("_x_max", "_z_max", "_cells")

    def __init__(self, x_max: int, z_max: int, default: T):
        if x_max <= 0 or z_max <= 0:
            raise ValueError(f"grid dimensions must be positive, got {x_max}x{z_max}")
        self._x_max = x_max
        self._z_max = z_max
        self._cells: List[T] = [default] * (x_max * z_max)

    @property
    def x_max(self) -> int:
        return self._x_max

    @property
    def z_max(self) -> int:
        return self._z_max

    def size(self) -> Rect:
        return Rect.from_xz(self._x_max, self._z_max)

    def contains(self, c) -> bool:
        return 0 <= c[0] < self._x_max and 0 <= c[1] < self._z_max

    def _index(self, c) -> int:
        x, z = c
        if not (0 <= x < self._x_max and 0 <= z < self._z_max):
            raise IndexError(f"({x}, {z}) outside grid {self._x_max}x{self._z_max}")
        return x + z * self._x_max

    def __getitem__(self, c) -> T:
        return self._cells[self._index(c)]

    def __setitem__(self, c, value: T) -> None:
        self._cells[self._index(c)] = value

    def get(self, c, default=None):
        """Bounds-tolerant read used where neighbours may fall off the edge."""
        if not self.contains(c):
            return default
        return self._cells[c[0] + c[1] * self._x_max]

    def iter(self) -> Iterator[Tuple[Coords, T]]:
        """Yield ``(coords, value)`` in buffer order (z outer, x inner)."""
        x_max = self._x_max
        for i, value in enumerate(self._cells):
            yield Coords(i % x_max, i // x_max), value

    def values(self) -> List[T]:
        return list(self._cells)

    def map(self, fn: Callable[[T], U]) -> "Grid[U]":
        out: Grid[U] = Grid.__new__(Grid)
        out._x_max = self._x_max
        out._z_max = self._z_max
        out._cells = [fn(v) for v in self._cells]
        return out

    def copy(self) -> "Grid[T]":
        return self.map(lambda v: v)

    def rows(self) -> Iterator[List[T]]:
        x_max = self._x_max
        for z in range(self._z_max):
            yield self._cells[z * x_max:(z + 1) * x_max]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._x_max, self._z_max, self._cells) == (other._x_max, other._z_max, other._cells)

    def __repr__(self) -> str:
        return f"Grid({self._x_max}x{self._z_max})"


__all__ = ["Grid"]
