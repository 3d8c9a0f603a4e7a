"""Breadth-first flood fill producing distance and step-direction fields."""
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Callable, Deque, Iterator, Optional, Tuple, TypeVar

from .coords import Coords
from .grid import Grid

T = TypeVar("T")

# u32 max; marks cells the fill never reached
UNREACHED = 2**32 - 1


class Dir4(str, Enum):
    """Step an agent on a cell should take to approach the fill origin.

    ``N`` is toward z-1, ``S`` toward z+1, ``E`` toward x+1, ``W`` toward x-1.
    """

    NONE = "none"
    SELF = "self"
    N = "n"
    E = "e"
    S = "s"
    W = "w"


STEP = {
    Dir4.N: (0, -1),
    Dir4.E: (1, 0),
    Dir4.S: (0, 1),
    Dir4.W: (-1, 0),
}


def find_path_to(
    grid: Grid[T],
    is_solid: Callable[[T], bool],
    target,
) -> Tuple[Grid[Dir4], Grid[int]]:
    """Flood fill from ``target`` over non-solid cells.

    Cells are finalized the first time they are dequeued while unvisited and
    walkable; later duplicates are dropped on dequeue. Off-grid neighbours are
    dropped the same way. Returns ``(directions, distances)``.
    """
    dirs: Grid[Dir4] = Grid(grid.x_max, grid.z_max, Dir4.NONE)
    distances: Grid[int] = Grid(grid.x_max, grid.z_max, UNREACHED)
    queue: Deque[Tuple[Coords, Dir4, int]] = deque()
    queue.append((Coords(*target), Dir4.SELF, 0))
    while queue:
        pos, direction, distance = queue.popleft()
        if not grid.contains(pos) or dirs[pos] is not Dir4.NONE or is_solid(grid[pos]):
            continue
        dirs[pos] = direction
        distances[pos] = distance
        queue.append((pos.right(), Dir4.W, distance + 1))
        queue.append((pos.left(), Dir4.E, distance + 1))
        queue.append((pos.bottom(), Dir4.N, distance + 1))
        queue.append((pos.top(), Dir4.S, distance + 1))
    return dirs, distances


class DistanceField:
    """Convenience view over a ``find_path_to`` result."""

    def __init__(self, grid: Grid[T], is_solid: Callable[[T], bool], target):
        self.target = Coords(*target)
        self.directions, self.distances = find_path_to(grid, is_solid, self.target)

    def distance(self, c) -> int:
        return self.distances[c]

    def is_reachable(self, c) -> bool:
        return self.distances.contains(c) and self.distances[c] != UNREACHED

    def reachable(self) -> Iterator[Tuple[Coords, int]]:
        for c, d in self.distances.iter():
            if d != UNREACHED:
                yield c, d

    def max_distance(self) -> Optional[int]:
        return max((d for _, d in self.reachable()), default=None)

    def step_from(self, c) -> Optional[Coords]:
        """Next cell toward the target, ``c`` itself at the target, None if unreachable."""
        direction = self.directions[c]
        if direction is Dir4.NONE:
            return None
        if direction is Dir4.SELF:
            return Coords(*c)
        return Coords(*c) + STEP[direction]


__all__ = ["Dir4", "UNREACHED", "STEP", "find_path_to", "DistanceField"]
