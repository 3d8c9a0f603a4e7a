from collections import deque

from lichcrawl.levelgen.coords import Coords
from lichcrawl.levelgen.grid import Grid
from lichcrawl.levelgen.rooms import RoomMetaData
from lichcrawl.levelgen.style import RoomShape
from lichcrawl.levelgen.tiles import VOID_TILE, CeilingTile, FloorTile, Tile, WallTile

SAND = Tile.make_open(FloorTile.SAND, CeilingTile.WHITE)
GRAY = Tile.make_open(FloorTile.GRAY_FLOOR, CeilingTile.WHITE)
CASTLE_WALL = Tile.make_wall(WallTile.CASTLE)


def make_meta(shape=RoomShape.CONSTRUCTED, wall=WallTile.CASTLE, floor=FloorTile.SAND):
    return RoomMetaData(wall, shape, floor, CeilingTile.WHITE)


def grid_from_rows(rows, legend=None):
    """Build a Grid[Tile] from strings: ' ' void, '#' castle wall, '.' sand floor.

    Row index is z, column index is x.
    """
    legend = legend or {" ": VOID_TILE, "#": CASTLE_WALL, ".": SAND, ",": GRAY}
    grid = Grid(len(rows[0]), len(rows), VOID_TILE)
    for z, row in enumerate(rows):
        for x, ch in enumerate(row):
            grid[x, z] = legend[ch]
    return grid


def open_cells(grid):
    return [c for c, t in grid.iter() if t.is_open]


def bfs_depths(grid, start):
    """Plain BFS over open cells, independent of the code under test."""
    depth = {Coords(*start): 0}
    q = deque([Coords(*start)])
    while q:
        c = q.popleft()
        for n in c.neighbors4():
            if grid.contains(n) and grid[n].is_open and n not in depth:
                depth[n] = depth[c] + 1
                q.append(n)
    return depth


def graph_is_connected(graph):
    if len(graph) == 0:
        return True
    seen = {0}
    q = deque([0])
    while q:
        i = q.popleft()
        for j in graph.neighbors(i):
            if j not in seen:
                seen.add(j)
                q.append(j)
    return len(seen) == len(graph)


def level_snapshot(result):
    """Hashable view of everything a collaborator consumes."""
    return (
        tuple(result.grid.values()),
        tuple(result.start),
        tuple((tuple(c), o) for c, o in result.objects),
    )
