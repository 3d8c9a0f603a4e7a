"""Room placement: stamp transformed footprints into the level grid."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .config import LevelGenConfig
from .coords import Coords
from .errors import PlacementError
from .graph import Graph
from .grid import Grid
from .randitem import rand_front_loaded
from .rooms import RoomMetaData, anchor_point
from .style import LevelStyle
from .tiles import VOID_TILE, Tile
from .transform import GridTransform

log = get_logger("lichcrawl.levelgen.placement")


@dataclass
class PlacedRoom:
    meta: RoomMetaData
    footprint: Grid[Tile]
    transform: GridTransform
    anchor: Coords


@dataclass
class MapLayout:
    grid: Grid[Tile]
    graph: Graph[RoomMetaData]
    rooms: List[PlacedRoom] = field(default_factory=list)
    dropped: int = 0


def can_place_room(level: Grid[Tile], room: Grid[Tile], transform: GridTransform) -> bool:
    for src_pos in room.size().cells():
        src = room[src_pos]
        if src.is_void:
            continue
        dst = level[transform.map(src_pos)]
        if not dst.is_void and dst != src:
            return False
    return True


def check_place_room(level: Grid[Tile], room: Grid[Tile], transform: GridTransform) -> bool:
    """Stamp ``room`` into ``level`` unless a non-Void cell would conflict.

    A destination cell accepts a source tile when it is Void or already holds
    the identical tile. Returns False (and leaves ``level`` untouched) on
    conflict.
    """
    if not can_place_room(level, room, transform):
        return False
    for src_pos in room.size().cells():
        src = room[src_pos]
        if not src.is_void:
            level[transform.map(src_pos)] = src
    return True


def place_room(
    level: Grid[Tile],
    room: Grid[Tile],
    rng: random.Random,
    attempts: int,
) -> GridTransform:
    for _ in range(attempts):
        transform = GridTransform.make_rand(level.size(), room.size(), rng)
        if check_place_room(level, room, transform):
            return transform
    raise PlacementError(f"no free spot for {room.x_max}x{room.z_max} room after {attempts} transforms")


def make_map(
    level_style: LevelStyle,
    rng: random.Random,
    config: Optional[LevelGenConfig] = None,
    metrics: Optional[Dict] = None,
) -> MapLayout:
    """Place up to ``room_attempts`` rooms and register their anchors as graph nodes."""
    config = config or LevelGenConfig()
    grid: Grid[Tile] = Grid(config.width, config.height, VOID_TILE)
    layout = MapLayout(grid=grid, graph=Graph())
    for attempt in range(config.room_attempts):
        wall = rand_front_loaded(level_style.rooms, rng)
        meta = RoomMetaData.from_wall(wall, rng)
        footprint = meta.make_room(rng)
        try:
            transform = place_room(grid, footprint, rng, config.transform_attempts)
        except PlacementError as e:
            layout.dropped += 1
            log.debug(event="room_dropped", attempt=attempt, wall=wall.value, shape=meta.shape.value, reason=str(e))
            continue
        anchor = transform.map(anchor_point(footprint, rng))
        layout.graph.add_node(anchor, meta)
        layout.rooms.append(PlacedRoom(meta, footprint, transform, anchor))
    if metrics is not None:
        metrics['rooms_attempted'] += config.room_attempts
        metrics['rooms_placed'] += len(layout.rooms)
        metrics['rooms_dropped'] += layout.dropped
    return layout


__all__ = ["PlacedRoom", "MapLayout", "can_place_room", "check_place_room", "place_room", "make_map"]
