"""Per-stage palettes and material lookups.

Every palette is an ordered tuple consumed through ``rand_front_loaded``, so
entries near the front are the common case for that stage and the tail adds
occasional variety.
"""
from __future__ import annotations

import random
from enum import Enum
from typing import Dict, Tuple

from .randitem import rand_front_loaded
from .tiles import CeilingTile, DoorType, FloorTile, MonsterType, WallTile


class RoomShape(str, Enum):
    ORGANIC = "organic"
    CONSTRUCTED = "constructed"
    MIRROR = "mirror"
    DOUBLE_RECT = "double_rect"


class LevelStyle(str, Enum):
    CASTLE = "castle"
    CAVES = "caves"
    SEWERS = "sewers"
    HELL = "hell"
    MACHINE = "machine"

    @classmethod
    def from_name(cls, name: str) -> "LevelStyle":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Level style {name} unknown") from None

    @property
    def portal_sprite(self) -> str:
        return _PORTAL_SPRITES[self]

    @property
    def rooms(self) -> Tuple[WallTile, ...]:
        return _ROOMS[self]

    @property
    def corridors(self) -> Tuple[WallTile, ...]:
        return _CORRIDORS[self]

    @property
    def doors(self) -> Tuple[DoorType, ...]:
        return _DOORS[self]

    @property
    def monsters(self) -> Tuple[MonsterType, ...]:
        return _MONSTERS[self]


_PORTAL_SPRITES: Dict[LevelStyle, str] = {
    LevelStyle.CASTLE: "portal_castle.png",
    LevelStyle.CAVES: "portal_cave.png",
    LevelStyle.SEWERS: "portal_sewers.png",
    LevelStyle.HELL: "portal_hell.png",
    LevelStyle.MACHINE: "portal_machine.png",
}

_ROOMS: Dict[LevelStyle, Tuple[WallTile, ...]] = {
    LevelStyle.CASTLE: (
        WallTile.CASTLE,
        WallTile.BROWN_TEMPLE,
        WallTile.GRAY_TEMPLE,
        WallTile.GREEN_TEMPLE,
        WallTile.GOLD_BRICKS,
        WallTile.WOOD,
        WallTile.CAVE,
    ),
    LevelStyle.CAVES: (
        WallTile.CASTLE,
        WallTile.CAVE,
        WallTile.GRAY_BLUE_TILES,
        WallTile.BROWN_TEMPLE,
        WallTile.GRAY_TEMPLE,
        WallTile.BEEHIVE,
        WallTile.GREEN_TEMPLE,
        WallTile.GOLD_BRICKS,
        WallTile.SEWER,
    ),
    LevelStyle.SEWERS: (
        WallTile.SEWER,
        WallTile.GREEN_TEMPLE,
        WallTile.GRAY_TEMPLE,
        WallTile.CAVE,
        WallTile.GRAY_BLUE_TILES,
    ),
    LevelStyle.HELL: (WallTile.DEMONIC, WallTile.GRAY_TEMPLE, WallTile.WOOD),
    LevelStyle.MACHINE: (
        WallTile.IRON,
        WallTile.BRONZE,
        WallTile.CORRUGATED_METAL,
        WallTile.GOLD_BRICKS,
        WallTile.GRAY_BLUE_TILES,
    ),
}

_CORRIDORS: Dict[LevelStyle, Tuple[WallTile, ...]] = {
    LevelStyle.CASTLE: (WallTile.CASTLE,),
    LevelStyle.CAVES: (WallTile.CAVE,),
    LevelStyle.SEWERS: (WallTile.SEWER,),
    LevelStyle.HELL: (WallTile.GRAY_TEMPLE,),
    LevelStyle.MACHINE: (WallTile.BRONZE, WallTile.IRON),
}

_DOORS: Dict[LevelStyle, Tuple[DoorType, ...]] = {
    LevelStyle.CASTLE: (DoorType.CHIPS,),
    LevelStyle.CAVES: (),
    LevelStyle.SEWERS: (DoorType.CHIPS,),
    LevelStyle.HELL: (),
    LevelStyle.MACHINE: (DoorType.CHIPS,),
}

_MONSTERS: Dict[LevelStyle, Tuple[MonsterType, ...]] = {
    LevelStyle.CASTLE: (MonsterType.EYE_MONSTER_1, MonsterType.GOBLIN, MonsterType.IMP, MonsterType.LAIMA),
    LevelStyle.CAVES: (
        MonsterType.EYE_MONSTER_1,
        MonsterType.LAIMA,
        MonsterType.ETTIN,
        MonsterType.EYE_MONSTER_2,
        MonsterType.GOBLIN,
    ),
    LevelStyle.SEWERS: (MonsterType.LAIMA, MonsterType.EYE_MONSTER_2, MonsterType.GOBLIN, MonsterType.EYE_MONSTER_1),
    LevelStyle.HELL: (MonsterType.IMP, MonsterType.EYE_MONSTER_2, MonsterType.DEMON, MonsterType.ETTIN),
    LevelStyle.MACHINE: (MonsterType.IRON_GOLEM, MonsterType.EYE_MONSTER_2, MonsterType.ETTIN, MonsterType.DEMON),
}

# Main progression, one entry per stage. The last stage holds the phylactery.
BASE_LEVELS: Tuple[LevelStyle, ...] = (
    LevelStyle.CASTLE,
    LevelStyle.CAVES,
    LevelStyle.SEWERS,
    LevelStyle.HELL,
    LevelStyle.MACHINE,
)

# Detours offered by the second portal when it would duplicate the main one.
ALT_LEVELS: Tuple[LevelStyle, ...] = (LevelStyle.SEWERS, LevelStyle.CAVES, LevelStyle.HELL)


def style_for_level(level: int) -> LevelStyle:
    """Map a 1-based stage number to its style; stages past the end reuse the last."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    return BASE_LEVELS[min(level - 1, len(BASE_LEVELS) - 1)]


_SHAPES: Dict[WallTile, Tuple[RoomShape, ...]] = {
    WallTile.CASTLE: (RoomShape.CONSTRUCTED, RoomShape.DOUBLE_RECT, RoomShape.MIRROR),
    WallTile.BROWN_TEMPLE: (RoomShape.DOUBLE_RECT, RoomShape.CONSTRUCTED),
    WallTile.GRAY_TEMPLE: (RoomShape.MIRROR, RoomShape.CONSTRUCTED),
    WallTile.GREEN_TEMPLE: (RoomShape.CONSTRUCTED, RoomShape.DOUBLE_RECT, RoomShape.MIRROR),
    WallTile.DEMONIC: (RoomShape.DOUBLE_RECT, RoomShape.CONSTRUCTED, RoomShape.MIRROR),
    WallTile.IRON: (RoomShape.MIRROR, RoomShape.CONSTRUCTED),
    WallTile.BRONZE: (RoomShape.MIRROR, RoomShape.CONSTRUCTED),
    WallTile.CAVE: (RoomShape.ORGANIC,),
    WallTile.BEEHIVE: (RoomShape.ORGANIC,),
    WallTile.SEWER: (RoomShape.DOUBLE_RECT,),
    WallTile.CORRUGATED_METAL: (RoomShape.DOUBLE_RECT, RoomShape.CONSTRUCTED),
    WallTile.GOLD_BRICKS: (RoomShape.DOUBLE_RECT, RoomShape.CONSTRUCTED),
    WallTile.GRAY_BLUE_TILES: (RoomShape.DOUBLE_RECT, RoomShape.CONSTRUCTED),
    WallTile.WOOD: (RoomShape.DOUBLE_RECT, RoomShape.MIRROR),
}

_FLOORS: Dict[WallTile, Tuple[FloorTile, ...]] = {
    WallTile.CASTLE: (FloorTile.SAND, FloorTile.BROWN_FLOOR, FloorTile.GRAY_FLOOR),
    WallTile.BROWN_TEMPLE: (FloorTile.BROWN_FLOOR, FloorTile.SAND),
    WallTile.GRAY_TEMPLE: (FloorTile.GRAY_FLOOR, FloorTile.RAINBOW_TILES, FloorTile.SAND),
    WallTile.GREEN_TEMPLE: (FloorTile.SAND,),
    WallTile.CAVE: (FloorTile.SAND,),
    WallTile.BEEHIVE: (FloorTile.SAND,),
    WallTile.DEMONIC: (FloorTile.SAND,),
    WallTile.IRON: (FloorTile.GRAY_FLOOR, FloorTile.RAINBOW_TILES),
    WallTile.BRONZE: (FloorTile.GRAY_FLOOR, FloorTile.RAINBOW_TILES),
    WallTile.SEWER: (FloorTile.SAND,),
    WallTile.CORRUGATED_METAL: (FloorTile.SAND, FloorTile.GRAY_FLOOR),
    WallTile.GOLD_BRICKS: (FloorTile.SAND,),
    WallTile.GRAY_BLUE_TILES: (FloorTile.GRAY_FLOOR, FloorTile.RAINBOW_TILES),
    WallTile.WOOD: (FloorTile.SAND,),
}

_CEILINGS: Tuple[CeilingTile, ...] = (CeilingTile.WHITE,)


def choose_shape(wall: WallTile, rng: random.Random) -> RoomShape:
    return rand_front_loaded(_SHAPES[wall], rng)


def choose_floor(wall: WallTile, rng: random.Random) -> FloorTile:
    return rand_front_loaded(_FLOORS[wall], rng)


def choose_ceiling(wall: WallTile, rng: random.Random) -> CeilingTile:
    # single ceiling material for now; the draw keeps RNG consumption stable
    return rand_front_loaded(_CEILINGS, rng)


__all__ = [
    "RoomShape",
    "LevelStyle",
    "BASE_LEVELS",
    "ALT_LEVELS",
    "style_for_level",
    "choose_shape",
    "choose_floor",
    "choose_ceiling",
]
