# Tile kinds and materials centralized for modular imports
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

VOID = "void"
WALL = "wall"
OPEN = "open"


class WallTile(str, Enum):
    CASTLE = "castle"
    BROWN_TEMPLE = "brown_temple"
    GRAY_TEMPLE = "gray_temple"
    GREEN_TEMPLE = "green_temple"
    CAVE = "cave"
    SEWER = "sewer"
    BEEHIVE = "beehive"
    DEMONIC = "demonic"
    IRON = "iron"
    BRONZE = "bronze"
    CORRUGATED_METAL = "corrugated_metal"
    GOLD_BRICKS = "gold_bricks"
    GRAY_BLUE_TILES = "gray_blue_tiles"
    WOOD = "wood"


class FloorTile(str, Enum):
    SAND = "sand"
    BROWN_FLOOR = "brown_floor"
    GRAY_FLOOR = "gray_floor"
    RAINBOW_TILES = "rainbow_tiles"


class CeilingTile(str, Enum):
    WHITE = "white"


class DoorType(str, Enum):
    CHIPS = "chips"


class MonsterType(str, Enum):
    EYE_MONSTER_1 = "eye_monster_1"
    EYE_MONSTER_2 = "eye_monster_2"
    GOBLIN = "goblin"
    IMP = "imp"
    LAIMA = "laima"
    ETTIN = "ettin"
    DEMON = "demon"
    IRON_GOLEM = "iron_golem"


@dataclass(frozen=True)
class Tile:
    """One level cell: void (unassigned), a wall, or open floor.

    Two tiles are equal only when both kind and materials match, which is
    what lets overlapping rooms share cells of the same material.
    """

    kind: str
    wall: Optional[WallTile] = None
    floor: Optional[FloorTile] = None
    ceiling: Optional[CeilingTile] = None

    @classmethod
    def make_wall(cls, wall: WallTile) -> "Tile":
        return cls(WALL, wall=wall)

    @classmethod
    def make_open(cls, floor: FloorTile, ceiling: Optional[CeilingTile] = None) -> "Tile":
        return cls(OPEN, floor=floor, ceiling=ceiling)

    @property
    def is_void(self) -> bool:
        return self.kind == VOID

    @property
    def is_wall(self) -> bool:
        return self.kind == WALL

    @property
    def is_open(self) -> bool:
        return self.kind == OPEN

    def is_solid(self) -> bool:
        return self.kind != OPEN

    def to_dict(self):
        d = {"kind": self.kind}
        if self.wall is not None:
            d["wall"] = self.wall.value
        if self.floor is not None:
            d["floor"] = self.floor.value
        if self.ceiling is not None:
            d["ceiling"] = self.ceiling.value
        return d


VOID_TILE = Tile(VOID)


def tile_is_solid(tile: Tile) -> bool:
    return tile.is_solid()


__all__ = [
    "VOID",
    "WALL",
    "OPEN",
    "WallTile",
    "FloorTile",
    "CeilingTile",
    "DoorType",
    "MonsterType",
    "Tile",
    "VOID_TILE",
    "tile_is_solid",
]
