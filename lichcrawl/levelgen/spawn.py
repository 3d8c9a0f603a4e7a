"""Spawn object descriptors handed to the entity spawner."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .coords import Coords
from .grid import Grid
from .style import LevelStyle
from .tiles import VOID_TILE, DoorType, MonsterType, Tile


@dataclass(frozen=True)
class Portal:
    style: LevelStyle
    kind = "portal"

    def validate_pos(self, pos: Coords, grid: Grid[Tile]) -> bool:
        return not grid[pos].is_solid()

    def to_dict(self):
        return {"kind": self.kind, "style": self.style.value, "sprite": self.style.portal_sprite}


@dataclass(frozen=True)
class Monster:
    monster_type: MonsterType
    kind = "monster"

    def validate_pos(self, pos: Coords, grid: Grid[Tile]) -> bool:
        return not grid[pos].is_solid()

    def to_dict(self):
        return {"kind": self.kind, "monster_type": self.monster_type.value}


@dataclass(frozen=True)
class Door:
    door_type: DoorType
    is_vertical: bool
    kind = "door"

    def validate_pos(self, pos: Coords, grid: Grid[Tile]) -> bool:
        """A door needs solid jambs: above and below when vertical, else left and right."""
        if grid[pos].is_solid():
            return False
        if self.is_vertical:
            jambs = (pos.top(), pos.bottom())
        else:
            jambs = (pos.left(), pos.right())
        return all(grid.get(j, VOID_TILE).is_solid() for j in jambs)

    def to_dict(self):
        return {"kind": self.kind, "door_type": self.door_type.value, "is_vertical": self.is_vertical}


@dataclass(frozen=True)
class Phylactery:
    """The lich's phylactery; placed instead of portals on the final stage."""

    kind = "phylactery"

    def validate_pos(self, pos: Coords, grid: Grid[Tile]) -> bool:
        return not grid[pos].is_solid()

    def to_dict(self):
        return {"kind": self.kind}


SpawnObject = Union[Portal, Monster, Door, Phylactery]

__all__ = ["Portal", "Monster", "Door", "Phylactery", "SpawnObject"]
