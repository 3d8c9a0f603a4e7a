"""Public level generator interface."""

from .config import LevelGenConfig
from .coords import Coords, Rect
from .errors import LevelGenerationError, PlacementError
from .graph import Graph
from .grid import Grid
from .pathfinding import UNREACHED, Dir4, DistanceField, find_path_to
from .pipeline import LevelResult, generate_level, generate_level_with_retries
from .spawn import Door, Monster, Phylactery, Portal
from .style import BASE_LEVELS, LevelStyle, RoomShape, style_for_level
from .tiles import VOID_TILE, Tile, tile_is_solid
from .transform import GridTransform

__all__ = [
    "LevelGenConfig",
    "Coords",
    "Rect",
    "LevelGenerationError",
    "PlacementError",
    "Graph",
    "Grid",
    "UNREACHED",
    "Dir4",
    "DistanceField",
    "find_path_to",
    "LevelResult",
    "generate_level",
    "generate_level_with_retries",
    "Door",
    "Monster",
    "Phylactery",
    "Portal",
    "BASE_LEVELS",
    "LevelStyle",
    "RoomShape",
    "style_for_level",
    "VOID_TILE",
    "Tile",
    "tile_is_solid",
    "GridTransform",
]
