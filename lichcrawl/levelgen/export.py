"""Text and JSON views of a generated level (CLI output and the HTTP API)."""
from __future__ import annotations

from typing import Dict, List

from .tiles import OPEN, VOID, WALL

TILE_CHARS = {VOID: " ", WALL: "#", OPEN: "."}
START_CHAR = "@"
OBJECT_CHARS = {"portal": "P", "phylactery": "T", "monster": "m", "door": "+"}


def render_lines(result, show_objects: bool = True) -> List[str]:
    """Rows of characters, one string per z row."""
    rows = [[TILE_CHARS[t.kind] for t in row] for row in result.grid.rows()]
    if show_objects:
        for (x, z), obj in result.objects:
            rows[z][x] = OBJECT_CHARS.get(obj.kind, "?")
        sx, sz = result.start
        rows[sz][sx] = START_CHAR
    return ["".join(r) for r in rows]


def materials_legend(result) -> Dict[str, Dict]:
    """Distinct tiles keyed by a short code, with the code grid in ``rows``."""
    codes: Dict = {}
    rows: List[List[int]] = []
    for row in result.grid.rows():
        out = []
        for tile in row:
            if tile not in codes:
                codes[tile] = len(codes)
            out.append(codes[tile])
        rows.append(out)
    return {"tiles": {str(i): t.to_dict() for t, i in codes.items()}, "rows": rows}


def level_to_dict(result, include_materials: bool = False) -> Dict:
    data = {
        "level": result.level,
        "style": result.style.value,
        "seed": result.seed,
        "width": result.width,
        "height": result.height,
        "tiles": render_lines(result, show_objects=False),
        "start": list(result.start),
        "objects": [dict(obj.to_dict(), pos=[c[0], c[1]]) for c, obj in result.objects],
        "metrics": result.metrics,
    }
    if include_materials:
        data["materials"] = materials_legend(result)
    return data


__all__ = ["TILE_CHARS", "OBJECT_CHARS", "render_lines", "materials_legend", "level_to_dict"]
