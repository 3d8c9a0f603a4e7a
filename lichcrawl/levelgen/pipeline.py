"""Pipeline orchestration for level generation.

``generate_level`` runs one attempt with a caller-owned RNG:
rooms -> graph -> corridors -> start -> flood fill -> exits -> doors/monsters.
``generate_level_with_retries`` is the level-transition boundary: it owns
seeding and retries fatal failures with derived seeds.
"""
from __future__ import annotations

import hashlib
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .config import LevelGenConfig
from .coords import Coords
from .corridors import DoorCandidate, connect_rooms
from .errors import LevelGenerationError
from .grid import Grid
from .metrics import init_metrics
from .pathfinding import UNREACHED, Dir4, find_path_to
from .placement import make_map
from .population import place_doors, place_monsters
from .style import LevelStyle, RoomShape, style_for_level
from .tiles import Tile, tile_is_solid
from .transitions import Placement, add_level_transition_objects

log = get_logger("lichcrawl.levelgen")


@dataclass
class LevelResult:
    level: int
    style: LevelStyle
    grid: Grid[Tile]
    start: Coords
    objects: List[Placement]
    anchors: List[Coords] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    seed: Optional[int] = None

    @property
    def width(self) -> int:
        return self.grid.x_max

    @property
    def height(self) -> int:
        return self.grid.z_max

    def path_to(self, target) -> Tuple[Grid[Dir4], Grid[int]]:
        """Fresh direction/distance fields toward ``target``; never cached."""
        return find_path_to(self.grid, tile_is_solid, target)


def choose_start(grid: Grid[Tile], rng: random.Random, attempts: int) -> Coords:
    """Random open cell: bounded sampling, then an exhaustive scan."""
    area = grid.size()
    for _ in range(attempts):
        c = area.rand(rng)
        if not grid[c].is_solid():
            return c
    open_cells = [c for c, t in grid.iter() if not t.is_solid()]
    if not open_cells:
        raise LevelGenerationError("no open cell for the start position")
    return rng.choice(open_cells)


def generate_level(
    level: int,
    rng: random.Random,
    config: Optional[LevelGenConfig] = None,
    style: Optional[LevelStyle] = None,
    seed: Optional[int] = None,
) -> LevelResult:
    """Build one level. Raises ``LevelGenerationError`` on fatal failure.

    Adds ``phase_ms`` (phase name -> duration in ms) to the metrics.
    """
    config = config or LevelGenConfig()
    style = style or style_for_level(level)
    metrics = init_metrics()
    start_t = time.perf_counter()
    phase_times = metrics['phase_ms']

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
        phase_times[label] = int((pe - ps) * 1000)
        return r

    layout = _phase('rooms', make_map, style, rng, config, metrics)
    graph = layout.graph
    _phase('connect_tree', graph.connect_tree)
    metrics['tree_edges'] = graph.edge_count()
    metrics['extra_edges'] = _phase('add_more_edges', graph.add_more_edges, rng, config.p_connect)

    def _carve_all() -> List[DoorCandidate]:
        candidates: List[DoorCandidate] = []
        for edge in graph.to_edges():
            res = connect_rooms(layout.grid, rng, style, edge, config)
            if res.shape is RoomShape.ORGANIC:
                metrics['corridors_organic'] += 1
            else:
                metrics['corridors_constructed'] += 1
            metrics['corridor_cells'] += len(res.carved)
            candidates.extend(res.door_candidates)
        return candidates

    door_candidates = _phase('corridors', _carve_all)
    metrics['door_candidates'] = len(door_candidates)

    grid = layout.grid
    start = _phase('start', choose_start, grid, rng, config.start_search_attempts)
    _, distances = _phase('flood_fill', find_path_to, grid, tile_is_solid, start)
    reachable = [d for _, d in distances.iter() if d != UNREACHED]
    metrics['reachable_cells'] = len(reachable)
    metrics['max_distance'] = max(reachable, default=0)

    objects: List[Placement] = list(
        _phase(
            'transitions',
            add_level_transition_objects,
            distances,
            rng,
            level,
            config.spawn_distance_percent,
            occupied={start},
        )
    )
    occupied = {start}
    occupied.update(c for c, _ in objects)
    metrics['objects_placed'] = len(objects)

    doors = _phase('doors', place_doors, grid, door_candidates, style, rng, config, occupied)
    metrics['doors_placed'] = len(doors)
    monsters, skipped = _phase('monsters', place_monsters, grid, distances, style, rng, config, occupied)
    metrics['monsters_placed'] = len(monsters)
    metrics['monsters_skipped'] = skipped
    objects.extend(doors)
    objects.extend(monsters)

    metrics['runtime_ms'] = int((time.perf_counter() - start_t) * 1000)
    log.info(
        event="level_generated",
        stage=level,
        style=style.value,
        seed=seed,
        rooms=metrics['rooms_placed'],
        objects=len(objects),
        runtime_ms=metrics['runtime_ms'],
    )
    return LevelResult(
        level=level,
        style=style,
        grid=grid,
        start=start,
        objects=objects,
        anchors=[n.coords for n in graph.nodes],
        metrics=metrics,
        seed=seed,
    )


def derive_seed(seed: int, attempt: int) -> int:
    """Deterministic follow-up seed for retry ``attempt`` (attempt 0 is ``seed``)."""
    if attempt == 0:
        return seed
    h = hashlib.sha256(f"{seed}:{attempt}".encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") >> 1


def generate_level_with_retries(
    level: int,
    seed: int,
    config: Optional[LevelGenConfig] = None,
    style: Optional[LevelStyle] = None,
) -> LevelResult:
    """Generate with a fresh ``random.Random`` per attempt, retrying fatal failures.

    Re-raises the last ``LevelGenerationError`` once ``max_generation_attempts``
    is used up.
    """
    config = config or LevelGenConfig()
    last_error: Optional[LevelGenerationError] = None
    for attempt in range(config.max_generation_attempts):
        attempt_seed = derive_seed(seed, attempt)
        try:
            result = generate_level(level, random.Random(attempt_seed), config, style=style, seed=attempt_seed)
        except LevelGenerationError as e:
            e.level, e.seed = level, attempt_seed
            last_error = e
            log.warn(event="level_attempt_failed", stage=level, seed=attempt_seed, attempt=attempt, reason=str(e))
            continue
        result.metrics['attempts'] = attempt + 1
        return result
    if last_error is None:
        raise LevelGenerationError("no generation attempts configured", level=level, seed=seed)
    raise last_error


__all__ = ["LevelResult", "choose_start", "generate_level", "derive_seed", "generate_level_with_retries"]
