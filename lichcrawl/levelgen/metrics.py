from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_attempted': 0,
        'rooms_placed': 0,
        'rooms_dropped': 0,
        'tree_edges': 0,
        'extra_edges': 0,
        'corridors_organic': 0,
        'corridors_constructed': 0,
        'corridor_cells': 0,
        'door_candidates': 0,
        'reachable_cells': 0,
        'max_distance': 0,
        'objects_placed': 0,
        'doors_placed': 0,
        'monsters_placed': 0,
        'monsters_skipped': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
