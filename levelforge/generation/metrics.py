from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    """Generation statistics counters shared by the generators."""
    return {
        'candidates_built': 0,
        'corridors_carved': 0,
        'exit_retries': 0,
        'pocket_retries': 0,
        'cells_carved': 0,
        'rooms_placed': 0,
        'room_attempts': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
