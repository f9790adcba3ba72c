#!/usr/bin/env python3
"""Structural diagnostics for generated levels over a set of seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727

If no seeds are provided as CLI args, a default list is used. For each seed
an arena and a maze-arena are generated and checked: one connected region,
solid border outside exits, no two gameplay points sharing a cell.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from levelforge.generation import ArenaConfig, MazeConfig, generate_arena, generate_maze_arena  # noqa: E402
from levelforge.generation.connectivity import flood_fill_regions  # noqa: E402
from levelforge.generation.grid import boundary_cells  # noqa: E402
from levelforge.generation.tiles import OPEN  # noqa: E402

DEFAULT_SEEDS = [292372, 730727, 1, 42, 1337]


def _duplicate_points(points) -> int:
    cells = [p.cell for p in points]
    return len(cells) - len(set(cells))


def _open_border_cells(grid, allowed=()) -> int:
    allowed = set(allowed)
    return sum(1 for x, z in boundary_cells(grid) if grid[x][z] == OPEN and (x, z) not in allowed)


def run_for_seed(seed: int) -> dict:
    arena = generate_arena(ArenaConfig(seed=seed))
    arena_points = [*arena.spawns, *arena.flags, *arena.collision_points, *arena.covers]
    combo = generate_maze_arena(MazeConfig(cols=12, rows=12, seed=seed))
    combo_points = [*combo.spawns, *combo.collision_points, *combo.covers]
    issues = {
        "arena_regions": len(flood_fill_regions(arena.grid)) - 1,
        "arena_duplicate_points": _duplicate_points(arena_points),
        "maze_regions": len(flood_fill_regions(combo.grid)) - 1,
        "maze_open_border": _open_border_cells(combo.grid, combo.maze.exits),
        "maze_duplicate_points": _duplicate_points(combo_points),
    }
    return {
        "seed": seed,
        "arena_score": round(arena.score, 4),
        "arena_metrics": arena.metrics.to_dict(),
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
