"""ASCII rendering of generated grids for the CLI and debugging.

Rows are printed top to bottom in ``z`` order, one character per cell:

    #  wall            .  open
    A/B spawns         a/b team flags, n neutral flag
    X  collision point c  cover
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from .grid import Grid, grid_size
from .tiles import NEUTRAL, TEAM_A, TEAM_B, WALL

WALL_CHAR = "#"
OPEN_CHAR = "."
FLAG_CHARS = {TEAM_A: "a", TEAM_B: "b", NEUTRAL: "n"}


def render_ascii(
    grid: Grid,
    spawns: Optional[Iterable] = None,
    flags: Optional[Iterable] = None,
    collision_points: Optional[Iterable] = None,
    covers: Optional[Iterable] = None,
) -> str:
    cols, rows = grid_size(grid)
    canvas: List[List[str]] = [
        [WALL_CHAR if grid[x][z] == WALL else OPEN_CHAR for x in range(cols)] for z in range(rows)
    ]

    def mark(points, char_for):
        for p in points or ():
            if 0 <= p.x < cols and 0 <= p.z < rows:
                canvas[p.z][p.x] = char_for(p)

    # later layers win; spawns are drawn last so they are never hidden
    mark(covers, lambda p: "c")
    mark(collision_points, lambda p: "X")
    mark(flags, lambda p: FLAG_CHARS.get(getattr(p, "type", ""), "n"))
    mark(list(spawns or ())[:1], lambda p: "A")
    mark(list(spawns or ())[1:2], lambda p: "B")
    return "\n".join("".join(row) for row in canvas)


def render_result(result) -> str:
    """Render any generator result, picking up whichever point lists it has."""
    return render_ascii(
        result.grid,
        spawns=getattr(result, "spawns", None),
        flags=getattr(result, "flags", None),
        collision_points=getattr(result, "collision_points", None),
        covers=getattr(result, "covers", None),
    )


__all__ = ["render_ascii", "render_result", "WALL_CHAR", "OPEN_CHAR"]
