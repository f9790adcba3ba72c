"""Breadth-first distance fields over open cells.

A field is a fresh grid of hop counts from a seed; cells in another region,
walls, and everything when the seed itself is a wall hold ``UNREACHABLE``.
"""
from __future__ import annotations

from collections import deque
from typing import List, Optional

from .grid import Cell, Grid, create_grid, grid_size, in_bounds, neighbors4
from .tiles import OPEN

UNREACHABLE = -1

DistanceField = List[List[int]]


def compute_distances(grid: Grid, seed: Cell) -> DistanceField:
    cols, rows = grid_size(grid)
    dist = create_grid(cols, rows, UNREACHABLE)
    sx, sz = seed
    if not in_bounds(grid, sx, sz) or grid[sx][sz] != OPEN:
        return dist
    dist[sx][sz] = 0
    q = deque([(sx, sz)])
    while q:
        x, z = q.popleft()
        d = dist[x][z] + 1
        for nx, nz in neighbors4(x, z, cols, rows):
            if grid[nx][nz] != OPEN or dist[nx][nz] != UNREACHABLE:
                continue
            dist[nx][nz] = d
            q.append((nx, nz))
    return dist


def farthest_cell(dist: DistanceField, exclude=None) -> Optional[Cell]:
    """Cell with the largest finite distance; first in scan order wins ties.

    ``exclude`` is an optional container of cells to skip. Returns None when
    nothing is reachable; callers fall back to the seed.
    """
    best = None
    best_d = UNREACHABLE
    for x, column in enumerate(dist):
        for z, d in enumerate(column):
            if d <= best_d:
                continue
            if exclude is not None and (x, z) in exclude:
                continue
            best, best_d = (x, z), d
    return best


__all__ = ["UNREACHABLE", "DistanceField", "compute_distances", "farthest_cell"]
