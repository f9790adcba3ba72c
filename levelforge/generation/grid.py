"""Shared 2D occupancy grid helpers.

Grids are column-major lists (``grid[x][z]``) holding ``OPEN``/``WALL``.
Both generators build on these helpers; nothing here draws randomness.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple

from .tiles import OPEN, WALL

Grid = List[List[int]]
Cell = Tuple[int, int]

DIRS4 = ((-1, 0), (1, 0), (0, -1), (0, 1))


def create_grid(cols: int, rows: int, fill=OPEN) -> list:
    return [[fill for _ in range(rows)] for _ in range(cols)]


def grid_size(grid) -> Tuple[int, int]:
    return len(grid), (len(grid[0]) if grid else 0)


def in_bounds(grid, x: int, z: int) -> bool:
    cols, rows = grid_size(grid)
    return 0 <= x < cols and 0 <= z < rows


def neighbors4(x: int, z: int, cols: int, rows: int) -> Iterator[Cell]:
    """Yield the in-bounds orthogonal neighbours of ``(x, z)``."""
    for dx, dz in DIRS4:
        nx, nz = x + dx, z + dz
        if 0 <= nx < cols and 0 <= nz < rows:
            yield nx, nz


def count_open_neighbors(grid: Grid, x: int, z: int) -> int:
    cols, rows = grid_size(grid)
    return sum(1 for nx, nz in neighbors4(x, z, cols, rows) if grid[nx][nz] == OPEN)


def count_wall_neighbors(grid: Grid, x: int, z: int) -> int:
    """Count walls in the 8-cell Moore neighbourhood; out of bounds counts as wall."""
    cols, rows = grid_size(grid)
    count = 0
    for dx in (-1, 0, 1):
        for dz in (-1, 0, 1):
            if dx == 0 and dz == 0:
                continue
            nx, nz = x + dx, z + dz
            if not (0 <= nx < cols and 0 <= nz < rows):
                count += 1
            elif grid[nx][nz] == WALL:
                count += 1
    return count


def is_boundary(grid, x: int, z: int) -> bool:
    cols, rows = grid_size(grid)
    return x == 0 or z == 0 or x == cols - 1 or z == rows - 1


def boundary_cells(grid) -> Iterator[Cell]:
    """Yield every perimeter cell exactly once."""
    cols, rows = grid_size(grid)
    for x in range(cols):
        for z in range(rows):
            if is_boundary(grid, x, z):
                yield x, z


def open_cells(grid: Grid) -> List[Cell]:
    cols, rows = grid_size(grid)
    return [(x, z) for x in range(cols) for z in range(rows) if grid[x][z] == OPEN]


def stamp_border(grid: Grid) -> None:
    for x, z in list(boundary_cells(grid)):
        grid[x][z] = WALL


__all__ = [
    "Grid",
    "Cell",
    "DIRS4",
    "create_grid",
    "grid_size",
    "in_bounds",
    "neighbors4",
    "count_open_neighbors",
    "count_wall_neighbors",
    "is_boundary",
    "boundary_cells",
    "open_cells",
    "stamp_border",
]
