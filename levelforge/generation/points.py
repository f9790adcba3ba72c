"""Gameplay point placement: spawns, flags, collision points and cover.

Placement functions share a ``UsedCells`` accumulator owned by whoever
builds the layout (one arena candidate, one maze-arena dressing pass).
Every function claims the cells it returns, so later steps can never reuse
a cell an earlier step took.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .distance import DistanceField, compute_distances, farthest_cell
from .grid import Cell, Grid, count_open_neighbors, grid_size, neighbors4, open_cells
from .tiles import OPEN


@dataclass(frozen=True)
class Point:
    x: int
    z: int

    @property
    def cell(self) -> Cell:
        return (self.x, self.z)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "z": self.z}


@dataclass(frozen=True)
class Flag(Point):
    type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "z": self.z, "type": self.type}


@dataclass(frozen=True)
class CollisionPoint(Point):
    open_neighbors: int = 0
    dist_to_center: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "z": self.z,
            "openNeighbors": self.open_neighbors,
            "distToCenter": self.dist_to_center,
        }


class UsedCells:
    """Set of cells already taken by a gameplay point."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Cell] = ()):
        self._cells: Set[Cell] = set(cells)

    def claim(self, cell: Cell) -> None:
        self._cells.add(tuple(cell))

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)


def flag_band(cols: int, rows: int) -> Tuple[int, int]:
    """Team flag distance band ``(min_flag, max_flag)`` for a grid size."""
    short = min(cols, rows)
    min_flag = max(3, int(short * 0.15))
    max_flag = max(min_flag + 2, int(short * 0.35))
    return min_flag, max_flag


def place_spawns(grid: Grid, used: UsedCells, rng=None, fallback: Optional[Cell] = None):
    """Double-farthest BFS spawn placement.

    A random open cell seeds a distance field; its farthest reachable cell is
    spawn A, and the farthest cell from A is spawn B. This approximates the
    endpoints of the grid's diameter. Returns ``(spawn_a, spawn_b, dist_a,
    dist_b)``; both spawns are claimed.
    """
    if rng is None:
        rng = random
    cols, rows = grid_size(grid)
    candidates = open_cells(grid)
    seed = rng.choice(candidates) if candidates else (fallback or (cols // 2, rows // 2))
    spawn_a = farthest_cell(compute_distances(grid, seed)) or seed
    dist_a = compute_distances(grid, spawn_a)
    spawn_b = farthest_cell(dist_a) or seed
    dist_b = compute_distances(grid, spawn_b)
    used.claim(spawn_a)
    used.claim(spawn_b)
    return Point(*spawn_a), Point(*spawn_b), dist_a, dist_b


def pick_flag_near(dist: DistanceField, min_dist: int, max_dist: int, used: UsedCells) -> Optional[Cell]:
    """Unused cell whose distance is closest to the middle of the band.

    Falls back to the farthest unused reachable cell when the band is empty.
    """
    target = (min_dist + max_dist) / 2
    best = None
    best_score = None
    for x, column in enumerate(dist):
        for z, d in enumerate(column):
            if d < min_dist or d > max_dist or (x, z) in used:
                continue
            score = abs(d - target)
            if best_score is None or score < best_score:
                best, best_score = (x, z), score
    if best is None:
        best = farthest_cell(dist, exclude=used)
    if best is not None:
        used.claim(best)
    return best


def pick_balanced_flags(
    dist_a: DistanceField,
    dist_b: DistanceField,
    min_dist: int,
    used: UsedCells,
    count: int = 2,
    spacing: Optional[float] = None,
) -> List[Cell]:
    """Neutral flags roughly equidistant from both spawns.

    Candidates are at least ``min_dist`` from both spawns, ordered by
    imbalance ``|da - db|`` ascending then by ``max(da, db)`` descending.
    They are accepted greedily when their Manhattan distance to every flag
    already picked exceeds ``spacing`` (default ``min_dist / 2``).
    """
    if spacing is None:
        spacing = min_dist / 2
    candidates = []
    for x, column in enumerate(dist_a):
        for z, d1 in enumerate(column):
            d2 = dist_b[x][z]
            if d1 < min_dist or d2 < min_dist or (x, z) in used:
                continue
            candidates.append((abs(d1 - d2), -max(d1, d2), x, z))
    candidates.sort(key=lambda c: (c[0], c[1]))
    picked: List[Cell] = []
    for _diff, _spread, x, z in candidates:
        if len(picked) >= count:
            break
        if all(abs(px - x) + abs(pz - z) > spacing for px, pz in picked):
            picked.append((x, z))
            used.claim((x, z))
    return picked


def find_collision_points(
    grid: Grid,
    max_count: int = 2,
    used: Optional[UsedCells] = None,
    bounds: Optional[Tuple[int, int, int, int]] = None,
) -> List[CollisionPoint]:
    """Open interior junction cells (>= 3 open 4-neighbours).

    Ranked by open neighbour count descending, then Manhattan distance to the
    centre ascending. ``bounds`` (x0, z0, x1, z1 inclusive) restricts the
    search to a rectangle and moves the centre to the rectangle's centre.
    """
    cols, rows = grid_size(grid)
    if bounds is None:
        x0, z0, x1, z1 = 1, 1, cols - 2, rows - 2
        center = ((cols - 1) / 2, (rows - 1) / 2)
    else:
        bx0, bz0, bx1, bz1 = bounds
        x0, z0, x1, z1 = max(1, bx0), max(1, bz0), min(cols - 2, bx1), min(rows - 2, bz1)
        center = ((bx0 + bx1) / 2, (bz0 + bz1) / 2)
    points = []
    for x in range(x0, x1 + 1):
        for z in range(z0, z1 + 1):
            if grid[x][z] != OPEN:
                continue
            if used is not None and (x, z) in used:
                continue
            open_n = count_open_neighbors(grid, x, z)
            if open_n < 3:
                continue
            dist_to_center = abs(x - center[0]) + abs(z - center[1])
            points.append(CollisionPoint(x, z, open_n, dist_to_center))
    points.sort(key=lambda p: (-p.open_neighbors, p.dist_to_center))
    chosen = points[:max_count]
    if used is not None:
        for p in chosen:
            used.claim(p.cell)
    return chosen


def place_cover_near(grid: Grid, points: List[Point], used: UsedCells, rng=None, max_per_point: int = 2) -> List[Point]:
    """Up to ``max_per_point`` unused open neighbours of each point, shuffled."""
    if rng is None:
        rng = random
    cols, rows = grid_size(grid)
    covers: List[Point] = []
    for point in points:
        options = [
            (nx, nz)
            for nx, nz in neighbors4(point.x, point.z, cols, rows)
            if grid[nx][nz] == OPEN and (nx, nz) not in used
        ]
        rng.shuffle(options)
        for cell in options[:max_per_point]:
            used.claim(cell)
            covers.append(Point(*cell))
    return covers


__all__ = [
    "Point",
    "Flag",
    "CollisionPoint",
    "UsedCells",
    "flag_band",
    "place_spawns",
    "pick_flag_near",
    "pick_balanced_flags",
    "find_collision_points",
    "place_cover_near",
]
