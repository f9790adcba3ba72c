"""Region extraction and connectivity repair.

Flood fill splits the open cells into 4-connected regions; when more than
one region exists a single Kruskal pass over the region centroids carves
L-shaped corridors between them. Edge weights come from the centroids;
each corridor runs between region anchors, the region cell nearest the
centroid, so it always touches both regions. The pass is best effort:
regions are not re-verified afterwards, callers re-extract and score what
is left.
"""
from __future__ import annotations

import random
from collections import deque
from typing import List, Tuple

from .grid import Cell, Grid, create_grid, grid_size, neighbors4
from .tiles import OPEN

Region = List[Cell]


def flood_fill_regions(grid: Grid) -> List[Region]:
    """Return every 4-connected region of open cells, in scan order."""
    cols, rows = grid_size(grid)
    visited = create_grid(cols, rows, False)
    regions: List[Region] = []
    for x in range(cols):
        for z in range(rows):
            if grid[x][z] != OPEN or visited[x][z]:
                continue
            q = deque([(x, z)])
            visited[x][z] = True
            cells: Region = []
            while q:
                cx, cz = q.popleft()
                cells.append((cx, cz))
                for nx, nz in neighbors4(cx, cz, cols, rows):
                    if grid[nx][nz] != OPEN or visited[nx][nz]:
                        continue
                    visited[nx][nz] = True
                    q.append((nx, nz))
            regions.append(cells)
    return regions


def region_center(cells: Region) -> Cell:
    """Rounded centroid of a region. Not guaranteed to be an open cell."""
    sx = sum(c[0] for c in cells)
    sz = sum(c[1] for c in cells)
    n = len(cells)
    # half-up rounding so .5 centroids do not flip with banker's rounding
    return int(sx / n + 0.5), int(sz / n + 0.5)


def region_anchor(cells: Region, cols: int, rows: int) -> Cell:
    """Interior cell of the region closest to its centroid (scan order on ties).

    Corridors start and end on anchors so each one really touches both
    regions it joins. Every region holds an interior cell because border
    cells are only ever opened together with the cell inside them.
    """
    cx, cz = region_center(cells)
    interior = [c for c in cells if 0 < c[0] < cols - 1 and 0 < c[1] < rows - 1] or cells
    return min(interior, key=lambda c: (c[0] - cx) ** 2 + (c[1] - cz) ** 2)


def carve_cell(grid: Grid, x: int, z: int, width: int = 1) -> None:
    """Open a ``width`` x ``width`` block around ``(x, z)``.

    Cells on the outer ring are never touched so the border stays solid.
    """
    cols, rows = grid_size(grid)
    w = max(1, int(width))
    half_low = (w - 1) // 2
    half_high = w - 1 - half_low
    for dx in range(-half_low, half_high + 1):
        for dz in range(-half_low, half_high + 1):
            nx, nz = x + dx, z + dz
            if nx <= 0 or nx >= cols - 1 or nz <= 0 or nz >= rows - 1:
                continue
            grid[nx][nz] = OPEN


def carve_corridor(grid: Grid, a: Cell, b: Cell, width: int = 1, rng=None) -> int:
    """Carve an axis-first L path from ``a`` to ``b``; returns the step count.

    The starting cell itself is not carved, matching a walk that only opens
    the cells it steps onto.
    """
    if rng is None:
        rng = random
    x, z = a
    bx, bz = b
    steps: List[Cell] = []

    def walk_x():
        nonlocal x
        while x != bx:
            x += 1 if x < bx else -1
            steps.append((x, z))

    def walk_z():
        nonlocal z
        while z != bz:
            z += 1 if z < bz else -1
            steps.append((x, z))

    if rng.random() > 0.5:
        walk_x()
        walk_z()
    else:
        walk_z()
        walk_x()
    for sx, sz in steps:
        carve_cell(grid, sx, sz, width)
    return len(steps)


def connect_regions(grid: Grid, regions: List[Region], width: int = 1, rng=None) -> List[Tuple[int, int]]:
    """Join regions along a minimum spanning tree of their centroids.

    Edges are squared Euclidean distances between centroids, processed in
    ascending order; a corridor is carved between the two region anchors only
    when the regions are not already joined. Returns the (i, j) region index
    pairs that were carved.
    """
    if len(regions) <= 1:
        return []
    cols, rows = grid_size(grid)
    centers = [region_center(r) for r in regions]
    anchors = [region_anchor(r, cols, rows) for r in regions]
    edges = []
    for i in range(len(centers)):
        x1, z1 = centers[i]
        for j in range(i + 1, len(centers)):
            x2, z2 = centers[j]
            edges.append(((x1 - x2) ** 2 + (z1 - z2) ** 2, i, j))
    edges.sort(key=lambda e: e[0])
    parent = list(range(len(centers)))

    def find(a):
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(a, b):
        ra, rb = find(a), find(b)
        if ra == rb:
            return False
        parent[ra] = rb
        return True

    carved = []
    for _d, i, j in edges:
        if union(i, j):
            carve_corridor(grid, anchors[i], anchors[j], width, rng)
            carved.append((i, j))
    return carved


__all__ = [
    "Region",
    "flood_fill_regions",
    "region_center",
    "region_anchor",
    "carve_cell",
    "carve_corridor",
    "connect_regions",
]
