from collections import deque

OPEN = 0
WALL = 1


def open_border_cells(grid):
    """Set of (x, z) perimeter cells that are open."""
    w = len(grid)
    h = len(grid[0])
    cells = set()
    for x in range(w):
        for z in range(h):
            if (x == 0 or z == 0 or x == w - 1 or z == h - 1) and grid[x][z] == OPEN:
                cells.add((x, z))
    return cells


def bfs_reachable(grid, start):
    """Return the set of open cells reachable from start."""
    w = len(grid)
    h = len(grid[0])
    sx, sz = start
    if grid[sx][sz] != OPEN:
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, z = q.popleft()
        for dx, dz in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, nz = x + dx, z + dz
            if 0 <= nx < w and 0 <= nz < h and (nx, nz) not in seen and grid[nx][nz] == OPEN:
                seen.add((nx, nz))
                q.append((nx, nz))
    return seen


def point_cells(*groups):
    """Flatten point lists into a list of (x, z) tuples."""
    return [(p.x, p.z) for group in groups for p in group]


def grid_from_rows(rows):
    """Build a column-major grid from strings drawn top to bottom ('#' wall)."""
    h = len(rows)
    w = len(rows[0])
    return [[WALL if rows[z][x] == "#" else OPEN for z in range(h)] for x in range(w)]
