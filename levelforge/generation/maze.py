"""Maze generation (randomized depth-first backtracker).

Grid encoding: a maze of ``cols x rows`` cells is a ``(cols*2+1) x
(rows*2+1)`` grid. Odd indices on both axes are cell centres, a cell
centre plus one odd/even index is the wall between two cells, and even/even
indices are pillars. The outer ring is wall except where exits are punched.

Phases:
    * Optional centre room (``center-out``): a square block of cells is
      pre-opened and its perimeter walls are protected from the carve step,
      except for a door on its right edge and one on its left edge.
    * Carve: iterative DFS from one seed (``out-out``, corner cell) or two
      seeds flanking the centre room (``center-out``).
    * Exits: one exit on a random side (``center-out``) or an entrance/exit
      pair on opposite sides (``out-out``), centred on the middle column/row.
    * Rooms: optional rectangles carved open after the maze, for the
      maze-arena mode.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .config import MazeConfig
from .grid import Cell, Grid, create_grid
from .metrics import init_metrics
from .rng import make_rng
from .rooms import Room, place_rooms
from .tiles import CENTER_OUT, OPEN, WALL

log = get_logger("levelforge.maze")

CARVE_DIRS = ((-2, 0), (2, 0), (0, -2), (0, 2))


@dataclass
class MazeResult:
    grid: Grid
    cols: int
    rows: int
    seed: Optional[int]
    layout: str
    rooms: List[Room] = field(default_factory=list)
    exits: List[Cell] = field(default_factory=list)
    center_room: Optional[Room] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "grid": self.grid,
            "cols": self.cols,
            "rows": self.rows,
            "seed": self.seed,
            "layout": self.layout,
            "exits": [{"x": x, "z": z} for x, z in self.exits],
        }
        if self.rooms:
            data["rooms"] = [r.to_dict() for r in self.rooms]
        if self.center_room is not None:
            data["centerRoom"] = self.center_room.to_dict()
        return data


class MazeGenerator:
    def __init__(self, config: Optional[MazeConfig] = None, rng=None):
        self.config = (config or MazeConfig()).sanitized()
        if rng is None:
            rng, self.seed = make_rng(self.config.seed)
        else:
            self.seed = self.config.seed
        self.rng = rng
        cfg = self.config
        self.center_start = cfg.layout == CENTER_OUT
        self.w = cfg.cols * 2 + 1
        self.h = cfg.rows * 2 + 1
        self.cx = (self.w // 2) | 1
        self.cz = (self.h // 2) | 1
        self.r = self._room_radius() if self.center_start else 0
        self.metrics = init_metrics()

    def _room_radius(self) -> int:
        """Centre room radius in cells, shrunk until the room and its two
        flanking carve seeds fit inside the border."""
        w, h, cx, cz = self.w, self.h, self.cx, self.cz
        fit = min((cx - 3) // 2, (w - 4 - cx) // 2, (cz - 1) // 2, (h - 2 - cz) // 2)
        return max(0, min(self.config.center_room_size - 1, 3, fit))

    # ------------------------------------------------------------------
    # Centre room
    # ------------------------------------------------------------------
    def is_room_boundary_wall(self, wx: int, wz: int) -> bool:
        r, cx, cz = self.r, self.cx, self.cz
        if not self.center_start or r == 0:
            return False
        left, right = cx - 2 * r - 1, cx + 2 * r + 1
        bottom, top = cz - 2 * r - 1, cz + 2 * r + 1
        if (wx == right or wx == left) and wz == cz:
            return False  # doors
        if wx in (left, right) and cz - 2 * r <= wz <= cz + 2 * r:
            return True
        if wz in (bottom, top) and cx - 2 * r <= wx <= cx + 2 * r:
            return True
        return False

    def _carve_center_room(self, grid: Grid) -> Room:
        r, cx, cz = self.r, self.cx, self.cz
        for dx in range(-2 * r, 2 * r + 1, 2):
            for dz in range(-2 * r, 2 * r + 1, 2):
                nx, nz = cx + dx, cz + dz
                grid[nx][nz] = OPEN
                if nx <= cx + 2 * r - 2:
                    grid[nx + 1][nz] = OPEN
                if nx >= cx - 2 * r + 2:
                    grid[nx - 1][nz] = OPEN
                if nz <= cz + 2 * r - 2:
                    grid[nx][nz + 1] = OPEN
                if nz >= cz - 2 * r + 2:
                    grid[nx][nz - 1] = OPEN
        # doors; with a zero radius they may land on the border of tiny mazes
        if cx + 2 * r + 1 <= self.w - 2:
            grid[cx + 2 * r + 1][cz] = OPEN
        if cx - 2 * r - 1 >= 1:
            grid[cx - 2 * r - 1][cz] = OPEN
        return Room(cx - 2 * r, cz - 2 * r, cx + 2 * r, cz + 2 * r)

    # ------------------------------------------------------------------
    # Carve
    # ------------------------------------------------------------------
    def carve(self, grid: Grid, start: Cell) -> int:
        """Depth-first carve from ``start`` with an explicit stack.

        Each frame holds a cell and its remaining shuffled directions, which
        reproduces the visiting order of the recursive backtracker without
        growing the call stack. Returns the number of cells opened.
        """
        w, h = self.w, self.h
        sx, sz = start
        grid[sx][sz] = OPEN
        opened = 1
        stack = [(sx, sz, self._shuffled_dirs())]
        while stack:
            x, z, dirs = stack[-1]
            if not dirs:
                stack.pop()
                continue
            dx, dz = dirs.pop(0)
            nx, nz = x + dx, z + dz
            if not (0 < nx < w - 1 and 0 < nz < h - 1) or grid[nx][nz] != WALL:
                continue
            wx, wz = (x + nx) // 2, (z + nz) // 2
            if self.is_room_boundary_wall(wx, wz):
                continue
            grid[wx][wz] = OPEN
            grid[nx][nz] = OPEN
            opened += 1
            stack.append((nx, nz, self._shuffled_dirs()))
        return opened

    def _shuffled_dirs(self) -> List[Tuple[int, int]]:
        dirs = list(CARVE_DIRS)
        self.rng.shuffle(dirs)
        return dirs

    # ------------------------------------------------------------------
    # Exits
    # ------------------------------------------------------------------
    def _exit_offsets(self) -> List[int]:
        width = self.config.exit_width
        return [2 * (i - width // 2) for i in range(width)]

    def punch_exits(self, grid: Grid) -> List[Cell]:
        w, h, cx, cz = self.w, self.h, self.cx, self.cz
        exits: List[Cell] = []

        def punch(x, z, inward):
            grid[x][z] = OPEN
            ix, iz = x + inward[0], z + inward[1]
            grid[ix][iz] = OPEN
            exits.append((x, z))

        if self.center_start:
            horiz, edge = self.rng.choice(((True, 0), (True, h - 1), (False, 0), (False, w - 1)))
            sides = [edge]
        else:
            horiz = self.rng.random() < 0.5
            sides = [0, h - 1] if horiz else [0, w - 1]
        for offset in self._exit_offsets():
            for a in sides:
                if horiz:
                    ex = cx + offset
                    if 1 <= ex <= w - 2:
                        punch(ex, a, (0, 1 if a == 0 else -1))
                else:
                    ez = cz + offset
                    if 1 <= ez <= h - 2:
                        punch(a, ez, (1 if a == 0 else -1, 0))
        return exits

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def run(self) -> MazeResult:
        start = time.perf_counter()
        self.metrics = init_metrics()
        cfg = self.config
        grid = create_grid(self.w, self.h, WALL)
        center_room = None
        if self.center_start:
            center_room = self._carve_center_room(grid)
            edge = min(2 * self.r + 2, self.w - 2 - self.cx, self.cx - 1, self.h - 2 - self.cz, self.cz - 1)
            opened = self.carve(grid, (self.cx - edge, self.cz))
            opened += self.carve(grid, (self.cx + edge, self.cz))
        else:
            opened = self.carve(grid, (1, 1))
        self.metrics["cells_carved"] = opened
        exits = self.punch_exits(grid)
        rooms: List[Room] = []
        if cfg.room_count > 0:
            reserved = [center_room] if center_room is not None and self.r > 0 else []
            rooms, attempts = place_rooms(
                grid, cfg.cols, cfg.rows, cfg.room_count, cfg.room_min_size, cfg.room_max_size, self.rng, reserved
            )
            self.metrics["rooms_placed"] = len(rooms)
            self.metrics["room_attempts"] = attempts
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        log.debug(
            event="maze_generated",
            seed=self.seed,
            layout=cfg.layout,
            cols=cfg.cols,
            rows=cfg.rows,
            cells=opened,
            rooms=len(rooms),
        )
        return MazeResult(
            grid=grid,
            cols=cfg.cols,
            rows=cfg.rows,
            seed=self.seed,
            layout=cfg.layout,
            rooms=rooms,
            exits=exits,
            center_room=center_room if self.r > 0 else None,
            stats=self.metrics,
        )


def generate_maze(config: Optional[MazeConfig] = None, rng=None, **options) -> MazeResult:
    """Generate a maze from a config (or keyword options)."""
    if config is None:
        config = MazeConfig.from_dict(options)
    return MazeGenerator(config, rng=rng).run()


__all__ = ["MazeResult", "MazeGenerator", "generate_maze"]
