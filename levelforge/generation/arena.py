"""Arena generation: noisy cave/building layouts scored over several candidates.

Candidate pipeline (``ArenaGenerator.build_candidate``):
    * all-open grid with a solid border
    * building stamps (solid rectangles)
    * uniform wall noise at ``density``
    * cellular-automaton smoothing (>= 5 wall neighbours => wall, <= 2 => open)
    * one pair of exits on opposite edges, offsets kept apart
    * forced-open centre pocket
    * region extraction and MST corridor repair
    * spawns (double-farthest BFS), team flags, neutral flags,
      collision points and cover
    * metrics for ``fitness_score``

``ArenaGenerator.run`` builds ``candidates`` of these on one RNG stream and
keeps the first one with the strictly highest score.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import ArenaConfig, clamp
from .connectivity import carve_cell, connect_regions, flood_fill_regions
from .fitness import MISSING_FLAG_PENALTY, CandidateMetrics, fitness_score
from .grid import Grid, count_wall_neighbors, create_grid, is_boundary, stamp_border
from .metrics import init_metrics
from .points import (
    CollisionPoint,
    Flag,
    Point,
    UsedCells,
    find_collision_points,
    flag_band,
    pick_balanced_flags,
    pick_flag_near,
    place_cover_near,
    place_spawns,
)
from .rng import make_rng
from .tiles import NEUTRAL, OPEN, TEAM_A, TEAM_B, WALL

log = get_logger("levelforge.arena")

EXIT_RETRIES = 20
MAX_COLLISION_POINTS = 2
MAX_NEUTRAL_FLAGS = 2
COVER_PER_POINT = 2


@dataclass
class Candidate:
    grid: Grid
    spawns: List[Point]
    flags: List[Flag]
    collision_points: List[CollisionPoint]
    covers: List[Point]
    metrics: CandidateMetrics
    score: float = 0.0


@dataclass
class ArenaResult:
    grid: Grid
    spawns: List[Point]
    flags: List[Flag]
    collision_points: List[CollisionPoint]
    covers: List[Point]
    metrics: CandidateMetrics
    score: float
    seed: Optional[int]
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def cols(self) -> int:
        return len(self.grid)

    @property
    def rows(self) -> int:
        return len(self.grid[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": self.grid,
            "cols": self.cols,
            "rows": self.rows,
            "seed": self.seed,
            "spawns": [p.to_dict() for p in self.spawns],
            "flags": [f.to_dict() for f in self.flags],
            "collisionPoints": [p.to_dict() for p in self.collision_points],
            "covers": [p.to_dict() for p in self.covers],
            "metrics": self.metrics.to_dict(),
            "score": self.score,
        }


class ArenaGenerator:
    def __init__(self, config: Optional[ArenaConfig] = None, rng=None):
        self.config = (config or ArenaConfig()).sanitized()
        if rng is None:
            rng, self.seed = make_rng(self.config.seed)
        else:
            self.seed = self.config.seed
        self.rng = rng
        self.metrics = init_metrics()

    def _phase(self, label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phases = self.metrics["phase_ms"]
        phases[label] = phases.get(label, 0) + int((time.perf_counter() - ps) * 1000)
        return r

    # ------------------------------------------------------------------
    # Structural phases
    # ------------------------------------------------------------------
    def stamp_buildings(self, grid: Grid) -> None:
        cfg = self.config
        cols, rows = cfg.cols, cfg.rows
        for _ in range(cfg.building_count):
            w = min(self.rng.randint(cfg.building_min_size, cfg.building_max_size), cols - 2)
            h = min(self.rng.randint(cfg.building_min_size, cfg.building_max_size), rows - 2)
            x0 = self.rng.randint(1, cols - 1 - w)
            z0 = self.rng.randint(1, rows - 1 - h)
            for x in range(x0, x0 + w):
                for z in range(z0, z0 + h):
                    grid[x][z] = WALL

    def apply_noise(self, grid: Grid) -> None:
        density = self.config.density
        for x in range(1, self.config.cols - 1):
            for z in range(1, self.config.rows - 1):
                if grid[x][z] == WALL:
                    continue
                if self.rng.random() < density:
                    grid[x][z] = WALL

    def smooth(self, grid: Grid) -> Grid:
        cols, rows = self.config.cols, self.config.rows
        for _ in range(self.config.smoothing_passes):
            nxt = create_grid(cols, rows, OPEN)
            for x in range(cols):
                for z in range(rows):
                    if is_boundary(grid, x, z):
                        nxt[x][z] = WALL
                        continue
                    walls = count_wall_neighbors(grid, x, z)
                    if walls >= 5:
                        nxt[x][z] = WALL
                    elif walls <= 2:
                        nxt[x][z] = OPEN
                    else:
                        nxt[x][z] = grid[x][z]
            grid = nxt
        return grid

    def carve_exits(self, grid: Grid) -> None:
        """Open one exit on each of two opposite edges.

        The second offset is re-rolled (up to ``EXIT_RETRIES`` times) until it
        is at least ``exit_offset + 1`` away from the first, so the exits are
        not directly across from each other.
        """
        cols, rows = self.config.cols, self.config.rows
        exit_width = max(1, self.config.corridor_width)
        exit_offset = exit_width // 2
        min_separation = max(1, exit_offset + 1)
        horizontal = self.rng.random() > 0.5
        lo, hi = 1, (cols - 2 if horizontal else rows - 2)
        first = self.rng.randint(lo, hi)
        second = self.rng.randint(lo, hi)
        retries = 0
        while abs(second - first) < min_separation and retries < EXIT_RETRIES:
            second = self.rng.randint(lo, hi)
            retries += 1
        self.metrics["exit_retries"] += retries
        for i in range(-exit_offset, exit_offset + 1):
            a = clamp(first + i, lo, hi)
            b = clamp(second + i, lo, hi)
            if horizontal:
                grid[a][0] = OPEN
                grid[a][1] = OPEN
                grid[b][rows - 1] = OPEN
                grid[b][rows - 2] = OPEN
            else:
                grid[0][a] = OPEN
                grid[1][a] = OPEN
                grid[cols - 1][b] = OPEN
                grid[cols - 2][b] = OPEN

    def repair_connectivity(self, grid: Grid):
        """Force a centre pocket open, then join regions; returns final regions."""
        cx, cz = self.config.cols // 2, self.config.rows // 2
        carve_cell(grid, cx, cz, 1)
        regions = flood_fill_regions(grid)
        if not regions:
            self.metrics["pocket_retries"] += 1
            grid[cx][cz] = OPEN
            regions = flood_fill_regions(grid)
        if len(regions) > 1:
            carved = connect_regions(grid, regions, self.config.corridor_width, self.rng)
            self.metrics["corridors_carved"] += len(carved)
        return flood_fill_regions(grid)

    # ------------------------------------------------------------------
    # Candidate
    # ------------------------------------------------------------------
    def build_candidate(self) -> Candidate:
        cfg = self.config
        cols, rows = cfg.cols, cfg.rows
        grid = create_grid(cols, rows, OPEN)
        stamp_border(grid)
        self._phase("buildings", self.stamp_buildings, grid)
        self._phase("noise", self.apply_noise, grid)
        grid = self._phase("smoothing", self.smooth, grid)
        self._phase("exits", self.carve_exits, grid)
        regions = self._phase("connectivity", self.repair_connectivity, grid)

        # The candidate owns this accumulator until it is returned.
        used = UsedCells()
        spawn_a, spawn_b, dist_a, dist_b = self._phase(
            "spawns", place_spawns, grid, used, self.rng, (cols // 2, rows // 2)
        )
        min_flag, max_flag = flag_band(cols, rows)
        flag_a = pick_flag_near(dist_a, min_flag, max_flag, used)
        flag_b = pick_flag_near(dist_b, min_flag, max_flag, used)
        neutrals = pick_balanced_flags(
            dist_a, dist_b, min_flag + 2, used, MAX_NEUTRAL_FLAGS, spacing=min_flag / 2
        )
        collision_points = find_collision_points(grid, MAX_COLLISION_POINTS, used)
        covers = place_cover_near(grid, collision_points, used, self.rng, COVER_PER_POINT)

        flags: List[Flag] = []
        if flag_a is not None:
            flags.append(Flag(*flag_a, type=TEAM_A))
        if flag_b is not None:
            flags.append(Flag(*flag_b, type=TEAM_B))
        flags.extend(Flag(x, z, type=NEUTRAL) for x, z in neutrals)

        if flag_a is not None and flag_b is not None:
            flag_fairness = abs(dist_a[flag_a[0]][flag_a[1]] - dist_b[flag_b[0]][flag_b[1]])
        else:
            flag_fairness = MISSING_FLAG_PENALTY
        metrics = CandidateMetrics(
            regions=len(regions),
            collision_count=len(collision_points),
            flag_fairness=flag_fairness,
            overall_fairness=sum(abs(dist_a[x][z] - dist_b[x][z]) for x, z in neutrals),
        )
        self.metrics["candidates_built"] += 1
        return Candidate(
            grid=grid,
            spawns=[spawn_a, spawn_b],
            flags=flags,
            collision_points=collision_points,
            covers=covers,
            metrics=metrics,
            score=fitness_score(metrics),
        )

    def run(self) -> ArenaResult:
        start = time.perf_counter()
        self.metrics = init_metrics()
        best: Optional[Candidate] = None
        clog = log.bind(seed=self.seed)
        for i in range(self.config.candidates):
            candidate = self.build_candidate()
            clog.debug(
                event="arena_candidate",
                index=i,
                score=candidate.score,
                regions=candidate.metrics.regions,
                collisions=candidate.metrics.collision_count,
                flag_fairness=candidate.metrics.flag_fairness,
            )
            if best is None or candidate.score > best.score:
                best = candidate
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        return ArenaResult(
            grid=best.grid,
            spawns=best.spawns,
            flags=best.flags,
            collision_points=best.collision_points,
            covers=best.covers,
            metrics=best.metrics,
            score=best.score,
            seed=self.seed,
            stats=self.metrics,
        )


def generate_arena(config: Optional[ArenaConfig] = None, rng=None, **options) -> ArenaResult:
    """Generate the best of ``candidates`` arena layouts."""
    if config is None:
        config = ArenaConfig.from_dict(options)
    return ArenaGenerator(config, rng=rng).run()


__all__ = ["Candidate", "ArenaResult", "ArenaGenerator", "generate_arena"]
