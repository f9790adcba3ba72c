"""Maze-arena mode: a maze with carved rooms, dressed like an arena.

The maze supplies the hallway network and the rooms; spawns come from the
same double-farthest BFS heuristic the arena uses, and every room gets at
most one collision point (ranked against the room's own centre) with cover
around it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .config import MazeConfig
from .maze import MazeGenerator, MazeResult
from .points import CollisionPoint, Point, UsedCells, find_collision_points, place_cover_near, place_spawns
from .rng import make_rng

log = get_logger("levelforge.maze_arena")

DEFAULT_ROOM_COUNT = 4


@dataclass
class MazeArenaResult:
    maze: MazeResult
    spawns: List[Point] = field(default_factory=list)
    collision_points: List[CollisionPoint] = field(default_factory=list)
    covers: List[Point] = field(default_factory=list)

    @property
    def grid(self):
        return self.maze.grid

    @property
    def rooms(self):
        return self.maze.rooms

    @property
    def seed(self):
        return self.maze.seed

    @property
    def stats(self):
        return self.maze.stats

    def to_dict(self) -> Dict[str, Any]:
        data = self.maze.to_dict()
        data["rooms"] = [r.to_dict() for r in self.maze.rooms]
        data["spawns"] = [p.to_dict() for p in self.spawns]
        data["collisionPoints"] = [p.to_dict() for p in self.collision_points]
        data["covers"] = [p.to_dict() for p in self.covers]
        return data


def generate_maze_arena(config: Optional[MazeConfig] = None, rng=None, **options) -> MazeArenaResult:
    if config is None:
        config = MazeConfig.from_dict(options)
    if config.room_count <= 0:
        config = replace(config, room_count=DEFAULT_ROOM_COUNT)
    seed = config.seed
    if rng is None:
        rng, seed = make_rng(config.seed)
        config = replace(config, seed=seed)
    maze = MazeGenerator(config, rng=rng).run()
    maze.seed = seed
    grid = maze.grid

    used = UsedCells()
    spawn_a, spawn_b, _da, _db = place_spawns(grid, used, rng)
    collision_points: List[CollisionPoint] = []
    for room in maze.rooms:
        collision_points.extend(find_collision_points(grid, 1, used, bounds=room.bounds))
    covers = place_cover_near(grid, collision_points, used, rng)
    log.debug(
        event="maze_arena_generated",
        seed=seed,
        spawn_a=spawn_a.cell,
        spawn_b=spawn_b.cell,
        rooms=len(maze.rooms),
        collisions=len(collision_points),
        covers=len(covers),
    )
    return MazeArenaResult(
        maze=maze,
        spawns=[spawn_a, spawn_b],
        collision_points=collision_points,
        covers=covers,
    )


__all__ = ["MazeArenaResult", "generate_maze_arena", "DEFAULT_ROOM_COUNT"]
