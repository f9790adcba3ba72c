"""Public generation package interface.

Pure Python core: nothing under ``levelforge.generation`` imports Flask.
"""

from .arena import ArenaGenerator, ArenaResult, generate_arena  # noqa: F401
from .config import ArenaConfig, InvalidOptionError, MazeConfig  # noqa: F401
from .connectivity import flood_fill_regions  # noqa: F401
from .distance import UNREACHABLE, compute_distances  # noqa: F401
from .fitness import CandidateMetrics, fitness_score  # noqa: F401
from .maze import MazeGenerator, MazeResult, generate_maze  # noqa: F401
from .maze_arena import MazeArenaResult, generate_maze_arena  # noqa: F401
from .preview import render_ascii, render_result  # noqa: F401
from .tiles import CENTER_OUT, NEUTRAL, OPEN, OUT_OUT, TEAM_A, TEAM_B, WALL  # noqa: F401

__all__ = [
    "ArenaConfig",
    "ArenaGenerator",
    "ArenaResult",
    "CandidateMetrics",
    "CENTER_OUT",
    "compute_distances",
    "fitness_score",
    "flood_fill_regions",
    "generate_arena",
    "generate_maze",
    "generate_maze_arena",
    "InvalidOptionError",
    "MazeArenaResult",
    "MazeConfig",
    "MazeGenerator",
    "MazeResult",
    "NEUTRAL",
    "OPEN",
    "OUT_OUT",
    "render_ascii",
    "render_result",
    "TEAM_A",
    "TEAM_B",
    "UNREACHABLE",
    "WALL",
]
