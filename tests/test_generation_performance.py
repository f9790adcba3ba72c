import time

import pytest

from levelforge.generation import ArenaConfig, MazeConfig, generate_arena, generate_maze, generate_maze_arena

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.


@pytest.mark.performance
def test_arena_generation_default_seeds():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 2.5  # generous threshold; 8 candidates on 24x24
    timings = []
    for s in seeds:
        start = time.perf_counter()
        result = generate_arena(ArenaConfig(seed=s))
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert result.grid is not None
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings) / len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"


@pytest.mark.performance
def test_largest_maze_and_maze_arena():
    start = time.perf_counter()
    generate_maze(MazeConfig(cols=31, rows=31, room_count=12, seed=1))
    generate_maze_arena(MazeConfig(cols=31, rows=31, seed=2))
    elapsed = time.perf_counter() - start
    assert elapsed < 3.0, f"Largest mazes took {elapsed:.3f}s"
