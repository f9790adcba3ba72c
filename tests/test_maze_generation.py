import random
import unittest

import pytest

from levelforge.generation import MazeConfig, generate_maze
from levelforge.generation.connectivity import flood_fill_regions
from levelforge.generation.maze import MazeGenerator
from levelforge.generation.tiles import CENTER_OUT, OPEN, OUT_OUT
from tests.level_test_utils import bfs_reachable, open_border_cells


def test_single_cell_out_out_maze():
    result = generate_maze(cols=1, rows=1, exitWidth=1, centerRoomSize=1, layout="out-out", seed=5)
    grid = result.grid
    assert len(grid) == 3 and len(grid[0]) == 3
    assert grid[1][1] == OPEN
    assert len(result.exits) == 2
    (ax, az), (bx, bz) = result.exits
    # one exit on each of two opposite sides
    assert (ax == bx == 1 and {az, bz} == {0, 2}) or (az == bz == 1 and {ax, bx} == {0, 2})
    assert sum(cell == OPEN for col in grid for cell in col) == 3


def test_center_room_block_open_and_reachable_from_exit():
    for seed in (1, 2, 3, 4):
        result = generate_maze(MazeConfig(cols=9, rows=9, center_room_size=3, layout=CENTER_OUT, seed=seed))
        grid = result.grid
        room = result.center_room
        assert room is not None
        assert (room.gx1 - room.gx0) // 2 + 1 == 5
        assert (room.gz1 - room.gz0) // 2 + 1 == 5
        (exit_cell,) = result.exits
        reach = bfs_reachable(grid, exit_cell)
        for x in range(room.gx0, room.gx1 + 1, 2):
            for z in range(room.gz0, room.gz1 + 1, 2):
                assert grid[x][z] == OPEN
                assert (x, z) in reach
                if x < room.gx1:
                    assert grid[x + 1][z] == OPEN
                if z < room.gz1:
                    assert grid[x][z + 1] == OPEN


@pytest.mark.parametrize("layout", [CENTER_OUT, OUT_OUT])
@pytest.mark.parametrize("cols,rows,exit_width", [(1, 1, 1), (2, 3, 1), (10, 10, 3), (15, 7, 9), (31, 31, 2)])
def test_border_closed_except_exits_and_single_region(layout, cols, rows, exit_width):
    for seed in (11, 12):
        result = generate_maze(
            MazeConfig(cols=cols, rows=rows, exit_width=exit_width, center_room_size=4, layout=layout, seed=seed)
        )
        assert len(result.grid) == cols * 2 + 1
        assert len(result.grid[0]) == rows * 2 + 1
        assert open_border_cells(result.grid) == set(result.exits)
        assert result.exits
        assert len(flood_fill_regions(result.grid)) == 1


def test_every_maze_cell_is_carved():
    result = generate_maze(MazeConfig(cols=12, rows=8, layout=OUT_OUT, seed=99))
    for x in range(1, 25, 2):
        for z in range(1, 17, 2):
            assert result.grid[x][z] == OPEN
    assert result.stats["cells_carved"] == 12 * 8


def test_out_of_range_options_are_clamped():
    result = generate_maze(MazeConfig(cols=500, rows=-4, exit_width=40, center_room_size=99, seed=3))
    assert len(result.grid) == 63
    assert len(result.grid[0]) == 3
    assert result.cols == 31 and result.rows == 1


def test_same_seed_same_maze():
    a = generate_maze(MazeConfig(cols=14, rows=9, room_count=3, seed=2024))
    b = generate_maze(MazeConfig(cols=14, rows=9, room_count=3, seed=2024))
    assert a.grid == b.grid
    assert a.exits == b.exits
    assert [r.bounds for r in a.rooms] == [r.bounds for r in b.rooms]


def test_injected_rng_drives_generation():
    cfg = MazeConfig(cols=10, rows=10, layout=OUT_OUT)
    a = MazeGenerator(cfg, rng=random.Random(7)).run()
    b = MazeGenerator(cfg, rng=random.Random(7)).run()
    assert a.grid == b.grid
    assert a.seed is None


def test_rerun_resets_stats():
    gen = MazeGenerator(MazeConfig(cols=6, rows=4, layout=OUT_OUT, seed=9))
    first = gen.run()
    second = gen.run()
    assert first.stats["cells_carved"] == 24
    assert second.stats["cells_carved"] == 24
    assert second.stats is not first.stats


def test_resolved_seed_is_reported_and_replayable():
    first = generate_maze(MazeConfig(cols=8, rows=8))
    assert isinstance(first.seed, int)
    again = generate_maze(MazeConfig(cols=8, rows=8, seed=first.seed))
    assert again.grid == first.grid


class TestMazeRooms(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.result = generate_maze(
            MazeConfig(cols=15, rows=15, center_room_size=3, room_count=6, room_min_size=1, room_max_size=3, seed=77)
        )

    def test_rooms_are_open_rectangles_on_cell_centres(self):
        self.assertTrue(self.result.rooms)
        for room in self.result.rooms:
            self.assertEqual(room.gx0 % 2, 1)
            self.assertEqual(room.gz0 % 2, 1)
            self.assertEqual(room.gx1 % 2, 1)
            self.assertEqual(room.gz1 % 2, 1)
            for x, z in room.cells():
                self.assertEqual(self.result.grid[x][z], OPEN)

    def test_rooms_keep_apart_and_avoid_center_room(self):
        rooms = self.result.rooms
        for i, a in enumerate(rooms):
            self.assertFalse(a.overlaps(self.result.center_room, pad=2))
            for b in rooms[i + 1 :]:
                self.assertFalse(a.overlaps(b, pad=2))

    def test_rooms_keep_maze_connected(self):
        self.assertEqual(len(flood_fill_regions(self.result.grid)), 1)
        self.assertEqual(open_border_cells(self.result.grid), set(self.result.exits))

    def test_room_stats(self):
        stats = self.result.stats
        self.assertEqual(stats["rooms_placed"], len(self.result.rooms))
        self.assertGreaterEqual(stats["room_attempts"], len(self.result.rooms))

    def test_to_dict_shape(self):
        data = self.result.to_dict()
        self.assertEqual(data["seed"], 77)
        self.assertEqual(data["layout"], CENTER_OUT)
        self.assertEqual(len(data["rooms"]), len(self.result.rooms))
        self.assertIn("centerRoom", data)
        self.assertEqual(set(data["exits"][0]), {"x", "z"})
