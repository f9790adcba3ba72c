import random

from levelforge.generation.connectivity import (
    carve_cell,
    carve_corridor,
    connect_regions,
    flood_fill_regions,
    region_anchor,
    region_center,
)
from levelforge.generation.grid import create_grid
from levelforge.generation.tiles import OPEN, WALL
from tests.level_test_utils import grid_from_rows


def _two_rooms():
    return grid_from_rows(
        [
            "#########",
            "#..######",
            "#..######",
            "#########",
            "#########",
            "#########",
            "######..#",
            "######..#",
            "#########",
        ]
    )


def test_flood_fill_finds_each_region_in_scan_order():
    regions = flood_fill_regions(_two_rooms())
    assert len(regions) == 2
    assert (1, 1) in regions[0]
    assert (7, 7) in regions[1]
    assert sum(len(r) for r in regions) == 8


def test_all_wall_grid_has_no_regions():
    assert flood_fill_regions(create_grid(4, 4, WALL)) == []


def test_region_center_rounds_half_up():
    assert region_center([(1, 1), (2, 2)]) == (2, 2)
    assert region_center([(0, 0), (0, 1), (0, 2)]) == (0, 1)


def test_region_anchor_is_member_of_concave_region():
    # U shape: the centroid (2, 2) is a wall cell between the arms
    grid = grid_from_rows(
        [
            "#####",
            "#.#.#",
            "#.#.#",
            "#...#",
            "#####",
        ]
    )
    (region,) = flood_fill_regions(grid)
    anchor = region_anchor(region, 5, 5)
    assert anchor in region
    assert grid[anchor[0]][anchor[1]] == OPEN


def test_carve_cell_never_opens_border():
    g = create_grid(5, 5, WALL)
    carve_cell(g, 0, 0, 3)
    assert g[1][1] == OPEN
    assert g[0][0] == WALL and g[0][1] == WALL and g[1][0] == WALL


def test_carve_corridor_returns_manhattan_steps():
    g = create_grid(8, 8, WALL)
    steps = carve_corridor(g, (1, 1), (5, 4), 1, random.Random(3))
    assert steps == 7
    assert g[5][4] == OPEN
    # start cell is not carved by the walk itself
    assert g[1][1] == WALL


def test_connect_regions_joins_everything():
    grid = _two_rooms()
    regions = flood_fill_regions(grid)
    carved = connect_regions(grid, regions, 1, random.Random(11))
    assert carved == [(0, 1)]
    assert len(flood_fill_regions(grid)) == 1


def test_corridor_order_follows_centroids_not_anchors():
    grid = create_grid(11, 12, WALL)
    # U shape: centroid (5, 4) sits in its hollow, anchor is (5, 1)
    for x in range(1, 10):
        grid[x][1] = OPEN
    for z in range(1, 10):
        grid[1][z] = OPEN
        grid[9][z] = OPEN
    grid[5][6] = OPEN
    grid[5][10] = OPEN
    regions = flood_fill_regions(grid)
    assert region_center(regions[0]) == (5, 4)
    assert region_anchor(regions[0], 11, 12) == (5, 1)
    carved = connect_regions(grid, regions, 1, random.Random(3))
    assert carved == [(0, 1), (1, 2)]
    assert len(flood_fill_regions(grid)) == 1


def test_connect_regions_many_pockets():
    rng = random.Random(5)
    grid = create_grid(21, 21, WALL)
    for _ in range(12):
        x, z = rng.randint(1, 19), rng.randint(1, 19)
        grid[x][z] = OPEN
    regions = flood_fill_regions(grid)
    carved = connect_regions(grid, regions, 2, rng)
    assert len(carved) == len(regions) - 1
    assert len(flood_fill_regions(grid)) == 1
    for x in range(21):
        assert grid[x][0] == WALL and grid[x][20] == WALL
        assert grid[0][x] == WALL and grid[20][x] == WALL


def test_single_region_is_left_alone():
    grid = create_grid(5, 5, WALL)
    grid[2][2] = OPEN
    assert connect_regions(grid, flood_fill_regions(grid)) == []
