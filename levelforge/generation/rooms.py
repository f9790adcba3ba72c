from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .tiles import OPEN


@dataclass
class Room:
    """Axis-aligned rectangle of grid cells, inclusive on both corners."""

    gx0: int
    gz0: int
    gx1: int
    gz1: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for x in range(self.gx0, self.gx1 + 1):
            for z in range(self.gz0, self.gz1 + 1):
                yield x, z

    @property
    def center(self) -> Tuple[int, int]:
        return ((self.gx0 + self.gx1) // 2, (self.gz0 + self.gz1) // 2)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        return (self.gx0, self.gz0, self.gx1, self.gz1)

    def overlaps(self, other: "Room", pad: int = 0) -> bool:
        return (
            self.gx0 - pad <= other.gx1
            and self.gx1 + pad >= other.gx0
            and self.gz0 - pad <= other.gz1
            and self.gz1 + pad >= other.gz0
        )

    def to_dict(self):
        return {"gx0": self.gx0, "gz0": self.gz0, "gx1": self.gx1, "gz1": self.gz1}


def place_rooms(
    grid,
    cols: int,
    rows: int,
    count: int,
    min_size: int,
    max_size: int,
    rng,
    reserved: Optional[List[Room]] = None,
):
    """Carve up to ``count`` non-overlapping rooms into a maze grid.

    Sizes are in maze cells; rooms snap to cell centres (odd grid indices)
    so each one swallows whole corridors and stays joined to the maze.
    Rooms keep one maze cell of spacing from each other and from any
    ``reserved`` rectangle. Gives up after ``count * 50`` attempts.

    Returns ``(rooms, attempts_used)``.
    """
    rooms: List[Room] = []
    blocked = list(reserved or [])
    attempts = count * 50
    used = 0
    while len(rooms) < count and used < attempts:
        used += 1
        w = rng.randint(min_size, max_size)
        h = rng.randint(min_size, max_size)
        if w > cols or h > rows:
            continue
        c0 = rng.randint(0, cols - w)
        r0 = rng.randint(0, rows - h)
        room = Room(2 * c0 + 1, 2 * r0 + 1, 2 * (c0 + w - 1) + 1, 2 * (r0 + h - 1) + 1)
        if any(room.overlaps(other, pad=2) for other in rooms + blocked):
            continue
        for x, z in room.cells():
            grid[x][z] = OPEN
        rooms.append(room)
    return rooms, used


__all__ = ["Room", "place_rooms"]
