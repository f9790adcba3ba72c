"""Generator option records.

Both configs accept any numbers and clamp them in ``sanitized()``; the core
never rejects a value. ``from_dict`` is the boundary used by the HTTP API and
the CLI, where values may arrive as strings and a value that cannot be read
as a number at all is an error.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from .rng import coerce_seed
from .tiles import CENTER_OUT, LAYOUTS


class InvalidOptionError(ValueError):
    """Raised when an option value cannot be coerced to its field type."""

    def __init__(self, field: str, value: Any):
        super().__init__(f"invalid value for '{field}': {value!r}")
        self.field = field
        self.value = value


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


# Accept both the wire (camelCase) and Python spellings.
_ALIASES = {
    "exitWidth": "exit_width",
    "centerRoomSize": "center_room_size",
    "roomCount": "room_count",
    "roomMinSize": "room_min_size",
    "roomMaxSize": "room_max_size",
    "buildingCount": "building_count",
    "buildingMinSize": "building_min_size",
    "buildingMaxSize": "building_max_size",
    "smoothingPasses": "smoothing_passes",
    "corridorWidth": "corridor_width",
}


def _coerce_number(name: str, raw: Any, kind: type):
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise InvalidOptionError(name, raw)
    try:
        value = float(raw.strip()) if isinstance(raw, str) else raw
        if not math.isfinite(value):
            raise ValueError(value)
        return kind(value)
    except (ValueError, OverflowError):
        raise InvalidOptionError(name, raw) from None


def _from_dict(cls, data: Dict[str, Any]):
    known = {f.name: f for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, raw in (data or {}).items():
        name = _ALIASES.get(key, key)
        if name not in known or raw is None:
            continue
        if name == "seed":
            try:
                kwargs["seed"] = coerce_seed(raw)
            except ValueError:
                raise InvalidOptionError("seed", raw) from None
        elif name == "layout":
            kwargs["layout"] = raw if raw in LAYOUTS else CENTER_OUT
        else:
            default = getattr(cls, name)
            kwargs[name] = _coerce_number(name, raw, float if isinstance(default, float) else int)
    return cls(**kwargs)


@dataclass
class MazeConfig:
    cols: int = 10
    rows: int = 10
    exit_width: int = 1
    center_room_size: int = 1
    layout: str = CENTER_OUT
    room_count: int = 0
    room_min_size: int = 1
    room_max_size: int = 3
    seed: Optional[int] = None

    def sanitized(self) -> "MazeConfig":
        safe = replace(
            self,
            cols=clamp(int(self.cols), 1, 31),
            rows=clamp(int(self.rows), 1, 31),
            exit_width=clamp(int(self.exit_width), 1, 9),
            center_room_size=clamp(int(self.center_room_size), 1, 6),
            layout=self.layout if self.layout in LAYOUTS else CENTER_OUT,
            room_count=clamp(int(self.room_count), 0, 12),
            room_min_size=clamp(int(self.room_min_size), 1, 8),
            room_max_size=clamp(int(self.room_max_size), 1, 10),
        )
        safe.room_max_size = max(safe.room_max_size, safe.room_min_size)
        return safe

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeConfig":
        return _from_dict(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ArenaConfig:
    cols: int = 24
    rows: int = 24
    density: float = 0.28
    building_count: int = 8
    building_min_size: int = 2
    building_max_size: int = 6
    smoothing_passes: int = 2
    corridor_width: int = 1
    candidates: int = 8
    seed: Optional[int] = None

    def sanitized(self) -> "ArenaConfig":
        safe = replace(
            self,
            cols=clamp(int(self.cols), 8, 64),
            rows=clamp(int(self.rows), 8, 64),
            density=clamp(float(self.density), 0.0, 0.6),
            building_count=clamp(int(self.building_count), 0, 40),
            building_min_size=clamp(int(self.building_min_size), 1, 10),
            building_max_size=clamp(int(self.building_max_size), 2, 16),
            smoothing_passes=clamp(int(self.smoothing_passes), 0, 6),
            corridor_width=clamp(int(self.corridor_width), 1, 4),
            candidates=clamp(int(self.candidates), 1, 20),
        )
        safe.building_max_size = max(safe.building_max_size, safe.building_min_size)
        return safe

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArenaConfig":
        return _from_dict(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["InvalidOptionError", "MazeConfig", "ArenaConfig", "clamp"]
