"""Seed resolution for the generators.

Every generation call runs on its own ``random.Random`` instance so module
level randomness elsewhere in the process never perturbs a layout, and a
layout can always be replayed from the seed stored on its result.
"""
from __future__ import annotations

import hashlib
import math
import random
from typing import Optional, Tuple

MAX_SEED = 2**31 - 1


def resolve_seed(seed: Optional[int] = None) -> int:
    if seed is None:
        return random.randint(0, MAX_SEED)
    return int(seed) % (MAX_SEED + 1)


def make_rng(seed: Optional[int] = None) -> Tuple[random.Random, int]:
    """Return ``(rng, seed)`` with the seed resolved (None => random)."""
    resolved = resolve_seed(seed)
    return random.Random(resolved), resolved


def coerce_seed(raw) -> Optional[int]:
    """Convert a user supplied seed (int or str) into a bounded int.

    Digit strings map directly; any other non-empty string is hashed so that
    words like ``"castle"`` still give a stable layout. Empty/None => None.
    A NaN or infinite float raises ``ValueError``.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw % (MAX_SEED + 1)
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise ValueError(f"seed must be finite, got {raw!r}")
        return int(raw) % (MAX_SEED + 1)
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return None
        if s.isdigit():
            return int(s) % (MAX_SEED + 1)
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % (MAX_SEED + 1)
    return None


__all__ = ["MAX_SEED", "resolve_seed", "make_rng", "coerce_seed"]
