"""Recency decoration for a hit: which ring (if any) surrounds its pin."""
from __future__ import annotations

from enum import Enum

INNER_RING_MS = 250   # hits younger than this get the small ring
OUTER_RING_MS = 500   # ... younger than this the large ring


class Decoration(Enum):
    NONE = "none"
    INNER_RING = "inner_ring"
    OUTER_RING = "outer_ring"


def decoration_for(hit_time: int, now: int) -> Decoration:
    """Pick the ring for a hit stamped *hit_time* as seen at *now* (ms).

    Hits from the future (clock skew between producer and display) get no
    ring.
    """
    delta = now - hit_time
    if delta < 0:
        return Decoration.NONE
    if delta < INNER_RING_MS:
        return Decoration.INNER_RING
    if delta < OUTER_RING_MS:
        return Decoration.OUTER_RING
    return Decoration.NONE
