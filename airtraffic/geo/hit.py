"""
Hit data model.

A Hit is one geolocated event to show on the map: the site that produced it,
where it happened and when (epoch milliseconds).  Hits are produced outside
the renderer and never modified by it.

Example
-------
    hit = Hit(site_id="4f2a", lat=51.5, lon=-0.12, time=now_millis())
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Hit:
    """One geolocated event."""
    site_id: str
    lat: float
    lon: float
    time: int = field(default_factory=now_millis)   # epoch ms
