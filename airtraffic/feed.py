"""
Synthetic hit feed for demonstrations.

Runs on the Qt event loop using QTimer.  Every tick one hit is generated
near a random city for a random site, appended to a bounded history and a
fresh snapshot of that history is emitted.

Usage
-----
    feed = HitFeed(["site-a", "site-b"], rate_hz=4.0)
    feed.hits_changed.connect(view.set_hits)
    feed.start()
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np
from PyQt5 import QtCore

from .geo.hit import Hit, now_millis

log = logging.getLogger(__name__)

# (lat, lon) of busy places hits cluster around
CITY_CENTRES: List[Tuple[float, float]] = [
    (40.71, -74.01),    # New York
    (37.77, -122.42),   # San Francisco
    (51.51, -0.13),     # London
    (48.86, 2.35),      # Paris
    (52.52, 13.40),     # Berlin
    (35.68, 139.69),    # Tokyo
    (-33.87, 151.21),   # Sydney
    (-23.55, -46.63),   # São Paulo
    (19.08, 72.88),     # Mumbai
    (1.35, 103.82),     # Singapore
    (55.76, 37.62),     # Moscow
    (-1.29, 36.82),     # Nairobi
]

_JITTER_DEG = 1.5


class HitFeed(QtCore.QObject):
    """Periodic synthetic hit producer.

    Signals
    -------
    hits_changed(tuple)
        Emitted with the latest hits (oldest first) after each new hit.
    """

    hits_changed = QtCore.pyqtSignal(object)   # tuple[Hit, ...]

    def __init__(
        self,
        site_ids: Sequence[str],
        rate_hz: float = 4.0,
        max_hits: int = 200,
        seed: Optional[int] = None,
        parent: Optional[QtCore.QObject] = None,
    ):
        super().__init__(parent)
        if rate_hz <= 0:
            raise ValueError(f"rate_hz must be positive, got {rate_hz}")
        if max_hits <= 0:
            raise ValueError(f"max_hits must be positive, got {max_hits}")
        self._site_ids = list(site_ids)
        self._rng = np.random.default_rng(seed)
        self._hits: Deque[Hit] = deque(maxlen=max_hits)

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(max(1, int(1000.0 / rate_hz)))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def hits(self) -> Tuple[Hit, ...]:
        return tuple(self._hits)

    def start(self) -> None:
        if not self._site_ids:
            log.warning("HitFeed has no sites: not started")
            return
        self._timer.start()
        log.info("HitFeed started: %d sites, every %d ms",
                 len(self._site_ids), self._timer.interval())

    def stop(self) -> None:
        self._timer.stop()
        log.info("HitFeed stopped")

    def push(self, hit: Hit) -> None:
        """Add *hit* from any producer and publish a new snapshot."""
        self._hits.append(hit)
        self.hits_changed.emit(tuple(self._hits))

    def generate(self, now: Optional[int] = None) -> Hit:
        """Make one random hit stamped *now* (defaults to the wall clock)."""
        site_id = self._site_ids[int(self._rng.integers(len(self._site_ids)))]
        lat0, lon0 = CITY_CENTRES[int(self._rng.integers(len(CITY_CENTRES)))]
        dlat, dlon = self._rng.normal(0.0, _JITTER_DEG, size=2)
        lat = float(np.clip(lat0 + dlat, -80.0, 80.0))
        lon = float((lon0 + dlon + 180.0) % 360.0 - 180.0)
        return Hit(site_id=site_id, lat=lat, lon=lon,
                   time=now if now is not None else now_millis())

    def _on_timeout(self) -> None:
        self.push(self.generate())
