"""
Qt-backed map and pin assets.

* :class:`PixmapMapAsset`: the world map as a ``QPixmap``.
* :func:`load_map_asset`: load the map image from disk.
* :func:`fallback_map_asset`: a generated dark map with a projected
  graticule, used when no map image is available.
* :class:`PaletteResourceProvider`: gives each site a palette colour and
  draws tinted pin / ring pixmaps for it.

All of these need a ``QApplication`` (or ``QGuiApplication``) to exist.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from PyQt5 import QtCore, QtGui

from ..geo.projection import compute_geometry, project_many
from ..render.resources import NO_KEY, MapAsset, ResourceProvider

log = logging.getLogger(__name__)

FALLBACK_MAP_SIZE = (720, 500)

# Cold palette, one colour per key
DEFAULT_PALETTE = [
    "#00ccff", "#ff6a3d", "#7dff6a", "#ffd23d",
    "#c86aff", "#ff3d8b", "#3dffd8", "#a0b8d0",
]


# ── Map ───────────────────────────────────────────────────────────────

class PixmapMapAsset(MapAsset):
    """World map held as a ``QPixmap``."""

    def __init__(self, pixmap: QtGui.QPixmap):
        if pixmap.isNull() or pixmap.width() <= 0 or pixmap.height() <= 0:
            raise ValueError("Map pixmap is empty")
        self._pixmap = pixmap

    def native_size(self) -> Tuple[int, int]:
        return self._pixmap.width(), self._pixmap.height()

    def scaled_to(self, width: int, height: int) -> QtGui.QPixmap:
        return self._pixmap.scaled(
            width, height,
            QtCore.Qt.IgnoreAspectRatio,
            QtCore.Qt.SmoothTransformation,
        )


def load_map_asset(path: Path) -> PixmapMapAsset:
    """Load the map image at *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If Qt cannot decode the image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Map image not found: {path}")
    pixmap = QtGui.QPixmap(str(path))
    if pixmap.isNull():
        raise ValueError(f"Unreadable map image: {path}")
    log.info("Map loaded: %s (%dx%d)", path.name, pixmap.width(), pixmap.height())
    return PixmapMapAsset(pixmap)


def _polyline(xs: np.ndarray, ys: np.ndarray) -> QtGui.QPolygonF:
    return QtGui.QPolygonF([QtCore.QPointF(float(x), float(y)) for x, y in zip(xs, ys)])


def fallback_map_asset(
    width: int = FALLBACK_MAP_SIZE[0],
    height: int = FALLBACK_MAP_SIZE[1],
    step_deg: float = 15.0,
) -> PixmapMapAsset:
    """Dark map with meridians / parallels every *step_deg* degrees.

    Lines are drawn with the same projection as the pins, so pins land on
    the right grid cells.
    """
    pixmap = QtGui.QPixmap(width, height)
    pixmap.fill(QtGui.QColor(4, 8, 16))
    geom = compute_geometry(width, height, width, height)

    painter = QtGui.QPainter(pixmap)
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    pen = QtGui.QPen(QtGui.QColor(20, 42, 64))
    pen.setWidthF(1.0)
    painter.setPen(pen)

    lats = np.linspace(-85.0, 85.0, 96)
    for lon in np.arange(-180.0, 180.0 + step_deg, step_deg):
        xs, ys = project_many(lats, np.full_like(lats, lon), geom)
        painter.drawPolyline(_polyline(xs, ys))

    lons = np.linspace(-180.0, 180.0, 96)
    for lat in np.arange(-75.0, 75.0 + step_deg, step_deg):
        xs, ys = project_many(np.full_like(lons, lat), lons, geom)
        if lat == 0.0:
            equator = QtGui.QPen(QtGui.QColor(0, 90, 130))
            equator.setWidthF(1.5)
            painter.setPen(equator)
            painter.drawPolyline(_polyline(xs, ys))
            painter.setPen(pen)
        else:
            painter.drawPolyline(_polyline(xs, ys))
    painter.end()

    log.info("Using generated %dx%d fallback map", width, height)
    return PixmapMapAsset(pixmap)


# ── Pins and rings ────────────────────────────────────────────────────

def _pin_pixmap(color: QtGui.QColor, size: int) -> QtGui.QPixmap:
    pm = QtGui.QPixmap(size, size)
    pm.fill(QtCore.Qt.transparent)
    painter = QtGui.QPainter(pm)
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    outline = QtGui.QPen(color.darker(180))
    outline.setWidthF(max(1.0, size * 0.08))
    painter.setPen(outline)
    painter.setBrush(color)
    inset = size * 0.1
    painter.drawEllipse(QtCore.QRectF(inset, inset, size - 2 * inset, size - 2 * inset))
    painter.end()
    return pm


def _ring_pixmap(color: QtGui.QColor, size: int) -> QtGui.QPixmap:
    pm = QtGui.QPixmap(size, size)
    pm.fill(QtCore.Qt.transparent)
    painter = QtGui.QPainter(pm)
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    pen = QtGui.QPen(color)
    width = max(1.0, size * 0.06)
    pen.setWidthF(width)
    painter.setPen(pen)
    painter.setBrush(QtCore.Qt.NoBrush)
    painter.drawEllipse(QtCore.QRectF(width, width, size - 2 * width, size - 2 * width))
    painter.end()
    return pm


class PaletteResourceProvider(ResourceProvider):
    """Assigns sites to palette colours in registration order.

    Pins and rings are drawn once per palette colour at construction.
    """

    def __init__(
        self,
        site_ids: Iterable[str] = (),
        palette: Optional[List[str]] = None,
        pin_px: int = 32,
        ring_px: int = 96,
    ):
        colors = [QtGui.QColor(c) for c in (palette or DEFAULT_PALETTE)]
        if not colors:
            raise ValueError("Palette must contain at least one colour")
        self._pin_px = pin_px
        self._ring_px = ring_px
        self._pins = [_pin_pixmap(c, pin_px) for c in colors]
        self._rings = [_ring_pixmap(c, ring_px) for c in colors]
        self._keys: Dict[str, int] = {}
        for site_id in site_ids:
            self.add_site(site_id)

    def add_site(self, site_id: str) -> int:
        if site_id not in self._keys:
            self._keys[site_id] = len(self._keys) % len(self._pins)
        return self._keys[site_id]

    def key_for(self, site_id: str) -> int:
        return self._keys.get(site_id, NO_KEY)

    def pin_for(self, key: int) -> QtGui.QPixmap:
        return self._pins[key]

    def ring_for(self, key: int) -> QtGui.QPixmap:
        return self._rings[key]

    def pin_size(self) -> Tuple[int, int]:
        return self._pin_px, self._pin_px

    def ring_size(self) -> Tuple[int, int]:
        return self._ring_px, self._ring_px
