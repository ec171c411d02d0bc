"""
Map projection for the AirTraffic world map.

Converts WGS84 lat/lon into pixel positions on the world map bitmap after it
has been stretched to fill the current display.  The projection is spherical
Mercator expressed in 256 px "world tiles" (16 tiles across), then squeezed
onto the map image with empirically fitted scale / correction constants.

The constants were fitted against a specific 720 px wide world map image and
are kept exactly as measured.  Changing any of them moves every pin.

Usage
-----
    geom = compute_geometry(map_width=720, map_height=500,
                            display_width=1440, display_height=1000)
    x, y = project(51.5, -0.12, geom)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

# ── Fitted constants ──────────────────────────────────────────────────

SCALE_DIVISOR = 720.0        # reference map width the constants were fitted on
SCALE_MULTIPLIER = 0.169
X_CORRECTOR = 1.1            # px at reference width
Y_CORRECTOR = 70.0           # px at reference width

TILE_SIZE = 256.0
TILES_ACROSS = 16.0
BITMAP_ORIGIN = TILES_ACROSS / 2.0
PIXELS_PER_LONGITUDE_DEGREE = TILES_ACROSS / 360.0
NEGATIVE_PIXELS_PER_LONGITUDE_RADIAN = -(TILES_ACROSS / (2.0 * math.pi))

# sin(lat) is clamped inside (-1, 1) so the log below never sees 0
MAX_SIN_LAT = 0.9999


@dataclass(frozen=True)
class ViewportGeometry:
    """Scale and correction values for one display size.

    Recomputed once per resize, then shared by every projection until the
    next resize.
    """
    scale: float
    x_corrector: float
    y_corrector: float
    x_map_scale: float           # display width / native map width
    y_map_scale: float           # display height / native map height
    map_pixel_width: int
    map_pixel_height: int
    display_width: int
    display_height: int


def compute_geometry(
    map_width: int,
    map_height: int,
    display_width: int,
    display_height: int,
) -> ViewportGeometry:
    """Build the geometry for a map of native size *map_width* x *map_height*
    shown at *display_width* x *display_height*.

    Raises
    ------
    ValueError
        If the native map size is not positive.
    """
    if map_width <= 0 or map_height <= 0:
        raise ValueError(f"Invalid map size {map_width}x{map_height}")

    relative_width = map_width / SCALE_DIVISOR
    return ViewportGeometry(
        scale=relative_width * SCALE_MULTIPLIER,
        x_corrector=X_CORRECTOR * relative_width,
        y_corrector=Y_CORRECTOR * relative_width,
        x_map_scale=display_width / map_width,
        y_map_scale=display_height / map_height,
        map_pixel_width=map_width,
        map_pixel_height=map_height,
        display_width=display_width,
        display_height=display_height,
    )


def world_pixel(lat: float, lon: float) -> Tuple[float, float]:
    """Position in the 16 x 256 px Mercator world (before map fitting)."""
    global_x = (BITMAP_ORIGIN + lon * PIXELS_PER_LONGITUDE_DEGREE) * TILE_SIZE
    e = math.sin(lat * (math.pi / 180.0))
    e = max(min(e, MAX_SIN_LAT), -MAX_SIN_LAT)
    global_y = (
        BITMAP_ORIGIN
        + 0.5 * math.log((1.0 + e) / (1.0 - e)) * NEGATIVE_PIXELS_PER_LONGITUDE_RADIAN
    ) * TILE_SIZE
    return global_x, global_y


def project(lat: float, lon: float, geometry: ViewportGeometry) -> Tuple[float, float]:
    """Project *lat*, *lon* (degrees) to display pixels."""
    global_x, global_y = world_pixel(lat, lon)

    x = global_x * geometry.scale - geometry.x_corrector
    y = global_y * geometry.scale - geometry.y_corrector

    # Positions are on the native map; stretch to the fitted map
    return x * geometry.x_map_scale, y * geometry.y_map_scale


def project_many(
    lats: np.ndarray,
    lons: np.ndarray,
    geometry: ViewportGeometry,
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised :func:`project` over arrays of coordinates."""
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)

    global_x = (BITMAP_ORIGIN + lons * PIXELS_PER_LONGITUDE_DEGREE) * TILE_SIZE
    e = np.clip(np.sin(lats * (math.pi / 180.0)), -MAX_SIN_LAT, MAX_SIN_LAT)
    global_y = (
        BITMAP_ORIGIN
        + 0.5 * np.log((1.0 + e) / (1.0 - e)) * NEGATIVE_PIXELS_PER_LONGITUDE_RADIAN
    ) * TILE_SIZE

    xs = (global_x * geometry.scale - geometry.x_corrector) * geometry.x_map_scale
    ys = (global_y * geometry.scale - geometry.y_corrector) * geometry.y_map_scale
    return xs, ys
