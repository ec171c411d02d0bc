"""
Frame renderer: turns the current hits into an ordered list of draw ops.

Drawing order (fixed):
  1. Fitted world map at the origin
  2. Map label, centred near the bottom edge (only once configured)
  3. For each hit: its pin, then its recency ring if it has one

The renderer is toolkit-independent: it only decides *what* to draw and
where.  A canvas surface (see ``scene.CanvasSurface``) replays the ops.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from ..geo.hit import Hit
from ..geo.projection import ViewportGeometry, project
from .decoration import Decoration, decoration_for
from .frame_clock import FrameClock
from .resources import NO_KEY, AssetSizes, ImageAsset, ResourceProvider

log = logging.getLogger(__name__)

MAP_LABEL = "AirTraffic Live"


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @classmethod
    def of_image(cls, image: ImageAsset) -> "Rect":
        return cls(0, 0, image.width(), image.height())

    @classmethod
    def centred(cls, x: float, y: float, width: int, height: int) -> "Rect":
        return cls(x - width // 2, y - height // 2, width, height)


@dataclass(frozen=True)
class DrawImage:
    image: ImageAsset
    source: Rect
    dest: Rect


@dataclass(frozen=True)
class DrawText:
    text: str
    x: float
    y: float         # baseline


DrawOp = Union[DrawImage, DrawText]


class Renderer:
    """Builds the draw ops for one frame."""

    def __init__(self, frame_clock: Optional[FrameClock] = None, label: str = MAP_LABEL):
        self._frame_clock = frame_clock
        self.label = label
        self.label_height = 0.0
        self.label_width = 0.0
        self.background: Optional[ImageAsset] = None
        self._provider: Optional[ResourceProvider] = None
        self._sizes: Optional[AssetSizes] = None

    @property
    def sizes(self) -> Optional[AssetSizes]:
        return self._sizes

    def configure(self, label_height: float, label_width: float) -> None:
        """Set the label text metrics; a zero width hides the label.

        Visibility depends on *label_width* alone.  *label_height* only lifts
        the label above the bottom edge, so a height with zero width draws
        nothing.
        """
        self.label_height = label_height
        self.label_width = label_width

    def attach_resource_provider(self, provider: ResourceProvider) -> None:
        self._provider = provider
        self._sizes = AssetSizes.from_provider(provider)

    # ── Frame ─────────────────────────────────────────────────────────

    def render_frame(
        self,
        events: Iterable[Hit],
        now: int,
        geometry: Optional[ViewportGeometry],
    ) -> List[DrawOp]:
        """Draw ops for *events* as seen at *now* (epoch ms).

        Returns an empty list until a geometry is known.
        """
        if geometry is None:
            return []

        ops: List[DrawOp] = []

        if self.background is not None:
            ops.append(DrawImage(
                self.background,
                Rect.of_image(self.background),
                Rect(0, 0, self.background.width(), self.background.height()),
            ))

        if self.label_width > 0:
            ops.append(DrawText(
                self.label,
                geometry.display_width / 2 - self.label_width / 2,
                geometry.display_height - self.label_height,
            ))

        if self._provider is not None:
            for hit in events:
                ops.extend(self._hit_ops(hit, now, geometry))

        if self._frame_clock is not None:
            self._frame_clock.record_frame()
        return ops

    def _hit_ops(self, hit: Hit, now: int, geometry: ViewportGeometry) -> List[DrawOp]:
        provider = self._provider
        sizes = self._sizes
        key = provider.key_for(hit.site_id)
        if key == NO_KEY:
            log.debug("No resources for site %s: hit skipped", hit.site_id)
            return []

        x, y = project(hit.lat, hit.lon, geometry)

        pin = provider.pin_for(key)
        ops: List[DrawOp] = [DrawImage(
            pin,
            Rect.of_image(pin),
            Rect.centred(x, y, sizes.pin_width, sizes.pin_height),
        )]

        decoration = decoration_for(hit.time, now)
        if decoration is Decoration.INNER_RING:
            w, h = sizes.inner_ring_width, sizes.inner_ring_height
        elif decoration is Decoration.OUTER_RING:
            w, h = sizes.outer_ring_width, sizes.outer_ring_height
        else:
            return ops

        ring = provider.ring_for(key)
        ops.append(DrawImage(ring, Rect.of_image(ring), Rect.centred(x, y, w, h)))
        return ops
