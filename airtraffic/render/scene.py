"""
AirTraffic scene: the toolkit-independent "view".

Ties the pieces together the way the host widget sees them:

    resize   → on_viewport_resized(w, h)   geometry + fitted map, clock restart
    new hits → set_events(collection)      reference swapped, never mutated
    repaint  → render_frame(surface)       ops built from a snapshot, replayed
    hide     → pause() / resume()

Drawing before the first resize, or before a resource provider is attached,
is a no-op for the parts that need them.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Collection, List, Optional, Tuple

from ..geo.hit import Hit, now_millis
from ..geo.projection import ViewportGeometry, compute_geometry
from .frame_clock import FrameClock
from .renderer import MAP_LABEL, DrawImage, DrawOp, DrawText, Rect, Renderer
from .resources import ImageAsset, MapAsset, ResourceProvider
from .scheduler import IntervalPolicy, Scheduler

log = logging.getLogger(__name__)


class CanvasSurface(ABC):
    """Something draw ops can be replayed on."""

    @abstractmethod
    def draw_image(self, image: ImageAsset, source: Rect, dest: Rect) -> None:
        ...

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float) -> None:
        ...


class AirTrafficScene:
    """Map, pins and rings for one on-screen view."""

    def __init__(
        self,
        map_asset: MapAsset,
        scheduler: Scheduler,
        request_redraw: Callable[[], None],
        policy: Optional[IntervalPolicy] = None,
        clock: Callable[[], int] = now_millis,
        label: str = MAP_LABEL,
    ):
        self._map = map_asset
        self._clock = clock
        self._events: Collection[Hit] = ()
        self._geometry: Optional[ViewportGeometry] = None
        self._display_size: Optional[Tuple[int, int]] = None
        self.frame_clock = FrameClock(scheduler, request_redraw, policy=policy, clock=clock)
        self.renderer = Renderer(self.frame_clock, label=label)

    # ── Configuration ─────────────────────────────────────────────────

    @property
    def geometry(self) -> Optional[ViewportGeometry]:
        return self._geometry

    @property
    def events(self) -> Collection[Hit]:
        return self._events

    @property
    def fps(self) -> float:
        return self.frame_clock.fps

    def add_fps_listener(self, callback: Callable[[float], None]) -> None:
        self.frame_clock.add_fps_listener(callback)

    def configure(self, label_height: float, label_width: float) -> "AirTrafficScene":
        """Set the label metrics.

        The label is drawn only when *label_width* is positive; a zero width
        hides it whatever *label_height* is.
        """
        self.renderer.configure(label_height, label_width)
        return self

    def attach_resource_provider(self, provider: ResourceProvider) -> "AirTrafficScene":
        self.renderer.attach_resource_provider(provider)
        log.info("Resource provider attached: %s", type(provider).__name__)
        return self

    def set_events(self, events: Collection[Hit]) -> "AirTrafficScene":
        self._events = events
        return self

    # ── Host lifecycle ────────────────────────────────────────────────

    def on_viewport_resized(self, width: int, height: int) -> None:
        """Refit the map to *width* x *height* and restart the animation."""
        if width <= 0 or height <= 0:
            log.debug("Ignoring empty viewport %dx%d", width, height)
            return

        map_w, map_h = self._map.native_size()
        self._geometry = compute_geometry(map_w, map_h, width, height)
        if self._display_size != (width, height) or self.renderer.background is None:
            self.renderer.background = self._map.scaled_to(width, height)
            self._display_size = (width, height)
        log.debug("Viewport %dx%d: map scale %.3f x %.3f",
                  width, height, self._geometry.x_map_scale, self._geometry.y_map_scale)

        # Hits placed for the previous size are dropped
        self._events = ()
        self.frame_clock.start()

    def pause(self) -> None:
        self.frame_clock.pause()

    def resume(self) -> None:
        self.frame_clock.resume()

    # ── Drawing ───────────────────────────────────────────────────────

    def render_frame(self, surface: CanvasSurface) -> List[DrawOp]:
        """Draw one frame onto *surface* and return the ops replayed."""
        events = tuple(self._events)
        ops = self.renderer.render_frame(events, self._clock(), self._geometry)
        for op in ops:
            if isinstance(op, DrawImage):
                surface.draw_image(op.image, op.source, op.dest)
            elif isinstance(op, DrawText):
                surface.draw_text(op.text, op.x, op.y)
        return ops
