"""
Animation clock and frames-per-second accounting.

The clock keeps the map animating: every scheduler tick it asks the host to
redraw.  Independently, the renderer calls :meth:`FrameClock.record_frame`
after each completed frame and the clock works out the realised frame rate
over roughly one-second windows.

Usage
-----
    clock = FrameClock(scheduler, request_redraw=widget.update)
    clock.add_fps_listener(lambda fps: print(f"{fps:.1f} fps"))
    clock.start()
    ...
    clock.pause()    # detach from the scheduler
    clock.resume()
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..geo.hit import now_millis
from .scheduler import IntervalPolicy, Scheduler

log = logging.getLogger(__name__)

FPS_WINDOW_MS = 1000


class FrameClock:
    """Drives redraws through a :class:`Scheduler` and measures fps."""

    def __init__(
        self,
        scheduler: Scheduler,
        request_redraw: Callable[[], None],
        policy: Optional[IntervalPolicy] = None,
        clock: Callable[[], int] = now_millis,
    ):
        self._scheduler = scheduler
        self._request_redraw = request_redraw
        self._policy = policy or IntervalPolicy()
        self._clock = clock
        self._running = False
        self._fps_listeners: List[Callable[[float], None]] = []

        # fps window
        self.start_ms = clock()
        self.frame_count = 0
        self.fps = 0.0

    @property
    def policy(self) -> IntervalPolicy:
        return self._policy

    @property
    def is_running(self) -> bool:
        return self._running and self._scheduler.is_active

    def add_fps_listener(self, callback: Callable[[float], None]) -> None:
        self._fps_listeners.append(callback)

    # ── Scheduling ────────────────────────────────────────────────────

    def start(self) -> None:
        """(Re)start the animation with a fresh fps window."""
        # Cancel first so a restart never leaves two timers running
        self._scheduler.cancel()
        self.reset_fps()
        self._scheduler.start(self._policy, self.on_tick)
        self._running = True
        log.debug("FrameClock started: loop %d ms, tick %d ms",
                  self._policy.duration_ms, self._policy.frame_interval_ms)

    def pause(self) -> None:
        self._scheduler.cancel()
        self._running = False
        log.debug("FrameClock paused")

    def resume(self) -> None:
        # The scheduler may have stopped on its own after a finite repeat count
        if self._running and self._scheduler.is_active:
            return
        self._scheduler.start(self._policy, self.on_tick)
        self._running = True
        log.debug("FrameClock resumed")

    def on_tick(self, fraction: float = 0.0) -> None:
        self._request_redraw()

    # ── fps ───────────────────────────────────────────────────────────

    def reset_fps(self) -> None:
        self.start_ms = self._clock()
        self.frame_count = 0

    def record_frame(self) -> None:
        """Count one completed frame; recompute fps once per window."""
        now = self._clock()
        elapsed = now - self.start_ms
        if elapsed < 0:
            # Clock went backwards: restart the window, drop this sample
            log.debug("FrameClock: clock moved back %d ms, fps window reset", -elapsed)
            self.start_ms = now
            return

        self.frame_count += 1
        if elapsed > FPS_WINDOW_MS:
            self.fps = self.frame_count / (elapsed / 1000.0)
            log.debug("fps = %.1f", self.fps)
            for callback in self._fps_listeners:
                callback(self.fps)
            self.start_ms = now
            self.frame_count = 0
