"""QTimer-backed :class:`Scheduler` for the Qt event loop."""
from __future__ import annotations

import logging
import time
from typing import Optional

from PyQt5 import QtCore

from ..render.scheduler import IntervalPolicy, Scheduler, TickCallback

log = logging.getLogger(__name__)


class QtScheduler(Scheduler):
    """Calls back every ``frame_interval_ms`` with the loop fraction.

    Behaves like a repeating value animator: the fraction runs from 0 to 1
    over ``duration_ms`` and wraps.  With a finite ``repeat_count`` the timer
    stops by itself after the last loop.
    """

    def __init__(self, parent: Optional[QtCore.QObject] = None):
        self._timer = QtCore.QTimer(parent)
        self._timer.setTimerType(QtCore.Qt.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)
        self._policy: Optional[IntervalPolicy] = None
        self._on_tick: Optional[TickCallback] = None
        self._started = 0.0

    def start(self, policy: IntervalPolicy, on_tick: TickCallback) -> None:
        self._timer.stop()
        self._policy = policy
        self._on_tick = on_tick
        self._started = time.monotonic()
        self._timer.start(policy.frame_interval_ms)

    def cancel(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        policy = self._policy
        if policy is None or self._on_tick is None:
            self._timer.stop()
            return

        elapsed_ms = (time.monotonic() - self._started) * 1000.0
        duration = max(policy.duration_ms, 1)
        loops = int(elapsed_ms // duration)
        if not policy.repeats_forever and loops > policy.repeat_count:
            self._timer.stop()
            log.debug("QtScheduler: %d loops done", loops)
            self._on_tick(1.0)
            return
        self._on_tick((elapsed_ms % duration) / duration)
