"""
AirTraffic map widget.

A plain ``QWidget`` that hosts an :class:`AirTrafficScene`:

  - resizeEvent  → refit the map, restart the animation clock
  - paintEvent   → render one frame through a QPainter
  - show / hide  → resume / pause the animation

The animation runs a 3 s loop forever; every tick schedules a repaint.
"""
from __future__ import annotations

import logging
from typing import Collection, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from ..geo.hit import Hit
from ..render.renderer import MAP_LABEL
from ..render.resources import MapAsset, ResourceProvider
from ..render.scene import AirTrafficScene
from ..render.scheduler import IntervalPolicy
from .qt_scheduler import QtScheduler
from .surface import QPainterSurface

log = logging.getLogger(__name__)


class AirTrafficView(QtWidgets.QWidget):
    """Live world map of hits.

    Signals
    -------
    fps_changed(float)
        Emitted about once a second with the realised frame rate.
    """

    fps_changed = QtCore.pyqtSignal(float)

    def __init__(
        self,
        map_asset: MapAsset,
        policy: Optional[IntervalPolicy] = None,
        label: str = MAP_LABEL,
        label_color: str = "#c0d0e0",
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self._scheduler = QtScheduler(self)
        self._scene = AirTrafficScene(
            map_asset, self._scheduler, self.update, policy=policy, label=label,
        )
        self._scene.add_fps_listener(self.fps_changed.emit)

        self._label_font = QtGui.QFont(self.font())
        self._label_color = QtGui.QColor(label_color)

        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, True)
        self.setMinimumSize(180, 125)

    @property
    def scene(self) -> AirTrafficScene:
        return self._scene

    @property
    def fps(self) -> float:
        return self._scene.fps

    # ── Configuration ─────────────────────────────────────────────────

    def set_label_height(self, height: float) -> "AirTrafficView":
        """Size the map label to *height* px (0 hides it)."""
        if height <= 0:
            self._scene.configure(0.0, 0.0)
            return self
        self._label_font.setPixelSize(max(1, int(round(height))))
        metrics = QtGui.QFontMetricsF(self._label_font)
        width = metrics.horizontalAdvance(self._scene.renderer.label)
        self._scene.configure(float(height), width)
        return self

    def set_resource_provider(self, provider: ResourceProvider) -> "AirTrafficView":
        self._scene.attach_resource_provider(provider)
        return self

    @QtCore.pyqtSlot(object)
    def set_hits(self, hits: Collection[Hit]) -> None:
        self._scene.set_events(hits)

    def pause(self) -> None:
        self._scene.pause()

    def resume(self) -> None:
        self._scene.resume()

    # ── Qt events ─────────────────────────────────────────────────────

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        super().resizeEvent(event)
        self._scene.on_viewport_resized(self.width(), self.height())
        if not self.isVisible():
            # showEvent resumes the clock
            self._scene.pause()

    def showEvent(self, event: QtGui.QShowEvent) -> None:
        super().showEvent(event)
        if self._scene.geometry is not None:
            self.resume()

    def hideEvent(self, event: QtGui.QHideEvent) -> None:
        super().hideEvent(event)
        self.pause()

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.fillRect(self.rect(), QtGui.QColor(0, 0, 0))
            painter.setRenderHint(QtGui.QPainter.SmoothPixmapTransform, True)
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            painter.setPen(self._label_color)
            painter.setFont(self._label_font)
            self._scene.render_frame(QPainterSurface(painter))
        finally:
            painter.end()
