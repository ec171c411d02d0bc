"""Replays draw ops on a QPainter."""
from __future__ import annotations

from PyQt5 import QtCore, QtGui

from ..render.renderer import Rect
from ..render.resources import ImageAsset
from ..render.scene import CanvasSurface


def _qrect(r: Rect) -> QtCore.QRectF:
    return QtCore.QRectF(r.left, r.top, r.width, r.height)


class QPainterSurface(CanvasSurface):
    """Canvas surface over an active ``QPainter``.

    The painter's current pen and font are used for text.
    """

    def __init__(self, painter: QtGui.QPainter):
        self._painter = painter

    def draw_image(self, image: ImageAsset, source: Rect, dest: Rect) -> None:
        if isinstance(image, QtGui.QImage):
            self._painter.drawImage(_qrect(dest), image, _qrect(source))
        else:
            self._painter.drawPixmap(_qrect(dest), image, _qrect(source))

    def draw_text(self, text: str, x: float, y: float) -> None:
        self._painter.drawText(QtCore.QPointF(x, y), text)
